"""SQLAlchemy models for agencyledger database."""

from datetime import datetime, UTC
from sqlalchemy import (
    Column,
    Integer,
    BigInteger,
    String,
    ForeignKey,
    DateTime,
    Date,
    Boolean,
    CheckConstraint,
    Float,
    create_engine,
)
from sqlalchemy.orm import declarative_base, relationship, sessionmaker, Session

Base = declarative_base()


class Client(Base):
    """Client model."""

    __tablename__ = "clients"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    projects = relationship("Project", back_populates="client", cascade="all, delete-orphan")


class Project(Base):
    """Project model, owned by a client."""

    __tablename__ = "projects"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    client = relationship("Client", back_populates="projects")
    transactions = relationship("Transaction", back_populates="project")
    time_entries = relationship("TimeEntry", back_populates="project", cascade="all, delete-orphan")


class TeamMember(Base):
    """Team member model with hourly cost in minor units."""

    __tablename__ = "team_members"

    id = Column(Integer, primary_key=True)
    name = Column(String, nullable=False)
    hourly_rate = Column(BigInteger, nullable=True)
    commission_percent = Column(Float, nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)


class BankAccount(Base):
    """Bank account with its opening balance in minor units."""

    __tablename__ = "bank_accounts"

    id = Column(Integer, primary_key=True)
    name = Column(String, unique=True, nullable=False)
    bank_name = Column(String, nullable=True)
    opening_balance = Column(BigInteger, default=0, nullable=False)
    is_default = Column(Boolean, default=False, nullable=False)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    transactions = relationship("Transaction", back_populates="bank_account")


class TimeEntry(Base):
    """Time tracked on a project."""

    __tablename__ = "time_entries"

    id = Column(Integer, primary_key=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=False)
    assignee_id = Column(Integer, ForeignKey("team_members.id"), nullable=True)
    minutes_spent = Column(Integer, nullable=False)
    entry_date = Column(Date, nullable=False)

    __table_args__ = (CheckConstraint("minutes_spent >= 0", name="ck_minutes_non_negative"),)

    # Relationships
    project = relationship("Project", back_populates="time_entries")


class Transaction(Base):
    """Ledger transaction model.

    Rows are only written after validation and preparation, so the columns
    always hold a consistent classification.
    """

    __tablename__ = "transactions"

    id = Column(Integer, primary_key=True)
    description = Column(String(500), nullable=False)
    category = Column(String(100), nullable=False)
    value = Column(BigInteger, nullable=False)
    type = Column(String, nullable=False)
    nature = Column(String, nullable=False)
    cost_type = Column(String, nullable=False)
    is_repasse = Column(Boolean, default=False, nullable=False)
    status = Column(String, nullable=False)
    date = Column(Date, nullable=False)
    competence_date = Column(Date, nullable=False)
    payment_date = Column(Date, nullable=True)
    project_id = Column(Integer, ForeignKey("projects.id"), nullable=True)
    salesperson_id = Column(Integer, ForeignKey("team_members.id"), nullable=True)
    bank_account_id = Column(Integer, ForeignKey("bank_accounts.id"), nullable=True)
    notes = Column(String(1000), nullable=True)
    created_at = Column(DateTime, default=lambda: datetime.now(UTC), nullable=False)

    __table_args__ = (
        CheckConstraint("value > 0", name="ck_value_positive"),
        CheckConstraint(
            "NOT is_repasse OR nature = 'nao_operacional'", name="ck_repasse_non_operational"
        ),
    )

    # Relationships
    project = relationship("Project", back_populates="transactions")
    bank_account = relationship("BankAccount", back_populates="transactions")


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
