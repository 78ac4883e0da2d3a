"""Domain model entities for agencyledger.

These are pure data classes representing business concepts, independent of
database schema. The classification and reporting functions only ever see
these types, so they stay unaware of how a snapshot was fetched.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from enum import Enum
from typing import Optional, Union


class TransactionType(str, Enum):
    """Direction of a money movement."""

    REVENUE = "receita"
    EXPENSE = "despesa"


class TransactionNature(str, Enum):
    """Whether a transaction counts toward the income statement."""

    OPERATIONAL = "operacional"
    NON_OPERATIONAL = "nao_operacional"


class CostType(str, Enum):
    """Direct (project-attributable) or fixed (overhead) cost."""

    DIRECT = "direto"
    FIXED = "fixo"


class TransactionStatus(str, Enum):
    """Settlement status of a transaction."""

    PENDING = "pendente"
    PAID = "pago"
    OVERDUE = "atrasado"
    CANCELLED = "cancelado"


class StatementGroup(str, Enum):
    """Income statement group an operational expense category falls into."""

    VARIABLE_COST = "variable_cost"
    INVESTMENT = "investment"
    FIXED_COST = "fixed_cost"


@dataclass(frozen=True)
class Client:
    """Client domain entity."""

    id: int
    name: str
    created_at: datetime


@dataclass(frozen=True)
class Project:
    """Project domain entity, always owned by one client."""

    id: int
    name: str
    client_id: int
    created_at: datetime


@dataclass(frozen=True)
class TeamMember:
    """Team member with an optional hourly cost and sales commission."""

    id: int
    name: str
    hourly_rate: Optional[int]
    created_at: datetime
    commission_percent: Optional[float] = None


@dataclass(frozen=True)
class BankAccount:
    """Bank account that paid transactions settle against."""

    id: int
    name: str
    bank_name: Optional[str]
    opening_balance: int
    is_default: bool
    created_at: datetime


@dataclass(frozen=True)
class TimeEntry:
    """Time spent on a project by an (optional) assignee."""

    id: int
    project_id: int
    assignee_id: Optional[int]
    minutes_spent: int
    entry_date: date


@dataclass(frozen=True)
class ValidatedTransaction:
    """Transaction input that passed validation but has not been normalized."""

    description: str
    category: str
    value: int
    type: TransactionType
    nature: TransactionNature
    cost_type: CostType
    is_repasse: bool
    status: TransactionStatus
    date: date
    competence_date: Optional[date] = None
    payment_date: Optional[date] = None
    project_id: Optional[int] = None
    salesperson_id: Optional[int] = None
    bank_account_id: Optional[int] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class PreparedTransaction(ValidatedTransaction):
    """Ledger-ready transaction: every invariant holds and defaults are applied."""


@dataclass(frozen=True)
class Transaction:
    """Persisted transaction domain entity."""

    id: int
    description: str
    category: str
    value: int
    type: TransactionType
    nature: TransactionNature
    cost_type: CostType
    is_repasse: bool
    status: TransactionStatus
    date: date
    competence_date: date
    payment_date: Optional[date]
    project_id: Optional[int]
    salesperson_id: Optional[int]
    notes: Optional[str]
    created_at: datetime
    bank_account_id: Optional[int] = None


# Anything the ledger functions can fold over
LedgerEntry = Union[PreparedTransaction, Transaction]


@dataclass(frozen=True)
class ValidationIssue:
    """A single rejected field."""

    field: str
    message: str
    code: str


@dataclass(frozen=True)
class ValidationResult:
    """Outcome of validating raw transaction input.

    Exactly one of ``transaction`` and ``errors`` is meaningful: a result with
    errors never carries a transaction.
    """

    transaction: Optional[ValidatedTransaction] = None
    errors: tuple[ValidationIssue, ...] = ()

    @property
    def is_valid(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class OperationalTotals:
    """Operational revenue and expense, excluding every repasse."""

    revenue: int
    expense: int
    result: int


@dataclass(frozen=True)
class RepasseTotals:
    """Pass-through inflow and outflow."""

    inflow: int
    outflow: int
    net: int


@dataclass(frozen=True)
class CashFlow:
    """Cash flow with its operational and pass-through components kept apart."""

    operational: int
    repasse: int
    total: int


@dataclass(frozen=True)
class CostBreakdown:
    """Operational expenses split by cost type."""

    direct: int
    fixed: int
    total: int


@dataclass(frozen=True)
class LedgerTotals:
    """Every aggregate of a ledger snapshot."""

    operational: OperationalTotals
    repasse: RepasseTotals
    cash_flow: CashFlow
    realized: OperationalTotals
    forecast: OperationalTotals
    costs: CostBreakdown


@dataclass(frozen=True)
class AccountBalance:
    """Realized balance of one bank account."""

    account_id: int
    name: str
    opening_balance: int
    inflow: int
    outflow: int
    balance: int
    is_default: bool = False


@dataclass(frozen=True)
class CategoryAmount:
    """Drill-down row of an income statement line."""

    name: str
    value: int


@dataclass(frozen=True)
class StatementLine:
    """One of the seven income statement lines."""

    key: str
    label: str
    value: int
    categories: tuple[CategoryAmount, ...] = ()
    percent: Optional[float] = None


@dataclass(frozen=True)
class IncomeStatement:
    """Seven-line income statement (DRE) plus informational repasse totals."""

    lines: tuple[StatementLine, ...]
    tax_rate_percent: float
    repasse_inflow: int
    repasse_outflow: int

    def line(self, key: str) -> StatementLine:
        """Return the line with the given key."""
        for statement_line in self.lines:
            if statement_line.key == key:
                return statement_line
        raise KeyError(key)

    @property
    def gross_revenue(self) -> int:
        return self.line("gross_revenue").value

    @property
    def taxes(self) -> int:
        return self.line("taxes").value

    @property
    def variable_costs(self) -> int:
        return self.line("variable_costs").value

    @property
    def contribution_margin(self) -> int:
        return self.line("contribution_margin").value

    @property
    def fixed_costs(self) -> int:
        return self.line("fixed_costs").value

    @property
    def investments(self) -> int:
        return self.line("investments").value

    @property
    def net_operating_profit(self) -> int:
        return self.line("net_operating_profit").value


@dataclass(frozen=True)
class ClientProfitability:
    """Per-client profitability row.

    ``unrated_minutes`` counts tracked minutes whose assignee had no known
    hourly rate. Those minutes cost nothing in ``labor_cost``, so any value
    above zero means profit and margin are overstated.
    """

    client_id: int
    client_name: str
    revenue: int
    direct_costs: int
    labor_cost: int
    profit: int
    margin: float
    unrated_minutes: int = 0
    project_ids: tuple[int, ...] = field(default_factory=tuple)

    @property
    def has_unrated_labor(self) -> bool:
        return self.unrated_minutes > 0
