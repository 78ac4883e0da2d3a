"""Tests for the transaction service."""

from datetime import date, timedelta

import pytest

from agencyledger.domain.entities import (
    CostType,
    TransactionNature,
    TransactionStatus,
    TransactionType,
)
from agencyledger.domain.errors import NotFoundError, TransactionValidationError
from agencyledger.domain.transaction import TransactionService


def test_create_transaction(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.id == transaction_id
    assert txn.type == TransactionType.REVENUE
    assert txn.value == 100000
    assert txn.nature == TransactionNature.OPERATIONAL
    assert txn.cost_type == CostType.FIXED
    assert txn.status == TransactionStatus.PENDING
    assert txn.competence_date == date(2024, 3, 10)
    assert txn.created_at is not None


def test_create_repasse_is_stored_non_operational(transaction_service):
    transaction_id = transaction_service.create_transaction(
        {
            "description": "Campanha março",
            "category": "Compra de Mídia/Ads",
            "value": 50000,
            "type": "despesa",
            "nature": "operacional",
            "is_repasse": True,
            "date": "2024-03-10",
        }
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.is_repasse
    assert txn.nature == TransactionNature.NON_OPERATIONAL


def test_create_with_project_is_direct_cost(transaction_service, sample_project):
    transaction_id = transaction_service.create_transaction(
        {
            "description": "Freelancer",
            "category": "Freelancers",
            "value": 30000,
            "type": "despesa",
            "date": "2024-03-10",
            "project_id": sample_project.id,
        }
    )

    assert transaction_service.get_transaction(transaction_id).cost_type == CostType.DIRECT


def test_create_rejects_invalid_input(transaction_service, temp_db):
    with pytest.raises(TransactionValidationError) as excinfo:
        transaction_service.create_transaction(
            {
                "description": "Salário",
                "category": "Salários",
                "value": 100000,
                "type": "despesa",
                "is_repasse": True,
                "date": "2024-03-10",
            }
        )

    assert [issue.field for issue in excinfo.value.business_rule_violations] == ["is_repasse"]
    assert temp_db.list_transactions() == []


def test_create_with_unknown_project(transaction_service, raw_revenue):
    with pytest.raises(NotFoundError, match="Project 42"):
        transaction_service.create_transaction({**raw_revenue, "project_id": 42})


def test_create_with_unknown_salesperson(transaction_service, raw_revenue):
    with pytest.raises(NotFoundError, match="Team member 7"):
        transaction_service.create_transaction({**raw_revenue, "salesperson_id": 7})


def test_max_value_is_configurable(temp_db, raw_revenue):
    service = TransactionService(temp_db, max_value=50000)

    with pytest.raises(TransactionValidationError) as excinfo:
        service.create_transaction(raw_revenue)

    assert excinfo.value.issues[0].code == "out_of_range"


def test_build_transaction_does_not_persist(transaction_service, temp_db, raw_revenue):
    prepared = transaction_service.build_transaction(raw_revenue)

    assert prepared.competence_date == date(2024, 3, 10)
    assert temp_db.list_transactions() == []


def test_update_revalidates_merged_record(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    with pytest.raises(TransactionValidationError):
        transaction_service.update_transaction(transaction_id, {"is_repasse": True})

    # Rejected updates leave the stored record untouched
    txn = transaction_service.get_transaction(transaction_id)
    assert txn.is_repasse is False
    assert txn.nature == TransactionNature.OPERATIONAL


def test_update_reapplies_preparation(transaction_service, sample_project, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    transaction_service.update_transaction(transaction_id, {"project_id": sample_project.id})
    assert transaction_service.get_transaction(transaction_id).cost_type == CostType.DIRECT

    transaction_service.update_transaction(transaction_id, {"project_id": None})
    assert transaction_service.get_transaction(transaction_id).cost_type == CostType.FIXED


def test_update_to_repasse_forces_nature(transaction_service):
    transaction_id = transaction_service.create_transaction(
        {
            "description": "Campanha",
            "category": "Google Ads",
            "value": 50000,
            "type": "despesa",
            "date": "2024-03-10",
        }
    )

    prepared = transaction_service.update_transaction(transaction_id, {"is_repasse": True})

    assert prepared.nature == TransactionNature.NON_OPERATIONAL
    assert transaction_service.get_transaction(transaction_id).nature == (
        TransactionNature.NON_OPERATIONAL
    )


def test_update_date_moves_defaulted_competence_date(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    transaction_service.update_transaction(transaction_id, {"date": "2024-04-10"})

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.date == date(2024, 4, 10)
    assert txn.competence_date == date(2024, 4, 10)


def test_update_date_keeps_distinct_competence_date(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(
        {**raw_revenue, "competence_date": "2024-02-29"}
    )

    transaction_service.update_transaction(transaction_id, {"date": "2024-04-10"})

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.date == date(2024, 4, 10)
    assert txn.competence_date == date(2024, 2, 29)


def test_update_keeps_explicit_competence_date(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    transaction_service.update_transaction(
        transaction_id, {"date": "2024-04-10", "competence_date": "2024-03-10"}
    )

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.date == date(2024, 4, 10)
    assert txn.competence_date == date(2024, 3, 10)


def test_update_missing_transaction(transaction_service):
    with pytest.raises(NotFoundError, match="Transaction 999 not found"):
        transaction_service.update_transaction(999, {"value": 10})


def test_mark_paid_defaults_payment_date(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)
    today = date(2024, 3, 15)

    prepared = transaction_service.mark_paid(transaction_id, today=today)

    assert prepared.status == TransactionStatus.PAID
    assert prepared.payment_date == today


def test_mark_paid_with_payment_date(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    transaction_service.mark_paid(transaction_id, payment_date=date(2024, 3, 12))

    txn = transaction_service.get_transaction(transaction_id)
    assert txn.status == TransactionStatus.PAID
    assert txn.payment_date == date(2024, 3, 12)


def test_update_status(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    transaction_service.update_status(transaction_id, TransactionStatus.CANCELLED)

    assert transaction_service.get_transaction(transaction_id).status == (
        TransactionStatus.CANCELLED
    )


def test_delete_transaction(transaction_service, raw_revenue):
    transaction_id = transaction_service.create_transaction(raw_revenue)

    transaction_service.delete_transaction(transaction_id)

    assert transaction_service.get_transaction(transaction_id) is None
    with pytest.raises(NotFoundError):
        transaction_service.delete_transaction(transaction_id)


def test_list_transactions_filters(transaction_service, sample_project, raw_revenue):
    transaction_service.create_transaction(raw_revenue)
    transaction_service.create_transaction(
        {**raw_revenue, "date": "2024-04-10", "project_id": sample_project.id}
    )
    transaction_service.create_transaction(
        {
            **raw_revenue,
            "category": "Google Ads",
            "type": "despesa",
            "is_repasse": True,
            "status": "pago",
            "date": "2024-05-10",
        }
    )

    assert len(transaction_service.list_transactions()) == 3
    assert len(
        transaction_service.list_transactions(
            start_date=date(2024, 4, 1), end_date=date(2024, 4, 30)
        )
    ) == 1
    assert len(transaction_service.list_transactions(project_id=sample_project.id)) == 1
    assert len(transaction_service.list_transactions(status=TransactionStatus.PAID)) == 1
    assert len(transaction_service.list_transactions(is_repasse=True)) == 1
    assert len(transaction_service.list_transactions(is_repasse=False)) == 2


def test_list_orders_newest_first(transaction_service, raw_revenue):
    transaction_service.create_transaction(raw_revenue)
    transaction_service.create_transaction({**raw_revenue, "date": "2024-05-10"})

    dates = [txn.date for txn in transaction_service.list_transactions()]

    assert dates == [date(2024, 5, 10), date(2024, 3, 10)]


def test_list_filters_on_competence_date(transaction_service, raw_revenue):
    transaction_service.create_transaction({**raw_revenue, "competence_date": "2024-02-29"})

    february = transaction_service.list_transactions(
        start_date=date(2024, 2, 1), end_date=date(2024, 2, 29)
    )

    assert len(february) == 1


def test_future_competence_date_uses_today(transaction_service, raw_revenue):
    far = date.today() + timedelta(days=400)

    with pytest.raises(TransactionValidationError):
        transaction_service.create_transaction({**raw_revenue, "date": far.isoformat()})
