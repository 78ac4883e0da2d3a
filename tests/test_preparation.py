"""Tests for transaction preparation."""

from datetime import date

import pytest

from agencyledger.domain.entities import (
    CostType,
    PreparedTransaction,
    TransactionNature,
    TransactionStatus,
)
from agencyledger.domain.preparation import (
    default_competence_date,
    default_payment_date,
    derive_cost_type,
    force_repasse_nature,
    prepare,
)
from agencyledger.domain.validation import validate_or_raise

TODAY = date(2024, 6, 1)


def _validated(**overrides):
    raw = {
        "description": "Campanha",
        "category": "Google Ads",
        "value": 500000,
        "type": "despesa",
        "date": "2024-06-10",
    }
    raw.update(overrides)
    return validate_or_raise(raw, today=TODAY)


@pytest.mark.parametrize("nature", ["operacional", "nao_operacional", None])
def test_repasse_is_always_non_operational(nature):
    prepared = prepare(_validated(is_repasse=True, nature=nature), today=TODAY)

    assert prepared.nature == TransactionNature.NON_OPERATIONAL


def test_non_repasse_keeps_its_nature():
    prepared = prepare(_validated(category="Aluguel", nature="nao_operacional"), today=TODAY)

    assert prepared.nature == TransactionNature.NON_OPERATIONAL
    assert prepare(_validated(category="Aluguel"), today=TODAY).nature == (
        TransactionNature.OPERATIONAL
    )


def test_project_makes_cost_direct():
    prepared = prepare(_validated(project_id=3, cost_type="fixo"), today=TODAY)

    assert prepared.cost_type == CostType.DIRECT


def test_no_project_makes_cost_fixed():
    prepared = prepare(_validated(cost_type="direto"), today=TODAY)

    assert prepared.cost_type == CostType.FIXED


def test_competence_date_defaults_to_due_date():
    prepared = prepare(_validated(), today=TODAY)

    assert prepared.competence_date == date(2024, 6, 10)


def test_explicit_competence_date_is_kept():
    prepared = prepare(_validated(competence_date="2024-05-31"), today=TODAY)

    assert prepared.competence_date == date(2024, 5, 31)


def test_paid_without_payment_date_is_paid_today():
    prepared = prepare(_validated(status="pago"), today=TODAY)

    assert prepared.status == TransactionStatus.PAID
    assert prepared.payment_date == TODAY


def test_paid_with_payment_date_keeps_it():
    prepared = prepare(_validated(status="pago", payment_date="2024-06-12"), today=TODAY)

    assert prepared.payment_date == date(2024, 6, 12)


def test_pending_has_no_payment_date():
    assert prepare(_validated(), today=TODAY).payment_date is None


def test_prepare_returns_prepared_transaction():
    assert isinstance(prepare(_validated(), today=TODAY), PreparedTransaction)


def test_steps_leave_unrelated_fields_alone():
    validated = _validated(category="Aluguel")

    assert force_repasse_nature(validated, TODAY) is validated
    assert derive_cost_type(validated, TODAY) is validated
    assert default_payment_date(validated, TODAY) is validated
    assert default_competence_date(validated, TODAY) is not validated
