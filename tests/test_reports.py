"""Tests for the report service."""

from datetime import date

import pytest

from agencyledger.domain.errors import ValidationError


@pytest.fixture
def ledger(transaction_service, directory_service, sample_project, sample_member):
    """Populate a small ledger across two months."""
    transaction_service.create_transaction(
        {
            "description": "Fee março",
            "category": "Fee Mensal",
            "value": 500000,
            "type": "receita",
            "date": "2024-03-05",
            "status": "pago",
            "project_id": sample_project.id,
        }
    )
    transaction_service.create_transaction(
        {
            "description": "Freelancer",
            "category": "Freelancers",
            "value": 50000,
            "type": "despesa",
            "date": "2024-03-10",
            "project_id": sample_project.id,
        }
    )
    transaction_service.create_transaction(
        {
            "description": "Taxa cartão",
            "category": "Taxas de Cartão",
            "value": 25000,
            "type": "despesa",
            "date": "2024-03-12",
        }
    )
    transaction_service.create_transaction(
        {
            "description": "Campanha",
            "category": "Compra de Mídia/Ads",
            "value": 200000,
            "type": "despesa",
            "is_repasse": True,
            "date": "2024-03-15",
        }
    )
    transaction_service.create_transaction(
        {
            "description": "Aluguel abril",
            "category": "Aluguel",
            "value": 30000,
            "type": "despesa",
            "date": "2024-04-05",
        }
    )
    directory_service.log_time(sample_project.id, 600, assignee_id=sample_member.id)


def test_ledger_totals_for_period(report_service, ledger):
    totals = report_service.ledger_totals(date(2024, 3, 1), date(2024, 3, 31))

    assert totals.operational.revenue == 500000
    assert totals.operational.expense == 75000
    assert totals.repasse.outflow == 200000
    assert totals.cash_flow.total == 500000 - 75000 - 200000
    assert totals.realized.revenue == 500000
    assert totals.realized.expense == 0
    assert totals.costs.direct == 50000
    assert totals.costs.fixed == 25000


def test_ledger_totals_without_period(report_service, ledger):
    assert report_service.ledger_totals().operational.expense == 105000


def test_income_statement(report_service, ledger):
    statement = report_service.income_statement(date(2024, 3, 1), date(2024, 3, 31))

    assert statement.gross_revenue == 500000
    assert statement.taxes == 75000
    assert statement.variable_costs == 25000
    assert statement.contribution_margin == 400000
    assert statement.fixed_costs == 50000
    assert statement.net_operating_profit == 350000
    assert statement.repasse_outflow == 200000
    assert statement.tax_rate_percent == 15


def test_income_statement_tax_override(report_service, ledger):
    statement = report_service.income_statement(tax_rate_percent=10)

    assert statement.taxes == 50000


def test_income_statement_rejects_bad_rate(report_service, ledger):
    with pytest.raises(ValidationError):
        report_service.income_statement(tax_rate_percent=150)


def test_client_profitability(report_service, directory_service, ledger):
    directory_service.create_client("Idle")

    rows = report_service.client_profitability()

    assert [row.client_name for row in rows] == ["Acme", "Idle"]
    acme = rows[0]
    assert acme.revenue == 500000
    assert acme.direct_costs == 50000
    assert acme.labor_cost == 100000
    assert acme.profit == 350000
    assert acme.margin == 70.0
    assert rows[1].margin == 0.0


def test_reports_read_fresh_data(report_service, transaction_service, raw_revenue):
    assert report_service.ledger_totals().operational.revenue == 0

    transaction_service.create_transaction(raw_revenue)

    assert report_service.ledger_totals().operational.revenue == 100000
