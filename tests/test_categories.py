"""Tests for category tables and classification rules."""

import pytest

from agencyledger.domain.categories import (
    CATEGORY_GROUP_RULES,
    EXPENSE_CATEGORIES,
    INVESTMENT_CATEGORIES,
    REPASSE_CATEGORIES,
    VARIABLE_COST_CATEGORIES,
    classify_expense_category,
    is_repasse_eligible,
    normalize_category,
)
from agencyledger.domain.entities import StatementGroup


@pytest.mark.parametrize("category", REPASSE_CATEGORIES)
def test_every_repasse_category_is_eligible(category):
    assert is_repasse_eligible(category)


@pytest.mark.parametrize(
    "category",
    ["Campanha Google", "Mídia OOH", "midia regional", "FACEBOOK boost", "Spotify Ads"],
)
def test_platform_tokens_make_free_text_eligible(category):
    assert is_repasse_eligible(category)


@pytest.mark.parametrize("category", ["Salários", "Aluguel", "Fee Mensal", "", "   "])
def test_non_media_categories_are_not_eligible(category):
    assert not is_repasse_eligible(category)


def test_media_purchase_is_both_expense_and_repasse_category():
    assert "Compra de Mídia/Ads" in EXPENSE_CATEGORIES
    assert is_repasse_eligible("Compra de Mídia/Ads")


def test_normalize_category():
    assert normalize_category("  Taxas de Cartão ") == "taxas de cartão"


@pytest.mark.parametrize("category", VARIABLE_COST_CATEGORIES)
def test_variable_cost_categories(category):
    assert classify_expense_category(category) == StatementGroup.VARIABLE_COST


@pytest.mark.parametrize("category", INVESTMENT_CATEGORIES)
def test_investment_categories(category):
    assert classify_expense_category(category) == StatementGroup.INVESTMENT


def test_classification_ignores_case_and_whitespace():
    assert classify_expense_category(" taxas de boleto ") == StatementGroup.VARIABLE_COST
    assert classify_expense_category("EQUIPAMENTOS") == StatementGroup.INVESTMENT


@pytest.mark.parametrize("category", ["Salários", "Aluguel", "Internet", "Anything else"])
def test_unknown_categories_are_fixed_costs(category):
    assert classify_expense_category(category) == StatementGroup.FIXED_COST


def test_group_rules_are_read_only():
    with pytest.raises(TypeError):
        CATEGORY_GROUP_RULES["aluguel"] = StatementGroup.INVESTMENT
