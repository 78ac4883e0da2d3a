"""Category tables and classification rules.

Categories are free text. Repasse eligibility is therefore a permissive
substring match, while statement grouping is an exact lookup in a rule table.
"""

from types import MappingProxyType
from typing import Mapping

from agencyledger.domain.entities import StatementGroup

REVENUE_CATEGORIES: tuple[str, ...] = (
    "Fee Mensal",
    "Projeto Pontual",
    "Consultoria",
    "Comissão",
    "Outros",
)

EXPENSE_CATEGORIES: tuple[str, ...] = (
    "Salários",
    "Freelancers",
    "Aluguel",
    "Ferramentas/Software",
    "Compra de Mídia/Ads",
    "Impostos",
    "Marketing",
    "Administrativo",
    "Outros",
)

REPASSE_CATEGORIES: tuple[str, ...] = (
    "Compra de Mídia/Ads",
    "Mídia Paga",
    "Investimento em Mídia",
    "Google Ads",
    "Facebook Ads",
    "Meta Ads",
    "LinkedIn Ads",
    "TikTok Ads",
)

VARIABLE_COST_CATEGORIES: tuple[str, ...] = (
    "Comissões de Vendas",
    "Impostos sobre Serviços",
    "Taxas de Boleto",
    "Taxas de Cartão",
    "Taxas Bancárias",
    "Custos de Mídia (Operacional)",
)

INVESTMENT_CATEGORIES: tuple[str, ...] = (
    "Equipamentos",
    "Marketing Institucional",
    "Cursos e Treinamentos",
    "Ferramentas e Softwares",
)

COMMISSION_CATEGORY = "Comissões de Vendas"

# Generic media/ad-platform tokens
REPASSE_TOKENS: tuple[str, ...] = (
    "mídia",
    "midia",
    "ads",
    "google",
    "facebook",
    "meta",
    "tiktok",
    "linkedin",
)


def normalize_category(category: str) -> str:
    """Normalize a category label for comparisons."""
    return category.strip().casefold()


def _build_group_rules() -> Mapping[str, StatementGroup]:
    rules: dict[str, StatementGroup] = {}
    for name in VARIABLE_COST_CATEGORIES:
        rules[normalize_category(name)] = StatementGroup.VARIABLE_COST
    for name in INVESTMENT_CATEGORIES:
        rules[normalize_category(name)] = StatementGroup.INVESTMENT
    return MappingProxyType(rules)


# Normalized category label -> statement group. Anything absent is fixed cost.
CATEGORY_GROUP_RULES: Mapping[str, StatementGroup] = _build_group_rules()

_REPASSE_PATTERNS: tuple[str, ...] = tuple(
    normalize_category(name) for name in REPASSE_CATEGORIES
) + REPASSE_TOKENS


def is_repasse_eligible(category: str) -> bool:
    """Return True if a category may carry a pass-through (repasse) flow.

    Args:
        category: Free-text category label

    Returns:
        True when the label contains a known media category or ad-platform token
    """
    normalized = normalize_category(category)
    if not normalized:
        return False
    return any(pattern in normalized for pattern in _REPASSE_PATTERNS)


def classify_expense_category(category: str) -> StatementGroup:
    """Map an expense category to its income statement group."""
    return CATEGORY_GROUP_RULES.get(
        normalize_category(category), StatementGroup.FIXED_COST
    )
