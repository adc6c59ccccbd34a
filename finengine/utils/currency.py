from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from finengine.core.config import settings

CENT = Decimal("0.01")


def quantize_money(amount: Decimal) -> Decimal:
    return amount.quantize(CENT, rounding=ROUND_HALF_UP)


def money_str(amount: Decimal) -> str:
    """Serialise an amount with two decimals for API output."""
    return str(quantize_money(amount))


def format_quetzales(amount: Decimal) -> str:
    return f"{settings.CURRENCY_SYMBOL}{quantize_money(amount)}"
