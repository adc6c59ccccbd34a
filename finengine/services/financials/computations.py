"""Tax computation functions and constants.

Pure computation logic for Guatemalan IVA (VAT) and ISR (income tax).
No I/O; every function is a deterministic function of its arguments.
"""
import logging
from decimal import Decimal

from finengine.core.exceptions import InvalidConfigurationError
from finengine.models.finance_schemas import TaxRegime, VatPosition

logger = logging.getLogger(__name__)


# IVA: every gross amount in the system is VAT-inclusive at this rate
VAT_RATE = Decimal("0.12")

# ISR Régimen Opcional Simplificado (monthly, on net revenue)
SIMPLIFIED_BRACKET_LIMIT = Decimal("30000")
SIMPLIFIED_LOWER_RATE = Decimal("0.05")   # up to Q30,000
SIMPLIFIED_UPPER_RATE = Decimal("0.07")   # on the excess
SIMPLIFIED_BASE_TAX = SIMPLIFIED_BRACKET_LIMIT * SIMPLIFIED_LOWER_RATE  # Q1,500

# ISR Régimen Sobre Utilidades
PROFIT_TAX_RATE = Decimal("0.25")

VAT_POSITION_LABELS = {
    VatPosition.PAYABLE: "IMPUESTO A PAGAR",
    VatPosition.CREDIT: "CRÉDITO FISCAL A FAVOR (REMANENTE)",
}


def vat_factor(vat_rate: Decimal = VAT_RATE) -> Decimal:
    """Divisor that turns a gross amount into its net base (1.12 by default).

    Raises:
        InvalidConfigurationError: If the rate is zero, negative or not a finite number
    """
    if vat_rate is None or not vat_rate.is_finite() or vat_rate <= 0:
        raise InvalidConfigurationError("vat_rate", vat_rate, "rate must be a finite number greater than zero")
    return Decimal("1") + vat_rate


def split_gross(gross: Decimal, vat_rate: Decimal = VAT_RATE) -> tuple[Decimal, Decimal]:
    """
    Split a VAT-inclusive amount into (net, vat).

    ``vat`` is taken as ``gross - net`` so the two parts always add back up to
    the gross amount exactly.
    """
    net = gross / vat_factor(vat_rate)
    return net, gross - net


def resolve_regime(regime: TaxRegime | str) -> TaxRegime:
    """Coerce a caller-supplied regime; never falls back to a default."""
    if isinstance(regime, TaxRegime):
        return regime
    try:
        return TaxRegime(regime)
    except ValueError as e:
        raise InvalidConfigurationError(
            "tax_regime",
            regime,
            f"expected one of {', '.join(r.value for r in TaxRegime)}",
        ) from e


def compute_simplified_isr(total_revenue_net: Decimal) -> Decimal:
    """
    ISR under the simplified regime.

    Two brackets on net revenue (not profit): 5% up to Q30,000 inclusive,
    then Q1,500 plus 7% of the excess.
    """
    if total_revenue_net <= SIMPLIFIED_BRACKET_LIMIT:
        return total_revenue_net * SIMPLIFIED_LOWER_RATE
    return SIMPLIFIED_BASE_TAX + (total_revenue_net - SIMPLIFIED_BRACKET_LIMIT) * SIMPLIFIED_UPPER_RATE


def compute_profit_isr(operating_income: Decimal) -> Decimal:
    """25% of operating income; a loss month owes nothing and gets no refund."""
    if operating_income > 0:
        return operating_income * PROFIT_TAX_RATE
    return Decimal("0")


def compute_income_tax(
    regime: TaxRegime | str,
    total_revenue_net: Decimal,
    operating_income: Decimal,
) -> Decimal:
    """
    Calculate ISR for a period under the selected regime.

    Args:
        regime: TaxRegime (or its string value) chosen for the report
        total_revenue_net: Period revenue without VAT
        operating_income: Gross profit minus net operating expenses

    Returns:
        ISR amount (never negative)

    Raises:
        InvalidConfigurationError: If the regime is unknown
    """
    resolved = resolve_regime(regime)
    if resolved is TaxRegime.SIMPLIFIED:
        return compute_simplified_isr(total_revenue_net)
    return compute_profit_isr(operating_income)


def vat_position(vat_net_result: Decimal) -> tuple[VatPosition, Decimal, str]:
    """Express a signed VAT result as (position, absolute amount, label)."""
    position = VatPosition.PAYABLE if vat_net_result > 0 else VatPosition.CREDIT
    return position, abs(vat_net_result), VAT_POSITION_LABELS[position]
