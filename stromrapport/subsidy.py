"""Estimate of the government electricity allowance (strømstønad)."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

ALLOWANCE_THRESHOLD_KR = 0.7
ALLOWANCE_COVERAGE = 0.9
# Allowance is computed ex VAT; 1.25 adds the 25% VAT back.
ALLOWANCE_GROSS_UP = 1.25


def estimate_allowance(spot_price_ex_vat: float, consumption_kwh: float) -> int:
    """Estimate the allowance in kroner for ``consumption_kwh`` at a spot price.

    The scheme covers 90% of the spot price above 0.70 kr/kWh. Prices below
    the threshold give a negative estimate, which is returned unchanged.
    """

    allowance = (
        (spot_price_ex_vat - ALLOWANCE_THRESHOLD_KR)
        * ALLOWANCE_COVERAGE
        * consumption_kwh
        * ALLOWANCE_GROSS_UP
    )
    return round_half_away_from_zero(allowance)


def round_half_away_from_zero(value: float) -> int:
    return int(Decimal(value).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
