from __future__ import annotations

from typing import Sequence

from .models import Measurement, MonthTotals, Nettleie, TariffConstants
from .subsidy import round_half_away_from_zero


def month_totals(measurements: Sequence[Measurement]) -> MonthTotals:
    """Derive monthly usage totals when the data source did not supply them."""

    consumption = float(sum(item.consumption for item in measurements))
    cost = float(sum(item.cost for item in measurements))
    vat = float(sum(item.vat for item in measurements))
    if consumption == 0:
        return MonthTotals(
            consumption=0.0, cost=cost, unit_price=0.0, unit_price_vat=0.0
        )
    return MonthTotals(
        consumption=consumption,
        cost=cost,
        unit_price=cost / consumption,
        unit_price_vat=vat / consumption,
    )


def spot_price(totals: MonthTotals, constants: TariffConstants) -> float:
    """Spot price including VAT, with the supplier markup removed."""

    return totals.unit_price - constants.paaslag_per_kwh


def spot_price_without_vat(totals: MonthTotals, constants: TariffConstants) -> float:
    return spot_price(totals, constants) - totals.unit_price_vat


def cost_without_markup(totals: MonthTotals, constants: TariffConstants) -> float:
    """Energy cost with supplier markup and electricity levy taken out."""

    return (
        totals.cost
        - constants.paaslag_per_kwh * totals.consumption
        - (constants.el_avgift_per_kwh / 100) * totals.consumption
    )


def sum_nettleie(nettleie: Nettleie) -> int:
    # energiledd is billed in øre, fastledd in kroner
    energiledd = nettleie.energiledd
    return round_half_away_from_zero(
        energiledd.dag.cost / 100 + energiledd.natt.cost / 100 + nettleie.fastledd.cost
    )


def total_cost(
    totals: MonthTotals,
    nettleie_sum: int,
    estimated_allowance: int,
    constants: TariffConstants,
) -> int:
    return round_half_away_from_zero(
        constants.tibber_fastpris_kr + nettleie_sum + totals.cost - estimated_allowance
    )
