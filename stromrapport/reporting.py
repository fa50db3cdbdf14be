from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, List, Sequence, Tuple

from .aggregates import DEFAULT_TIMEZONE, aggregate_by_day, count_unique_days
from .costs import (
    cost_without_markup,
    month_totals,
    spot_price,
    spot_price_without_vat,
    sum_nettleie,
    total_cost,
)
from .exceptions import DivisionByZeroError, MalformedInputError
from .models import Measurement, Month, Nettleie, TariffConstants
from .subsidy import estimate_allowance, round_half_away_from_zero

logger = logging.getLogger(__name__)

# Share of a VAT-inclusive price that is left after removing 25% VAT.
WITHOUT_VAT_FACTOR = 0.8


@dataclass(frozen=True)
class DayReport:
    date: str
    usage: float
    cost: float
    vat: float
    estimated_allowance: int
    diff: float

    @property
    def price_per_kwh(self) -> float:
        if self.usage == 0:
            raise DivisionByZeroError(f"price per kWh for {self.date}")
        return self.cost / self.usage

    @property
    def is_over_allowance(self) -> bool:
        return self.diff > 0


@dataclass(frozen=True)
class MonthlyReport:
    """Cost figures for one month.

    Figures typed ``int`` are rounded to whole kroner; everything else keeps
    full precision.
    """

    month_name: str
    consumption: float
    consumption_unit: str
    cost: float
    spot_price: float
    spot_price_without_vat: float
    estimated_allowance: int
    actual_power_cost: int
    cost_without_markup: float
    fastledd_name: str
    fastledd_kr: float
    energiledd_dag_kwh: float
    energiledd_dag_kr: float
    energiledd_natt_kwh: float
    energiledd_natt_kr: float
    sum_nettleie: int
    tibber_fastpris_kr: float
    total_cost: int
    num_days_counted: int
    last_registered: datetime | None
    days: Tuple[DayReport, ...]

    @property
    def cost_per_day(self) -> float:
        if self.num_days_counted == 0:
            raise DivisionByZeroError("cost per day")
        return self.total_cost / self.num_days_counted

    @property
    def average_price_per_kwh(self) -> float:
        if self.consumption == 0:
            raise DivisionByZeroError("average price per kWh")
        return self.cost_without_markup / self.consumption

    @property
    def average_price_per_kwh_without_vat(self) -> float:
        return self.average_price_per_kwh * WITHOUT_VAT_FACTOR


def summarize(
    month: Month,
    nettleie: Nettleie,
    constants: TariffConstants = TariffConstants(),
    *,
    timezone: str = DEFAULT_TIMEZONE,
) -> MonthlyReport:
    """Compute the monthly report figures and the per-day breakdown."""

    measurements = _checked_measurements(month.measurements)
    totals = month.total_usage or month_totals(measurements)

    price = spot_price(totals, constants)
    price_without_vat = spot_price_without_vat(totals, constants)
    allowance = estimate_allowance(price_without_vat, totals.consumption)
    nettleie_sum = sum_nettleie(nettleie)
    num_days = count_unique_days(measurements, timezone=timezone)

    logger.debug(
        "Summarizing %s: %d measurements over %d days",
        month.month_name,
        len(measurements),
        num_days,
    )

    energiledd = nettleie.energiledd
    return MonthlyReport(
        month_name=month.month_name,
        consumption=totals.consumption,
        consumption_unit=month.consumption_unit,
        cost=totals.cost,
        spot_price=price,
        spot_price_without_vat=price_without_vat,
        estimated_allowance=allowance,
        actual_power_cost=round_half_away_from_zero(totals.cost - allowance),
        cost_without_markup=cost_without_markup(totals, constants),
        fastledd_name=nettleie.fastledd.name,
        fastledd_kr=nettleie.fastledd.cost,
        energiledd_dag_kwh=energiledd.dag.consume,
        energiledd_dag_kr=energiledd.dag.cost / 100,
        energiledd_natt_kwh=energiledd.natt.consume,
        energiledd_natt_kr=energiledd.natt.cost / 100,
        sum_nettleie=nettleie_sum,
        tibber_fastpris_kr=constants.tibber_fastpris_kr,
        total_cost=total_cost(totals, nettleie_sum, allowance, constants),
        num_days_counted=num_days,
        last_registered=_last_registered(measurements),
        days=tuple(
            build_day_breakdown(measurements, price_without_vat, timezone=timezone)
        ),
    )


def build_day_breakdown(
    measurements: Iterable[Measurement],
    spot_price_without_vat: float,
    *,
    timezone: str = DEFAULT_TIMEZONE,
) -> List[DayReport]:
    """Per-day cost and allowance, newest day first.

    The allowance for each day uses the month's spot price with that day's
    usage.
    """

    days = []
    for entry in aggregate_by_day(measurements, timezone=timezone):
        allowance = estimate_allowance(spot_price_without_vat, entry.usage)
        days.append(
            DayReport(
                date=entry.date,
                usage=entry.usage,
                cost=entry.cost,
                vat=entry.vat,
                estimated_allowance=allowance,
                diff=entry.cost - allowance,
            )
        )
    # Keys are zero padded, so lexical order is chronological.
    days.sort(key=lambda day: day.date, reverse=True)
    return days


def _last_registered(measurements: Sequence[Measurement]) -> datetime | None:
    if not measurements:
        return None
    return max(item.to for item in measurements)


def _checked_measurements(measurements: object) -> Tuple[Measurement, ...]:
    if isinstance(measurements, (str, bytes)) or not isinstance(measurements, Sequence):
        raise MalformedInputError(
            "measurements must be a sequence", field="measurements"
        )
    for item in measurements:
        if not isinstance(item, Measurement):
            raise MalformedInputError(
                f"Expected Measurement, got {type(item).__name__}",
                field="measurements",
            )
    return tuple(measurements)
