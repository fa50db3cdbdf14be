"""Monthly electricity report computations: day buckets, grid fees, allowance estimate and totals."""

from .aggregates import aggregate_by_day, count_unique_days, day_key
from .exceptions import (
    DivisionByZeroError,
    InvalidDateComponentError,
    MalformedInputError,
    StromrapportError,
)
from .models import (
    DailyAggregate,
    Energiledd,
    EnergileddBand,
    Fastledd,
    Measurement,
    Month,
    MonthTotals,
    Nettleie,
    TariffConstants,
)
from .reporting import DayReport, MonthlyReport, build_day_breakdown, summarize
from .subsidy import estimate_allowance, round_half_away_from_zero

__all__ = [
    "aggregate_by_day",
    "build_day_breakdown",
    "count_unique_days",
    "DailyAggregate",
    "day_key",
    "DayReport",
    "DivisionByZeroError",
    "Energiledd",
    "EnergileddBand",
    "estimate_allowance",
    "Fastledd",
    "InvalidDateComponentError",
    "MalformedInputError",
    "Measurement",
    "Month",
    "MonthlyReport",
    "MonthTotals",
    "Nettleie",
    "round_half_away_from_zero",
    "StromrapportError",
    "summarize",
    "TariffConstants",
]
