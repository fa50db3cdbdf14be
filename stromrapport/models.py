from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime
from typing import Mapping, Sequence, Tuple

from .exceptions import MalformedInputError

EL_AVGIFT_PER_KWH = 15.41
PAASLAG_PER_KWH = 0.01
TIBBER_FASTPRIS_KR = 39.0


@dataclass(frozen=True)
class Measurement:
    """Hourly meter reading with its spot price."""

    from_: datetime
    to: datetime
    consumption: float
    cost: float
    unit_price: float
    unit_price_vat: float

    @property
    def vat(self) -> float:
        return self.unit_price_vat * self.consumption

    @classmethod
    def from_mapping(cls, row: Mapping[str, object]) -> "Measurement":
        consumption = _require_non_negative(row, "consumption")
        unit_price = _require_float(row, "unitPrice")
        if row.get("cost") is None:
            cost = consumption * unit_price
        else:
            cost = _require_float(row, "cost")
        return cls(
            from_=_require_datetime(row, "from"),
            to=_require_datetime(row, "to"),
            consumption=consumption,
            cost=cost,
            unit_price=unit_price,
            unit_price_vat=_require_float(row, "unitPriceVAT"),
        )


@dataclass(frozen=True)
class MonthTotals:
    """Aggregate usage for a whole month."""

    consumption: float
    cost: float
    unit_price: float
    unit_price_vat: float

    @classmethod
    def from_mapping(cls, row: Mapping[str, object]) -> "MonthTotals":
        return cls(
            consumption=_require_float(row, "consumption"),
            cost=_require_float(row, "cost"),
            unit_price=_require_float(row, "unitPrice"),
            unit_price_vat=_require_float(row, "unitPriceVAT"),
        )


@dataclass(frozen=True)
class Month:
    """A named month and the hourly readings registered in it."""

    month_name: str
    measurements: Tuple[Measurement, ...]
    total_usage: MonthTotals | None = None
    consumption_unit: str = "kWh"

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Month":
        rows = data.get("measurements")
        if isinstance(rows, (str, bytes)) or not isinstance(rows, Sequence):
            raise MalformedInputError(
                "measurements must be a sequence of rows", field="measurements"
            )
        total_usage = data.get("totalUsage")
        return cls(
            month_name=str(data.get("monthName", "")),
            measurements=tuple(_measurement_from_row(row) for row in rows),
            total_usage=(
                MonthTotals.from_mapping(_require_mapping(total_usage, "totalUsage"))
                if total_usage is not None
                else None
            ),
            consumption_unit=str(data.get("consumptionUnit", "kWh")),
        )


@dataclass(frozen=True)
class Fastledd:
    """Fixed grid fee, in kroner."""

    name: str
    cost: float


@dataclass(frozen=True)
class EnergileddBand:
    """Consumption based grid fee for one band, cost in øre."""

    consume: float
    cost: float


@dataclass(frozen=True)
class Energiledd:
    dag: EnergileddBand
    natt: EnergileddBand


@dataclass(frozen=True)
class Nettleie:
    """Grid fee schedule for a month."""

    fastledd: Fastledd
    energiledd: Energiledd

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "Nettleie":
        fastledd = _require_mapping(data.get("fastledd"), "fastledd")
        energiledd = _require_mapping(data.get("energiledd"), "energiledd")
        return cls(
            fastledd=Fastledd(
                name=str(fastledd.get("name", "")),
                cost=_require_float(fastledd, "cost"),
            ),
            energiledd=Energiledd(
                dag=_band_from_mapping(energiledd, "dag"),
                natt=_band_from_mapping(energiledd, "natt"),
            ),
        )


@dataclass(frozen=True)
class TariffConstants:
    """Fixed tariff figures used when summarizing a month.

    ``el_avgift_per_kwh`` is given in øre per kWh, the other two in kroner.
    """

    el_avgift_per_kwh: float = EL_AVGIFT_PER_KWH
    paaslag_per_kwh: float = PAASLAG_PER_KWH
    tibber_fastpris_kr: float = TIBBER_FASTPRIS_KR

    @classmethod
    def from_mapping(cls, data: Mapping[str, object]) -> "TariffConstants":
        return cls(
            el_avgift_per_kwh=_optional_non_negative(
                data, "elAvgiftPerKwh", EL_AVGIFT_PER_KWH
            ),
            paaslag_per_kwh=_optional_non_negative(
                data, "paaslagPerKwh", PAASLAG_PER_KWH
            ),
            tibber_fastpris_kr=_optional_non_negative(
                data, "tibberFastprisKr", TIBBER_FASTPRIS_KR
            ),
        )


@dataclass(frozen=True)
class DailyAggregate:
    """Usage, cost and VAT summed over one calendar day."""

    date: str
    usage: float
    cost: float
    vat: float


def _measurement_from_row(row: object) -> Measurement:
    if isinstance(row, Measurement):
        return row
    return Measurement.from_mapping(_require_mapping(row, "measurements"))


def _band_from_mapping(data: Mapping[str, object], key: str) -> EnergileddBand:
    band = _require_mapping(data.get(key), f"energiledd.{key}")
    return EnergileddBand(
        consume=_require_float(band, "consume"),
        cost=_require_float(band, "cost"),
    )


def _require_mapping(value: object, field: str) -> Mapping[str, object]:
    if not isinstance(value, Mapping):
        raise MalformedInputError(f"{field} must be a mapping", field=field)
    return value


def _require_float(row: Mapping[str, object], key: str) -> float:
    if key not in row or row[key] is None:
        raise MalformedInputError(f"Missing numeric field {key!r}", field=key)
    value = row[key]
    if isinstance(value, bool):
        raise MalformedInputError(f"Field {key!r} is not numeric", field=key)
    try:
        number = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError) as exc:
        raise MalformedInputError(
            f"Field {key!r} is not numeric: {value!r}", field=key
        ) from exc
    if not math.isfinite(number):
        raise MalformedInputError(
            f"Field {key!r} is not a finite number: {value!r}", field=key
        )
    return number


def _require_non_negative(row: Mapping[str, object], key: str) -> float:
    value = _require_float(row, key)
    if value < 0:
        raise MalformedInputError(f"{key} must be at least 0", field=key)
    return value


def _optional_non_negative(
    data: Mapping[str, object], key: str, default: float
) -> float:
    if data.get(key) is None:
        return default
    return _require_non_negative(data, key)


def _require_datetime(row: Mapping[str, object], key: str) -> datetime:
    if key not in row:
        raise MalformedInputError(f"Missing timestamp field {key!r}", field=key)
    value = row[key]
    if isinstance(value, datetime):
        return value
    if isinstance(value, str):
        try:
            return datetime.fromisoformat(value)
        except ValueError as exc:
            raise MalformedInputError(
                f"Invalid timestamp for {key!r}: {value!r}", field=key
            ) from exc
    raise MalformedInputError(
        f"Unsupported timestamp type for {key!r}: {type(value)!r}", field=key
    )
