"""Builders shared by the test modules."""

from datetime import datetime, timedelta

from stromrapport.models import Measurement


def make_measurement(
    start: str,
    consumption: float,
    unit_price: float,
    unit_price_vat: float,
    cost: float | None = None,
) -> Measurement:
    """Build a one-hour measurement starting at ``start`` (ISO format)."""
    from_ = datetime.fromisoformat(start)
    return Measurement(
        from_=from_,
        to=from_ + timedelta(hours=1),
        consumption=consumption,
        cost=consumption * unit_price if cost is None else cost,
        unit_price=unit_price,
        unit_price_vat=unit_price_vat,
    )
