"""Pytest configuration and fixtures."""

import pytest

from stromrapport.models import (
    Energiledd,
    EnergileddBand,
    Fastledd,
    Measurement,
    Nettleie,
    TariffConstants,
)
from tests.helpers import make_measurement


@pytest.fixture
def two_day_measurements() -> list[Measurement]:
    """Two readings on consecutive days, 15 kWh and 16 kr in total."""
    return [
        make_measurement("2023-01-01T00:00", 10, 1.0, 0.2, cost=10),
        make_measurement("2023-01-02T00:00", 5, 1.2, 0.24, cost=6),
    ]


@pytest.fixture
def nettleie() -> Nettleie:
    return Nettleie(
        fastledd=Fastledd(name="0-2 kW", cost=100),
        energiledd=Energiledd(
            dag=EnergileddBand(consume=10, cost=500),
            natt=EnergileddBand(consume=5, cost=200),
        ),
    )


@pytest.fixture
def constants() -> TariffConstants:
    return TariffConstants(
        el_avgift_per_kwh=15.41, paaslag_per_kwh=0.01, tibber_fastpris_kr=39
    )
