"""Tests for the monthly summary and per-day breakdown."""

from datetime import datetime

import pytest

from stromrapport.exceptions import DivisionByZeroError, MalformedInputError
from stromrapport.models import Month, MonthTotals
from stromrapport.reporting import build_day_breakdown, summarize
from tests.helpers import make_measurement


@pytest.fixture
def month(two_day_measurements) -> Month:
    """January with the monthly totals supplied by the data source."""
    return Month(
        month_name="januar",
        measurements=tuple(two_day_measurements),
        total_usage=MonthTotals(
            consumption=15, cost=16, unit_price=1.1, unit_price_vat=0.22
        ),
    )


def test_summarize_end_to_end(month, nettleie, constants):
    report = summarize(month, nettleie, constants)

    assert report.month_name == "januar"
    assert report.consumption == 15
    assert report.cost == 16
    assert report.spot_price == pytest.approx(1.09)
    assert report.spot_price_without_vat == pytest.approx(0.87)
    # (0.87 - 0.7) * 0.9 * 15 * 1.25 = 2.86875
    assert report.estimated_allowance == 3
    assert report.actual_power_cost == 13
    # 16 - 0.01 * 15 - 0.1541 * 15
    assert report.cost_without_markup == pytest.approx(13.5385)
    assert report.sum_nettleie == 107
    assert report.total_cost == 159
    assert report.num_days_counted == 2
    assert report.cost_per_day == pytest.approx(79.5)
    assert report.last_registered == datetime(2023, 1, 2, 1, 0)


def test_summarize_grid_fee_figures(month, nettleie, constants):
    report = summarize(month, nettleie, constants)

    assert report.fastledd_name == "0-2 kW"
    assert report.fastledd_kr == 100
    assert report.energiledd_dag_kwh == 10
    assert report.energiledd_dag_kr == pytest.approx(5.0)
    assert report.energiledd_natt_kwh == 5
    assert report.energiledd_natt_kr == pytest.approx(2.0)
    assert report.tibber_fastpris_kr == 39


def test_summarize_average_prices(month, nettleie, constants):
    report = summarize(month, nettleie, constants)

    assert report.average_price_per_kwh == pytest.approx(13.5385 / 15)
    assert report.average_price_per_kwh_without_vat == pytest.approx(
        13.5385 / 15 * 0.8
    )


def test_summarize_derives_totals_from_measurements(
    two_day_measurements, nettleie, constants
):
    month = Month(month_name="januar", measurements=tuple(two_day_measurements))

    report = summarize(month, nettleie, constants)

    assert report.consumption == pytest.approx(15)
    assert report.cost == pytest.approx(16)
    assert report.spot_price == pytest.approx(16 / 15 - 0.01)
    assert report.spot_price_without_vat == pytest.approx(16 / 15 - 0.01 - 3.2 / 15)
    # (0.8433 - 0.7) * 0.9 * 15 * 1.25 = 2.41875
    assert report.estimated_allowance == 2
    assert report.total_cost == 160
    assert report.num_days_counted == 2
    assert sum(day.usage for day in report.days) == pytest.approx(report.consumption)


def test_summarize_day_breakdown(month, nettleie, constants):
    report = summarize(month, nettleie, constants)

    assert [day.date for day in report.days] == ["2023-01-02", "2023-01-01"]
    newest, oldest = report.days
    # (0.87 - 0.7) * 0.9 * usage * 1.25
    assert oldest.estimated_allowance == 2
    assert oldest.diff == pytest.approx(8)
    assert newest.estimated_allowance == 1
    assert newest.diff == pytest.approx(5)
    assert newest.price_per_kwh == pytest.approx(1.2)
    assert newest.is_over_allowance


def test_summarize_is_idempotent(month, nettleie, constants):
    assert summarize(month, nettleie, constants) == summarize(
        month, nettleie, constants
    )


def test_summarize_last_registered_uses_latest_end(nettleie, constants):
    measurements = (
        make_measurement("2023-01-03T10:00", 1.0, 1.0, 0.2),
        make_measurement("2023-01-01T00:00", 1.0, 1.0, 0.2),
        make_measurement("2023-01-02T00:00", 1.0, 1.0, 0.2),
    )

    report = summarize(Month("januar", measurements), nettleie, constants)

    assert report.last_registered == datetime(2023, 1, 3, 11, 0)


def test_summarize_empty_month(nettleie, constants):
    report = summarize(Month("februar", ()), nettleie, constants)

    assert report.num_days_counted == 0
    assert report.days == ()
    assert report.last_registered is None
    assert report.estimated_allowance == 0
    assert report.total_cost == 39 + 107
    with pytest.raises(DivisionByZeroError):
        report.cost_per_day
    with pytest.raises(ZeroDivisionError):
        report.average_price_per_kwh


def test_summarize_rejects_non_measurements(nettleie, constants):
    month = Month("januar", ({"consumption": 1},))  # type: ignore[arg-type]

    with pytest.raises(MalformedInputError) as excinfo:
        summarize(month, nettleie, constants)
    assert excinfo.value.field == "measurements"


def test_build_day_breakdown_sorted_newest_first():
    measurements = [
        make_measurement("2023-01-01T00:00", 1.0, 1.0, 0.2),
        make_measurement("2023-01-03T00:00", 1.0, 1.0, 0.2),
        make_measurement("2023-01-02T00:00", 1.0, 1.0, 0.2),
    ]

    days = build_day_breakdown(measurements, 0.9)

    assert [day.date for day in days] == ["2023-01-03", "2023-01-02", "2023-01-01"]


def test_build_day_breakdown_uses_given_spot_price():
    measurements = [make_measurement("2023-01-01T00:00", 100.0, 0.5, 0.1)]

    (day,) = build_day_breakdown(measurements, 1.5)

    # (1.5 - 0.7) * 0.9 * 100 * 1.25 = 90
    assert day.estimated_allowance == 90
    assert day.diff == pytest.approx(50 - 90)
    assert not day.is_over_allowance


def test_build_day_breakdown_zero_usage_day():
    measurements = [make_measurement("2023-01-01T00:00", 0.0, 1.0, 0.2)]

    (day,) = build_day_breakdown(measurements, 1.0)

    assert day.estimated_allowance == 0
    with pytest.raises(DivisionByZeroError):
        day.price_per_kwh
