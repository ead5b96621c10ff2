"""Tests for reading submission and amount computation."""

from decimal import Decimal

import pytest

from meters.exceptions import CustomerNotFound, InvalidInput, RateNotFound
from meters.models import WaterRate
from meters.services import ReadingBillingService, compute_amount, parse_reading_value

from .conftest import FakeCustomerDirectory, FakeRateStore, make_customer, make_rate


@pytest.fixture
def service(customers, rates, readings, clock) -> ReadingBillingService:
    return ReadingBillingService(customers, rates, readings, clock=clock)


class TestParseReadingValue:
    """Test validation of the raw reading value."""

    @pytest.mark.parametrize("raw, expected", [
        ("5", Decimal("5")),
        (" 12.5 ", Decimal("12.5")),
        (7, Decimal("7")),
        (0.1, Decimal("0.1")),
        ("0", Decimal("0")),
        ("1.125", Decimal("1.125")),
    ])
    def test_accepts_non_negative_numbers(self, raw, expected) -> None:
        assert parse_reading_value(raw) == expected

    @pytest.mark.parametrize("raw", [
        None, "", "   ", "abc", "-1", "NaN", "Infinity", True, "1.2345", [5],
    ])
    def test_rejects_invalid_values(self, raw) -> None:
        with pytest.raises(InvalidInput):
            parse_reading_value(raw)

    @pytest.mark.parametrize("raw, expected", [
        ("999999999.999", Decimal("999999999.999")),
        ("123456789", Decimal("123456789")),
        ("1e3", Decimal("1000")),
    ])
    def test_accepts_largest_storable_values(self, raw, expected) -> None:
        value = parse_reading_value(raw)

        assert value == expected
        assert str(value) == str(expected)

    @pytest.mark.parametrize("raw", ["1000000000", "12345678901", "1e12", "1E+9"])
    def test_rejects_values_too_large_to_store(self, raw) -> None:
        with pytest.raises(InvalidInput, match="before the decimal point"):
            parse_reading_value(raw)


class TestComputeAmount:
    """Test the billing formula."""

    def test_minimum_plus_volume_times_rate(self) -> None:
        rate = make_rate(minimum_charge="150.00", rate="15.5000")

        assert compute_amount(Decimal("12.5"), rate) == Decimal("343.75")

    def test_no_float_drift(self) -> None:
        rate = make_rate(minimum_charge="0.10", rate="0.2000")

        assert compute_amount(Decimal("1"), rate) == Decimal("0.30")

    def test_rounds_to_centavo(self) -> None:
        rate = make_rate(minimum_charge="0.00", rate="1.0005")

        assert compute_amount(Decimal("1"), rate) == Decimal("1.00")
        assert compute_amount(Decimal("10"), rate) == Decimal("10.01")

    def test_negative_rate_is_not_repaired(self) -> None:
        rate = make_rate(minimum_charge="10.00", rate="-5.0000")

        assert compute_amount(Decimal("4"), rate) == Decimal("-10.00")

    def test_four_place_rate_rounds_half_up(self) -> None:
        rate = make_rate(minimum_charge="50.00", rate="0.0111")
        exact = Decimal("50.00") + Decimal("1.5") * Decimal("0.0111")

        amount = compute_amount(Decimal("1.5"), rate)

        assert exact == Decimal("50.01665")
        assert amount == Decimal("50.02")
        assert amount != exact

    def test_amount_too_large_to_store(self) -> None:
        rate = make_rate(minimum_charge="0.00", rate="999999.9999")

        with pytest.raises(InvalidInput, match="too large"):
            compute_amount(Decimal("999999999"), rate)


class TestSubmitReading:
    """Test ReadingBillingService.submit_reading."""

    def test_end_to_end_amount(self, service, readings, fixed_now) -> None:
        receipt = service.submit_reading("C1", "5", remarks="gate locked", staff_id=7)

        reading = receipt.reading
        assert reading.amount == Decimal("100")
        assert reading.reading_value == Decimal("5")
        assert reading.reading_date == fixed_now
        assert reading.remarks == "gate locked"
        assert reading.staff_id == 7
        assert readings.rows == [reading]

    def test_receipt_carries_rate_breakdown(self, service) -> None:
        receipt = service.submit_reading("C1", "5")

        assert receipt.customer_type == "residential"
        assert receipt.minimum_charge == Decimal("50.00")
        assert receipt.rate_per_cubic_meter == Decimal("10.0000")

        data = receipt.as_dict()
        assert data["id"] == 1
        assert data["amount"] == "100.00"
        assert data["customer_type"] == "residential"
        assert data["rate_per_cubic_meter"] == "10.0000"
        assert data["minimum_charge"] == "50.00"

    @pytest.mark.parametrize("value", ["0", "3", "12.345", "999.5"])
    def test_amount_matches_formula(self, service, value) -> None:
        receipt = service.submit_reading("C1", value)

        expected = Decimal("50.00") + Decimal(value) * Decimal("10.0000")
        assert receipt.reading.amount == expected

    def test_invalid_value_touches_nothing(self, service, customers, rates, readings) -> None:
        with pytest.raises(InvalidInput):
            service.submit_reading("C1", "abc")

        assert customers.calls == []
        assert rates.calls == []
        assert readings.rows == []

    def test_unknown_meter_skips_rate_store(self, service, rates, readings) -> None:
        with pytest.raises(CustomerNotFound) as exc:
            service.submit_reading("NOPE", "5")

        assert str(exc.value) == "Meter number not found"
        assert rates.calls == []
        assert readings.rows == []

    def test_missing_rate_writes_nothing(self, readings, clock) -> None:
        customers = FakeCustomerDirectory([make_customer("G1", "government")])
        rates = FakeRateStore([
            make_rate("residential"),
            make_rate("government", status=WaterRate.INACTIVE),
        ])
        service = ReadingBillingService(customers, rates, readings, clock=clock)

        with pytest.raises(RateNotFound):
            service.submit_reading("G1", "5")

        assert rates.calls == ["government"]
        assert readings.rows == []

    def test_unknown_customer_type_is_rate_not_found(self, rates, readings, clock) -> None:
        customers = FakeCustomerDirectory([make_customer("X1", "industrial")])
        service = ReadingBillingService(customers, rates, readings, clock=clock)

        with pytest.raises(RateNotFound):
            service.submit_reading("X1", "5")

        assert readings.rows == []

    def test_oversized_reading_touches_nothing(self, service, customers, readings) -> None:
        with pytest.raises(InvalidInput):
            service.submit_reading("C1", "12345678901")

        assert customers.calls == []
        assert readings.rows == []

    def test_amount_overflow_writes_nothing(self, readings, clock) -> None:
        customers = FakeCustomerDirectory([make_customer("C9", "commercial")])
        rates = FakeRateStore([make_rate("commercial", rate="999999.9999")])
        service = ReadingBillingService(customers, rates, readings, clock=clock)

        with pytest.raises(InvalidInput):
            service.submit_reading("C9", "999999999")

        assert readings.rows == []

    def test_double_submission_creates_two_readings(self, service, readings) -> None:
        service.submit_reading("C1", "5")
        service.submit_reading("C1", "5")

        assert len(readings.rows) == 2

    def test_readings_for_meter_newest_first(self, customers, rates, readings, fixed_now) -> None:
        instants = iter([fixed_now.replace(day=1), fixed_now.replace(day=20)])
        service = ReadingBillingService(customers, rates, readings,
                                        clock=lambda: next(instants))
        first = service.submit_reading("C1", "1").reading
        second = service.submit_reading("C1", "2").reading

        assert service.readings_for_meter("C1") == [second, first]
        assert service.readings_for_meter("C2") == []
