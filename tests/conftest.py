"""Pytest configuration, in-memory stores and fixtures."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from meters.models import Customer, WaterRate
from meters.stores import billing_period


class FakeCustomerDirectory:
    """Customer directory backed by a dict, recording every call."""

    def __init__(self, customers=()):
        self.customers = {c.meter_number: c for c in customers}
        self.calls = []

    def find_by_meter_number(self, meter_number):
        self.calls.append(meter_number)
        return self.customers.get(meter_number)

    def list_all(self):
        return list(self.customers.values())


class FakeRateStore:
    """Rate store backed by a list, recording every call."""

    def __init__(self, rates=()):
        self.rates = list(rates)
        self.calls = []

    def list_by_type(self, customer_type):
        self.calls.append(customer_type)
        return [r for r in self.rates if r.customer_type == customer_type]


class FakeReadingStore:
    """Reading store that keeps inserted readings in memory."""

    def __init__(self, clock):
        self.clock = clock
        self.rows = []

    def insert(self, reading):
        reading.pk = len(self.rows) + 1
        self.rows.append(reading)
        return reading

    def list_by_meter_number(self, meter_number):
        rows = [r for r in self.rows if r.meter_number == meter_number]
        return sorted(rows, key=lambda r: r.reading_date, reverse=True)

    def list_for_current_period(self):
        start, end = billing_period(self.clock())
        return [r.meter_number for r in self.rows if start <= r.reading_date < end]


def make_rate(customer_type='residential', minimum_charge='50.00', rate='10.0000',
              status=WaterRate.ACTIVE, effective_date=datetime(2024, 1, 1, tzinfo=timezone.utc)):
    return WaterRate(
        customer_type=customer_type,
        minimum_charge=Decimal(minimum_charge),
        rate_per_cubic_meter=Decimal(rate),
        status=status,
        effective_date=effective_date,
    )


def make_customer(meter_number='C1', customer_type='residential', name='Juan Dela Cruz'):
    return Customer(
        meter_number=meter_number,
        name=name,
        address='123 Main Street',
        customer_type=customer_type,
    )


@pytest.fixture
def fixed_now() -> datetime:
    """Submission instant used by the fixed clock."""
    return datetime(2024, 3, 15, 2, 30, tzinfo=timezone.utc)


@pytest.fixture
def clock(fixed_now):
    return lambda: fixed_now


@pytest.fixture
def customers() -> FakeCustomerDirectory:
    return FakeCustomerDirectory([make_customer('C1', 'residential')])


@pytest.fixture
def rates() -> FakeRateStore:
    return FakeRateStore([make_rate('residential', '50.00', '10.0000')])


@pytest.fixture
def readings(clock) -> FakeReadingStore:
    return FakeReadingStore(clock)
