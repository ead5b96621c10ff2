"""
Data-store collaborators used by the billing services.

Each store is described by a Protocol so the services can be handed
in-memory fakes; the Django* classes are the ORM-backed versions used by
the API and the management commands. Any database error is re-raised as
StorageFailure.
"""
import logging
from datetime import datetime
from typing import Callable, Iterable, Optional, Protocol

from django.db import DatabaseError
from django.utils import timezone

from .exceptions import StorageFailure
from .models import Customer, MeterReading, WaterRate

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def billing_period(now: datetime) -> tuple[datetime, datetime]:
    """Return the [start, end) bounds of the calendar month containing ``now``."""
    start = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if start.month == 12:
        end = start.replace(year=start.year + 1, month=1)
    else:
        end = start.replace(month=start.month + 1)
    return start, end


class CustomerDirectory(Protocol):
    def find_by_meter_number(self, meter_number: str) -> Optional[Customer]: ...

    def list_all(self) -> Iterable[Customer]: ...


class RateStore(Protocol):
    def list_by_type(self, customer_type: str) -> Iterable[WaterRate]: ...


class ReadingStore(Protocol):
    def insert(self, reading: MeterReading) -> MeterReading: ...

    def list_by_meter_number(self, meter_number: str) -> list[MeterReading]: ...

    def list_for_current_period(self) -> list[str]: ...


# ══════════════════════════════════════════════════════════
#   ORM STORE 1 — customers
# ══════════════════════════════════════════════════════════
class DjangoCustomerDirectory:

    def find_by_meter_number(self, meter_number):
        try:
            return Customer.objects.filter(meter_number=meter_number).first()
        except DatabaseError as exc:
            logger.error('Customer lookup failed for meter %s: %s', meter_number, exc)
            raise StorageFailure('Failed to look up customer') from exc

    def list_all(self):
        try:
            return list(Customer.objects.all())
        except DatabaseError as exc:
            logger.error('Customer listing failed: %s', exc)
            raise StorageFailure('Failed to fetch customers') from exc


# ══════════════════════════════════════════════════════════
#   ORM STORE 2 — water rates
# ══════════════════════════════════════════════════════════
class DjangoRateStore:

    def list_by_type(self, customer_type):
        # Stored types are not guaranteed to be lower case.
        try:
            return list(WaterRate.objects.filter(customer_type__iexact=customer_type))
        except DatabaseError as exc:
            logger.error('Rate lookup failed for %s: %s', customer_type, exc)
            raise StorageFailure('Failed to look up rates') from exc


# ══════════════════════════════════════════════════════════
#   ORM STORE 3 — meter readings
# ══════════════════════════════════════════════════════════
class DjangoReadingStore:

    def __init__(self, clock: Clock = timezone.now):
        self.clock = clock

    def insert(self, reading):
        try:
            reading.save(force_insert=True)
        except DatabaseError as exc:
            logger.error('Saving reading for meter %s failed: %s', reading.meter_number, exc)
            raise StorageFailure('Failed to save meter reading') from exc
        return reading

    def list_by_meter_number(self, meter_number):
        try:
            return list(
                MeterReading.objects.filter(meter_number=meter_number)
                .order_by('-reading_date', '-pk')
            )
        except DatabaseError as exc:
            logger.error('Reading history failed for meter %s: %s', meter_number, exc)
            raise StorageFailure('Failed to fetch readings') from exc

    def list_for_current_period(self):
        start, end = billing_period(timezone.localtime(self.clock()))
        try:
            return list(
                MeterReading.objects.filter(reading_date__gte=start, reading_date__lt=end)
                .values_list('meter_number', flat=True)
            )
        except DatabaseError as exc:
            logger.error('Current-period readings query failed: %s', exc)
            raise StorageFailure('Failed to fetch readings') from exc
