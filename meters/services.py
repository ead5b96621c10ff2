import logging
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from django.utils import timezone

from .exceptions import CustomerNotFound, InvalidInput, RateNotFound
from .models import CUSTOMER_TYPES, MeterReading, WaterRate, normalize_customer_type
from .stores import Clock, CustomerDirectory, RateStore, ReadingStore

logger = logging.getLogger(__name__)

CENTAVO          = Decimal('0.01')
DONE, PENDING    = 'Done', 'Pending'


def integer_digits(value):
    """Digits left of the decimal point, as a DecimalField counts them."""
    sign, digits, exponent = value.as_tuple()
    return len(digits) + exponent


def field_limits(field_name):
    """(integer digits, decimal places) a MeterReading DecimalField can hold."""
    field = MeterReading._meta.get_field(field_name)
    return field.max_digits - field.decimal_places, field.decimal_places


READING_INTEGER_DIGITS, READING_PLACES = field_limits('reading_value')
AMOUNT_INTEGER_DIGITS, _ = field_limits('amount')


# ══════════════════════════════════════════════════════════
#   FUNCTION 1 — parse_reading_value
#   Turns the raw submitted value into a non-negative Decimal
#   Raises InvalidInput for anything else
# ══════════════════════════════════════════════════════════
def parse_reading_value(raw):
    if raw is None or isinstance(raw, bool):
        raise InvalidInput()
    if isinstance(raw, float):
        raw = repr(raw)
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        raise InvalidInput() from None

    if not value.is_finite() or value < 0:
        raise InvalidInput()
    if value.as_tuple().exponent < -READING_PLACES:
        raise InvalidInput(
            f'Reading value may have at most {READING_PLACES} decimal places')
    if integer_digits(value) > READING_INTEGER_DIGITS:
        raise InvalidInput(
            f'Reading value may have at most {READING_INTEGER_DIGITS} digits '
            f'before the decimal point')
    # 1E+3 is stored and echoed as 1000
    if value.as_tuple().exponent > 0:
        value = value.quantize(Decimal(1))
    return value


# ══════════════════════════════════════════════════════════
#   FUNCTION 2 — compute_amount
#   minimum charge + reading * rate, rounded to the centavo
# ══════════════════════════════════════════════════════════
def compute_amount(reading_value, rate):
    """
    Billed amount for ``reading_value`` under ``rate``.

    The exact product is rounded half-up to the centavo, so 50.00 + 1.5 x 0.0111
    (exactly 50.01665) bills 50.02. Raises InvalidInput when the result does not
    fit the stored amount column.
    """
    amount = rate.minimum_charge + reading_value * rate.rate_per_cubic_meter
    amount = amount.quantize(CENTAVO, rounding=ROUND_HALF_UP)
    if integer_digits(amount) > AMOUNT_INTEGER_DIGITS:
        raise InvalidInput(f'Billed amount {amount} is too large to record')
    return amount


# ══════════════════════════════════════════════════════════
#   SERVICE 1 — RateResolver
#   Picks the active rate with the latest effective date
# ══════════════════════════════════════════════════════════
class RateResolver:

    def __init__(self, rate_store: RateStore):
        self.rate_store = rate_store

    def resolve(self, customer_type):
        """Return the rate in effect for ``customer_type``, or None."""
        customer_type = normalize_customer_type(customer_type)
        if customer_type is None:
            return None

        active = [
            rate for rate in self.rate_store.list_by_type(customer_type)
            if rate.status == WaterRate.ACTIVE
        ]
        if not active:
            return None
        if len(active) > 1:
            logger.warning('%d active rates found for %s; using the most recent',
                           len(active), customer_type)
        return max(active, key=lambda rate: rate.effective_date)


@dataclass
class ReadingReceipt:
    """A persisted reading plus the rate figures it was billed with."""

    reading: MeterReading
    customer_type: str
    rate_per_cubic_meter: Decimal
    minimum_charge: Decimal

    def as_dict(self):
        data = self.reading.as_dict()
        data.update({
            'customer_type':        self.customer_type,
            'rate_per_cubic_meter': str(self.rate_per_cubic_meter),
            'minimum_charge':       str(self.minimum_charge),
        })
        return data


# ══════════════════════════════════════════════════════════
#   SERVICE 2 — ReadingBillingService
#   validate → customer → rate → amount → persist
# ══════════════════════════════════════════════════════════
class ReadingBillingService:

    def __init__(self, customers: CustomerDirectory, rates: RateStore,
                 readings: ReadingStore, clock: Clock = timezone.now):
        self.customers = customers
        self.rate_resolver = RateResolver(rates)
        self.readings = readings
        self.clock = clock

    def submit_reading(self, meter_number, raw_reading_value, remarks='', staff_id=None):
        """
        Record a meter reading and bill it against the customer's active rate.

        Raises InvalidInput, CustomerNotFound, RateNotFound or StorageFailure.
        Nothing is looked up before the value validates and nothing is written
        unless both the customer and the rate resolve.
        """
        reading_value = parse_reading_value(raw_reading_value)

        customer = self.customers.find_by_meter_number(meter_number)
        if customer is None:
            logger.info('Reading rejected: meter %s not found', meter_number)
            raise CustomerNotFound()

        rate = self.rate_resolver.resolve(customer.customer_type)
        if rate is None:
            logger.warning('No active rate for customer type %r (meter %s)',
                           customer.customer_type, meter_number)
            raise RateNotFound()

        amount = compute_amount(reading_value, rate)

        reading = MeterReading(
            meter_number  = meter_number,
            reading_value = reading_value,
            remarks       = remarks or '',
            staff_id      = staff_id,
            reading_date  = self.clock(),
            amount        = amount,
        )
        reading = self.readings.insert(reading)
        logger.info('Reading saved for meter %s: %s cu.m billed P%s',
                    meter_number, reading_value, amount)

        return ReadingReceipt(
            reading              = reading,
            customer_type        = customer.customer_type,
            rate_per_cubic_meter = rate.rate_per_cubic_meter,
            minimum_charge       = rate.minimum_charge,
        )

    def readings_for_meter(self, meter_number):
        return self.readings.list_by_meter_number(meter_number)


# ══════════════════════════════════════════════════════════
#   SERVICE 3 — CustomerStatusAggregator
#   Groups customers by type, Done/Pending for this period
# ══════════════════════════════════════════════════════════
class CustomerStatusAggregator:

    def aggregate(self, customers, readings_this_period):
        """
        Group ``customers`` into the three customer-type buckets.

        ``readings_this_period`` holds the meter numbers read during the current
        billing period. Customers of any other type are left out.
        """
        done = set(readings_this_period)
        grouped = {customer_type: [] for customer_type in CUSTOMER_TYPES}

        for customer in customers:
            customer_type = normalize_customer_type(customer.customer_type)
            if customer_type is None:
                continue
            entry = customer.as_dict()
            entry['status'] = DONE if customer.meter_number in done else PENDING
            grouped[customer_type].append(entry)

        return grouped


class DashboardService:

    def __init__(self, customers: CustomerDirectory, readings: ReadingStore,
                 aggregator=None):
        self.customers = customers
        self.readings = readings
        self.aggregator = aggregator or CustomerStatusAggregator()

    def customer_statuses(self):
        return self.aggregator.aggregate(
            self.customers.list_all(),
            self.readings.list_for_current_period(),
        )
