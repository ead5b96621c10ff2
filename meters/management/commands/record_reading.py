from django.core.management.base import BaseCommand, CommandError
from meters.exceptions import MeterBillingError
from meters.services import ReadingBillingService
from meters.stores import DjangoCustomerDirectory, DjangoRateStore, DjangoReadingStore


class Command(BaseCommand):
    help = 'Record a meter reading and bill it against the active rate'

    def add_arguments(self, parser):
        parser.add_argument('meter_number', type=str)
        parser.add_argument('reading_value', type=str,
                            help='Reading in cu.m, e.g. 12.5')
        parser.add_argument('--remarks',  type=str, default='')
        parser.add_argument('--staff-id', type=int, default=None,
                            help='User id of the meter handler')

    def handle(self, *args, **options):
        service = ReadingBillingService(
            customers = DjangoCustomerDirectory(),
            rates     = DjangoRateStore(),
            readings  = DjangoReadingStore(),
        )

        try:
            receipt = service.submit_reading(
                meter_number      = options['meter_number'],
                raw_reading_value = options['reading_value'],
                remarks           = options['remarks'],
                staff_id          = options['staff_id'],
            )
        except MeterBillingError as e:
            self.stderr.write(self.style.ERROR(f'ERROR [{e.code}]: {e}'))
            raise CommandError(str(e)) from e

        reading = receipt.reading
        self.stdout.write(self.style.SUCCESS(
            f'Reading saved: {reading.meter_number} — {reading.reading_value} cu.m'
        ))
        self.stdout.write(
            f'  {receipt.customer_type}: P{receipt.minimum_charge} + '
            f'{reading.reading_value} x P{receipt.rate_per_cubic_meter} = P{reading.amount}'
        )
