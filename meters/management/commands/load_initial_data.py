from datetime import datetime
from decimal import Decimal

from django.core.management.base import BaseCommand
from django.utils import timezone

from meters.models import COMMERCIAL, GOVERNMENT, RESIDENTIAL, Customer, WaterRate


RATES = [
    {
        'customer_type':        RESIDENTIAL,
        'minimum_charge':       Decimal('150.00'),
        'rate_per_cubic_meter': Decimal('15.5000'),
    },
    {
        'customer_type':        COMMERCIAL,
        'minimum_charge':       Decimal('250.00'),
        'rate_per_cubic_meter': Decimal('18.0000'),
    },
    {
        'customer_type':        GOVERNMENT,
        'minimum_charge':       Decimal('200.00'),
        'rate_per_cubic_meter': Decimal('16.0000'),
    },
]

CUSTOMERS = [
    {
        'meter_number':  'MTR001',
        'name':          'Juan Dela Cruz',
        'address':       '123 Main Street, Poblacion',
        'customer_type': RESIDENTIAL,
    },
    {
        'meter_number':  'MTR002',
        'name':          'Maria Santos Trading',
        'address':       '456 Commerce Avenue, San Isidro',
        'customer_type': COMMERCIAL,
    },
    {
        'meter_number':  'MTR003',
        'name':          'Barangay Hall Balamban',
        'address':       '789 Government Road, Balamban',
        'customer_type': GOVERNMENT,
    },
]


class Command(BaseCommand):
    help = 'Populate water rates and sample customers'

    def add_arguments(self, parser):
        parser.add_argument('--effective-date', type=str, default='2026-01-01',
                            help='YYYY-MM-DD the seeded rates take effect')
        parser.add_argument('--skip-customers', action='store_true')

    def handle(self, *args, **options):
        effective = timezone.make_aware(
            datetime.fromisoformat(options['effective_date']))

        self.create_water_rates(effective)
        if not options['skip_customers']:
            self.create_sample_customers()

        self.stdout.write(self.style.SUCCESS('Initial setup complete.'))

    def create_water_rates(self, effective):
        for data in RATES:
            if WaterRate.objects.filter(customer_type=data['customer_type'],
                                        status=WaterRate.ACTIVE).exists():
                self.stdout.write(f'Active {data["customer_type"]} rate already exists')
                continue
            rate = WaterRate.objects.create(effective_date=effective, **data)
            self.stdout.write(self.style.SUCCESS(f'Created rate: {rate}'))

    def create_sample_customers(self):
        created_count = 0
        for data in CUSTOMERS:
            customer, created = Customer.objects.get_or_create(
                meter_number=data['meter_number'],
                defaults=data,
            )
            if created:
                created_count += 1
                self.stdout.write(self.style.SUCCESS(f'Created customer: {customer}'))
            else:
                self.stdout.write(f'Customer already exists: {customer}')

        self.stdout.write(f'{created_count} new customers created')
