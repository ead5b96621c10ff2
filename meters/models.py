from django.conf import settings
from django.contrib.auth.models import User
from django.db import models


RESIDENTIAL = 'residential'
COMMERCIAL  = 'commercial'
GOVERNMENT  = 'government'

CUSTOMER_TYPES = (RESIDENTIAL, COMMERCIAL, GOVERNMENT)


def normalize_customer_type(value):
    """Lower-cased customer type, or None when it is not one of CUSTOMER_TYPES."""
    if not isinstance(value, str):
        return None
    value = value.strip().lower()
    return value if value in CUSTOMER_TYPES else None


# ═══════════════════════════════════════════════════════════
#   MODEL 1 — Customer  (service connection, keyed by meter)
# ═══════════════════════════════════════════════════════════
class Customer(models.Model):
    CUSTOMER_TYPE_CHOICES = [
        (RESIDENTIAL, 'Residential'),
        (COMMERCIAL,  'Commercial'),
        (GOVERNMENT,  'Government'),
    ]

    meter_number  = models.CharField(max_length=50, unique=True)
    name          = models.CharField(max_length=200)
    address       = models.TextField(blank=True)
    customer_type = models.CharField(max_length=20,
                        choices=CUSTOMER_TYPE_CHOICES,
                        default=RESIDENTIAL)

    class Meta:
        ordering = ['name']

    def __str__(self):
        return f'{self.meter_number} - {self.name}'

    def as_dict(self):
        return {
            'name':          self.name,
            'address':       self.address,
            'meter_number':  self.meter_number,
            'customer_type': self.customer_type,
        }


# ═══════════════════════════════════════════════════════════
#   MODEL 2 — WaterRate  (tariff per customer type)
# ═══════════════════════════════════════════════════════════
class WaterRate(models.Model):
    ACTIVE   = 'active'
    INACTIVE = 'inactive'
    STATUS_CHOICES = [
        (ACTIVE,   'Active'),
        (INACTIVE, 'Inactive'),
    ]

    customer_type        = models.CharField(max_length=20,
                               choices=Customer.CUSTOMER_TYPE_CHOICES)
    rate_per_cubic_meter = models.DecimalField(max_digits=10, decimal_places=4,
                               help_text='Charge per cu.m consumed')
    minimum_charge       = models.DecimalField(max_digits=10, decimal_places=2,
                               help_text='Flat charge added to every reading')
    status               = models.CharField(max_length=10,
                               choices=STATUS_CHOICES, default=ACTIVE)
    effective_date       = models.DateTimeField()

    class Meta:
        ordering = ['-effective_date']

    def __str__(self):
        return (f'{self.get_customer_type_display()} | '
                f'Min: P{self.minimum_charge} | '
                f'P{self.rate_per_cubic_meter}/cu.m | {self.status}')


# ═══════════════════════════════════════════════════════════
#   MODEL 3 — MeterReading  (field reading with billed amount)
# ═══════════════════════════════════════════════════════════
class MeterReading(models.Model):
    meter_number  = models.CharField(max_length=50, db_index=True)
    reading_value = models.DecimalField(max_digits=12, decimal_places=3)
    remarks       = models.TextField(blank=True)
    staff         = models.ForeignKey(User, on_delete=models.SET_NULL,
                        null=True, blank=True, related_name='meter_readings')
    reading_date  = models.DateTimeField()
    amount        = models.DecimalField(max_digits=14, decimal_places=2)

    class Meta:
        ordering = ['-reading_date']

    def __str__(self):
        return (f'{self.meter_number} | '
                f'{self.reading_date:%Y-%m-%d %H:%M} | '
                f'{self.reading_value} cu.m | P{self.amount}')

    def as_dict(self):
        return {
            'id':            self.pk,
            'meter_number':  self.meter_number,
            'reading_value': str(self.reading_value),
            'remarks':       self.remarks,
            'staff_id':      self.staff_id,
            'reading_date':  self.reading_date.isoformat(),
            'amount':        str(self.amount),
        }


# ═══════════════════════════════════════════════════════════
#   MODEL 4 — StaffProfile  (meter handler account details)
# ═══════════════════════════════════════════════════════════
class StaffProfile(models.Model):
    METER_HANDLER = 'meter handler'
    ROLE_CHOICES = [
        (METER_HANDLER, 'Meter Handler'),
        ('admin',       'Administrator'),
        ('cashier',     'Cashier'),
    ]

    user           = models.OneToOneField(User, on_delete=models.CASCADE,
                         related_name='staff_profile')
    name           = models.CharField(max_length=200, blank=True)
    email          = models.EmailField(blank=True)
    address        = models.TextField(blank=True)
    contact_number = models.CharField(max_length=20, blank=True)
    role           = models.CharField(max_length=20,
                         choices=ROLE_CHOICES, default=METER_HANDLER)
    profile_image  = models.CharField(max_length=255, blank=True,
                         help_text='Stored file name of the uploaded photo')

    def __str__(self):
        return f'{self.user.username} ({self.role})'

    @property
    def profile_image_url(self):
        if not self.profile_image:
            return None
        return f'{settings.HERMOSA_MEDIA_BASE_URL.rstrip("/")}/{self.profile_image}'

    def as_dict(self):
        data = {
            'id':             self.user_id,
            'name':           self.name,
            'username':       self.user.username,
            'email':          self.email,
            'address':        self.address,
            'contact_number': self.contact_number,
            'role':           self.role,
            'profile_image':  self.profile_image or None,
        }
        if self.profile_image:
            data['profile_image_url'] = self.profile_image_url
        return data
