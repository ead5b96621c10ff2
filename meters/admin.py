from django.contrib import admin
from .models import Customer, WaterRate, MeterReading, StaffProfile

# ── Customize admin site headers ─────────────────────────────
admin.site.site_header  = 'Hermosa Water Field Operations'
admin.site.site_title   = 'Hermosa Water Admin'
admin.site.index_title  = 'Administration Dashboard'


@admin.register(Customer)
class CustomerAdmin(admin.ModelAdmin):
    list_display   = ['meter_number', 'name', 'customer_type', 'address']
    list_filter    = ['customer_type']
    search_fields  = ['meter_number', 'name', 'address']
    ordering       = ['name']


@admin.register(WaterRate)
class WaterRateAdmin(admin.ModelAdmin):
    list_display  = ['customer_type', 'minimum_charge', 'rate_per_cubic_meter',
                      'effective_date', 'status']
    list_filter   = ['customer_type', 'status']
    ordering      = ['-effective_date']


@admin.register(MeterReading)
class MeterReadingAdmin(admin.ModelAdmin):
    list_display    = ['meter_number', 'reading_date', 'reading_value',
                        'amount', 'staff', 'remarks']
    list_filter     = ['reading_date']
    search_fields   = ['meter_number', 'staff__username']
    ordering        = ['-reading_date']
    readonly_fields = ['meter_number', 'reading_value', 'reading_date',
                        'amount', 'staff']

    def has_add_permission(self, request):
        # Readings are billed through the API or the record_reading command.
        return False


@admin.register(StaffProfile)
class StaffProfileAdmin(admin.ModelAdmin):
    list_display  = ['user', 'name', 'role', 'email', 'contact_number']
    list_filter   = ['role']
    search_fields = ['user__username', 'name', 'email']
