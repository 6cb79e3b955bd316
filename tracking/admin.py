from django.contrib import admin
from .models import Shipment, TrackingEvent


class TrackingEventInline(admin.TabularInline):
    model = TrackingEvent
    extra = 0
    fields = ('event_date', 'event_time', 'location', 'status', 'description')


@admin.register(Shipment)
class ShipmentAdmin(admin.ModelAdmin):
    list_display = ('tracking_number', 'customer_name', 'origin', 'destination', 'status', 'service_type', 'updated_at')
    list_filter = ('status', 'service_type')
    search_fields = ('tracking_number', 'customer_name', 'customer_email')
    inlines = [TrackingEventInline]


@admin.register(TrackingEvent)
class TrackingEventAdmin(admin.ModelAdmin):
    list_display = ('shipment', 'event_date', 'event_time', 'location', 'status')
    list_filter = ('status',)
    search_fields = ('shipment__tracking_number', 'location')
