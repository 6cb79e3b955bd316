from django.contrib import admin
from .models import ContactMessage, QuoteRequest


@admin.register(ContactMessage)
class ContactMessageAdmin(admin.ModelAdmin):
    list_display = ('name', 'email', 'status', 'created_at')
    list_filter = ('status', 'created_at')
    search_fields = ('name', 'email', 'message')


@admin.register(QuoteRequest)
class QuoteRequestAdmin(admin.ModelAdmin):
    list_display = ('quote_number', 'customer_name', 'service_type', 'status', 'quote_amount', 'created_at')
    list_filter = ('status', 'service_type')
    search_fields = ('quote_number', 'customer_name', 'customer_email', 'company_name')
    readonly_fields = ('quote_number',)
