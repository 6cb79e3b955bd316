from django.db import models
from django.utils import timezone
import uuid


class ContactMessage(models.Model):
    UNREAD = 'unread'
    READ = 'read'
    REPLIED = 'replied'

    # unread -> read -> replied is the usual workflow; any status may be set directly.
    STATUS_CHOICES = [
        (UNREAD, 'Unread'),
        (READ, 'Read'),
        (REPLIED, 'Replied'),
    ]

    name = models.CharField(max_length=200)
    email = models.EmailField()
    phone = models.CharField(max_length=30, blank=True)
    message = models.TextField()
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=UNREAD)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'contact_messages'

    def __str__(self):
        return f"{self.name} <{self.email}> - {self.status}"


class QuoteRequest(models.Model):
    PENDING = 'pending'
    QUOTED = 'quoted'
    ACCEPTED = 'accepted'
    REJECTED = 'rejected'
    EXPIRED = 'expired'

    STATUS_CHOICES = [
        (PENDING, 'Pending'),
        (QUOTED, 'Quoted'),
        (ACCEPTED, 'Accepted'),
        (REJECTED, 'Rejected'),
        (EXPIRED, 'Expired'),
    ]

    SERVICE_TYPE_CHOICES = [
        ('ocean', 'Ocean Freight'),
        ('air', 'Air Freight'),
        ('land', 'Land Transport'),
        ('express', 'Express Service'),
    ]

    quote_number = models.CharField(max_length=50, unique=True, editable=False)
    customer_name = models.CharField(max_length=200)
    customer_email = models.EmailField()
    customer_phone = models.CharField(max_length=30, blank=True)
    company_name = models.CharField(max_length=200, blank=True)
    origin = models.CharField(max_length=255)
    destination = models.CharField(max_length=255)
    service_type = models.CharField(max_length=20, choices=SERVICE_TYPE_CHOICES, default='ocean')
    cargo_type = models.CharField(max_length=100, blank=True)
    weight = models.DecimalField(max_digits=10, decimal_places=2, null=True, blank=True)
    dimensions = models.CharField(max_length=255, blank=True)
    estimated_value = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    quote_amount = models.DecimalField(max_digits=12, decimal_places=2, null=True, blank=True)
    currency = models.CharField(max_length=3, default='USD')
    status = models.CharField(max_length=20, choices=STATUS_CHOICES, default=PENDING)
    valid_until = models.DateField(null=True, blank=True)
    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = 'quote_requests'

    def save(self, *args, **kwargs):
        if not self.quote_number:
            self.quote_number = f"QT{timezone.now().strftime('%Y%m%d')}{uuid.uuid4().hex[:6].upper()}"
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.quote_number} - {self.status}"
