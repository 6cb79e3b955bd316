"""
Dashboard counters and the recent-activity feed.

Both read straight from the shipments, contact and account tables; nothing is
stored or cached here.
"""
import logging

from django.contrib.auth import get_user_model

from contact.models import ContactMessage, QuoteRequest
from tracking.models import Shipment

logger = logging.getLogger(__name__)

RECENT_PER_SOURCE = 5
FEED_LIMIT = 10


def get_stats():
    """
    Back-office counters. Database errors propagate to the caller.
    """
    shipments = Shipment.objects.all()

    return {
        'total_shipments': shipments.count(),
        'active_messages': ContactMessage.objects.filter(status=ContactMessage.UNREAD).count(),
        'total_users': get_user_model().objects.filter(is_active=True).count(),
        'delivered_shipments': shipments.filter(status=Shipment.STATUS_DELIVERED).count(),
        'in_transit_shipments': shipments.filter(status=Shipment.STATUS_IN_TRANSIT).count(),
        'pending_shipments': shipments.filter(status=Shipment.STATUS_PENDING).count(),
        'pending_quotes': QuoteRequest.objects.filter(status=QuoteRequest.PENDING).count(),
    }


def message_activity(message):
    return {
        'id': message.id,
        'type': 'message',
        'action': 'New message received',
        'user': message.name,
        'time': message.created_at,
    }


def shipment_activity(shipment):
    action = f"Shipment {shipment.status.lower()}" if shipment.status else 'Shipment updated'
    return {
        'id': shipment.id,
        'type': 'tracking',
        'action': action,
        'user': shipment.customer_name,
        'time': shipment.updated_at,
    }


def merge_activity(*streams, limit=FEED_LIMIT):
    """
    Merge activity entries newest first by their timestamp and keep ``limit``.
    """
    entries = [entry for stream in streams for entry in stream]
    entries.sort(key=lambda entry: entry['time'], reverse=True)
    return entries[:limit]


def get_recent_activity():
    """
    The newest contact messages and the most recently updated shipments, as
    one feed of at most ``FEED_LIMIT`` entries.
    """
    messages = ContactMessage.objects.order_by('-created_at')[:RECENT_PER_SOURCE]
    shipments = Shipment.objects.order_by('-updated_at')[:RECENT_PER_SOURCE]

    return merge_activity(
        [message_activity(m) for m in messages],
        [shipment_activity(s) for s in shipments],
    )
