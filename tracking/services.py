"""
Shipment tracking queries.

``lookup_tracking`` is the public lookup behind the tracking form and
``add_tracking_event`` is the only write that touches two tables.
"""
import logging

from django.db import DatabaseError, transaction
from django.utils import timezone

from .models import Shipment, TrackingEvent

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = 'Tracking number not found'
LOOKUP_FAILED_MESSAGE = 'Failed to fetch tracking information'


class TrackingLookup:
    """
    Outcome of a tracking-number lookup: found, not found, or failed.

    A missing tracking number is a normal outcome the caller shows as an
    input mistake; ``failed`` means the database could not answer.
    """
    FOUND = 'found'
    NOT_FOUND = 'not_found'
    FAILED = 'failed'

    def __init__(self, outcome, tracking=None, events=None, error=None):
        self.outcome = outcome
        self.tracking = tracking
        self.events = events or []
        self.error = error

    @property
    def found(self):
        return self.outcome == self.FOUND

    @property
    def not_found(self):
        return self.outcome == self.NOT_FOUND

    @property
    def failed(self):
        return self.outcome == self.FAILED

    def as_dict(self):
        return {
            'tracking': self.tracking,
            'events': list(self.events),
            'error': self.error,
        }

    def __repr__(self):
        return f"<TrackingLookup {self.outcome} events={len(self.events)}>"


def events_for(shipment):
    return shipment.events.order_by('-event_date', '-event_time')


def lookup_tracking(tracking_number):
    """
    Find the shipment with exactly ``tracking_number`` and its events, newest
    first (event date, then event time).

    Raises ``ValueError`` for a blank tracking number.
    """
    if not tracking_number or not tracking_number.strip():
        raise ValueError('Tracking number is required')

    try:
        shipment = Shipment.objects.get(tracking_number=tracking_number)
    except Shipment.DoesNotExist:
        logger.info(f"Tracking lookup miss for {tracking_number!r}")
        return TrackingLookup(TrackingLookup.NOT_FOUND, error=NOT_FOUND_MESSAGE)
    except DatabaseError:
        logger.error(f"Error fetching tracking info for {tracking_number!r}", exc_info=True)
        return TrackingLookup(TrackingLookup.FAILED, error=LOOKUP_FAILED_MESSAGE)

    try:
        events = list(events_for(shipment))
    except DatabaseError:
        logger.error(f"Error fetching tracking events for shipment {shipment.pk}", exc_info=True)
        return TrackingLookup(TrackingLookup.FAILED, tracking=shipment, error=LOOKUP_FAILED_MESSAGE)

    return TrackingLookup(TrackingLookup.FOUND, tracking=shipment, events=events)


def add_tracking_event(shipment, **event_data):
    """
    Record a tracking event and copy its status and location onto the
    shipment. The shipment always shows the most recently added event,
    whatever its event date. Both writes share one transaction.
    """
    with transaction.atomic():
        event = TrackingEvent.objects.create(shipment=shipment, **event_data)

        now = timezone.now()
        Shipment.objects.filter(pk=shipment.pk).update(
            status=event.status,
            current_location=event.location,
            updated_at=now,
        )

    shipment.status = event.status
    shipment.current_location = event.location
    shipment.updated_at = now

    logger.info(f"Added event '{event.status}' at {event.location} to {shipment.tracking_number}")
    return event
