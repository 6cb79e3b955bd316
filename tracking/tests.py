from datetime import date, time
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from rest_framework import status
from rest_framework.test import APITestCase

from users.models import AdminAccount
from .models import Shipment, TrackingEvent
from . import services


def make_shipment(**overrides):
    data = {
        'tracking_number': 'PIE100200',
        'customer_name': 'Nadia Rahman',
        'customer_email': 'nadia@example.com',
        'origin': 'Chittagong',
        'destination': 'Rotterdam',
        'status': 'Pending',
        'service_type': 'ocean',
    }
    data.update(overrides)
    return Shipment.objects.create(**data)


class TrackingLookupTests(TestCase):

    def test_unknown_number_on_empty_dataset(self):
        result = services.lookup_tracking('ABC123')

        self.assertTrue(result.not_found)
        self.assertFalse(result.failed)
        self.assertEqual(result.as_dict(), {
            'tracking': None,
            'events': [],
            'error': 'Tracking number not found',
        })

    def test_unknown_number_is_not_a_failure(self):
        make_shipment(tracking_number='OTHER1')

        result = services.lookup_tracking('ABC123')

        self.assertEqual(result.outcome, services.TrackingLookup.NOT_FOUND)
        self.assertEqual(result.error, services.NOT_FOUND_MESSAGE)

    def test_found_returns_events_newest_first(self):
        shipment = make_shipment()
        other = make_shipment(tracking_number='PIE999')
        TrackingEvent.objects.create(shipment=shipment, event_date=date(2026, 3, 1), event_time=time(9, 0),
                                     location='Chittagong', status='Picked Up')
        TrackingEvent.objects.create(shipment=shipment, event_date=date(2026, 3, 4), event_time=time(8, 30),
                                     location='Colombo', status='In Transit')
        TrackingEvent.objects.create(shipment=shipment, event_date=date(2026, 3, 4), event_time=time(17, 45),
                                     location='Colombo', status='Departed')
        TrackingEvent.objects.create(shipment=other, event_date=date(2026, 3, 5), event_time=time(10, 0),
                                     location='Dhaka', status='Pending')

        result = services.lookup_tracking('PIE100200')

        self.assertTrue(result.found)
        self.assertIsNone(result.error)
        self.assertEqual(result.tracking, shipment)
        self.assertEqual(
            [(e.event_date, e.event_time) for e in result.events],
            [(date(2026, 3, 4), time(17, 45)), (date(2026, 3, 4), time(8, 30)), (date(2026, 3, 1), time(9, 0))],
        )

    def test_match_is_exact(self):
        make_shipment(tracking_number='PIE100200')

        self.assertTrue(services.lookup_tracking('PIE1002').not_found)

    def test_blank_number_rejected(self):
        with self.assertRaises(ValueError):
            services.lookup_tracking('   ')

    def test_database_error_is_a_failure(self):
        with mock.patch.object(Shipment.objects, 'get', side_effect=DatabaseError('connection lost')):
            result = services.lookup_tracking('PIE100200')

        self.assertTrue(result.failed)
        self.assertFalse(result.not_found)
        self.assertIsNone(result.tracking)
        self.assertEqual(result.error, services.LOOKUP_FAILED_MESSAGE)

    def test_events_failure_keeps_shipment(self):
        shipment = make_shipment()

        with mock.patch('tracking.services.events_for', side_effect=DatabaseError('events table locked')):
            result = services.lookup_tracking('PIE100200')

        self.assertTrue(result.failed)
        self.assertEqual(result.tracking, shipment)
        self.assertEqual(result.events, [])
        self.assertEqual(result.error, services.LOOKUP_FAILED_MESSAGE)

    def test_each_call_refetches(self):
        self.assertTrue(services.lookup_tracking('PIE100200').not_found)
        make_shipment()
        self.assertTrue(services.lookup_tracking('PIE100200').found)


class AddTrackingEventTests(TestCase):

    def test_event_status_and_location_copied_to_shipment(self):
        shipment = make_shipment(status='In Transit', current_location='Colombo')
        TrackingEvent.objects.create(shipment=shipment, event_date=date(2026, 5, 20), event_time=time(12, 0),
                                     location='Colombo', status='In Transit')

        # Older than the existing event, still wins because it was added last
        services.add_tracking_event(
            shipment,
            event_date=date(2026, 5, 1),
            event_time=time(6, 0),
            location='Port X',
            status='Delivered',
        )

        shipment.refresh_from_db()
        self.assertEqual(shipment.status, 'Delivered')
        self.assertEqual(shipment.current_location, 'Port X')
        self.assertEqual(shipment.events.count(), 2)

    def test_updated_at_is_bumped(self):
        shipment = make_shipment()
        before = shipment.updated_at

        services.add_tracking_event(shipment, event_date=date(2026, 5, 1), event_time=time(6, 0),
                                    location='Dhaka', status='Picked Up')

        shipment.refresh_from_db()
        self.assertGreater(shipment.updated_at, before)

    def test_failed_shipment_update_rolls_back_event(self):
        shipment = make_shipment()

        with mock.patch.object(Shipment.objects, 'filter', side_effect=DatabaseError('write failed')):
            with self.assertRaises(DatabaseError):
                services.add_tracking_event(shipment, event_date=date(2026, 5, 1), event_time=time(6, 0),
                                            location='Dhaka', status='Picked Up')

        self.assertEqual(TrackingEvent.objects.count(), 0)
        shipment.refresh_from_db()
        self.assertEqual(shipment.status, 'Pending')


class TrackingApiTests(APITestCase):

    def setUp(self):
        self.admin = AdminAccount.objects.create_user(
            email='ops@example.com', password='Fr3ight-Desk!', name='Ops Admin', role=AdminAccount.ADMIN
        )

    def test_public_lookup_found(self):
        shipment = make_shipment()
        TrackingEvent.objects.create(shipment=shipment, event_date=date(2026, 3, 1), event_time=time(9, 0),
                                     location='Chittagong', status='Picked Up')

        response = self.client.get('/api/v1/tracking/lookup/PIE100200/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tracking']['tracking_number'], 'PIE100200')
        self.assertNotIn('customer_email', response.data['tracking'])
        self.assertEqual(len(response.data['events']), 1)
        self.assertIsNone(response.data['error'])
        self.assertEqual(response.data['tracking_summary']['total_events'], 1)

    def test_public_lookup_not_found(self):
        response = self.client.get('/api/v1/tracking/lookup/ABC123/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertEqual(response.data, {
            'tracking': None,
            'events': [],
            'error': 'Tracking number not found',
        })

    def test_public_lookup_failure(self):
        with mock.patch.object(Shipment.objects, 'get', side_effect=DatabaseError('down')):
            response = self.client.get('/api/v1/tracking/lookup/ABC123/')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['error'], services.LOOKUP_FAILED_MESSAGE)

    def test_shipment_list_requires_login(self):
        response = self.client.get('/api/v1/tracking/shipments/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_admin_crud(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post('/api/v1/tracking/shipments/', {
            'tracking_number': 'PIE555',
            'customer_name': 'Karim Uddin',
            'origin': 'Dhaka',
            'destination': 'Dubai',
            'service_type': 'air',
            'weight': '12.50',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['status'], 'Pending')
        pk = response.data['id']

        response = self.client.patch(f'/api/v1/tracking/shipments/{pk}/', {'status': 'In Transit'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(Shipment.objects.get(pk=pk).status, 'In Transit')

        response = self.client.get('/api/v1/tracking/shipments/', {'status': 'In Transit'})
        self.assertEqual(response.data['count'], 1)

        response = self.client.delete(f'/api/v1/tracking/shipments/{pk}/')
        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(Shipment.objects.filter(pk=pk).exists())

    def test_duplicate_tracking_number_rejected(self):
        make_shipment(tracking_number='PIE555')
        self.client.force_authenticate(self.admin)

        response = self.client.post('/api/v1/tracking/shipments/', {
            'tracking_number': 'PIE555',
            'customer_name': 'Karim Uddin',
            'origin': 'Dhaka',
            'destination': 'Dubai',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('tracking_number', response.data)

    def test_add_event_through_api(self):
        shipment = make_shipment()
        self.client.force_authenticate(self.admin)

        response = self.client.post(f'/api/v1/tracking/shipments/{shipment.pk}/events/', {
            'event_date': '2026-06-02',
            'event_time': '14:05',
            'location': 'Port X',
            'status': 'Delivered',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['shipment']['status'], 'Delivered')
        self.assertEqual(response.data['shipment']['current_location'], 'Port X')

        response = self.client.get(f'/api/v1/tracking/shipments/{shipment.pk}/events/')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(len(response.data), 1)

    def test_missing_shipment_is_404(self):
        self.client.force_authenticate(self.admin)

        response = self.client.get('/api/v1/tracking/shipments/9999/')

        self.assertEqual(response.status_code, status.HTTP_404_NOT_FOUND)
        self.assertIn('error', response.data)

    def test_database_failure_on_list_is_503(self):
        self.client.force_authenticate(self.admin)

        with mock.patch.object(Shipment.objects, 'order_by', side_effect=DatabaseError('down')):
            response = self.client.get('/api/v1/tracking/shipments/')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertIn('error', response.data)

    def test_public_lookup_events_failure(self):
        make_shipment()

        with mock.patch('tracking.services.events_for', side_effect=DatabaseError('events table locked')):
            response = self.client.get('/api/v1/tracking/lookup/PIE100200/')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['tracking']['tracking_number'], 'PIE100200')
        self.assertEqual(response.data['events'], [])
        self.assertEqual(response.data['error'], services.LOOKUP_FAILED_MESSAGE)

    def test_tracking_number_named_like_a_route_can_be_looked_up(self):
        make_shipment(tracking_number='shipments')

        response = self.client.get('/api/v1/tracking/lookup/shipments/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['tracking']['tracking_number'], 'shipments')
