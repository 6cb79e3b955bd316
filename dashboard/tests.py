from datetime import timedelta
from unittest import mock

from django.db import DatabaseError
from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase

from contact.models import ContactMessage, QuoteRequest
from tracking.models import Shipment
from users.models import AdminAccount
from . import services
from .serializers import ActivityEntrySerializer


def make_message(name, created_at):
    message = ContactMessage.objects.create(name=name, email=f'{name.lower()}@example.com', message='Hello')
    ContactMessage.objects.filter(pk=message.pk).update(created_at=created_at)
    return message


def make_shipment(number, status, updated_at, customer='Customer'):
    shipment = Shipment.objects.create(
        tracking_number=number, customer_name=customer, origin='Dhaka', destination='Jeddah', status=status
    )
    Shipment.objects.filter(pk=shipment.pk).update(updated_at=updated_at)
    return shipment


class RecentActivityTests(TestCase):

    def setUp(self):
        self.now = timezone.now()

    def test_newer_message_comes_before_older_shipment(self):
        make_shipment('S1', 'In Transit', self.now - timedelta(hours=2), customer='Rafi')
        make_message('Mina', self.now - timedelta(hours=1))

        feed = services.get_recent_activity()

        self.assertEqual([entry['type'] for entry in feed], ['message', 'tracking'])
        self.assertEqual(feed[0]['action'], 'New message received')
        self.assertEqual(feed[0]['user'], 'Mina')
        self.assertEqual(feed[1]['action'], 'Shipment in transit')
        self.assertEqual(feed[1]['user'], 'Rafi')

    def test_interleaves_by_timestamp(self):
        make_message('Old', self.now - timedelta(days=3))
        make_shipment('S1', 'Delivered', self.now - timedelta(days=2))
        make_message('New', self.now - timedelta(minutes=5))

        feed = services.get_recent_activity()

        self.assertEqual([entry['user'] for entry in feed], ['New', 'Customer', 'Old'])

    def test_sorts_across_days_and_months(self):
        # Timestamps whose locale strings would sort wrongly as text
        make_message('December', self.now.replace(month=12, day=1) - timedelta(days=400))
        make_message('February', self.now.replace(month=2, day=10) - timedelta(days=365))
        make_shipment('S1', 'Pending', self.now - timedelta(days=1))

        feed = services.get_recent_activity()

        times = [entry['time'] for entry in feed]
        self.assertEqual(times, sorted(times, reverse=True))

    def test_never_more_than_ten_entries(self):
        for i in range(6):
            make_message(f'Sender{i}', self.now - timedelta(minutes=i))
            make_shipment(f'S{i}', 'Pending', self.now - timedelta(minutes=i, seconds=30))

        feed = services.get_recent_activity()

        self.assertEqual(len(feed), 10)
        self.assertEqual(sum(1 for e in feed if e['type'] == 'message'), 5)
        self.assertNotIn('Sender5', [e['user'] for e in feed])

    def test_merge_truncates(self):
        stream = [{'time': self.now - timedelta(minutes=i)} for i in range(12)]

        merged = services.merge_activity(stream[:6], stream[6:])

        self.assertEqual(len(merged), 10)
        self.assertEqual(merged[0]['time'], self.now)

    def test_empty(self):
        self.assertEqual(services.get_recent_activity(), [])


class ActivityEntrySerializerTests(TestCase):

    def time_ago(self, when):
        entry = {'id': 1, 'type': 'message', 'action': 'New message received', 'user': 'Mina', 'time': when}
        return ActivityEntrySerializer(entry).data['time_ago']

    def test_one_hour_reads_as_hours(self):
        self.assertEqual(self.time_ago(timezone.now() - timedelta(hours=1)), '1 hour ago')

    def test_minutes_and_days(self):
        self.assertEqual(self.time_ago(timezone.now() - timedelta(minutes=5)), '5 minutes ago')
        self.assertEqual(self.time_ago(timezone.now() - timedelta(days=2, hours=1)), '2 days ago')

    def test_future_timestamp_is_just_now(self):
        self.assertEqual(self.time_ago(timezone.now() + timedelta(minutes=5)), 'Just now')


class DashboardStatsTests(TestCase):

    def test_counts(self):
        now = timezone.now()
        make_shipment('S1', 'Delivered', now)
        make_shipment('S2', 'Delivered', now)
        make_shipment('S3', 'In Transit', now)
        make_shipment('S4', 'Pending', now)
        make_shipment('S5', 'Customs Hold', now)
        make_message('A', now)
        ContactMessage.objects.create(name='B', email='b@example.com', message='x', status=ContactMessage.READ)
        AdminAccount.objects.create_user(email='a@example.com', password='x', name='A')
        AdminAccount.objects.create_user(email='b@example.com', password='x', name='B', is_active=False)
        QuoteRequest.objects.create(customer_name='Q', customer_email='q@example.com', origin='A', destination='B')
        QuoteRequest.objects.create(
            customer_name='R', customer_email='r@example.com', origin='A', destination='B', status=QuoteRequest.QUOTED
        )

        self.assertEqual(services.get_stats(), {
            'total_shipments': 5,
            'active_messages': 1,
            'total_users': 1,
            'delivered_shipments': 2,
            'in_transit_shipments': 1,
            'pending_shipments': 1,
            'pending_quotes': 1,
        })


class DashboardApiTests(APITestCase):

    def setUp(self):
        self.manager = AdminAccount.objects.create_user(
            email='desk@example.com', password='Fr3ight-Desk!', name='Desk', role=AdminAccount.MANAGER
        )

    def test_requires_login(self):
        response = self.client.get('/api/v1/dashboard/stats/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_stats(self):
        self.client.force_authenticate(self.manager)

        response = self.client.get('/api/v1/dashboard/stats/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['total_users'], 1)

    def test_activity_is_formatted_at_the_boundary(self):
        make_message('Mina', timezone.now() - timedelta(hours=3))
        self.client.force_authenticate(self.manager)

        response = self.client.get('/api/v1/dashboard/activity/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        entry = response.data[0]
        self.assertEqual(entry['type'], 'message')
        self.assertEqual(entry['time_ago'], '3 hours ago')
        self.assertRegex(entry['formatted_time'], r'^\d{4}-\d{2}-\d{2} \d{2}:\d{2}:\d{2}$')

    def test_stats_failure_is_reported(self):
        self.client.force_authenticate(self.manager)

        with mock.patch('dashboard.services.get_stats', side_effect=DatabaseError('down')):
            response = self.client.get('/api/v1/dashboard/stats/')

        self.assertEqual(response.status_code, status.HTTP_503_SERVICE_UNAVAILABLE)
        self.assertEqual(response.data['error'], 'Failed to load dashboard statistics')

    def test_combined_view_degrades_per_panel(self):
        make_message('Mina', timezone.now())
        self.client.force_authenticate(self.manager)

        with mock.patch('dashboard.services.get_stats', side_effect=DatabaseError('down')):
            response = self.client.get('/api/v1/dashboard/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIsNone(response.data['stats'])
        self.assertIn('stats', response.data['errors'])
        self.assertEqual(len(response.data['recent_activity']), 1)
