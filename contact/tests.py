from rest_framework import status
from rest_framework.test import APITestCase

from users.models import AdminAccount
from .models import ContactMessage, QuoteRequest


class ContactMessageApiTests(APITestCase):

    def setUp(self):
        self.admin = AdminAccount.objects.create_user(
            email='ops@example.com', password='Fr3ight-Desk!', name='Ops Admin', role=AdminAccount.ADMIN
        )

    def make_message(self, **overrides):
        data = {'name': 'Lina Chowdhury', 'email': 'lina@example.com', 'message': 'Need a container to Hamburg.'}
        data.update(overrides)
        return ContactMessage.objects.create(**data)

    def test_public_submit(self):
        response = self.client.post('/api/v1/contact/messages/', {
            'name': 'Lina Chowdhury',
            'email': 'lina@example.com',
            'phone': '+8801700000000',
            'message': 'Need a container to Hamburg.',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        message = ContactMessage.objects.get(pk=response.data['id'])
        self.assertEqual(message.status, ContactMessage.UNREAD)

    def test_submit_requires_message_and_valid_email(self):
        response = self.client.post('/api/v1/contact/messages/', {
            'name': 'Lina', 'email': 'not-an-email',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)
        self.assertIn('message', response.data)

    def test_inbox_requires_login(self):
        self.make_message()

        response = self.client.get('/api/v1/contact/messages/')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_inbox_filter_by_status(self):
        self.make_message()
        self.make_message(status=ContactMessage.READ)
        self.client.force_authenticate(self.admin)

        response = self.client.get('/api/v1/contact/messages/', {'status': 'read'})

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 1)
        self.assertEqual(response.data['results'][0]['status'], 'read')

    def test_status_can_move_in_any_direction(self):
        message = self.make_message(status=ContactMessage.REPLIED)
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f'/api/v1/contact/messages/{message.pk}/', {'status': 'unread'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        message.refresh_from_db()
        self.assertEqual(message.status, ContactMessage.UNREAD)

    def test_body_is_read_only(self):
        message = self.make_message()
        self.client.force_authenticate(self.admin)

        self.client.patch(f'/api/v1/contact/messages/{message.pk}/', {'message': 'edited'}, format='json')

        message.refresh_from_db()
        self.assertEqual(message.message, 'Need a container to Hamburg.')

    def test_unknown_status_rejected(self):
        message = self.make_message()
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f'/api/v1/contact/messages/{message.pk}/', {'status': 'archived'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_delete(self):
        message = self.make_message()
        self.client.force_authenticate(self.admin)

        response = self.client.delete(f'/api/v1/contact/messages/{message.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(ContactMessage.objects.exists())

    def test_unread_count(self):
        self.make_message()
        self.make_message()
        self.make_message(status=ContactMessage.REPLIED)
        self.client.force_authenticate(self.admin)

        response = self.client.get('/api/v1/contact/messages/unread-count/')

        self.assertEqual(response.data, {'unread_count': 2, 'total_messages': 3})


class QuoteRequestApiTests(APITestCase):

    def setUp(self):
        self.admin = AdminAccount.objects.create_user(
            email='ops@example.com', password='Fr3ight-Desk!', name='Ops Admin', role=AdminAccount.ADMIN
        )

    def test_public_quote_request_gets_number(self):
        response = self.client.post('/api/v1/contact/quotes/', {
            'customer_name': 'Arif Hasan',
            'customer_email': 'arif@example.com',
            'origin': 'Dhaka',
            'destination': 'Singapore',
            'service_type': 'air',
            'weight': '340.00',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertTrue(response.data['quote_number'].startswith('QT'))
        quote = QuoteRequest.objects.get(quote_number=response.data['quote_number'])
        self.assertEqual(quote.status, 'pending')
        self.assertEqual(quote.currency, 'USD')

    def test_quoted_needs_amount(self):
        quote = QuoteRequest.objects.create(
            customer_name='Arif Hasan', customer_email='arif@example.com', origin='Dhaka', destination='Singapore'
        )
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f'/api/v1/contact/quotes/{quote.pk}/', {'status': 'quoted'}, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

        response = self.client.patch(f'/api/v1/contact/quotes/{quote.pk}/', {
            'status': 'quoted', 'quote_amount': '1250.00', 'valid_until': '2026-12-31',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['status'], 'quoted')
