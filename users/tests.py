from datetime import timedelta

from django.test import TestCase
from django.utils import timezone
from rest_framework import status
from rest_framework.test import APITestCase
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken

from .models import AdminAccount, AdminSession
from .permissions import can_manage

PASSWORD = 'Fr3ight-Desk!'


def make_account(email, role, **extra):
    return AdminAccount.objects.create_user(
        email=email, password=PASSWORD, name=email.split('@')[0].title(), role=role, **extra
    )


class CanManageTests(TestCase):

    def test_super_admin_manages_everyone(self):
        for role in ('super_admin', 'admin', 'manager'):
            self.assertTrue(can_manage('super_admin', role))

    def test_admin_manages_non_super_admins(self):
        self.assertTrue(can_manage('admin', 'manager'))
        self.assertTrue(can_manage('admin', 'admin'))
        self.assertFalse(can_manage('admin', 'super_admin'))

    def test_manager_manages_no_one(self):
        for role in ('super_admin', 'admin', 'manager'):
            self.assertFalse(can_manage('manager', role))

    def test_accepts_accounts(self):
        boss = make_account('boss@example.com', AdminAccount.SUPER_ADMIN)
        clerk = make_account('clerk@example.com', AdminAccount.MANAGER)

        self.assertTrue(can_manage(boss, clerk))
        self.assertFalse(can_manage(clerk, boss))

    def test_unknown_role_denied(self):
        self.assertFalse(can_manage('operator', 'manager'))
        self.assertFalse(can_manage(None, 'manager'))


class AdminAccountManagerTests(TestCase):

    def test_create_user_hashes_password(self):
        account = make_account('ops@example.com', AdminAccount.ADMIN)

        self.assertNotEqual(account.password, PASSWORD)
        self.assertTrue(account.check_password(PASSWORD))
        self.assertFalse(account.is_staff)

    def test_create_superuser(self):
        account = AdminAccount.objects.create_superuser(email='root@example.com', password=PASSWORD, name='Root')

        self.assertEqual(account.role, AdminAccount.SUPER_ADMIN)
        self.assertTrue(account.is_staff)
        self.assertTrue(account.is_superuser)

    def test_email_stored_lowercase(self):
        account = make_account('Ops.Lead@Example.COM', AdminAccount.ADMIN)

        self.assertEqual(account.email, 'ops.lead@example.com')

    def test_email_required(self):
        with self.assertRaises(ValueError):
            AdminAccount.objects.create_user(email='', password=PASSWORD, name='Nobody')


class AuthApiTests(APITestCase):

    def setUp(self):
        self.account = make_account('ops@example.com', AdminAccount.ADMIN)

    def login(self, email='ops@example.com', password=PASSWORD):
        return self.client.post('/api/v1/auth/login/', {'email': email, 'password': password}, format='json')

    def test_login_opens_session(self):
        response = self.login()

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertIn('access', response.data)
        self.assertIn('refresh', response.data)
        self.assertEqual(response.data['admin']['email'], 'ops@example.com')
        self.assertEqual(response.data['token_type'], 'Bearer')

        session = AdminSession.objects.get(pk=response.data['session_id'])
        self.assertTrue(session.is_active)
        self.assertFalse(session.is_expired())

        self.account.refresh_from_db()
        self.assertIsNotNone(self.account.last_login)

    def test_bad_password(self):
        response = self.login(password='wrong-password')

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)
        self.assertEqual(response.data['error'], 'Invalid email or password')
        self.assertFalse(AdminSession.objects.exists())

    def test_inactive_account_cannot_login(self):
        self.account.is_active = False
        self.account.save()

        response = self.login()

        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_me_with_bearer_token(self):
        access = self.login().data['access']
        self.client.credentials(HTTP_AUTHORIZATION=f'Bearer {access}')

        response = self.client.get('/api/v1/auth/me/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['role'], 'admin')

    def test_logout_closes_session(self):
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post('/api/v1/auth/logout/', {'refresh_token': tokens['refresh']}, format='json')

        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)
        self.assertFalse(AdminSession.objects.get(pk=tokens['session_id']).is_active)

        response = self.client.post('/api/v1/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_logout_with_bad_refresh_token(self):
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post('/api/v1/auth/logout/', {'refresh_token': 'not-a-token'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_logout_without_refresh_token_still_ends_login(self):
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post('/api/v1/auth/logout/', {}, format='json')
        self.assertEqual(response.status_code, status.HTTP_205_RESET_CONTENT)

        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        response = self.client.post('/api/v1/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_password_change_ends_every_login(self):
        other_device = self.login().data
        tokens = self.login().data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.post(f'/api/v1/auth/admins/{self.account.pk}/password/', {
            'new_password': 'Br4nd-New-Pass!',
            'new_password2': 'Br4nd-New-Pass!',
        }, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        for old in (tokens, other_device):
            self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {old['access']}")
            response = self.client.get('/api/v1/auth/me/')
            self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

            response = self.client.post('/api/v1/auth/token/refresh/', {'refresh': old['refresh']}, format='json')
            self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        outstanding = OutstandingToken.objects.filter(user=self.account)
        self.assertTrue(outstanding.exists())
        self.assertEqual(BlacklistedToken.objects.filter(token__in=outstanding).count(), outstanding.count())

        self.client.credentials()
        fresh = self.login(password='Br4nd-New-Pass!').data
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {fresh['access']}")
        self.assertEqual(self.client.get('/api/v1/auth/me/').status_code, status.HTTP_200_OK)

    def test_expired_session_is_refused(self):
        tokens = self.login().data
        AdminSession.objects.filter(pk=tokens['session_id']).update(expires_at=timezone.now() - timedelta(minutes=1))
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        response = self.client.get('/api/v1/auth/me/')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

        response = self.client.post('/api/v1/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED)

    def test_refreshed_access_token_keeps_the_session(self):
        tokens = self.login().data

        response = self.client.post('/api/v1/auth/token/refresh/', {'refresh': tokens['refresh']}, format='json')
        self.assertEqual(response.status_code, status.HTTP_200_OK)

        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        self.assertEqual(self.client.get('/api/v1/auth/me/').status_code, status.HTTP_200_OK)

    def test_authenticated_request_updates_last_activity(self):
        tokens = self.login().data
        earlier = timezone.now() - timedelta(hours=1)
        AdminSession.objects.filter(pk=tokens['session_id']).update(last_activity=earlier)
        self.client.credentials(HTTP_AUTHORIZATION=f"Bearer {tokens['access']}")

        self.client.get('/api/v1/auth/me/')

        self.assertGreater(AdminSession.objects.get(pk=tokens['session_id']).last_activity, earlier)

    def test_login_ignores_email_case(self):
        response = self.login(email='OPS@Example.com')

        self.assertEqual(response.status_code, status.HTTP_200_OK)


class AdminAccountApiTests(APITestCase):

    def setUp(self):
        self.super_admin = make_account('boss@example.com', AdminAccount.SUPER_ADMIN)
        self.admin = make_account('ops@example.com', AdminAccount.ADMIN)
        self.manager = make_account('desk@example.com', AdminAccount.MANAGER)

    def test_any_back_office_role_can_list(self):
        self.client.force_authenticate(self.manager)

        response = self.client.get('/api/v1/auth/admins/')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.assertEqual(response.data['count'], 3)

    def test_admin_creates_manager(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post('/api/v1/auth/admins/', {
            'name': 'New Clerk',
            'email': 'clerk@example.com',
            'password': 'An0ther-Secret!',
            'role': 'manager',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        created = AdminAccount.objects.get(email='clerk@example.com')
        self.assertEqual(created.created_by, self.admin)
        self.assertTrue(created.check_password('An0ther-Secret!'))
        self.assertNotIn('password', response.data)

    def test_only_super_admin_assigns_super_admin(self):
        payload = {
            'name': 'Another Boss',
            'email': 'boss2@example.com',
            'password': 'An0ther-Secret!',
            'role': 'super_admin',
        }

        self.client.force_authenticate(self.admin)
        response = self.client.post('/api/v1/auth/admins/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('role', response.data)

        self.client.force_authenticate(self.super_admin)
        response = self.client.post('/api/v1/auth/admins/', payload, format='json')
        self.assertEqual(response.status_code, status.HTTP_201_CREATED)

    def test_created_email_is_lowercased(self):
        self.client.force_authenticate(self.admin)

        response = self.client.post('/api/v1/auth/admins/', {
            'name': 'Mixed Case', 'email': 'Mixed.Case@Example.com', 'password': 'An0ther-Secret!', 'role': 'manager',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_201_CREATED)
        self.assertEqual(response.data['email'], 'mixed.case@example.com')

    def test_manager_cannot_create(self):
        self.client.force_authenticate(self.manager)

        response = self.client.post('/api/v1/auth/admins/', {
            'name': 'X', 'email': 'x@example.com', 'password': 'An0ther-Secret!', 'role': 'manager',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_admin_updates_manager(self):
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f'/api/v1/auth/admins/{self.manager.pk}/', {'is_active': False}, format='json')

        self.assertEqual(response.status_code, status.HTTP_200_OK)
        self.manager.refresh_from_db()
        self.assertFalse(self.manager.is_active)

    def test_admin_cannot_update_super_admin(self):
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f'/api/v1/auth/admins/{self.super_admin.pk}/', {'name': 'Demoted'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)

    def test_manager_cannot_delete_admin(self):
        self.client.force_authenticate(self.manager)

        response = self.client.delete(f'/api/v1/auth/admins/{self.admin.pk}/')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
        self.assertTrue(AdminAccount.objects.filter(pk=self.admin.pk).exists())

    def test_super_admin_deletes_admin(self):
        self.client.force_authenticate(self.super_admin)

        response = self.client.delete(f'/api/v1/auth/admins/{self.admin.pk}/')

        self.assertEqual(response.status_code, status.HTTP_204_NO_CONTENT)
        self.assertFalse(AdminAccount.objects.filter(pk=self.admin.pk).exists())

    def test_cannot_delete_self(self):
        self.client.force_authenticate(self.super_admin)

        response = self.client.delete(f'/api/v1/auth/admins/{self.super_admin.pk}/')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)

    def test_duplicate_email_rejected(self):
        self.client.force_authenticate(self.admin)

        response = self.client.patch(f'/api/v1/auth/admins/{self.manager.pk}/', {'email': 'OPS@example.com'}, format='json')

        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST)
        self.assertIn('email', response.data)

    def test_manager_cannot_change_other_password(self):
        self.client.force_authenticate(self.manager)

        response = self.client.post(f'/api/v1/auth/admins/{self.admin.pk}/password/', {
            'new_password': 'Br4nd-New-Pass!',
            'new_password2': 'Br4nd-New-Pass!',
        }, format='json')

        self.assertEqual(response.status_code, status.HTTP_403_FORBIDDEN)
