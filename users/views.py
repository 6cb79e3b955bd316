import logging

from rest_framework import generics, permissions, status, filters
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.views import TokenRefreshView
from django.shortcuts import get_object_or_404
from django.utils import timezone
from django_filters.rest_framework import DjangoFilterBackend
from .models import AdminAccount
from .permissions import IsBackOfficeAdmin, CanManageAccount, can_manage
from .serializers import (
    AdminLoginSerializer, AdminAccountSerializer,
    AdminAccountCreateSerializer, AdminAccountUpdateSerializer,
    ChangePasswordSerializer, AdminSessionSerializer, SessionTokenRefreshSerializer
)
from . import services

logger = logging.getLogger(__name__)


class AdminLoginView(APIView):
    """
    Authenticate a back-office account and open a session
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def post(self, request):
        serializer = AdminLoginSerializer(data=request.data, context={'request': request})

        if not serializer.is_valid():
            logger.warning(f"Failed login attempt for {request.data.get('email')!r}")
            return Response({
                'error': 'Invalid email or password'
            }, status=status.HTTP_401_UNAUTHORIZED)

        account = serializer.validated_data['account']
        session = services.start_session(account, request)

        return Response({
            'admin': AdminAccountSerializer(account).data,
            'refresh': session['refresh'],
            'access': session['access'],
            'session_id': session['session'].id,
            'session_expires_at': session['session'].expires_at,
            'expires_in': session['expires_in'],
            'token_type': 'Bearer',
            'message': 'Login successful'
        })


class AdminLogoutView(APIView):
    """
    Blacklist the refresh token and close the current session
    """
    permission_classes = [permissions.IsAuthenticated]

    def post(self, request):
        try:
            services.end_session(
                request.user,
                request.auth,
                refresh_token=request.data.get('refresh_token'),
            )
        except TokenError as e:
            return Response({
                'error': 'Invalid token',
                'details': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        return Response({
            'message': 'Logged out successfully',
            'timestamp': timezone.now().isoformat()
        }, status=status.HTTP_205_RESET_CONTENT)


class SessionTokenRefreshView(TokenRefreshView):
    """
    Exchange a refresh token while its login session is still open
    """
    serializer_class = SessionTokenRefreshSerializer


class CurrentAdminView(generics.RetrieveAPIView):
    """
    Get the logged-in account
    """
    serializer_class = AdminAccountSerializer
    permission_classes = [IsBackOfficeAdmin]

    def get_object(self):
        return self.request.user


class AdminSessionListView(generics.ListAPIView):
    """
    List live sessions of the logged-in account
    """
    serializer_class = AdminSessionSerializer
    permission_classes = [IsBackOfficeAdmin]

    def get_queryset(self):
        return services.active_sessions(self.request.user)


class AdminAccountListView(generics.ListCreateAPIView):
    """
    List all back-office accounts or create a new one
    """
    permission_classes = [IsBackOfficeAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['role', 'is_active']
    search_fields = ['name', 'email']
    ordering_fields = ['created_at', 'name', 'last_login']

    def get_queryset(self):
        return AdminAccount.objects.select_related('created_by').order_by('-created_at')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return AdminAccountCreateSerializer
        return AdminAccountSerializer

    def create(self, request, *args, **kwargs):
        if request.user.role == AdminAccount.MANAGER:
            return Response({
                'error': 'Managers cannot create accounts'
            }, status=status.HTTP_403_FORBIDDEN)

        serializer = self.get_serializer(data=request.data)
        if serializer.is_valid():
            account = serializer.save()
            logger.info(f"Admin {request.user.email} created account {account.email} ({account.role})")
            return Response(
                AdminAccountSerializer(account).data,
                status=status.HTTP_201_CREATED
            )

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class AdminAccountDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, update or delete a back-office account
    """
    permission_classes = [IsBackOfficeAdmin, CanManageAccount]
    queryset = AdminAccount.objects.select_related('created_by')

    def get_serializer_class(self):
        if self.request.method in ('PUT', 'PATCH'):
            return AdminAccountUpdateSerializer
        return AdminAccountSerializer

    def update(self, request, *args, **kwargs):
        instance = self.get_object()
        serializer = AdminAccountUpdateSerializer(
            instance,
            data=request.data,
            partial=True,
            context=self.get_serializer_context()
        )

        if serializer.is_valid():
            account = serializer.save()
            logger.info(f"Admin {request.user.email} updated account {account.email}")
            return Response(AdminAccountSerializer(account).data)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def destroy(self, request, *args, **kwargs):
        instance = self.get_object()

        if instance.pk == request.user.pk:
            return Response({
                'error': 'You cannot delete your own account'
            }, status=status.HTTP_400_BAD_REQUEST)

        email = instance.email
        instance.delete()
        logger.info(f"Admin {request.user.email} deleted account {email}")

        return Response(status=status.HTTP_204_NO_CONTENT)


class AdminPasswordView(APIView):
    """
    Set a new password for an account (self, or an account the caller manages)
    """
    permission_classes = [IsBackOfficeAdmin]

    def post(self, request, pk):
        account = get_object_or_404(AdminAccount, pk=pk)

        if account.pk != request.user.pk and not can_manage(request.user, account):
            return Response({
                'error': 'You do not have permission to manage this account.'
            }, status=status.HTTP_403_FORBIDDEN)

        serializer = ChangePasswordSerializer(data=request.data)
        if serializer.is_valid():
            account.set_password(serializer.validated_data['new_password'])
            account.save()

            services.revoke_all_sessions(account)
            logger.info(f"Password changed for {account.email} by {request.user.email}")

            return Response({
                'message': 'Password updated successfully. Please login again.'
            })

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
