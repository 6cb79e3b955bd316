import logging

from rest_framework import generics, permissions, status, filters
from rest_framework.response import Response
from rest_framework.views import APIView
from django_filters.rest_framework import DjangoFilterBackend
from users.permissions import IsBackOfficeAdmin
from .models import ContactMessage, QuoteRequest
from .serializers import (
    ContactMessageSubmitSerializer, ContactMessageSerializer,
    QuoteRequestSubmitSerializer, QuoteRequestSerializer
)

logger = logging.getLogger(__name__)


class PublicSubmitMixin:
    """
    Anyone may POST; reading requires a back-office account
    """
    def get_permissions(self):
        if self.request.method == 'POST':
            return [permissions.AllowAny()]
        return [IsBackOfficeAdmin()]


class ContactMessageListView(PublicSubmitMixin, generics.ListCreateAPIView):
    """
    List inbox messages or submit the public contact form
    """
    filter_backends = [DjangoFilterBackend, filters.SearchFilter]
    filterset_fields = ['status']
    search_fields = ['name', 'email', 'message']

    def get_queryset(self):
        return ContactMessage.objects.order_by('-created_at')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return ContactMessageSubmitSerializer
        return ContactMessageSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if serializer.is_valid():
            message = serializer.save()
            logger.info(f"Contact message {message.id} received from {message.email}")
            return Response({
                'id': message.id,
                'message': 'Message sent successfully'
            }, status=status.HTTP_201_CREATED)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class ContactMessageDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve a message, change its status, or delete it
    """
    serializer_class = ContactMessageSerializer
    permission_classes = [IsBackOfficeAdmin]
    queryset = ContactMessage.objects.all()

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)


class UnreadMessageCountView(APIView):
    """
    Get count of unread messages
    """
    permission_classes = [IsBackOfficeAdmin]

    def get(self, request):
        return Response({
            'unread_count': ContactMessage.objects.filter(status=ContactMessage.UNREAD).count(),
            'total_messages': ContactMessage.objects.count()
        })


class QuoteRequestListView(PublicSubmitMixin, generics.ListCreateAPIView):
    """
    List quote requests or submit the public quote form
    """
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'service_type']
    search_fields = ['quote_number', 'customer_name', 'customer_email', 'company_name']
    ordering_fields = ['created_at', 'valid_until']

    def get_queryset(self):
        return QuoteRequest.objects.order_by('-created_at')

    def get_serializer_class(self):
        if self.request.method == 'POST':
            return QuoteRequestSubmitSerializer
        return QuoteRequestSerializer

    def create(self, request, *args, **kwargs):
        serializer = self.get_serializer(data=request.data)
        if serializer.is_valid():
            quote = serializer.save()
            logger.info(f"Quote request {quote.quote_number} received from {quote.customer_email}")
            return Response({
                'quote_number': quote.quote_number,
                'message': 'Quote request submitted'
            }, status=status.HTTP_201_CREATED)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)


class QuoteRequestDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, price, update or delete a quote request
    """
    serializer_class = QuoteRequestSerializer
    permission_classes = [IsBackOfficeAdmin]
    queryset = QuoteRequest.objects.all()

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)
