import logging

from rest_framework import generics, permissions, status, filters
from rest_framework.response import Response
from rest_framework.views import APIView
from django.shortcuts import get_object_or_404
from django_filters.rest_framework import DjangoFilterBackend
from users.permissions import IsBackOfficeAdmin
from .models import Shipment
from .serializers import ShipmentSerializer, PublicShipmentSerializer, TrackingEventSerializer
from . import services

logger = logging.getLogger(__name__)


class TrackingLookupView(APIView):
    """
    Public lookup: a shipment and its events by tracking number
    """
    permission_classes = [permissions.AllowAny]
    authentication_classes = []

    def get(self, request, tracking_number):
        try:
            result = services.lookup_tracking(tracking_number)
        except ValueError as e:
            return Response({
                'tracking': None,
                'events': [],
                'error': str(e)
            }, status=status.HTTP_400_BAD_REQUEST)

        if result.not_found:
            return Response(self._payload(result), status=status.HTTP_404_NOT_FOUND)

        if result.failed:
            return Response(self._payload(result), status=status.HTTP_503_SERVICE_UNAVAILABLE)

        payload = self._payload(result)
        payload['tracking_summary'] = {
            'total_events': len(result.events),
            'current_status': result.tracking.status,
            'current_location': result.tracking.current_location,
            'estimated_delivery': result.tracking.estimated_delivery,
            'is_delivered': result.tracking.status == Shipment.STATUS_DELIVERED,
        }
        return Response(payload)

    def _payload(self, result):
        return {
            'tracking': PublicShipmentSerializer(result.tracking).data if result.tracking else None,
            'events': TrackingEventSerializer(result.events, many=True).data,
            'error': result.error,
        }


class ShipmentListView(generics.ListCreateAPIView):
    """
    List all shipments or create a new one
    """
    serializer_class = ShipmentSerializer
    permission_classes = [IsBackOfficeAdmin]
    filter_backends = [DjangoFilterBackend, filters.SearchFilter, filters.OrderingFilter]
    filterset_fields = ['status', 'service_type']
    search_fields = ['tracking_number', 'customer_name', 'origin', 'destination']
    ordering_fields = ['created_at', 'updated_at', 'estimated_delivery']

    def get_queryset(self):
        return Shipment.objects.order_by('-created_at')

    def perform_create(self, serializer):
        shipment = serializer.save()
        logger.info(f"Admin {self.request.user.email} created shipment {shipment.tracking_number}")


class ShipmentDetailView(generics.RetrieveUpdateDestroyAPIView):
    """
    Retrieve, update or delete a shipment
    """
    serializer_class = ShipmentSerializer
    permission_classes = [IsBackOfficeAdmin]
    queryset = Shipment.objects.all()

    def update(self, request, *args, **kwargs):
        kwargs['partial'] = True
        return super().update(request, *args, **kwargs)

    def perform_destroy(self, instance):
        tracking_number = instance.tracking_number
        instance.delete()
        logger.info(f"Admin {self.request.user.email} deleted shipment {tracking_number}")


class TrackingEventListView(generics.ListCreateAPIView):
    """
    List the events of a shipment or add a new one
    """
    serializer_class = TrackingEventSerializer
    permission_classes = [IsBackOfficeAdmin]
    pagination_class = None

    def get_shipment(self):
        return get_object_or_404(Shipment, pk=self.kwargs['pk'])

    def get_queryset(self):
        return services.events_for(self.get_shipment())

    def create(self, request, *args, **kwargs):
        shipment = self.get_shipment()
        serializer = self.get_serializer(data=request.data)

        if serializer.is_valid():
            event = services.add_tracking_event(shipment, **serializer.validated_data)
            return Response({
                'event': TrackingEventSerializer(event).data,
                'shipment': ShipmentSerializer(shipment).data,
            }, status=status.HTTP_201_CREATED)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
