import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import APIView
from django.db import DatabaseError
from django.utils import timezone
from users.permissions import IsBackOfficeAdmin
from .serializers import DashboardStatsSerializer, ActivityEntrySerializer
from . import services

logger = logging.getLogger(__name__)

STATS_FAILED_MESSAGE = 'Failed to load dashboard statistics'
ACTIVITY_FAILED_MESSAGE = 'Failed to load recent activity'


class DashboardStatsView(APIView):
    """
    Back-office counters
    """
    permission_classes = [IsBackOfficeAdmin]

    def get(self, request):
        try:
            stats = services.get_stats()
        except DatabaseError:
            logger.error("Error fetching dashboard stats", exc_info=True)
            return Response({'error': STATS_FAILED_MESSAGE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(DashboardStatsSerializer(stats).data)


class RecentActivityView(APIView):
    """
    Newest messages and shipment updates, merged newest first
    """
    permission_classes = [IsBackOfficeAdmin]

    def get(self, request):
        try:
            activity = services.get_recent_activity()
        except DatabaseError:
            logger.error("Error fetching recent activity", exc_info=True)
            return Response({'error': ACTIVITY_FAILED_MESSAGE}, status=status.HTTP_503_SERVICE_UNAVAILABLE)

        return Response(ActivityEntrySerializer(activity, many=True).data)


class DashboardView(APIView):
    """
    Counters and activity in one call; a failing panel does not hide the other
    """
    permission_classes = [IsBackOfficeAdmin]

    def get(self, request):
        payload = {
            'stats': None,
            'recent_activity': [],
            'errors': {},
            'timestamp': timezone.now().isoformat(),
        }

        try:
            payload['stats'] = DashboardStatsSerializer(services.get_stats()).data
        except DatabaseError:
            logger.error("Error fetching dashboard stats", exc_info=True)
            payload['errors']['stats'] = STATS_FAILED_MESSAGE

        try:
            payload['recent_activity'] = ActivityEntrySerializer(services.get_recent_activity(), many=True).data
        except DatabaseError:
            logger.error("Error fetching recent activity", exc_info=True)
            payload['errors']['recent_activity'] = ACTIVITY_FAILED_MESSAGE

        return Response(payload)
