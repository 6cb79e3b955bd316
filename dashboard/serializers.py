from rest_framework import serializers
from django.utils import timezone


class DashboardStatsSerializer(serializers.Serializer):
    """
    Serializer for dashboard statistics
    """
    total_shipments = serializers.IntegerField()
    active_messages = serializers.IntegerField()
    total_users = serializers.IntegerField()
    delivered_shipments = serializers.IntegerField()
    in_transit_shipments = serializers.IntegerField()
    pending_shipments = serializers.IntegerField()
    pending_quotes = serializers.IntegerField()


class ActivityEntrySerializer(serializers.Serializer):
    """
    One line of the recent-activity feed; formatting happens here only
    """
    id = serializers.IntegerField()
    type = serializers.ChoiceField(choices=['message', 'tracking'])
    action = serializers.CharField()
    user = serializers.CharField()
    time = serializers.DateTimeField()
    formatted_time = serializers.SerializerMethodField()
    time_ago = serializers.SerializerMethodField()

    def get_formatted_time(self, obj):
        return timezone.localtime(obj['time']).strftime('%Y-%m-%d %H:%M:%S') if obj['time'] else None

    def get_time_ago(self, obj):
        diff = timezone.now() - obj['time']

        if diff.total_seconds() < 60:
            return "Just now"
        elif diff.days > 0:
            return f"{diff.days} day{'s' if diff.days > 1 else ''} ago"
        elif diff.seconds >= 3600:
            hours = diff.seconds // 3600
            return f"{hours} hour{'s' if hours > 1 else ''} ago"
        else:
            minutes = diff.seconds // 60
            return f"{minutes} minute{'s' if minutes > 1 else ''} ago"
