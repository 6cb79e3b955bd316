from rest_framework import serializers
from .models import Shipment, TrackingEvent


class TrackingEventSerializer(serializers.ModelSerializer):
    """
    Serializer for TrackingEvent model
    """
    shipment_tracking = serializers.CharField(source='shipment.tracking_number', read_only=True)
    formatted_event_time = serializers.SerializerMethodField()

    class Meta:
        model = TrackingEvent
        fields = [
            'id', 'shipment', 'shipment_tracking', 'event_date', 'event_time',
            'formatted_event_time', 'location', 'status', 'description', 'created_at'
        ]
        read_only_fields = ['id', 'shipment', 'created_at']
        extra_kwargs = {
            'description': {'required': False},
        }

    def get_formatted_event_time(self, obj):
        if not obj.event_date or not obj.event_time:
            return None
        return f"{obj.event_date:%Y-%m-%d} {obj.event_time:%H:%M}"


class ShipmentSerializer(serializers.ModelSerializer):
    """
    Complete serializer for Shipment model, used for reads and for the
    back-office create / update forms
    """
    service_type_display = serializers.CharField(source='get_service_type_display', read_only=True)
    formatted_created_at = serializers.SerializerMethodField()
    formatted_updated_at = serializers.SerializerMethodField()

    class Meta:
        model = Shipment
        fields = [
            'id', 'tracking_number', 'customer_name', 'customer_email', 'customer_phone',
            'origin', 'destination', 'status', 'current_location',
            'estimated_delivery', 'actual_delivery', 'weight', 'dimensions',
            'service_type', 'service_type_display',
            'created_at', 'formatted_created_at', 'updated_at', 'formatted_updated_at'
        ]
        read_only_fields = ['id', 'created_at', 'updated_at']
        extra_kwargs = {
            'status': {'required': False},
        }

    def get_formatted_created_at(self, obj):
        return obj.created_at.strftime('%Y-%m-%d %H:%M:%S') if obj.created_at else None

    def get_formatted_updated_at(self, obj):
        return obj.updated_at.strftime('%Y-%m-%d %H:%M:%S') if obj.updated_at else None

    def validate_weight(self, value):
        """Validate weight is positive"""
        if value is not None and value <= 0:
            raise serializers.ValidationError("Weight must be greater than 0")
        return value


class PublicShipmentSerializer(serializers.ModelSerializer):
    """
    What the public tracking form shows; customer contact details stay private
    """
    service_type_display = serializers.CharField(source='get_service_type_display', read_only=True)

    class Meta:
        model = Shipment
        fields = [
            'tracking_number', 'customer_name', 'origin', 'destination',
            'status', 'current_location', 'estimated_delivery', 'actual_delivery',
            'weight', 'dimensions', 'service_type', 'service_type_display', 'updated_at'
        ]
        read_only_fields = fields
