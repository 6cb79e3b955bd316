from rest_framework import serializers
from .models import ContactMessage, QuoteRequest


class ContactMessageSubmitSerializer(serializers.ModelSerializer):
    """
    Public contact form
    """
    class Meta:
        model = ContactMessage
        fields = ['name', 'email', 'phone', 'message']
        extra_kwargs = {
            'phone': {'required': False},
        }


class ContactMessageSerializer(serializers.ModelSerializer):
    """
    Serializer for ContactMessage model
    """
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    formatted_created_at = serializers.SerializerMethodField()

    class Meta:
        model = ContactMessage
        fields = [
            'id', 'name', 'email', 'phone', 'message', 'status', 'status_display',
            'created_at', 'formatted_created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'name', 'email', 'phone', 'message', 'created_at', 'updated_at']

    def get_formatted_created_at(self, obj):
        return obj.created_at.strftime('%Y-%m-%d %H:%M:%S') if obj.created_at else None


class QuoteRequestSubmitSerializer(serializers.ModelSerializer):
    """
    Public quote request form
    """
    class Meta:
        model = QuoteRequest
        fields = [
            'customer_name', 'customer_email', 'customer_phone', 'company_name',
            'origin', 'destination', 'service_type', 'cargo_type',
            'weight', 'dimensions', 'estimated_value'
        ]

    def validate_weight(self, value):
        """Validate weight is positive"""
        if value is not None and value <= 0:
            raise serializers.ValidationError("Weight must be greater than 0")
        return value

    def validate_estimated_value(self, value):
        if value is not None and value <= 0:
            raise serializers.ValidationError("Estimated value must be positive")
        return value


class QuoteRequestSerializer(serializers.ModelSerializer):
    status_display = serializers.CharField(source='get_status_display', read_only=True)
    service_type_display = serializers.CharField(source='get_service_type_display', read_only=True)

    class Meta:
        model = QuoteRequest
        fields = [
            'id', 'quote_number', 'customer_name', 'customer_email', 'customer_phone',
            'company_name', 'origin', 'destination', 'service_type', 'service_type_display',
            'cargo_type', 'weight', 'dimensions', 'estimated_value', 'quote_amount',
            'currency', 'status', 'status_display', 'valid_until', 'notes',
            'created_at', 'updated_at'
        ]
        read_only_fields = ['id', 'quote_number', 'created_at', 'updated_at']

    def validate(self, data):
        status = data.get('status')
        quote_amount = data.get('quote_amount', getattr(self.instance, 'quote_amount', None))
        if status == QuoteRequest.QUOTED and quote_amount is None:
            raise serializers.ValidationError({
                'quote_amount': 'A quoted request needs a quote amount'
            })
        return data
