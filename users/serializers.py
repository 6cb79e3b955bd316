from rest_framework import serializers
from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from .models import AdminAccount, AdminSession
from . import services


class AdminLoginSerializer(serializers.Serializer):
    email = serializers.EmailField(required=True)
    password = serializers.CharField(write_only=True, required=True)

    def validate(self, attrs):
        account = authenticate(
            self.context.get('request'),
            email=attrs['email'].lower(),
            password=attrs['password'],
        )
        if account is None:
            raise serializers.ValidationError("Invalid email or password")

        attrs['account'] = account
        return attrs


class AdminAccountSerializer(serializers.ModelSerializer):
    role_display = serializers.CharField(source='get_role_display', read_only=True)
    created_by_name = serializers.CharField(source='created_by.name', read_only=True, default=None)

    class Meta:
        model = AdminAccount
        fields = [
            'id', 'name', 'email', 'role', 'role_display', 'is_active',
            'created_by', 'created_by_name', 'last_login', 'created_at', 'updated_at'
        ]
        read_only_fields = fields


class _RoleGuardMixin:
    def validate_role(self, value):
        """Only a super admin may hand out the super admin role"""
        request = self.context.get('request')
        acting_role = getattr(getattr(request, 'user', None), 'role', None)
        if value == AdminAccount.SUPER_ADMIN and acting_role != AdminAccount.SUPER_ADMIN:
            raise serializers.ValidationError("Only a super admin can assign the super_admin role.")
        return value


class AdminAccountCreateSerializer(_RoleGuardMixin, serializers.ModelSerializer):
    password = serializers.CharField(write_only=True, required=True, validators=[validate_password])

    class Meta:
        model = AdminAccount
        fields = ['name', 'email', 'password', 'role']
        extra_kwargs = {
            'role': {'required': False},
        }

    def validate_email(self, value):
        if AdminAccount.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return value.lower()

    def create(self, validated_data):
        request = self.context.get('request')
        created_by = request.user if request and request.user.is_authenticated else None
        return AdminAccount.objects.create_user(created_by=created_by, **validated_data)


class AdminAccountUpdateSerializer(_RoleGuardMixin, serializers.ModelSerializer):
    class Meta:
        model = AdminAccount
        fields = ['name', 'email', 'role', 'is_active']

    def validate_email(self, value):
        if AdminAccount.objects.exclude(pk=self.instance.pk).filter(email__iexact=value).exists():
            raise serializers.ValidationError("This email is already in use.")
        return value.lower()


class ChangePasswordSerializer(serializers.Serializer):
    new_password = serializers.CharField(write_only=True, required=True, validators=[validate_password])
    new_password2 = serializers.CharField(write_only=True, required=True)

    def validate(self, attrs):
        if attrs['new_password'] != attrs['new_password2']:
            raise serializers.ValidationError({"new_password": "Password fields don't match."})
        return attrs


class AdminSessionSerializer(serializers.ModelSerializer):
    is_expired = serializers.SerializerMethodField()

    class Meta:
        model = AdminSession
        fields = [
            'id', 'ip_address', 'user_agent', 'login_at',
            'last_activity', 'expires_at', 'is_active', 'is_expired'
        ]
        read_only_fields = fields

    def get_is_expired(self, obj):
        return obj.is_expired()


class SessionTokenRefreshSerializer(TokenRefreshSerializer):
    """
    Token refresh that refuses tokens whose login session has been closed
    """

    def validate(self, attrs):
        refresh = self.token_class(attrs['refresh'])
        if services.live_session(refresh.get(services.SESSION_CLAIM)) is None:
            raise InvalidToken('Session has ended')
        return super().validate(attrs)
