# accounts/serializers.py
from djoser.serializers import UserCreateSerializer as BaseUserCreateSerializer
from rest_framework import serializers
from rest_framework_simplejwt.serializers import TokenObtainPairSerializer

from django.contrib.auth import get_user_model

User = get_user_model()


class CurrentUserSerializer(serializers.ModelSerializer):
    class Meta:
        model = User
        fields = ['id', 'email', 'name', 'date_joined']
        read_only_fields = fields


class CustomTokenObtainPairSerializer(TokenObtainPairSerializer):
    """
    Email/password login. Emails are stored lowercase, so the submitted
    address is normalised before the credential check.
    """

    @classmethod
    def get_token(cls, user):
        token = super().get_token(user)  # user_id, exp, jti
        token['email'] = user.email
        token['name'] = user.name
        return token

    def validate(self, attrs):
        attrs[self.username_field] = attrs[self.username_field].strip().lower()
        data = super().validate(attrs)
        data['user'] = CurrentUserSerializer(self.user).data
        return data


class UserRegistrationSerializer(BaseUserCreateSerializer):
    name = serializers.CharField(max_length=255, min_length=2)

    class Meta(BaseUserCreateSerializer.Meta):
        model = User
        fields = ['id', 'email', 'name', 'password']

    def validate_email(self, value):
        value = value.strip().lower()
        if User.objects.filter(email__iexact=value).exists():
            raise serializers.ValidationError("An account with this email already exists.")
        return value


class LogoutSerializer(serializers.Serializer):
    refresh = serializers.CharField(required=False, allow_blank=True)
