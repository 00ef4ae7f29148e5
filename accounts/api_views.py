import logging

from django.conf import settings
from django.contrib.auth import get_user_model
from django.middleware.csrf import get_token
from rest_framework import generics, permissions, status
from rest_framework.exceptions import ValidationError
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.tokens import RefreshToken
from rest_framework_simplejwt.views import TokenObtainPairView

from .serializers import (
    UserRegistrationSerializer,
    CurrentUserSerializer,
    CustomTokenObtainPairSerializer,
    LogoutSerializer,
)

User = get_user_model()
logger = logging.getLogger(__name__)


def set_auth_cookie(response, access_token):
    lifetime = settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME']
    response.set_cookie(
        settings.AUTH_COOKIE_NAME,
        access_token,
        max_age=int(lifetime.total_seconds()),
        httponly=True,
        secure=settings.AUTH_COOKIE_SECURE,
        samesite=settings.AUTH_COOKIE_SAMESITE,
        path='/',
    )


class UserRegistrationView(generics.CreateAPIView):
    queryset = User.objects.all()
    authentication_classes = []
    permission_classes = [permissions.AllowAny]
    serializer_class = UserRegistrationSerializer

    def perform_create(self, serializer):
        user = serializer.save()
        logger.info(f"Registered user {user.id}")


class CustomTokenObtainPairView(TokenObtainPairView):
    """
    Email/password login. Returns the token pair plus the user, and issues
    the access token as an httpOnly cookie.
    """
    serializer_class = CustomTokenObtainPairSerializer

    def post(self, request, *args, **kwargs):
        response = super().post(request, *args, **kwargs)
        set_auth_cookie(response, response.data['access'])
        # Cookie-authenticated writes need the CSRF token as X-CSRFToken.
        get_token(request)
        logger.info(f"User {response.data['user']['id']} logged in")
        return response


class LogoutView(APIView):
    """
    Clears the auth cookie and, when a refresh token is supplied, blacklists
    it so it can no longer mint access tokens.
    """
    authentication_classes = []
    permission_classes = [permissions.AllowAny]

    def post(self, request):
        serializer = LogoutSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        refresh = serializer.validated_data.get('refresh')
        if refresh:
            try:
                RefreshToken(refresh).blacklist()
            except TokenError as e:
                raise ValidationError({"refresh": [str(e)]})

        response = Response({"detail": "Logged out."}, status=status.HTTP_200_OK)
        response.delete_cookie(settings.AUTH_COOKIE_NAME, path='/')
        return response


class CurrentUserView(APIView):
    permission_classes = [permissions.IsAuthenticated]

    def get(self, request):
        """Retrieve details of the currently authenticated user."""
        serializer = CurrentUserSerializer(request.user)
        return Response(serializer.data)
