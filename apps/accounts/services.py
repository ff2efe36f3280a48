"""
Authentication services.

Registration hashes the password through Django's auth machinery and login
issues a DRF auth token, one per user, reused across logins.
"""
import logging

from django.contrib.auth import authenticate
from rest_framework.authtoken.models import Token
from rest_framework.exceptions import AuthenticationFailed

from .models import User

logger = logging.getLogger(__name__)


class AuthService:
    @staticmethod
    def register_user(*, email, password, role, first_name, last_name, phone=None):
        user = User.objects.create_user(
            email=email,
            password=password,
            role=role,
            first_name=first_name,
            last_name=last_name,
            phone=phone or None,
        )
        logger.info("Registered user %s with role %s", user.id, user.role)
        return user

    @staticmethod
    def login_user(*, email, password):
        """
        Authenticate by email and password.

        Returns:
            tuple: (user, token key)
        """
        user_obj = User.objects.filter(email__iexact=email).first()
        user = None
        if user_obj is not None:
            user = authenticate(username=user_obj.username, password=password)

        if user is None:
            # authenticate() returns None for inactive users as well
            if user_obj is not None and not user_obj.is_active and user_obj.check_password(password):
                raise AuthenticationFailed('User account is disabled.')
            logger.warning("Failed login attempt for %s", email)
            raise AuthenticationFailed('Invalid email or password.')

        token, _ = Token.objects.get_or_create(user=user)
        return user, token.key

    @staticmethod
    def get_user_for_token(token):
        """Resolve a token key to its active user, or None."""
        try:
            token_obj = Token.objects.select_related("user").get(key=token)
        except Token.DoesNotExist:
            return None
        if not token_obj.user.is_active:
            return None
        return token_obj.user
