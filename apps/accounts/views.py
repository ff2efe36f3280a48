"""
Procedure views for accounts app.

Handles user registration, login and token lookup.
"""
from rest_framework.permissions import AllowAny

from apps.accounts.permissions import IsAdminRole
from apps.rpc.registry import mutation, query
from .serializers import LoginInputSerializer, RegisterInputSerializer, TokenInputSerializer, UserSerializer
from .services import AuthService


@mutation("auth.register", input_serializer=RegisterInputSerializer, permission_classes=[IsAdminRole])
def register(request, data):
    """
    Create a new user account.

    Only administrators can register users.
    """
    user = AuthService.register_user(**data)
    return UserSerializer(user).data


@mutation("auth.login", input_serializer=LoginInputSerializer, permission_classes=[AllowAny])
def login(request, data):
    user, token = AuthService.login_user(email=data["email"], password=data["password"])
    return {
        "user": UserSerializer(user).data,
        "token": token,
    }


@query("auth.get_current_user", input_serializer=TokenInputSerializer, permission_classes=[AllowAny])
def get_current_user(request, data):
    """Return the user owning ``token``, or null when the token is unknown."""
    user = AuthService.get_user_for_token(data["token"])
    if user is None:
        return None
    return UserSerializer(user).data
