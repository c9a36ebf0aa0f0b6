# accounts/authentication.py
"""
Bearer token authentication.

Tokens are simplejwt access tokens carrying ``sub`` (user id), ``email``,
``iat`` and ``exp``. Signature and expiry are verified by simplejwt
(InvalidToken -> 401). The subject is then resolved to a stored, active
user; a missing or deactivated user is rejected with 401 as well.
"""
import logging

from rest_framework.exceptions import AuthenticationFailed
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken

from accounts.models import User

logger = logging.getLogger(__name__)


def issue_token(user: User) -> str:
    """Sign an access token for ``user``."""
    token = AccessToken.for_user(user)
    token["email"] = user.email
    return str(token)


class PrincipalJWTAuthentication(JWTAuthentication):
    """Resolve ``Authorization: Bearer <token>`` to an active principal."""

    def get_user(self, validated_token):
        try:
            user_id = validated_token[api_settings.USER_ID_CLAIM]
        except KeyError:
            raise AuthenticationFailed("Token contained no recognizable user identification", code="token_not_valid")

        user = (
            User.objects.select_related("company")
            .filter(**{api_settings.USER_ID_FIELD: user_id})
            .first()
        )
        if user is None or not user.is_active:
            logger.info("Rejected token for missing or inactive user", extra={"user_id": user_id})
            raise AuthenticationFailed("Token is invalid or user is inactive", code="user_inactive")
        return user
