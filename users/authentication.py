from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed

from . import services


class SessionJWTAuthentication(JWTAuthentication):
    """
    Bearer-token authentication that also requires the token's login session
    to be open and unexpired
    """

    def get_user(self, validated_token):
        account = super().get_user(validated_token)

        session = services.live_session(validated_token.get(services.SESSION_CLAIM), account)
        if session is None:
            raise AuthenticationFailed('Session has ended', code='session_ended')

        services.touch_session(session)
        return account
