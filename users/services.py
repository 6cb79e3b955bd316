"""
Login session handling for back-office accounts.

A session is explicit: ``start_session`` hands the caller a token pair plus
the recorded ``AdminSession`` and its expiry, ``end_session`` closes it.
Every token carries the id of its session, and authentication and token
refresh both refuse a token whose session is closed or expired.
"""
import logging

from django.conf import settings
from django.utils import timezone
from rest_framework_simplejwt.token_blacklist.models import BlacklistedToken, OutstandingToken
from rest_framework_simplejwt.tokens import RefreshToken

from .models import AdminSession

logger = logging.getLogger(__name__)

SESSION_CLAIM = 'session_id'


def get_client_ip(request):
    x_forwarded_for = request.META.get('HTTP_X_FORWARDED_FOR')
    return x_forwarded_for.split(',')[0].strip() if x_forwarded_for else request.META.get('REMOTE_ADDR')


def issue_tokens(account, session):
    refresh = RefreshToken.for_user(account)
    # Copied into every access token derived from this refresh token
    refresh[SESSION_CLAIM] = session.id
    access_token = refresh.access_token

    access_token['email'] = account.email
    access_token['name'] = account.name
    access_token['role'] = account.role

    return refresh, access_token


def start_session(account, request):
    """
    Issue tokens for ``account`` and record the login.

    Returns a dict with ``refresh``, ``access``, ``session`` and ``expires_in``
    (access token lifetime in seconds).
    """
    session = AdminSession.objects.create(
        account=account,
        session_token='',
        ip_address=get_client_ip(request),
        user_agent=request.META.get('HTTP_USER_AGENT', ''),
        expires_at=timezone.now() + settings.SESSION_LIFETIME,
    )

    refresh, access_token = issue_tokens(account, session)
    session.session_token = str(access_token)
    session.save(update_fields=['session_token'])

    account.last_login = timezone.now()
    account.save(update_fields=['last_login'])

    logger.info(f"Admin {account.email} logged in (session {session.id})")

    return {
        'refresh': str(refresh),
        'access': str(access_token),
        'session': session,
        'expires_in': int(settings.SIMPLE_JWT['ACCESS_TOKEN_LIFETIME'].total_seconds()),
    }


def live_session(session_id, account=None):
    """
    The open, unexpired session with ``session_id``, or ``None``.
    """
    if session_id is None:
        return None

    sessions = AdminSession.objects.filter(pk=session_id, is_active=True, expires_at__gt=timezone.now())
    if account is not None:
        sessions = sessions.filter(account=account)
    return sessions.first()


def touch_session(session):
    AdminSession.objects.filter(pk=session.pk).update(last_activity=timezone.now())


def end_session(account, access_token, refresh_token=None):
    """
    Blacklist ``refresh_token`` (if given) and close the session named in
    ``access_token``. Raises ``TokenError`` for an invalid refresh token.
    """
    if refresh_token:
        RefreshToken(refresh_token).blacklist()

    session_id = access_token.get(SESSION_CLAIM) if access_token is not None else None

    closed = AdminSession.objects.filter(
        pk=session_id,
        account=account,
        is_active=True,
    ).update(is_active=False, expires_at=timezone.now())

    logger.info(f"Admin {account.email} logged out ({closed} session(s) closed)")
    return closed


def revoke_all_sessions(account):
    """
    Close every session of ``account`` and blacklist all of its refresh tokens.
    """
    closed = AdminSession.objects.filter(account=account, is_active=True).update(
        is_active=False,
        expires_at=timezone.now(),
    )

    for token in OutstandingToken.objects.filter(user=account):
        BlacklistedToken.objects.get_or_create(token=token)

    logger.info(f"Revoked {closed} session(s) for {account.email}")
    return closed


def active_sessions(account):
    return AdminSession.objects.filter(
        account=account,
        is_active=True,
        expires_at__gt=timezone.now(),
    ).order_by('-last_activity')
