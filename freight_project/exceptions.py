import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = 'The service is temporarily unavailable. Please try again.'


def api_exception_handler(exc, context):
    """
    DRF exception handler. Missing objects come back as ``{"error": ...}``
    and database failures as a 503 with a generic message instead of a 500.
    """
    response = exception_handler(exc, context)
    if response is not None:
        if response.status_code == status.HTTP_404_NOT_FOUND and 'detail' in response.data:
            response.data = {'error': response.data['detail']}
        return response

    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(f"Database error in {view.__class__.__name__}: {exc}", exc_info=exc)
        return Response({
            'error': GENERIC_FAILURE_MESSAGE
        }, status=status.HTTP_503_SERVICE_UNAVAILABLE)

    return None
