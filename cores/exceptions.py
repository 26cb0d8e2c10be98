# cores/exceptions.py
import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def _message_from(detail):
    if isinstance(detail, dict):
        if 'detail' in detail:
            return _message_from(detail['detail'])
        return {key: _message_from(value) for key, value in detail.items()}
    if isinstance(detail, list):
        return [_message_from(item) for item in detail] if len(detail) != 1 else _message_from(detail[0])
    return str(detail)


def api_exception_handler(exc, context):
    """
    Renders every API error as {"error": ...}. Server-side failures are
    logged with their traceback and never leak internals to the client.
    """
    view = context.get('view')
    response = exception_handler(exc, context)

    if response is None:
        logger.exception("Unhandled error in %s", view.__class__.__name__ if view else "view", exc_info=exc)
        return Response({"error": "An internal error occurred."}, status=status.HTTP_500_INTERNAL_SERVER_ERROR)

    if response.status_code >= 500:
        logger.error("%s failed: %s", view.__class__.__name__ if view else "view", exc, exc_info=exc)

    response.data = {"error": _message_from(response.data)}
    return response
