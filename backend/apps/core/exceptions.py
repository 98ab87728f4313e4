"""
API exception handling.
"""
import logging

from django.db.models.deletion import ProtectedError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


def custom_exception_handler(exc, context):
    """
    Map deletes of still-referenced rows to 409, defer everything else to DRF.
    """
    if isinstance(exc, ProtectedError):
        protected = [str(o) for o in list(exc.protected_objects)[:5]]
        logger.info(f"Refused delete, object still referenced by: {protected}")
        return Response(
            {
                'detail': 'Cannot delete this object, it is still referenced by other records.',
                'error': 'protected_error',
                'protected_objects_sample': protected,
            },
            status=status.HTTP_409_CONFLICT,
        )

    return exception_handler(exc, context)
