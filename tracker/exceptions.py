import logging

from django.db import DatabaseError
from django.http import Http404
from rest_framework import exceptions
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class StoreError(exceptions.APIException):
    """Raised when the underlying database rejects a read or write."""
    status_code = 500
    default_detail = 'The request could not be completed because of a storage failure.'
    default_code = 'store_error'


# Checked in order, so subclasses must come before their bases.
ERROR_KINDS = (
    (exceptions.ValidationError, 'validation_error'),
    (exceptions.NotFound, 'not_found'),
    (exceptions.NotAuthenticated, 'unauthorized'),
    (exceptions.AuthenticationFailed, 'unauthorized'),
    (StoreError, 'store_error'),
)


def error_kind(exc):
    for exc_class, kind in ERROR_KINDS:
        if isinstance(exc, exc_class):
            return kind
    return getattr(exc, 'default_code', 'error')


def api_exception_handler(exc, context):
    """
    Renders every API failure as ``{"kind", "error", "details"}``.

    Database failures are logged and reported as a generic ``store_error``;
    anything DRF does not recognise is left for Django to handle.
    """
    if isinstance(exc, DatabaseError):
        view = context.get('view')
        logger.error(f"Store failure while handling {view.__class__.__name__}: {exc}", exc_info=exc)
        exc = StoreError()
    elif isinstance(exc, Http404):
        exc = exceptions.NotFound()

    response = exception_handler(exc, context)
    if response is None:
        return None

    details = response.data
    if isinstance(exc, exceptions.ValidationError):
        message = 'Invalid input.'
    elif isinstance(details, dict) and 'detail' in details:
        message = str(details['detail'])
        details = {k: v for k, v in details.items() if k != 'detail'} or None
    else:
        message = str(exc)

    response.data = {
        'kind': error_kind(exc),
        'error': message,
        'details': details,
    }
    return response
