import logging

from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.exceptions import APIException, ParseError
from rest_framework.views import exception_handler

from location.exceptions import DependencyUnavailable, LocationFilterError

logger = logging.getLogger(__name__)


class InvalidConfiguration(Exception):
    """Locator settings or a stored locator hold values the core cannot use."""


class ServiceUnavailable(APIException):
    status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    default_detail = "Location store is temporarily unavailable."
    default_code = "service_unavailable"


class Misconfigured(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Locator is misconfigured."
    default_code = "invalid_configuration"


def locator_exception_handler(exc, context):
    """DRF exception handler mapping locator errors onto API errors."""
    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.error("Location store unavailable: %s", exc)
        exc = ServiceUnavailable()
    elif isinstance(exc, DependencyUnavailable):
        exc = ServiceUnavailable()
    elif isinstance(exc, LocationFilterError):
        exc = ParseError(str(exc))
    elif isinstance(exc, InvalidConfiguration):
        logger.error("Invalid locator configuration: %s", exc)
        exc = Misconfigured(str(exc))
    return exception_handler(exc, context)
