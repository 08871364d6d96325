import logging
from typing import Optional

from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.views import exception_handler

logger = logging.getLogger(__name__)


class ResourceNotFoundError(APIException):
    """Referenced room, booking or catalog entry does not exist"""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Resource not found."
    default_code = "not_found"

    def __init__(
            self,
            resource: Optional[str] = None,
            resource_id: Optional[int] = None,
            message: Optional[str] = None
    ) -> None:
        if message is None and resource is not None:
            message = f"{resource} with ID {resource_id} not found."
        super().__init__(message)
        self.resource = resource
        self.resource_id = resource_id


class BusinessValidationError(APIException):
    """Input breaks a business rule: bad dates, busy room, bad transition"""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid request."
    default_code = "invalid"


class AccessDeniedError(APIException):
    """Caller is neither the owner of the booking nor an admin"""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "Access denied."
    default_code = "access_denied"


def api_exception_handler(exc, context):
    """
    Wrap DRF's default handler so every API error has the same shape:
    {"status": <http code>, "detail": <message>, "errors": <fields or null>}
    """
    response = exception_handler(exc, context)
    if response is None:
        return None

    request = context.get("request")
    path = request.path if request is not None else ""
    log = logger.error if response.status_code >= 500 else logger.warning
    log("%s: %s - Path: %s", exc.__class__.__name__, response.data, path)

    data = response.data
    if isinstance(data, dict) and set(data) == {"detail"}:
        detail, errors = data["detail"], None
    else:
        detail, errors = "Validation failed", data

    response.data = {
        "status": response.status_code,
        "detail": detail,
        "errors": errors,
    }
    return response
