"""Mapping of domain errors to HTTP responses."""

import falcon
import falcon.asgi

from rolegate.domain.exceptions import (
    NotFound,
    PermissionDenied,
    RoleGateError,
    SystemEntityImmutable,
    ValidationError,
)

_STATUS = [
    (SystemEntityImmutable, falcon.HTTP_409),
    (ValidationError, falcon.HTTP_400),
    (NotFound, falcon.HTTP_404),
    (PermissionDenied, falcon.HTTP_403),
]


def set_domain_error(resp: falcon.asgi.Response, error: RoleGateError) -> None:
    """Set status and body for a domain error."""
    for error_type, status in _STATUS:
        if isinstance(error, error_type):
            resp.status = status
            break
    else:
        resp.status = falcon.HTTP_400
    resp.media = {"error": str(error)}


def set_not_found(resp: falcon.asgi.Response, what: str) -> None:
    resp.status = falcon.HTTP_404
    resp.media = {"error": f"{what} not found"}


async def read_json_body(req: falcon.asgi.Request) -> dict:
    """Request body as a dict, ValidationError otherwise."""
    try:
        body = await req.get_media()
    except falcon.MediaNotFoundError as e:
        raise ValidationError("Request body is required") from e
    except falcon.MediaMalformedError as e:
        raise ValidationError("Malformed JSON body") from e
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    return body
