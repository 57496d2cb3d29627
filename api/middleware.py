"""
Request Pipeline Stages

Middleware run ahead of the router, outermost first:

- ResponseFormatterMiddleware: forces the outgoing content-type to JSON
- TextBodyMiddleware, JSONBodyMiddleware, FormBodyMiddleware: decode the
  request body when its declared content type matches, storing the result
  on request.state.body

Decoders run before routing, so a malformed body is rejected even when no
route would have matched. They sit outside FastAPI's exception middleware
and therefore render their errors directly.
"""

from __future__ import annotations

import json
import logging
from typing import Any
from urllib.parse import parse_qsl

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from api.errors import APIError, MalformedBodyError, PayloadTooLargeError, error_response
from core.config.runtime import DEFAULT_MAX_BODY_BYTES


logger = logging.getLogger(__name__)


JSON_MEDIA_TYPE = "application/json"
TEXT_MEDIA_TYPE = "text/plain"
FORM_MEDIA_TYPE = "application/x-www-form-urlencoded"

_MISSING = object()


def parse_content_type(header: str | None) -> tuple[str, dict[str, str]]:
    """
    Split a content-type header into a lowercased media type and parameters.

    "Application/JSON; charset=UTF-8" -> ("application/json", {"charset": "UTF-8"})
    """
    if not header:
        return "", {}
    media_type, _, rest = header.partition(";")
    params: dict[str, str] = {}
    for item in rest.split(";"):
        key, sep, value = item.partition("=")
        if sep:
            params[key.strip().lower()] = value.strip().strip('"')
    return media_type.strip().lower(), params


def decoded_body(request: Request, default: Any = None) -> Any:
    """Return the body attached by a decoder, or default if none matched."""
    value = getattr(request.state, "body", _MISSING)
    return default if value is _MISSING else value


class ResponseFormatterMiddleware(BaseHTTPMiddleware):
    """Set content-type: application/json on every response."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        response.headers["content-type"] = JSON_MEDIA_TYPE
        return response


class BodyDecoderMiddleware(BaseHTTPMiddleware):
    """
    Base for content-type driven body decoders.

    Subclasses set media_type and implement decode(). Requests with any
    other content type pass through untouched.
    """

    media_type: str = ""

    def __init__(self, app: ASGIApp, max_body_bytes: int = DEFAULT_MAX_BODY_BYTES) -> None:
        super().__init__(app)
        self.max_body_bytes = max_body_bytes

    def decode(self, body: bytes, params: dict[str, str]) -> Any:
        raise NotImplementedError

    async def read_body(self, request: Request) -> bytes:
        declared = request.headers.get("content-length")
        if declared and declared.isdigit() and int(declared) > self.max_body_bytes:
            raise PayloadTooLargeError(self.max_body_bytes)
        # Chunked bodies carry no length; count while reading
        chunks: list[bytes] = []
        received = 0
        async for chunk in request.stream():
            received += len(chunk)
            if received > self.max_body_bytes:
                raise PayloadTooLargeError(self.max_body_bytes)
            chunks.append(chunk)
        body = b"".join(chunks)
        # Replayed to downstream stages by BaseHTTPMiddleware
        request._body = body
        return body

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        media_type, params = parse_content_type(request.headers.get("content-type"))
        if media_type != self.media_type:
            return await call_next(request)

        try:
            body = await self.read_body(request)
            request.state.body = self.decode(body, params)
        except APIError as e:
            logger.warning(
                f"Rejected {media_type} body on {request.method} {request.url.path}: {e.message}"
            )
            return error_response(e)

        return await call_next(request)


class TextBodyMiddleware(BodyDecoderMiddleware):
    """Decode text/plain bodies to str."""

    media_type = TEXT_MEDIA_TYPE

    def decode(self, body: bytes, params: dict[str, str]) -> str:
        charset = params.get("charset", "utf-8")
        try:
            return body.decode(charset)
        except LookupError:
            raise MalformedBodyError(f"Unsupported charset: {charset}", details={"charset": charset})
        except UnicodeDecodeError as e:
            raise MalformedBodyError(f"Invalid {charset} text body", details={"reason": str(e)})


def _reject_constant(name: str) -> Any:
    raise ValueError(f"{name} is not valid JSON")


class JSONBodyMiddleware(BodyDecoderMiddleware):
    """Decode application/json bodies. An empty body decodes to {}."""

    media_type = JSON_MEDIA_TYPE

    def decode(self, body: bytes, params: dict[str, str]) -> Any:
        if not body.strip():
            return {}
        try:
            return json.loads(body, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            raise MalformedBodyError("Invalid JSON body", details={"reason": str(e)})


class FormBodyMiddleware(BodyDecoderMiddleware):
    """
    Decode application/x-www-form-urlencoded bodies.

    Keys seen once map to a string; repeated keys map to a list of strings
    in body order.
    """

    media_type = FORM_MEDIA_TYPE

    def decode(self, body: bytes, params: dict[str, str]) -> dict[str, str | list[str]]:
        charset = params.get("charset", "utf-8")
        try:
            text = body.decode(charset)
            pairs = parse_qsl(text, keep_blank_values=True, encoding=charset, errors="strict")
        except LookupError:
            raise MalformedBodyError(f"Unsupported charset: {charset}", details={"charset": charset})
        except ValueError as e:
            raise MalformedBodyError("Invalid form body", details={"reason": str(e)})

        form: dict[str, str | list[str]] = {}
        for key, value in pairs:
            if key not in form:
                form[key] = value
                continue
            existing = form[key]
            if isinstance(existing, list):
                existing.append(value)
            else:
                form[key] = [existing, value]
        return form


BODY_DECODERS = (TextBodyMiddleware, JSONBodyMiddleware, FormBodyMiddleware)
