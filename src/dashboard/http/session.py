"""Async HTTP session for the REST backend.

Single place where httpx is touched. Repositories call ``ApiSession.get`` /
``post`` / ``patch`` and receive decoded JSON; every failure comes out as one of
the dashboard exceptions:

    404              -> NotFoundError
    400, 422         -> ValidationError
    other non-2xx    -> TransportError (with status_code)
    network failure  -> TransportError (status_code None)
"""

import uuid
from typing import Any

import httpx
import structlog
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from dashboard.config import Settings, settings
from dashboard.exceptions import NotFoundError, TransportError, ValidationError
from dashboard.logging import get_logger
from dashboard.schemas.error import error_message

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"


class ApiSession:
    """Wraps one ``httpx.AsyncClient`` bound to the backend base URL.

    Usage:
        session = create_session()
        body = await session.get("/patients", params={"page": 1, "limit": 10})
        await session.aclose()

    Each request gets a fresh X-Request-ID, sent as a header and bound to the
    structlog context so every log line of that call carries it.
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        entity: str | None = None,
        identifier: object = None,
    ) -> Any:
        return await self._request("GET", path, params=params, entity=entity, identifier=identifier)

    async def post(self, path: str, *, json: Any) -> Any:
        return await self._request("POST", path, json=json)

    async def patch(
        self,
        path: str,
        *,
        json: Any,
        entity: str | None = None,
        identifier: object = None,
    ) -> Any:
        return await self._request(
            "PATCH", path, json=json, entity=entity, identifier=identifier
        )

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        json: Any = None,
        entity: str | None = None,
        identifier: object = None,
    ) -> Any:
        request_id = str(uuid.uuid4())
        # Optional query arguments are simply left out, never sent as "None"
        query = {key: value for key, value in (params or {}).items() if value is not None}

        with structlog.contextvars.bound_contextvars(request_id=request_id):
            try:
                response = await self._client.request(
                    method,
                    path,
                    params=query,
                    json=json,
                    headers={REQUEST_ID_HEADER: request_id},
                )
            except httpx.HTTPError as exc:
                logger.warning("api_unreachable", method=method, path=path, error=str(exc))
                raise TransportError(str(exc) or type(exc).__name__) from exc

            logger.debug("api_response", method=method, path=path, status=response.status_code)
            if response.is_success:
                try:
                    return response.json()
                except ValueError as exc:
                    raise TransportError(f"Malformed response from {path}") from exc

            raise self._error_for(response, entity, identifier)

    @staticmethod
    def _error_for(
        response: httpx.Response, entity: str | None, identifier: object
    ) -> Exception:
        try:
            message = error_message(response.json())
        except ValueError:
            message = None
        message = message or f"HTTP {response.status_code} {response.reason_phrase}".strip()

        logger.warning(
            "api_error",
            path=response.request.url.path,
            status=response.status_code,
            error=message,
        )
        if response.status_code == 404:
            return NotFoundError(entity or "Resource", identifier or response.request.url.path)
        if response.status_code in (400, 422):
            return ValidationError(message)
        return TransportError(message, status_code=response.status_code)

    async def aclose(self) -> None:
        """Close pooled connections. Call once when the dashboard shuts down."""
        await self._client.aclose()


def create_session(
    config: Settings = settings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> ApiSession:
    """Build a session from settings; tests pass an ``httpx.ASGITransport``."""
    return ApiSession(config.api_base_url, timeout=config.api_timeout, transport=transport)


def decode[M: BaseModel](model: type[M], body: Any) -> M:
    """Validate a decoded JSON body, reporting a malformed payload as a transport failure."""
    try:
        return model.model_validate(body)
    except PydanticValidationError as exc:
        raise TransportError(f"Unexpected {model.__name__} payload: {exc.error_count()} errors") from exc
