"""
Shared HTTP executor for the PMS and channel-manager clients.

Handles what both external APIs have in common:
- Authentication attached once per client (API-key header or basic auth)
- GET sends query params, POST/PUT send a JSON body, DELETE sends neither
- Non-2xx responses and transport failures become UpstreamError
- Response bodies validated into typed models at this boundary

No retries happen here. A failed call fails the operation that made it.
"""

import time
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Type, TypeVar

import httpx
from pydantic import BaseModel, ValidationError as PydanticValidationError

from ..exceptions import UpstreamError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass
class ApiResponse:
    """One completed call to an external system"""
    system: str
    method: str
    endpoint: str
    status_code: int
    data: Any = None
    raw: Any = None
    request_payload: Any = None
    duration_ms: int = 0


@dataclass
class UpstreamErrorInfo:
    """Structured meaning of an upstream status code"""
    code: str
    message: str
    retryable: bool = False


# Error mapping for upstream responses
ERROR_MAP = {
    400: UpstreamErrorInfo("bad_request", "Request rejected by upstream"),
    401: UpstreamErrorInfo("unauthorized", "Invalid or missing credentials"),
    403: UpstreamErrorInfo("forbidden", "Access denied to this resource"),
    404: UpstreamErrorInfo("not_found", "Resource not found"),
    409: UpstreamErrorInfo("conflict", "Conflicting state upstream"),
    422: UpstreamErrorInfo("validation_error", "Invalid request data"),
    429: UpstreamErrorInfo("rate_limited", "Too many requests", True),
    500: UpstreamErrorInfo("server_error", "Upstream server error", True),
    502: UpstreamErrorInfo("bad_gateway", "Upstream gateway error", True),
    503: UpstreamErrorInfo("service_unavailable", "Upstream service unavailable", True),
}


class ApiKeyAuth(httpx.Auth):
    """Sends the API key in a fixed header on every request"""

    def __init__(self, api_key: str, header_name: str = "X-API-KEY"):
        self.api_key = api_key
        self.header_name = header_name

    def auth_flow(self, request: httpx.Request):
        request.headers[self.header_name] = self.api_key
        yield request


def build_auth(
    api_key: Optional[str] = None,
    username: Optional[str] = None,
    password: Optional[str] = None,
) -> Optional[httpx.Auth]:
    """API key wins over basic credentials; neither means anonymous."""
    if api_key:
        return ApiKeyAuth(api_key)
    if username:
        return httpx.BasicAuth(username, password or "")
    return None


class ApiClient:
    """
    Base async client for one external system.

    Instances hold only configuration, so one client can serve concurrent
    operations for different properties.
    """

    system = "external"

    def __init__(
        self,
        base_url: str,
        auth: Optional[httpx.Auth] = None,
        timeout: float = 30,
        user_agent: str = "channel-bridge/1.0",
    ):
        self.base_url = base_url.rstrip("/")
        self.auth = auth
        self.timeout = timeout
        self.user_agent = user_agent

    def _get_headers(self) -> Dict[str, str]:
        return {
            "Accept": "application/json",
            "Content-Type": "application/json",
            "User-Agent": self.user_agent,
        }

    def _map_error(self, status_code: int, response_data: Any) -> UpstreamErrorInfo:
        """Map HTTP status code to structured error"""
        info = ERROR_MAP.get(status_code)
        if info is None:
            if status_code >= 500:
                info = UpstreamErrorInfo("server_error", f"Server error: {status_code}", True)
            else:
                info = UpstreamErrorInfo("unknown", f"Unexpected status: {status_code}")

        # Try to get more specific message from response
        if isinstance(response_data, dict):
            error = response_data.get("error")
            msg = error.get("message") if isinstance(error, dict) else error
            msg = msg or response_data.get("message")
            if msg and isinstance(msg, str):
                return UpstreamErrorInfo(info.code, msg, info.retryable)
        return info

    async def _request(
        self,
        method: str,
        endpoint: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Any = None,
    ) -> ApiResponse:
        method = method.upper()
        start_time = time.perf_counter()

        kwargs: Dict[str, Any] = {}
        if method == "GET":
            kwargs["params"] = params
        elif method in ("POST", "PUT", "PATCH"):
            kwargs["json"] = payload

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                auth=self.auth,
                timeout=self.timeout,
                headers=self._get_headers(),
            ) as client:
                response = await client.request(method, endpoint, **kwargs)
        except httpx.TimeoutException as e:
            raise UpstreamError(
                f"{self.system} request timed out: {method} {endpoint}",
                system=self.system, method=method, endpoint=endpoint,
                request_payload=payload, error_code="timeout", retryable=True,
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"{self.system} request failed: {e}",
                system=self.system, method=method, endpoint=endpoint,
                request_payload=payload, error_code="transport_error", retryable=True,
            ) from e

        duration_ms = int((time.perf_counter() - start_time) * 1000)
        logger.debug(f"{self.system} {method} {endpoint} -> {response.status_code} ({duration_ms}ms)")

        data = None
        if response.content:
            try:
                data = response.json()
            except ValueError:
                data = {"raw": response.text[:1000]}

        if not 200 <= response.status_code < 300:
            error = self._map_error(response.status_code, data)
            raise UpstreamError(
                f"{self.system} {method} {endpoint} failed ({response.status_code}): {error.message}",
                system=self.system, method=method, endpoint=endpoint,
                status_code=response.status_code, body=data, request_payload=payload,
                error_code=error.code, retryable=error.retryable,
            )

        return ApiResponse(
            system=self.system,
            method=method,
            endpoint=endpoint,
            status_code=response.status_code,
            data=data,
            raw=data,
            request_payload=payload,
            duration_ms=duration_ms,
        )

    # ==================
    # Response parsing
    # ==================

    @staticmethod
    def _unwrap(raw: Any) -> Any:
        """Both APIs may wrap results in {"data": ...}"""
        if isinstance(raw, dict) and "data" in raw:
            return raw["data"]
        return raw

    def _malformed(self, response: ApiResponse, detail: str) -> UpstreamError:
        return UpstreamError(
            f"Malformed {self.system} response for {response.method} {response.endpoint}: {detail}",
            system=self.system, method=response.method, endpoint=response.endpoint,
            status_code=response.status_code, body=response.raw,
            request_payload=response.request_payload, error_code="malformed_response",
        )

    def _parse_one(self, model: Type[ModelT], response: ApiResponse) -> ApiResponse:
        body = self._unwrap(response.raw)
        if not isinstance(body, dict):
            raise self._malformed(response, "expected an object")
        try:
            response.data = model.model_validate(body)
        except PydanticValidationError as e:
            raise self._malformed(response, str(e)) from e
        return response

    def _parse_list(self, model: Type[ModelT], response: ApiResponse) -> ApiResponse:
        body = self._unwrap(response.raw)
        if body is None:
            body = []
        if not isinstance(body, list):
            raise self._malformed(response, "expected a list")
        try:
            items: List[ModelT] = [model.model_validate(item) for item in body]
        except PydanticValidationError as e:
            raise self._malformed(response, str(e)) from e
        response.data = items
        return response
