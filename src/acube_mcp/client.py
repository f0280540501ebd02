import base64
import json
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Literal, Mapping, Optional

import httpx

Environment = Literal["sandbox", "production"]
Service = Literal["common", "gov_it"]

BASE_URLS: Dict[str, Dict[str, str]] = {
    "production": {
        "common": "https://common.api.acubeapi.com",
        "gov_it": "https://api.acubeapi.com",
    },
    "sandbox": {
        "common": "https://common-sandbox.api.acubeapi.com",
        "gov_it": "https://api-sandbox.acubeapi.com",
    },
}

# Upstream tokens live 24h; refresh one hour early.
TOKEN_TTL_SECONDS = 23 * 60 * 60

BINARY_ACCEPT_TYPES = frozenset({"application/pdf", "application/octet-stream"})


class AcubeClientError(Exception):
    """Base error for client failures."""


class AcubeAuthenticationError(AcubeClientError):
    def __init__(self, *, status_code: int, response_text: str, message: str = ""):
        super().__init__(
            message or f"Acube login failed ({status_code}): {response_text}"
        )
        self.status_code = status_code
        self.response_text = response_text


class AcubeAPIError(AcubeClientError):
    def __init__(self, *, status_code: int, response_text: str):
        super().__init__(f"Acube API error ({status_code}): {response_text}")
        self.status_code = status_code
        self.response_text = response_text


@dataclass(frozen=True)
class SessionToken:
    value: str
    expires_at: float

    def is_valid(self, now: float) -> bool:
        return now < self.expires_at


@dataclass(frozen=True)
class AcubeResponse:
    status: int
    data: Any
    raw: Optional[bytes] = None


def _is_success(status_code: int) -> bool:
    # 202 is how A-Cube acknowledges asynchronous submissions.
    return 200 <= status_code < 300 or status_code == 202


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON; json.loads accepts them by default.
    raise ValueError(f"invalid JSON constant {name}")


def _parse_json_or_text(text: str) -> Any:
    """Return the decoded JSON value, or the text itself when it is not JSON."""
    try:
        return json.loads(text, parse_constant=_reject_constant)
    except ValueError:
        return text


class AcubeClient:
    """
    Async HTTP client for the A-Cube API with JWT authentication.
    - Logs in with email/password against the `common` service
    - Caches one token per instance for 23h and refreshes it lazily
    - Negotiates JSON, XML/HTML text and binary (PDF) responses
    - No retries; transport errors propagate as httpx exceptions
    """

    def __init__(
        self,
        *,
        email: str,
        password: str,
        environment: Environment = "sandbox",
        timeout_seconds: Optional[float] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
        clock: Callable[[], float] = time.time,
    ):
        email = (email or "").strip()
        password = password or ""

        if not email:
            raise ValueError("email must be provided.")
        if not password:
            raise ValueError("password must be provided.")
        if environment not in BASE_URLS:
            raise ValueError(
                f"environment must be 'sandbox' or 'production', got {environment!r}."
            )

        self._email = email
        self._password = password
        self.environment = environment
        self.log = logger or logging.getLogger("acube_mcp.client")
        self._clock = clock

        # Shared by all concurrent calls; a refresh race simply overwrites it
        # with another valid token (last write wins).
        self._token: Optional[SessionToken] = None

        self._owns_http = http is None
        if http is not None:
            self.http = http
        elif timeout_seconds is not None:
            self.http = httpx.AsyncClient(timeout=timeout_seconds)
        else:
            self.http = httpx.AsyncClient()

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "AcubeClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def token(self) -> Optional[SessionToken]:
        return self._token

    def get_base_url(self, service: Service) -> str:
        return BASE_URLS[self.environment][service]

    async def login(self) -> str:
        """
        Authenticate against `{common}/login` and cache the JWT.

        Raises AcubeAuthenticationError on a non-2xx status, or when the
        response carries no usable token.
        """
        url = f"{self.get_base_url('common')}/login"
        start = time.perf_counter()

        resp = await self.http.post(
            url,
            content=json.dumps({"email": self._email, "password": self._password}),
            headers={"Content-Type": "application/json"},
        )

        self.log.debug(
            "acube.login",
            extra={
                "method": "POST",
                "url": url,
                "service": "common",
                "status": resp.status_code,
                "duration_ms": int((time.perf_counter() - start) * 1000),
            },
        )

        if not 200 <= resp.status_code < 300:
            raise AcubeAuthenticationError(
                status_code=resp.status_code, response_text=resp.text
            )

        try:
            payload = resp.json()
        except ValueError:
            payload = None

        token = payload.get("token") if isinstance(payload, dict) else None
        if not isinstance(token, str) or not token:
            raise AcubeAuthenticationError(
                status_code=resp.status_code,
                response_text=resp.text,
                message=(
                    f"Acube login failed ({resp.status_code}): "
                    f"response did not include a token"
                ),
            )

        self._token = SessionToken(
            value=token, expires_at=self._clock() + TOKEN_TTL_SECONDS
        )
        return token

    async def get_token(self) -> str:
        """Return the cached token, logging in again once it has expired."""
        current = self._token
        if current is not None and current.is_valid(self._clock()):
            return current.value
        return await self.login()

    async def request(
        self,
        method: str,
        path: str,
        *,
        service: Service = "gov_it",
        body: Any = None,
        headers: Optional[Mapping[str, str]] = None,
        accept: str = "application/json",
    ) -> AcubeResponse:
        """
        Core request method.
        - Injects `Authorization: Bearer <token>` and `Accept`; caller headers win
        - Sends string bodies verbatim, everything else as compact JSON
        - Binary accept types return base64 `data` plus the raw bytes
        - Raises AcubeAPIError unless the status is 2xx (202 included)
        - JSON bodies that fail to decode are returned as text
        """
        method = method.upper()
        token = await self.get_token()
        url = f"{self.get_base_url(service)}{path}"

        req_headers = httpx.Headers(
            {"Authorization": f"Bearer {token}", "Accept": accept}
        )
        if headers:
            req_headers.update(headers)

        content: Optional[str] = None
        if body is not None:
            if "Content-Type" not in req_headers:
                req_headers["Content-Type"] = "application/json"
            content = (
                body
                if isinstance(body, str)
                else json.dumps(body, separators=(",", ":"), ensure_ascii=False)
            )

        start = time.perf_counter()
        resp = await self.http.request(method, url, headers=req_headers, content=content)

        self.log.debug(
            "acube.request",
            extra={
                "method": method,
                "url": url,
                "service": service,
                "status": resp.status_code,
                "duration_ms": int((time.perf_counter() - start) * 1000),
                "accept": accept,
            },
        )

        if accept in BINARY_ACCEPT_TYPES:
            if not 200 <= resp.status_code < 300:
                raise AcubeAPIError(
                    status_code=resp.status_code, response_text=resp.text
                )
            raw = resp.content
            return AcubeResponse(
                status=resp.status_code,
                data=base64.b64encode(raw).decode("ascii"),
                raw=raw,
            )

        text = resp.text
        if not _is_success(resp.status_code):
            raise AcubeAPIError(status_code=resp.status_code, response_text=text)

        content_type = resp.headers.get("content-type", "")
        if accept == "application/json" or "json" in content_type:
            return AcubeResponse(status=resp.status_code, data=_parse_json_or_text(text))

        return AcubeResponse(status=resp.status_code, data=text)

    async def get(self, path: str, **options: Any) -> AcubeResponse:
        return await self.request("GET", path, **options)

    async def post(self, path: str, body: Any = None, **options: Any) -> AcubeResponse:
        return await self.request("POST", path, body=body, **options)

    async def put(self, path: str, body: Any = None, **options: Any) -> AcubeResponse:
        return await self.request("PUT", path, body=body, **options)

    async def delete(self, path: str, **options: Any) -> AcubeResponse:
        return await self.request("DELETE", path, **options)
