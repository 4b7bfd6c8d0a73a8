"""
HTTP client that executes assembled requests.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
import time
from dataclasses import dataclass, field

import httpx

from hep.config import HepConfig
from hep.parse.request import RequestDescriptor

logger = logging.getLogger(__name__)


@dataclass
class HTTPResponse:
    """HTTP response details."""
    status_code: int
    status_text: str
    headers: list[tuple[str, str]]
    body: str
    body_bytes: bytes
    elapsed_ms: float
    http_version: str = "HTTP/1.1"
    content_type: str | None = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def is_redirect(self) -> bool:
        return 300 <= self.status_code < 400

    @property
    def is_error(self) -> bool:
        return self.status_code >= 400

    def grouped_headers(self) -> dict[str, list[str]]:
        """Header values grouped by name, in arrival order."""
        grouped: dict[str, list[str]] = {}
        for name, value in self.headers:
            grouped.setdefault(name, []).append(value)
        return grouped


@dataclass
class HTTPResult:
    """Result of executing a request."""
    success: bool = False
    request: RequestDescriptor | None = None
    response: HTTPResponse | None = None
    error: str | None = None
    redirect_chain: list[str] = field(default_factory=list)


class HTTPClient:
    """Sends RequestDescriptors over httpx."""

    def __init__(
        self,
        config: HepConfig | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.config = config or HepConfig()
        self.transport = transport
        self._client: httpx.Client | None = None

    def __enter__(self) -> "HTTPClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _get_client(self) -> httpx.Client:
        """Get or create HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.Client(
                timeout=httpx.Timeout(self.config.timeout),
                verify=self.config.verify_ssl,
                follow_redirects=self.config.follow_redirects,
                headers={"User-Agent": self.config.user_agent},
                transport=self.transport,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            self._client.close()

    def build_headers(self, request: RequestDescriptor) -> httpx.Headers:
        """Request headers, adding a JSON Content-Type for non-empty bodies.

        Values are sent as UTF-8 so non-ASCII command-line input can be used.
        """
        headers = httpx.Headers(request.headers.multi_items(), encoding="utf-8")
        if request.body and "content-type" not in headers:
            headers["Content-Type"] = "application/json"
        return headers

    def execute(self, request: RequestDescriptor) -> HTTPResult:
        """Send the request and collect the response."""
        result = HTTPResult(request=request)

        try:
            client = self._get_client()
            start_time = time.time()

            response = client.request(
                method=request.method,
                url=request.url,
                headers=self.build_headers(request),
                content=request.body or None,
            )

            elapsed_ms = (time.time() - start_time) * 1000

            result.response = HTTPResponse(
                status_code=response.status_code,
                status_text=response.reason_phrase,
                headers=[
                    (name.decode(response.headers.encoding), value.decode(response.headers.encoding))
                    for name, value in response.headers.raw
                ],
                body=response.text,
                body_bytes=response.content,
                elapsed_ms=elapsed_ms,
                http_version=response.http_version,
                content_type=response.headers.get("content-type"),
            )
            result.redirect_chain = [str(r.url) for r in response.history]
            result.success = True

            logger.debug(
                f"{request.method} {request.url} -> {response.status_code} "
                f"in {elapsed_ms:.0f}ms"
            )

        except httpx.ConnectError as e:
            result.error = f"Connection failed: {e}"
        except httpx.TimeoutException:
            result.error = f"Request timed out after {self.config.timeout}s"
        except httpx.TooManyRedirects as e:
            result.error = f"Too many redirects: {e}"
        except httpx.HTTPError as e:
            result.error = str(e) or type(e).__name__
        except UnicodeEncodeError as e:
            result.error = f"Could not encode request: {e}"

        if result.error:
            logger.debug(f"{request.method} {request.url} failed: {result.error}")

        return result
