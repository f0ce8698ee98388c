"""HTTP client wrapper around httpx."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import httpx

from pastelize.errors import NetworkError, RequestTimeoutError, error_from_status_code

DEFAULT_USER_AGENT = "pastelize/0.1 (+https://github.com/catppuccin/userstyles)"


@dataclass(frozen=True)
class HttpTimeout:
    """Connect and read timeouts, in seconds."""

    connect: float = 5.0
    request: float = 30.0


@dataclass(frozen=True)
class HttpResponse:
    """Parsed HTTP response."""

    status_code: int
    url: str
    text: str
    headers: dict[str, str]
    body: Any = None


class HttpClient:
    """Thin wrapper around :mod:`httpx` that maps errors into pastelize exceptions."""

    def __init__(
        self,
        base_url: str = "",
        headers: dict[str, str] | None = None,
        timeout: HttpTimeout | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        t = timeout or HttpTimeout()
        self._client = httpx.Client(
            base_url=base_url,
            headers={"User-Agent": DEFAULT_USER_AGENT, **(headers or {})},
            timeout=httpx.Timeout(
                connect=t.connect,
                read=t.request,
                write=t.request,
                pool=t.connect,
            ),
            follow_redirects=True,
            transport=transport,
        )

    def _send(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            resp = self._client.request(method, url, **kwargs)
        except httpx.TimeoutException as exc:
            raise RequestTimeoutError(str(exc), cause=exc) from exc
        except httpx.TransportError as exc:
            raise NetworkError(str(exc), cause=exc) from exc

        if resp.status_code >= 300:
            try:
                body = resp.json()
            except ValueError:
                body = {}
            error = body.get("error") if isinstance(body, dict) else None
            msg = error.get("message", resp.text) if isinstance(error, dict) else resp.text
            retry_after: float | None = None
            if "retry-after" in resp.headers:
                try:
                    retry_after = float(resp.headers["retry-after"])
                except ValueError:
                    retry_after = None
            raise error_from_status_code(
                resp.status_code,
                msg or f"HTTP {resp.status_code} for {resp.request.url}",
                raw=body if isinstance(body, dict) else None,
                retry_after=retry_after,
            )
        return resp

    def get(self, url: str) -> HttpResponse:
        """Send a GET request and return the response text.

        Raises a pastelize error on non-2xx status or transport failure.
        """
        resp = self._send("GET", url)
        return HttpResponse(
            status_code=resp.status_code,
            url=str(resp.url),
            text=resp.text,
            headers=dict(resp.headers),
        )

    def post(
        self,
        path: str,
        json: dict[str, Any],
        extra_headers: dict[str, str] | None = None,
    ) -> HttpResponse:
        """Send a JSON POST request and return the parsed response."""
        resp = self._send("POST", path, json=json, headers=extra_headers or {})
        try:
            body = resp.json()
        except ValueError:
            body = {}
        return HttpResponse(
            status_code=resp.status_code,
            url=str(resp.url),
            text=resp.text,
            headers=dict(resp.headers),
            body=body,
        )

    def close(self) -> None:
        """Close the underlying httpx client."""
        self._client.close()

    def __enter__(self) -> HttpClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
