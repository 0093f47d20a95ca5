from __future__ import annotations
import time
from typing import Any, Mapping, Optional
import httpx

DEFAULT_TIMEOUT = 10.0
RETRYABLE = (429, 502, 503, 504)

class HttpRetryingClient:
    """httpx client with basic retries/backoff for POST requests."""
    def __init__(self, base_url: str = "", headers: Optional[Mapping[str, str]] = None,
                 timeout: float = DEFAULT_TIMEOUT, transport: Optional[httpx.BaseTransport] = None):
        self._http = httpx.Client(base_url=base_url, timeout=timeout, headers=headers or {}, transport=transport)

    def close(self) -> None:
        self._http.close()

    def post(self, url: str, *, json: Any = None,
             retries: int = 2, backoff: float = 0.5) -> httpx.Response:
        return self._send("POST", url, json=json, retries=retries, backoff=backoff)

    def _send(self, method: str, url: str, *, retries: int, backoff: float, **kwargs: Any) -> httpx.Response:
        last_exc = None
        for i in range(retries + 1):
            try:
                r = self._http.request(method, url, **kwargs)
                if r.status_code in RETRYABLE:
                    # retryable server / rate limit
                    raise httpx.HTTPStatusError("retryable", request=r.request, response=r)
                r.raise_for_status()
                return r
            except httpx.HTTPError as e:
                last_exc = e
                if i == retries or not _is_retryable(e):
                    break
                time.sleep(backoff * (2 ** i))
        assert last_exc is not None
        raise last_exc


def _is_retryable(exc: httpx.HTTPError) -> bool:
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in RETRYABLE
    return isinstance(exc, httpx.TransportError)
