"""HTTP adapter – HttpxMultiClient."""
from __future__ import annotations

from concurrent.futures import ThreadPoolExecutor
from typing import Any, Sequence

from mw_eventbus.adapters.http.ports import HttpRequest, HttpResponse
from mw_eventbus.observability.logging import get_logger

logger = get_logger(__name__)


def _require_httpx() -> Any:
    try:
        import httpx  # type: ignore[import-untyped]
        return httpx
    except ImportError as exc:
        raise ImportError("Install 'httpx' to use the HTTPX transport") from exc


class HttpxMultiClient:
    """Blocking httpx transport that fans a request list out over threads.

    A single request goes out on the calling thread. The underlying
    ``httpx.Client`` is shared and thread safe; it does not retry or follow
    redirects.
    """

    def __init__(self, max_concurrency: int = 8, **client_kwargs: Any) -> None:
        httpx = _require_httpx()
        self._max_concurrency = max(1, max_concurrency)
        self._client = httpx.Client(follow_redirects=False, **client_kwargs)

    def __enter__(self) -> "HttpxMultiClient":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def run_multi(
        self,
        requests: Sequence[HttpRequest],
        *,
        timeout: float,
    ) -> list[HttpResponse]:
        if len(requests) <= 1:
            return [self._run(request, timeout) for request in requests]
        workers = min(self._max_concurrency, len(requests))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="eventbus-http") as pool:
            return list(pool.map(lambda request: self._run(request, timeout), requests))

    def _run(self, request: HttpRequest, timeout: float) -> HttpResponse:
        httpx = _require_httpx()
        try:
            response = self._client.request(
                request.method,
                request.url,
                content=request.body.encode("utf-8"),
                headers=request.headers,
                timeout=timeout,
            )
        except httpx.TimeoutException as exc:
            logger.debug("http.timeout", url=request.url, timeout=timeout)
            return HttpResponse(code=0, error=f"Request to {request.url} timed out after {timeout}s: {exc}")
        except httpx.HTTPError as exc:
            logger.debug("http.transport_error", url=request.url, error=str(exc))
            return HttpResponse(code=0, error=f"{type(exc).__name__}: {exc}")
        return HttpResponse(
            code=response.status_code,
            reason=response.reason_phrase,
            body=response.text,
        )


__all__ = ["HttpxMultiClient"]
