"""HTTP adapter – MultiHttpClient port and its request/response records."""
from __future__ import annotations

import dataclasses
from typing import Protocol, Sequence


@dataclasses.dataclass(frozen=True)
class HttpRequest:
    url: str
    body: str
    method: str = "POST"
    headers: dict[str, str] = dataclasses.field(default_factory=dict)


@dataclasses.dataclass(frozen=True)
class HttpResponse:
    """Outcome of one request.

    ``code`` is ``0`` when no HTTP response was obtained; ``error`` then
    carries the transport error text.
    """

    code: int
    reason: str = ""
    error: str = ""
    body: str = ""


class MultiHttpClient(Protocol):
    """Port: issue several requests, get one response per request, in order.

    Implementations may run the requests concurrently. They must not raise
    for HTTP or transport failures; those come back as responses.
    """

    def run_multi(
        self,
        requests: Sequence[HttpRequest],
        *,
        timeout: float,
    ) -> list[HttpResponse]: ...


__all__ = ["HttpRequest", "HttpResponse", "MultiHttpClient"]
