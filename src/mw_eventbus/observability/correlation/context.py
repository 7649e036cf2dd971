"""Observability – RequestContext, CorrelationContext."""
from __future__ import annotations

import dataclasses
from contextvars import ContextVar, Token
from uuid import uuid4


@dataclasses.dataclass(frozen=True)
class RequestContext:
    """Facts about the request that triggered a batch of events.

    Passed explicitly down the delivery path; ``client_ip`` is only forwarded
    to services configured to receive it.
    """
    request_id: str
    client_ip: str | None = None

    @classmethod
    def new(cls, client_ip: str | None = None) -> "RequestContext":
        return cls(request_id=uuid4().hex, client_ip=client_ip)

    @classmethod
    def from_headers(cls, headers: dict[str, str]) -> "RequestContext":
        """Build a context from incoming HTTP headers.

        ``X-Request-Id`` is propagated when present, otherwise a fresh id is
        generated. The client IP comes from ``X-Client-IP`` or the first hop
        of ``X-Forwarded-For``. Header names are matched case-insensitively.
        """
        norm: dict[str, str] = {k.lower(): v for k, v in headers.items()}
        request_id = norm.get("x-request-id") or uuid4().hex

        client_ip = norm.get("x-client-ip")
        if not client_ip and norm.get("x-forwarded-for"):
            client_ip = norm["x-forwarded-for"].split(",")[0].strip() or None

        return cls(request_id=request_id, client_ip=client_ip)


_CTX_VAR: ContextVar[RequestContext | None] = ContextVar("_mw_eventbus_request_ctx", default=None)


class CorrelationContext:
    """Binds the active :class:`RequestContext` for log enrichment."""

    @staticmethod
    def set(ctx: RequestContext) -> Token[RequestContext | None]:
        return _CTX_VAR.set(ctx)

    @staticmethod
    def get() -> RequestContext | None:
        return _CTX_VAR.get()

    @staticmethod
    def reset(token: Token[RequestContext | None]) -> None:
        _CTX_VAR.reset(token)

    @staticmethod
    def clear() -> None:
        _CTX_VAR.set(None)


__all__ = ["CorrelationContext", "RequestContext"]
