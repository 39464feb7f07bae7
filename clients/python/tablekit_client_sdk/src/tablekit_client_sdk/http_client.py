from __future__ import annotations

import time
from dataclasses import dataclass
from typing import Any, Sequence

import httpx

from .config import ClientConfig
from .error_mapper import map_error
from .exceptions import TransportError
from .tracing import TRACE_HEADER, TraceContext

QueryParams = dict[str, Any] | Sequence[tuple[str, str]]


@dataclass
class LastOperation:
    module: str
    operation: str
    duration_ms: int
    result: str
    trace_id: str | None


@dataclass
class HttpClient:
    """Async JSON client. Requests are never retried; callers decide when to ask again."""

    config: ClientConfig
    trace: TraceContext | None = None
    client: httpx.AsyncClient | None = None
    transport: httpx.AsyncBaseTransport | None = None
    last_operation: LastOperation | None = None

    def __post_init__(self) -> None:
        if self.client is None:
            self.client = httpx.AsyncClient(
                base_url=self.config.api_base_url,
                timeout=httpx.Timeout(
                    self.config.read_timeout_seconds,
                    connect=self.config.connect_timeout_seconds,
                ),
                limits=httpx.Limits(max_connections=self.config.max_connections),
                verify=self.config.verify_ssl,
                transport=self.transport,
            )

    async def request(
        self,
        method: str,
        path: str,
        *,
        headers: dict[str, str] | None = None,
        params: QueryParams | None = None,
        module: str = "unknown",
        operation: str = "unknown",
    ) -> dict[str, Any] | list[Any] | None:
        if self.client is None:
            raise RuntimeError("HTTP client not initialized")
        request_headers = {"Accept": "application/json"}
        if headers:
            request_headers.update(headers)
        trace_context = self.trace or TraceContext()
        request_headers[TRACE_HEADER] = trace_context.ensure()

        started = time.monotonic()
        try:
            response = await self.client.request(
                method.upper(),
                path,
                headers=request_headers,
                params=params,
            )
        except httpx.TransportError as exc:
            self._record_operation(module, operation, started, "error", trace_context.trace_id)
            raise TransportError(
                code="TRANSPORT_ERROR",
                message=str(exc) or type(exc).__name__,
                details={"type": type(exc).__name__},
                trace_id=trace_context.trace_id,
                status_code=0,
                raw_payload=None,
            ) from exc

        trace_context.update_from_headers(response.headers)
        if response.is_success:
            self._record_operation(module, operation, started, "success", trace_context.trace_id)
            if not response.content:
                return None
            return response.json()

        try:
            payload = response.json()
        except ValueError:
            payload = {"message": response.text or response.reason_phrase}
        if not isinstance(payload, dict):
            payload = {"message": response.reason_phrase, "details": payload}
        trace_context.update_from_payload(payload)
        self._record_operation(module, operation, started, "error", trace_context.trace_id)
        raise map_error(response.status_code, payload, trace_context.trace_id)

    async def aclose(self) -> None:
        if self.client is not None:
            await self.client.aclose()

    def _record_operation(self, module: str, operation: str, started: float, result: str, trace_id: str | None) -> None:
        self.last_operation = LastOperation(
            module=module,
            operation=operation,
            duration_ms=int((time.monotonic() - started) * 1000),
            result=result,
            trace_id=trace_id,
        )
