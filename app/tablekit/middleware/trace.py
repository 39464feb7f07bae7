import uuid

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request

TRACE_HEADER = "X-Trace-ID"
MAX_TRACE_ID_LENGTH = 128


def resolve_trace_id(incoming: str | None) -> str:
    """Reuse the caller's trace id when it is usable, otherwise mint one."""
    trace_id = (incoming or "").strip()
    if not trace_id or len(trace_id) > MAX_TRACE_ID_LENGTH:
        return str(uuid.uuid4())
    return trace_id


class TraceIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        request.state.trace_id = resolve_trace_id(request.headers.get(TRACE_HEADER))
        response = await call_next(request)
        response.headers[TRACE_HEADER] = request.state.trace_id
        return response
