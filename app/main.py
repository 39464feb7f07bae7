from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.tablekit.api import api_router
from app.tablekit.core.config import settings
from app.tablekit.core.errors import setup_exception_handlers
from app.tablekit.core.logging import configure_logging
from app.tablekit.middleware.observability import ObservabilityMiddleware
from app.tablekit.middleware.trace import TRACE_HEADER, TraceIdMiddleware


def create_app() -> FastAPI:
    configure_logging()
    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(TraceIdMiddleware)
    app.add_middleware(ObservabilityMiddleware)
    if settings.CORS_ALLOW_ORIGINS:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=settings.CORS_ALLOW_ORIGINS,
            allow_methods=["GET"],
            allow_headers=["*"],
            expose_headers=[TRACE_HEADER],
        )
    setup_exception_handlers(app)
    app.include_router(api_router)
    return app


app = create_app()
