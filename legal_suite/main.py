"""FastAPI application entrypoint for Legal Suite."""

from __future__ import annotations

from fastapi import FastAPI

from legal_suite.api.auth import router as auth_router
from legal_suite.api.lawsuits import router as lawsuits_router
from legal_suite.api.lawyers import router as lawyers_router
from legal_suite.api.reports import router as reports_router
from legal_suite.core.auth import AuthGate
from legal_suite.core.config import Settings
from legal_suite.core.config import get_settings
from legal_suite.core.errors import ErrorFunnelRoute
from legal_suite.core.errors import ErrorHandler
from legal_suite.core.errors import register_error_handlers
from legal_suite.core.logging import StructuredLogger
from legal_suite.core.logging import configure_logging
from legal_suite.core.notifications import CriticalErrorNotifier
from legal_suite.core.notifications import LoggingNotifier
from legal_suite.core.notifications import WebhookNotifier
from legal_suite.core.request_context import RequestIdMiddleware
from legal_suite.core.tokens import JwtAuthService
from legal_suite.db import models as _models  # noqa: F401
from legal_suite.db.base import build_engine
from legal_suite.db.base import build_session_factory


def build_notifier(settings: Settings, logger: StructuredLogger) -> CriticalErrorNotifier:
    if settings.alert_webhook_url:
        return WebhookNotifier(
            url=settings.alert_webhook_url,
            logger=logger,
            timeout_seconds=settings.alert_timeout_seconds,
        )
    return LoggingNotifier(logger)


def create_app(
    settings: Settings | None = None,
    *,
    notifier: CriticalErrorNotifier | None = None,
) -> FastAPI:
    """Build the application and its per-app collaborators.

    The logger, error handler, auth gate and session factory live on
    `app.state`, so two apps built in one process never share them.
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level)
    logger = StructuredLogger(settings.service_name)

    engine = build_engine(settings.database_url)
    auth_service = JwtAuthService(
        secret_key=settings.jwt_secret,
        expires_seconds=settings.jwt_expires_seconds,
        bcrypt_rounds=settings.bcrypt_rounds,
    )

    app = FastAPI(title="Legal Suite")
    app.state.settings = settings
    app.state.logger = logger
    app.state.error_handler = ErrorHandler(
        logger,
        verbose=settings.verbose_errors,
        notifier=notifier or build_notifier(settings, logger),
    )
    app.state.auth_service = auth_service
    app.state.auth_gate = AuthGate(auth_service)
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)

    app.add_middleware(RequestIdMiddleware)
    register_error_handlers(app)
    app.router.route_class = ErrorFunnelRoute
    app.include_router(auth_router)
    app.include_router(lawyers_router)
    app.include_router(lawsuits_router)
    app.include_router(reports_router)

    @app.get("/health")
    def health() -> dict[str, str]:
        """Liveness check."""
        return {"status": "ok", "service": settings.service_name}

    logger.info("Application configured", {"settings": settings.safe_for_logging()})
    return app
