"""Error reporting to Sentry for non-operational failures."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import sentry_sdk

from .config import Settings

if TYPE_CHECKING:  # pragma: no cover - imported for typing only
    from ..errors import ApplicationError

logger = logging.getLogger(__name__)


def configure_error_reporting(settings: Settings) -> bool:
    """Initialise the Sentry client when reporting is enabled and a DSN is set."""

    if not settings.error_reporting_enabled or not settings.sentry_dsn:
        logger.debug("Error reporting disabled")
        return False

    sentry_sdk.init(
        dsn=settings.sentry_dsn,
        environment=settings.environment,
        release=f"{settings.project_name}@{settings.version}",
        traces_sample_rate=settings.sentry_traces_sample_rate,
        send_default_pii=False,
    )
    logger.info("Error reporting configured", extra={"environment": settings.environment})
    return True


def report_error(
    exc: BaseException,
    error: "ApplicationError",
    *,
    tags: Mapping[str, Any] | None = None,
    extra: Mapping[str, Any] | None = None,
) -> bool:
    """Forward ``exc`` to Sentry when ``error`` asks for it.

    Returns ``True`` when an event was captured.
    """

    if not error.should_report:
        return False
    if not sentry_sdk.get_client().is_active():
        return False

    with sentry_sdk.new_scope() as scope:
        scope.set_tag("error_kind", error.kind.value)
        scope.set_tag("status_code", error.status_code)
        for key, value in (tags or {}).items():
            scope.set_tag(key, value)
        for key, value in (extra or {}).items():
            scope.set_extra(key, value)
        sentry_sdk.capture_exception(exc)
    return True


__all__ = ["configure_error_reporting", "report_error"]
