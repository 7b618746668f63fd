"""
App configuration for the core app.
"""

import logging
import os
import sys

from django.apps import AppConfig
from django.conf import settings

logger = logging.getLogger(__name__)

# Management commands that never serve requests
SKIP_OBSERVABILITY_COMMANDS = {
    "migrate",
    "makemigrations",
    "collectstatic",
    "shell",
    "check",
    "createsuperuser",
}


class CoreConfig(AppConfig):
    """Wires observability and domain event handlers at startup."""

    name = "core"
    verbose_name = "Core"

    def ready(self):
        """Called when Django starts."""
        from core.infrastructure.event_handlers import register_event_handlers

        register_event_handlers()

        if self._observability_wanted():
            from core.instrumentation import setup_opentelemetry

            logger.info("Setting up observability...")
            setup_opentelemetry()

    def _observability_wanted(self) -> bool:
        if not getattr(settings, "OTEL_ENABLED", False):
            return False
        if len(sys.argv) > 1 and sys.argv[1] in SKIP_OBSERVABILITY_COMMANDS:
            return False
        # Django's autoreloader parent process
        return os.environ.get("RUN_MAIN") != "false"
