from __future__ import annotations

import logging
from typing import Any, Mapping, Protocol

logger = logging.getLogger("ecotrails_admin.ui")


class Navigator(Protocol):
    def navigate_to(self, screen: str, params: Mapping[str, Any] | None = None) -> None:
        ...

    def go_back(self) -> None:
        ...


class Notifier(Protocol):
    def alert(self, title: str, message: str) -> None:
        """Show a user-visible alert or banner."""
        ...


class LoggingNotifier:
    """Notifier used when no presentation layer is attached."""

    def alert(self, title: str, message: str) -> None:
        logger.info("ui_alert", extra={"extra": {"title": title, "alert": message}})
