from __future__ import annotations

import logging

from ecotrails_admin.shared.collaborators import LoggingNotifier, Navigator, Notifier

logger = logging.getLogger(__name__)

LOGIN_SCREEN = "Login"

DASHBOARD_SECTIONS: dict[str, str] = {
    "Analytics": "AdminAnalytics",
    "Users": "UsersAdmin",
    "Bookings": "BookingsAdmin",
    "Partners": "PartnersAdmin",
    "Requests": "ItineraryRequestsAdmin",
    "Itineraries": "ItinerariesAdmin",
    "Locations": "LocationAdmin",
    "Feedback": "FeedbackManagement",
}


class AdminDashboard:
    def __init__(self, navigator: Navigator, *, notifier: Notifier | None = None) -> None:
        self._navigator = navigator
        self._notifier: Notifier = notifier or LoggingNotifier()

    @property
    def sections(self) -> list[str]:
        return list(DASHBOARD_SECTIONS)

    def open_section(self, section: str) -> bool:
        screen = DASHBOARD_SECTIONS.get(section)
        if screen is None:
            logger.info("dashboard_section_unknown", extra={"extra": {"section": section}})
            self._notifier.alert("Coming Soon", f'Section "{section}" not configured yet.')
            return False
        self._navigator.navigate_to(screen)
        return True

    def logout(self) -> None:
        self._navigator.navigate_to(LOGIN_SCREEN)
