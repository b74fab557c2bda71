"""App settings with defaults, overridable through settings.UNIVISTA."""

from django.conf import settings

DEFAULTS = {
    "TICKET_ID_PREFIX": "TICKET-",
    "TICKET_ID_LENGTH": 9,
    "GUEST_ID_PREFIX": "GUEST_",
    "GUEST_ID_LENGTH": 9,
    "TRANSACTION_MAX_ATTEMPTS": 5,
    "POSTER_PATH_PREFIX": "event_posters",
    "FREE_EVENT_CAPACITY": 99999,
}


class AppSettings:
    def __getattr__(self, name: str):
        if name not in DEFAULTS:
            raise AttributeError(name)
        return getattr(settings, "UNIVISTA", {}).get(name, DEFAULTS[name])


app_settings = AppSettings()
