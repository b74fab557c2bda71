from univista.services.account_service import AccountService
from univista.services.booking_service import BookingService
from univista.services.event_service import EventService, PosterUpload

__all__ = ["AccountService", "BookingService", "EventService", "PosterUpload"]
