from .alerts import AlertsService
from .base import ResourceService, ServiceError
from .incidents import IncidentsService
from .services import ServicesService

__all__ = ["AlertsService", "IncidentsService", "ResourceService", "ServiceError", "ServicesService"]
