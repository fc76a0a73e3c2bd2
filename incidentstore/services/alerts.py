from __future__ import annotations

from ..schemas import AlertCreate, AlertPatch, AlertRecord
from .base import ResourceService


class AlertsService(ResourceService[AlertRecord]):
    resource = "alert"
    record_schema = AlertRecord
    create_schema = AlertCreate
    patch_schema = AlertPatch
