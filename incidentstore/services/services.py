from __future__ import annotations

from ..schemas import ServiceCreate, ServicePatch, ServiceRecord
from .base import ResourceService


class ServicesService(ResourceService[ServiceRecord]):
    resource = "service"
    record_schema = ServiceRecord
    create_schema = ServiceCreate
    patch_schema = ServicePatch
