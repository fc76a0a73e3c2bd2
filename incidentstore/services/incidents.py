from __future__ import annotations

from ..schemas import IncidentCreate, IncidentPatch, IncidentRecord
from .base import ResourceService


class IncidentsService(ResourceService[IncidentRecord]):
    resource = "incident"
    record_schema = IncidentRecord
    create_schema = IncidentCreate
    patch_schema = IncidentPatch
