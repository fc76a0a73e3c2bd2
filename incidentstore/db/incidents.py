from __future__ import annotations

from .repository import Repository
from .schema import Incident


class IncidentsDb(Repository):
    model = Incident
    resource = "incident"
