from __future__ import annotations

from .repository import Repository
from .schema import Service


class ServicesDb(Repository):
    model = Service
    resource = "service"
