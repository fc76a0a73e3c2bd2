from __future__ import annotations

from .repository import Repository
from .schema import Alert


class AlertsDb(Repository):
    model = Alert
    resource = "alert"
