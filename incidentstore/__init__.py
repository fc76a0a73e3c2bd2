"""incidentstore — incident, service and alert storage API."""

__version__ = "1.0.0"
