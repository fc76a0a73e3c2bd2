from .alerts import AlertsDb
from .errors import DbError, DbErrorKind, missing_resource_error, unknown_db_error
from .incidents import IncidentsDb
from .services import ServicesDb

__all__ = [
    "AlertsDb",
    "DbError",
    "DbErrorKind",
    "IncidentsDb",
    "ServicesDb",
    "missing_resource_error",
    "unknown_db_error",
]
