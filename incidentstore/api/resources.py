"""
incidentstore — CRUD routes shared by every resource.

The HTTP layer is the only place status codes are chosen:

    validation error  -> 400
    other error       -> 500
    no data           -> 404 (reads and patch)
    delete            -> 204 whether or not the record existed
"""
from __future__ import annotations

import logging
import re
from typing import Any, Callable, Optional

from fastapi import APIRouter, Body, Depends, Request, Response
from pydantic import ValidationError

from ..schemas import ID_MAX, ID_MIN
from ..services.base import ResourceService
from .errors import bad_request, internal_error, invalid_payload, not_found

logger = logging.getLogger("incidentstore.api")

_ID_RE = re.compile(r"-?[0-9]+")


def parse_id(raw: str) -> Optional[int]:
    if not _ID_RE.fullmatch(raw):
        return None
    id = int(raw)
    if not ID_MIN <= id <= ID_MAX:
        return None
    return id


def build_resource_router(
    plural: str,
    label: str,
    select_service: Callable[[Any], ResourceService],
) -> APIRouter:
    """
    Five conventional endpoints under ``/<plural>``.

    ``label`` is the singular display name used in error bodies
    ("Incident not found", "Invalid incident ID"). ``select_service`` picks
    the domain service out of ``app.state.deps``.
    """
    router = APIRouter(prefix=f"/{plural}", tags=[plural])
    not_found_message = f"{label} not found"
    bad_id_message = f"Invalid {label.lower()} ID"

    def get_service(request: Request) -> ResourceService:
        return select_service(request.app.state.deps)

    @router.get("", name=f"list_{plural}")
    def list_resources(service: ResourceService = Depends(get_service)):
        query = service.get_all()
        # either a validation error (corrupted rows) or a store error: both are server faults
        if query.err is not None:
            return internal_error()
        return [record.to_json() for record in query.data]

    @router.get("/{resource_id}", name=f"get_{plural}")
    def get_resource(resource_id: str, service: ResourceService = Depends(get_service)):
        id = parse_id(resource_id)
        if id is None:
            return bad_request(bad_id_message)

        query = service.get(id)
        if query.err is not None:
            return internal_error()
        if query.data is None:
            return not_found(not_found_message)
        return query.data.to_json()

    @router.post("", status_code=201, name=f"create_{plural}")
    def create_resource(payload: Any = Body(default=None), service: ResourceService = Depends(get_service)):
        query = service.create(payload)
        if query.err is not None:
            # a validation error stems from the client sending bad data
            if isinstance(query.err, ValidationError):
                return invalid_payload(query.err)
            return internal_error()
        return query.data.to_json()

    @router.patch("/{resource_id}", name=f"patch_{plural}")
    def patch_resource(
        resource_id: str,
        payload: Any = Body(default=None),
        service: ResourceService = Depends(get_service),
    ):
        id = parse_id(resource_id)
        if id is None:
            return bad_request(bad_id_message)

        query = service.patch(id, payload)
        if query.err is not None:
            if isinstance(query.err, ValidationError):
                return invalid_payload(query.err)
            return internal_error()
        if query.data is None:
            return not_found(not_found_message)
        return query.data.to_json()

    @router.delete("/{resource_id}", status_code=204, name=f"delete_{plural}")
    def delete_resource(resource_id: str, service: ResourceService = Depends(get_service)):
        id = parse_id(resource_id)
        if id is None:
            return bad_request(bad_id_message)

        if service.delete(id) is not None:
            return internal_error()
        return Response(status_code=204)

    return router
