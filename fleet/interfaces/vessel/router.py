"""
FastAPI router for the vessel bounded context.

All routes delegate to services. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

import math
import re
from typing import Literal, Optional

from fastapi import APIRouter, Depends, Header, Request, Response
from fastapi.responses import JSONResponse

from fleet.application.vessel.read_service import VesselReadService
from fleet.application.vessel.write_service import VesselWriteService
from fleet.core.config import settings
from fleet.domain.vessel.entities import (
    CargoBox,
    NewVessel,
    Officer,
    Vessel,
    VesselChanges,
)
from fleet.domain.vessel.errors import VesselNotFoundError
from fleet.domain.vessel.pagination import Pageable, Slice, create_pageable
from fleet.domain.vessel.version_token import format_version_token
from fleet.interfaces.vessel.dependencies import get_read_service, get_write_service
from fleet.interfaces.vessel.schemas import (
    CargoBoxResponse,
    CountResponse,
    ErrorResponse,
    OfficerResponse,
    PageMetadata,
    VesselCreateRequest,
    VesselPageResponse,
    VesselResponse,
    VesselUpdateRequest,
)
from fleet.shared.security.rate_limiting import limiter

router = APIRouter(prefix="/vessels", tags=["vessels"])

ID_PATTERN = re.compile(r"[1-9][0-9]{0,10}")
PAGING_PARAMS = frozenset({"page", "size", "only"})
HTTP_428 = 428


def _parse_vessel_id(vessel_id: str) -> int:
    """Return the numeric identity; malformed identities are unknown vessels."""
    if ID_PATTERN.fullmatch(vessel_id) is None:
        raise VesselNotFoundError(None)
    return int(vessel_id)


def _to_response(vessel: Vessel) -> VesselResponse:
    return VesselResponse(
        id=vessel.id,
        version=vessel.version,
        name=vessel.name,
        length=vessel.length,
        officer=OfficerResponse(name=vessel.officer.name, age=vessel.officer.age),
        cargo_boxes=[
            CargoBoxResponse(height=box.height, length=box.length, width=box.width)
            for box in vessel.cargo_boxes
        ],
        created_at=vessel.created_at,
        updated_at=vessel.updated_at,
    )


def _to_page(vessels: Slice[Vessel], pageable: Pageable) -> VesselPageResponse:
    return VesselPageResponse(
        content=[_to_response(v) for v in vessels.content],
        page=PageMetadata(
            size=pageable.size,
            number=pageable.number,
            total_elements=vessels.total_elements,
            total_pages=math.ceil(vessels.total_elements / pageable.size),
        ),
    )


@router.get(
    "/{vessel_id}",
    name="get_vessel",
    response_model=VesselResponse,
    responses={304: {"description": "Not modified"}, 404: {"model": ErrorResponse}},
    summary="Get a vessel",
    description=(
        "Return a vessel with its officer and cargo boxes. The ETag header "
        "carries the version; a matching If-None-Match yields 304."
    ),
)
def get_vessel(
    vessel_id: str,
    response: Response,
    if_none_match: Optional[str] = Header(default=None),
    read_service: VesselReadService = Depends(get_read_service),
) -> VesselResponse | Response:
    """Return one vessel by identity."""
    vessel = read_service.find_by_id(_parse_vessel_id(vessel_id))

    etag = format_version_token(vessel.version)
    if if_none_match == etag:
        return Response(status_code=304, headers={"ETag": etag})

    response.headers["ETag"] = etag
    return _to_response(vessel)


@router.get(
    "",
    response_model=VesselPageResponse | CountResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Search vessels",
    description=(
        "Search vessels by name (case-insensitive substring) and length "
        "(minimum). Results are paged with page and size; only=count returns "
        "the number of stored vessels instead."
    ),
)
def search_vessels(
    request: Request,
    page: Optional[str] = None,
    size: Optional[str] = None,
    only: Optional[Literal["count"]] = None,
    read_service: VesselReadService = Depends(get_read_service),
) -> VesselPageResponse | CountResponse:
    """Search vessels or count them."""
    if only is not None:
        return CountResponse(count=read_service.count())

    search_params = {
        key: value
        for key, value in request.query_params.items()
        if key not in PAGING_PARAMS
    }
    pageable = create_pageable(
        page,
        size,
        default_size=settings.default_page_size,
        max_size=settings.max_page_size,
    )
    vessels = read_service.find(search_params, pageable)
    return _to_page(vessels, pageable)


@router.post(
    "",
    status_code=201,
    responses={422: {"model": ErrorResponse}},
    summary="Create a vessel",
    description="Create a vessel with its officer and cargo boxes.",
)
@limiter.limit(settings.rate_limit_write)
def create_vessel(
    request: Request,
    payload: VesselCreateRequest,
    write_service: VesselWriteService = Depends(get_write_service),
) -> Response:
    """Create a vessel and point to it with the Location header."""
    new_vessel = NewVessel(
        name=payload.name,
        length=payload.length,
        officer=Officer(name=payload.officer.name, age=payload.officer.age),
        cargo_boxes=tuple(
            CargoBox(height=box.height, length=box.length, width=box.width)
            for box in payload.cargo_boxes
        ),
    )
    vessel_id = write_service.create(new_vessel)

    location = str(request.url_for("get_vessel", vessel_id=str(vessel_id)))
    return Response(status_code=201, headers={"Location": location})


@router.put(
    "/{vessel_id}",
    status_code=204,
    responses={
        404: {"model": ErrorResponse},
        412: {"model": ErrorResponse},
        428: {"model": ErrorResponse},
    },
    summary="Update a vessel",
    description=(
        "Replace name and length of a vessel. The If-Match header must carry "
        "the current version; the new version is returned in the ETag header."
    ),
)
def update_vessel(
    vessel_id: str,
    payload: VesselUpdateRequest,
    if_match: Optional[str] = Header(default=None),
    write_service: VesselWriteService = Depends(get_write_service),
) -> Response:
    """Update a vessel under optimistic concurrency control."""
    identity = _parse_vessel_id(vessel_id)
    if if_match is None:
        return JSONResponse(
            status_code=HTTP_428,
            content={"error": "Precondition required", "detail": 'Header "If-Match" is missing'},
        )

    new_version = write_service.update(
        identity,
        VesselChanges(name=payload.name, length=payload.length),
        if_match,
    )
    return Response(status_code=204, headers={"ETag": format_version_token(new_version)})


@router.delete(
    "/{vessel_id}",
    status_code=204,
    responses={404: {"model": ErrorResponse}},
    summary="Delete a vessel",
    description="Delete a vessel with its officer and cargo boxes. Deleting an absent vessel succeeds.",
)
def delete_vessel(
    vessel_id: str,
    write_service: VesselWriteService = Depends(get_write_service),
) -> Response:
    """Delete a vessel by identity."""
    write_service.delete(_parse_vessel_id(vessel_id))
    return Response(status_code=204)
