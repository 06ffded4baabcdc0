"""
Pydantic schemas for vessel API request/response validation.

These schemas enforce input validation and define the API contract.
Validation happens here, before the service layer is invoked.
No business logic belongs here.
"""

from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any

from pydantic import BaseModel, Field, field_validator

NAME_PATTERN = r"^\w.*"
TWO_PLACES = Decimal("0.01")


def _round_two_places(value: Any) -> Any:
    """Round numeric input to two decimal places; leave the rest to pydantic."""
    if value is None or value == "" or isinstance(value, bool):
        return value
    try:
        return Decimal(str(value)).quantize(TWO_PLACES)
    except InvalidOperation:
        return value


class OfficerSchema(BaseModel):
    """The officer of a vessel.

    Attributes:
        name: Officer name (max 20 chars, starting with a word character).
        age: Optional age between 30 and 70.
    """

    name: str = Field(..., min_length=1, max_length=20, pattern=NAME_PATTERN)
    age: int | None = Field(default=None, ge=30, le=70)


class CargoBoxSchema(BaseModel):
    """A cargo box; dimensions are rounded to two decimal places."""

    height: Decimal = Field(..., ge=0, le=10)
    length: Decimal = Field(..., ge=0, le=20)
    width: Decimal = Field(..., ge=0, le=10)

    round_dimensions = field_validator("height", "length", "width", mode="before")(
        _round_two_places
    )


class VesselUpdateRequest(BaseModel):
    """Request schema for replacing the attributes of a vessel.

    Attributes:
        name: Vessel name (max 30 chars, starting with a word character).
        length: Vessel length in metres (at most 500), two decimal places.
    """

    name: str = Field(..., min_length=1, max_length=30, pattern=NAME_PATTERN)
    length: Decimal = Field(..., ge=0, le=500)

    round_length = field_validator("length", mode="before")(_round_two_places)


class VesselCreateRequest(VesselUpdateRequest):
    """Request schema for creating a vessel with officer and cargo boxes."""

    officer: OfficerSchema
    cargo_boxes: list[CargoBoxSchema] = Field(default_factory=list)


class OfficerResponse(BaseModel):
    """Officer as returned by the API."""

    name: str
    age: int | None = None


class CargoBoxResponse(BaseModel):
    """Cargo box as returned by the API."""

    height: Decimal
    length: Decimal
    width: Decimal


class VesselResponse(BaseModel):
    """Response schema for a single vessel."""

    id: int
    version: int
    name: str
    length: Decimal
    officer: OfficerResponse
    cargo_boxes: list[CargoBoxResponse]
    created_at: datetime | None = None
    updated_at: datetime | None = None


class PageMetadata(BaseModel):
    """Position of a page within the full result set."""

    size: int
    number: int
    total_elements: int
    total_pages: int


class VesselPageResponse(BaseModel):
    """Response schema for a page of vessels."""

    content: list[VesselResponse]
    page: PageMetadata


class CountResponse(BaseModel):
    """Response schema for the number of stored vessels."""

    count: int


class HealthResponse(BaseModel):
    """Response schema for health check endpoint."""

    status: str
    version: str
    database: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: str | None = None
