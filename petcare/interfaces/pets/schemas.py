"""
Pydantic schemas for the pets API request/response validation.

These schemas define the API contract (camelCase JSON). They carry
shape constraints only (types, maximum lengths) as a fast-fail; the
domain constructors remain the single validation authority.
No business logic belongs here.
"""

from datetime import date, datetime
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base schema: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# ══════════════════════════════════════════════════════════════════════
# Requests
# ══════════════════════════════════════════════════════════════════════


class CreateOwnerRequest(CamelModel):
    """Request schema for registering an owner.

    Attributes:
        first_name: Given name (letters, spaces, hyphens, apostrophes).
        last_name: Family name, stored upper-cased.
        email: Email address, unique across owners.
        phone_number: French national, international or generic number.
        street: Street line.
        city: City name.
        postal_code: Postal code, checked against the country.
        country: Country; defaults to the configured default country.
    """

    first_name: str = Field(..., max_length=100, description="Given name")
    last_name: str = Field(..., max_length=100, description="Family name")
    email: str = Field(..., max_length=180, description="Email address")
    phone_number: str = Field(..., max_length=30, description="Phone number")
    street: str = Field(..., max_length=255, description="Street line")
    city: str = Field(..., max_length=100, description="City")
    postal_code: str = Field(..., max_length=10, description="Postal code")
    country: Optional[str] = Field(default=None, max_length=100, description="Country")


class UpdateOwnerRequest(CamelModel):
    """Request schema for a partial owner update. Omitted fields are kept."""

    first_name: Optional[str] = Field(default=None, max_length=100)
    last_name: Optional[str] = Field(default=None, max_length=100)
    email: Optional[str] = Field(default=None, max_length=180)
    phone_number: Optional[str] = Field(default=None, max_length=30)
    street: Optional[str] = Field(default=None, max_length=255)
    city: Optional[str] = Field(default=None, max_length=100)
    postal_code: Optional[str] = Field(default=None, max_length=10)
    country: Optional[str] = Field(default=None, max_length=100)
    is_active: Optional[bool] = None


class CreateAnimalRequest(CamelModel):
    """Request schema for registering an animal.

    Variant fields: breed/isDangerous/registrationNumber for dogs,
    isIndoor/isHypoallergenic for cats, species/wingSpan/canTalk for birds.
    """

    animal_type: str = Field(
        ..., alias="type", max_length=20, description="dog, cat or bird"
    )
    name: str = Field(..., max_length=100)
    birth_date: date
    weight: float = Field(..., description="Weight in kg")
    color: str = Field(..., max_length=30)
    owner_id: int
    breed: Optional[str] = Field(default=None, max_length=100)
    is_dangerous: bool = False
    registration_number: Optional[str] = Field(default=None, max_length=15)
    is_indoor: bool = True
    is_hypoallergenic: bool = False
    species: Optional[str] = Field(default=None, max_length=100)
    wing_span: Optional[float] = Field(default=None, description="Wing span in cm")
    can_talk: bool = False


class UpdateWeightRequest(CamelModel):
    """Request schema for recording a new weight."""

    weight: float = Field(..., description="New weight in kg")


class TransferOwnershipRequest(CamelModel):
    """Request schema for moving an animal to another owner."""

    new_owner_id: int


# ══════════════════════════════════════════════════════════════════════
# Responses
# ══════════════════════════════════════════════════════════════════════


class OwnerRefSchema(CamelModel):
    id: Optional[int]
    name: str


class AnimalResponse(CamelModel):
    """Response schema for one animal."""

    id: Optional[int]
    type: str
    type_label: str
    name: str
    birth_date: date
    age: int
    weight: float
    color: str
    owner: Optional[OwnerRefSchema]
    special_needs: list[str]
    sound: str
    description: str
    specific_data: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    weight_alert: bool = False


class AnimalListResponse(CamelModel):
    """Response schema for a list of animals."""

    items: list[AnimalResponse]
    total: int


class AnimalSummarySchema(CamelModel):
    id: Optional[int]
    type: str
    name: str
    age: int
    color: str


class AddressSchema(CamelModel):
    street: str
    city: str
    postal_code: str
    country: str
    full_address: str


class OwnerStatisticsSchema(CamelModel):
    total_animals: int
    animals_by_type: dict[str, int]
    average_age: float
    senior_animals: int


class OwnerResponse(CamelModel):
    """Response schema for one owner.

    ``animals`` and ``statistics`` are present on detail responses only.
    """

    id: Optional[int]
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: str
    address: AddressSchema
    total_animals: int
    is_active: bool
    registration_date: datetime
    updated_at: datetime
    animals: Optional[list[AnimalSummarySchema]] = None
    statistics: Optional[OwnerStatisticsSchema] = None


class OwnerPageResponse(CamelModel):
    """Response schema for one page of owners."""

    items: list[OwnerResponse]
    total: int
    page: int
    per_page: int
    total_pages: int


class AnimalStatisticsResponse(CamelModel):
    """Response schema for collection-wide animal statistics."""

    total_animals: int
    by_type: dict[str, int]
    average_age: float
    needing_attention: list[AnimalSummarySchema]


class AnnualCostResponse(CamelModel):
    """Response schema for an owner's yearly cost estimate."""

    owner_id: int
    total: int
    breakdown: dict[str, int]
    currency: str
    note: str


class HealthResponse(BaseModel):
    """Service status: "ok", or "degraded" when the database is unreachable."""

    status: str
    version: str
    database: str


class ErrorResponse(BaseModel):
    """Standard error response schema."""

    error: str
    detail: Optional[str] = None
