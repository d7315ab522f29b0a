"""
Data Transfer Objects for the pets application layer.

DTOs carry data between the interface and application layers.
They are plain dataclasses with no behavior. Results are the only
shapes handed back across the application boundary; live entities
never leave it.
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Optional


# ══════════════════════════════════════════════════════════════════════
# Owner commands and queries
# ══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class CreateOwnerCommand:
    """Input DTO for registering an owner.

    Attributes:
        first_name: Given name.
        last_name: Family name.
        email: Email address, must not be registered yet.
        phone_number: Phone number in any accepted shape.
        street: Street line of the address.
        city: City of the address.
        postal_code: Postal code, checked against the country.
        country: Country of the address.
    """

    first_name: str
    last_name: str
    email: str
    phone_number: str
    street: str
    city: str
    postal_code: str
    country: str = "France"


@dataclass(frozen=True)
class UpdateOwnerCommand:
    """Input DTO for a partial owner update. ``None`` leaves a field unchanged.

    Address fields are merged with the current address before the new
    address is validated.
    """

    owner_id: int
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email: Optional[str] = None
    phone_number: Optional[str] = None
    street: Optional[str] = None
    city: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    is_active: Optional[bool] = None


@dataclass(frozen=True)
class ListOwnersQuery:
    """Input DTO for listing owners page by page."""

    page: int = 1
    per_page: int = 20
    city: Optional[str] = None


# ══════════════════════════════════════════════════════════════════════
# Animal commands and queries
# ══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class CreateAnimalCommand:
    """Input DTO for registering an animal.

    Attributes:
        animal_type: "dog", "cat" or "bird" (labels are accepted too).
        name: Animal name.
        birth_date: Date of birth.
        weight: Weight in kg.
        color: Coat or plumage color.
        owner_id: Id of the owning owner (mandatory).
        breed: Dog breed.
        is_dangerous: Dog danger flag; deny-listed breeds are always dangerous.
        registration_number: Optional dog identification number.
        is_indoor: Cat habitat.
        is_hypoallergenic: Cat breed trait.
        species: Bird species.
        wing_span: Bird wing span in cm.
        can_talk: Whether the bird talks.
    """

    animal_type: str
    name: str
    birth_date: date
    weight: float
    color: str
    owner_id: int
    breed: Optional[str] = None
    is_dangerous: bool = False
    registration_number: Optional[str] = None
    is_indoor: bool = True
    is_hypoallergenic: bool = False
    species: Optional[str] = None
    wing_span: Optional[float] = None
    can_talk: bool = False


@dataclass(frozen=True)
class ListAnimalsQuery:
    """Input DTO for listing animals, optionally of one type."""

    animal_type: Optional[str] = None


@dataclass(frozen=True)
class UpdateAnimalWeightCommand:
    """Input DTO for recording a new weight."""

    animal_id: int
    weight: float


@dataclass(frozen=True)
class TransferOwnershipCommand:
    """Input DTO for moving an animal to another owner."""

    animal_id: int
    new_owner_id: int


# ══════════════════════════════════════════════════════════════════════
# Results
# ══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class OwnerRef:
    """Owner reference embedded in an animal result."""

    id: Optional[int]
    name: str


@dataclass(frozen=True)
class AnimalResult:
    """Output DTO describing one animal.

    Attributes:
        type: Discriminator ("dog", "cat", "bird").
        type_label: Display label ("Chien", "Chat", "Oiseau").
        age: Age in whole years, computed at assembly time.
        owner: Owner reference, or None for a released animal.
        special_needs: Care requirements.
        sound: What the animal says.
        description: One-line description.
        specific_data: Variant-specific fields and derived values.
    """

    id: Optional[int]
    type: str
    type_label: str
    name: str
    birth_date: date
    age: int
    weight: float
    color: str
    owner: Optional[OwnerRef]
    special_needs: list[str]
    sound: str
    description: str
    specific_data: dict[str, Any]
    created_at: datetime
    updated_at: datetime
    weight_alert: bool = False


@dataclass(frozen=True)
class AnimalSummary:
    """Short animal entry listed inside an owner result."""

    id: Optional[int]
    type: str
    name: str
    age: int
    color: str


@dataclass(frozen=True)
class AddressResult:
    """Address block of an owner result."""

    street: str
    city: str
    postal_code: str
    country: str
    full_address: str


@dataclass(frozen=True)
class OwnerStatistics:
    """Aggregates over an owner's animals."""

    total_animals: int
    animals_by_type: dict[str, int]
    average_age: float
    senior_animals: int


@dataclass(frozen=True)
class OwnerResult:
    """Output DTO describing one owner.

    ``animals`` and ``statistics`` are only filled for detail views.
    """

    id: Optional[int]
    first_name: str
    last_name: str
    full_name: str
    email: str
    phone_number: str
    address: AddressResult
    total_animals: int
    is_active: bool
    registration_date: datetime
    updated_at: datetime
    animals: Optional[list[AnimalSummary]] = None
    statistics: Optional[OwnerStatistics] = None


@dataclass(frozen=True)
class OwnerPageResult:
    """Output DTO for one page of owners."""

    items: list[OwnerResult]
    total: int
    page: int
    per_page: int
    total_pages: int


@dataclass(frozen=True)
class AnimalStatisticsResult:
    """Collection-wide animal statistics."""

    total_animals: int
    by_type: dict[str, int]
    average_age: float
    needing_attention: list[AnimalSummary] = field(default_factory=list)


@dataclass(frozen=True)
class AnnualCostResult:
    """Estimated yearly cost of an owner's animals."""

    owner_id: int
    total: int
    breakdown: dict[str, int]
    currency: str
    note: str
