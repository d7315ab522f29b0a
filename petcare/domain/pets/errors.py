"""
Domain-specific errors for the pets bounded context.

All errors raised from the domain layer must be defined here.
These are mapped to HTTP responses at the interface layer.
No framework imports allowed.
"""

from typing import Optional


class PetDomainError(Exception):
    """Base error for all pets domain errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(self.message)


# ── Validation ───────────────────────────────────────────────────────


class DomainValidationError(PetDomainError):
    """Raised when a field constraint is violated.

    Attributes:
        field: Name of the offending field.
        reason: The violated rule, in plain words.
    """

    def __init__(self, field: str, reason: str) -> None:
        super().__init__(f"Invalid {field}: {reason}")
        self.field = field
        self.reason = reason


class InvalidAnimalDataError(DomainValidationError):
    """Raised when an animal field is invalid."""


class InvalidOwnerDataError(DomainValidationError):
    """Raised when an owner field is invalid."""


class InvalidEmailError(DomainValidationError):
    """Raised when an email address has an invalid format."""

    def __init__(self, reason: str) -> None:
        super().__init__("email", reason)


class InvalidPhoneNumberError(DomainValidationError):
    """Raised when a phone number cannot be normalized to a known shape."""

    def __init__(self, reason: str) -> None:
        super().__init__("phone_number", reason)


class InvalidAddressError(DomainValidationError):
    """Raised when an address component is invalid."""


class UnsupportedAnimalTypeError(DomainValidationError):
    """Raised when an animal type is outside {dog, cat, bird}."""

    def __init__(self, animal_type: object) -> None:
        super().__init__(
            "type",
            f"unsupported animal type '{animal_type}', expected one of dog, cat, bird",
        )
        self.animal_type = animal_type


# ── Lookup ───────────────────────────────────────────────────────────


class NotFoundError(PetDomainError):
    """Base error for missing aggregates."""


class AnimalNotFoundError(NotFoundError):
    """Raised when an animal cannot be found."""

    def __init__(self, animal_id: int) -> None:
        super().__init__(f"Animal not found: {animal_id}")
        self.animal_id = animal_id


class OwnerNotFoundError(NotFoundError):
    """Raised when an owner cannot be found by id or email."""

    def __init__(
        self, owner_id: Optional[int] = None, email: Optional[str] = None
    ) -> None:
        if owner_id is not None:
            super().__init__(f"Owner not found: {owner_id}")
        else:
            super().__init__("Owner not found for the given email address")
        self.owner_id = owner_id
        self.email = email


# ── Conflicts ────────────────────────────────────────────────────────


class ConflictError(PetDomainError):
    """Base error for operations that clash with existing state."""


class EmailAlreadyInUseError(ConflictError):
    """Raised when an email address is already registered to another owner."""

    def __init__(self, email: str) -> None:
        super().__init__("Email address already in use")
        self.email = email


class DogLimitReachedError(ConflictError):
    """Raised when an owner already holds the maximum number of dogs."""

    def __init__(self, owner_id: Optional[int], limit: int) -> None:
        super().__init__(f"Owner {owner_id} already owns {limit} dogs")
        self.owner_id = owner_id
        self.limit = limit


class StaleAggregateError(ConflictError):
    """Raised when a save loses an optimistic concurrency check."""

    def __init__(self, kind: str, entity_id: Optional[int]) -> None:
        super().__init__(f"{kind} {entity_id} was modified concurrently")
        self.kind = kind
        self.entity_id = entity_id
