"""
Port interfaces (ABCs) for the pets bounded context.

Ports define the contracts that the domain requires from the outside world.
Infrastructure adapters implement these interfaces.
The domain layer never depends on concrete implementations.

Save contract: ``save`` persists the aggregate and records the assigned
id and version on it. Saves are compare-and-swap on ``version``; a
concurrent modification surfaces as StaleAggregateError.
"""

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from dataclasses import dataclass
from typing import Optional

from petcare.domain.pets.entities import Animal, Owner


@dataclass(frozen=True)
class OwnerPage:
    """One page of owners.

    Attributes:
        items: Owners on this page, with their animals loaded.
        total: Number of owners matching the query across all pages.
        page: 1-based page number.
        per_page: Page size.
    """

    items: list[Owner]
    total: int
    page: int
    per_page: int

    @property
    def total_pages(self) -> int:
        if self.per_page <= 0:
            return 0
        return -(-self.total // self.per_page)


class AnimalRepository(ABC):
    """Port for loading and storing animals."""

    @abstractmethod
    def find_by_id(self, animal_id: int) -> Animal:
        """Return the animal with its owner graph.

        Raises:
            AnimalNotFoundError: If no animal has this id.
        """
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Animal]:
        """Return every animal."""
        raise NotImplementedError

    @abstractmethod
    def find_by_owner(self, owner: Owner) -> list[Animal]:
        """Return the stored animals of a persisted owner."""
        raise NotImplementedError

    @abstractmethod
    def find_by_type(self, animal_type: object) -> list[Animal]:
        """Return animals of one variant (enum, value or label)."""
        raise NotImplementedError

    @abstractmethod
    def find_by_age_range(self, min_age: int, max_age: int) -> list[Animal]:
        """Return animals whose age in years is within [min_age, max_age]."""
        raise NotImplementedError

    @abstractmethod
    def count_all(self) -> int:
        """Return the number of stored animals."""
        raise NotImplementedError

    @abstractmethod
    def save(self, animal: Animal) -> None:
        """Insert or update an animal.

        The owner must already be persisted. An animal without an
        owner is removed from storage.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, animal: Animal) -> None:
        """Remove an animal from storage."""
        raise NotImplementedError


class OwnerRepository(ABC):
    """Port for loading and storing owners with their animals."""

    @abstractmethod
    def find_by_id(self, owner_id: int) -> Owner:
        """Return the owner with all their animals.

        Raises:
            OwnerNotFoundError: If no owner has this id.
        """
        raise NotImplementedError

    @abstractmethod
    def find_by_email(self, email: str) -> Owner:
        """Return the owner registered with this email.

        Raises:
            OwnerNotFoundError: If the email is unknown.
        """
        raise NotImplementedError

    @abstractmethod
    def exists_by_email(self, email: str, exclude_owner_id: Optional[int] = None) -> bool:
        """Return True if another owner already uses this email."""
        raise NotImplementedError

    @abstractmethod
    def find_all(self) -> list[Owner]:
        """Return every owner."""
        raise NotImplementedError

    @abstractmethod
    def find_active_owners(self) -> list[Owner]:
        """Return owners whose account is active."""
        raise NotImplementedError

    @abstractmethod
    def find_by_city(self, city: str) -> list[Owner]:
        """Return owners living in a city (case-insensitive)."""
        raise NotImplementedError

    @abstractmethod
    def find_by_postal_code(self, postal_code: str) -> list[Owner]:
        """Return owners with this postal code."""
        raise NotImplementedError

    @abstractmethod
    def search_by_name(self, term: str) -> list[Owner]:
        """Return owners whose first or last name contains ``term``."""
        raise NotImplementedError

    @abstractmethod
    def paginate(
        self, page: int = 1, per_page: int = 20, city: Optional[str] = None
    ) -> OwnerPage:
        """Return one page of owners ordered by last name, then first name."""
        raise NotImplementedError

    @abstractmethod
    def count(self) -> int:
        """Return the number of stored owners."""
        raise NotImplementedError

    @abstractmethod
    def save(self, owner: Owner) -> None:
        """Insert or update an owner.

        New animals in the collection are inserted with the owner.
        Stored animals no longer in the collection are removed.
        """
        raise NotImplementedError

    @abstractmethod
    def delete(self, owner: Owner) -> None:
        """Remove an owner and, by cascade, their animals."""
        raise NotImplementedError


class UnitOfWork(ABC):
    """Port for grouping repository calls into one atomic transaction."""

    @abstractmethod
    def transaction(self) -> AbstractContextManager:
        """Return a context manager; repository calls inside it commit together."""
        raise NotImplementedError
