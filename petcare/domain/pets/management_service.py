"""
Domain service: operations spanning several aggregates.

Ownership changes touch an animal and up to two owners. They are
persisted inside one unit-of-work transaction; when persistence fails
the in-memory graph is put back the way it was before re-raising.
"""

from contextlib import nullcontext
from typing import Optional

from petcare.domain.pets.entities import Animal, Entity, Owner, round_half_up
from petcare.domain.pets.ports import AnimalRepository, OwnerRepository, UnitOfWork

ATTENTION_AGE_YEARS = 10


class AnimalManagementService:
    """Ownership transfer and collection-wide statistics."""

    def __init__(
        self,
        animal_repository: AnimalRepository,
        owner_repository: OwnerRepository,
        unit_of_work: Optional[UnitOfWork] = None,
    ) -> None:
        self._animal_repository = animal_repository
        self._owner_repository = owner_repository
        self._unit_of_work = unit_of_work

    def _transaction(self):
        if self._unit_of_work is None:
            return nullcontext()
        return self._unit_of_work.transaction()

    def transfer_ownership(self, animal: Animal, new_owner: Owner) -> None:
        """Give ``animal`` to ``new_owner`` and persist all affected aggregates.

        The animal is saved before the previous owner so that the
        previous owner's orphan cleanup does not remove it.
        """
        previous = animal.owner
        if previous is new_owner:
            return
        snapshot = _snapshot(animal, previous, new_owner)
        animal.assign_owner(new_owner)
        try:
            with self._transaction():
                self._animal_repository.save(animal)
                if previous is not None:
                    self._owner_repository.save(previous)
                self._owner_repository.save(new_owner)
        except Exception:
            _restore_owner(animal, previous)
            _restore(snapshot)
            raise

    def release_animal(self, animal: Animal) -> None:
        """Detach ``animal`` from its owner and persist both sides.

        No-op for an animal without an owner.
        """
        previous = animal.owner
        if previous is None:
            return
        snapshot = _snapshot(animal, previous)
        animal.remove_owner()
        try:
            with self._transaction():
                self._animal_repository.save(animal)
                self._owner_repository.save(previous)
        except Exception:
            _restore_owner(animal, previous)
            _restore(snapshot)
            raise

    def get_animal_statistics_by_type(self) -> dict[str, int]:
        """Count all animals by display label."""
        statistics: dict[str, int] = {}
        for animal in self._animal_repository.find_all():
            label = animal.get_type()
            statistics[label] = statistics.get(label, 0) + 1
        return statistics

    def find_animals_needing_attention(self) -> list[Animal]:
        """Animals aged 10 years or more."""
        return [
            animal
            for animal in self._animal_repository.find_all()
            if animal.calculate_age() >= ATTENTION_AGE_YEARS
        ]

    def calculate_average_age(self) -> float:
        """Mean age in years, rounded to one decimal like the owner average."""
        animals = self._animal_repository.find_all()
        if not animals:
            return 0.0
        ages = [animal.calculate_age() for animal in animals]
        return round_half_up(sum(ages) / len(ages), 1)


def _snapshot(*entities: Optional[Entity]) -> list[tuple]:
    return [
        (entity, entity.id, entity.version, entity.updated_at)
        for entity in entities
        if entity is not None
    ]


def _restore(snapshot: list[tuple]) -> None:
    for entity, entity_id, version, updated_at in snapshot:
        entity.id = entity_id
        entity.version = version
        entity.updated_at = updated_at


def _restore_owner(animal: Animal, previous: Optional[Owner]) -> None:
    if previous is None:
        animal.remove_owner()
    else:
        animal.assign_owner(previous)
