"""
Adapter: Animal repository.

Implements AnimalRepository port on SQLAlchemy Core.
An animal is always returned inside its owner's freshly loaded graph,
so ``animal.owner.animals`` lists its stored siblings.
"""

import logging

from sqlalchemy import func, select

from petcare.domain.pets.entities import Animal, AnimalType, Owner
from petcare.domain.pets.errors import AnimalNotFoundError
from petcare.domain.pets.ports import AnimalRepository
from petcare.infrastructure.pets.database import SqlDatabase
from petcare.infrastructure.pets.records import (
    delete_animal_row,
    insert_animal,
    load_owner_graphs_by_id,
    update_animal,
)
from petcare.infrastructure.pets.tables import animals

logger = logging.getLogger(__name__)


class AnimalRepositoryAdapter(AnimalRepository):
    """Persists animals of all variants in the ``animals`` table.

    Implements the AnimalRepository port defined in the domain layer.
    """

    def __init__(self, database: SqlDatabase) -> None:
        self._database = database

    def _load(self, *criteria) -> list[Animal]:
        """Load the owner graphs holding matching animals; return those animals."""
        query = select(animals.c.id, animals.c.owner_id)
        if criteria:
            query = query.where(*criteria)
        with self._database.connect() as conn:
            rows = conn.execute(query).all()
            wanted = {row.id for row in rows}
            graphs = load_owner_graphs_by_id(conn, (row.owner_id for row in rows))
        found = [
            animal
            for owner in graphs
            for animal in owner.animals
            if animal.id in wanted
        ]
        return sorted(found, key=lambda animal: animal.id)

    # ── Reads ────────────────────────────────────────────────────────

    def find_by_id(self, animal_id: int) -> Animal:
        found = self._load(animals.c.id == animal_id)
        if not found:
            raise AnimalNotFoundError(animal_id)
        return found[0]

    def find_all(self) -> list[Animal]:
        return self._load()

    def find_by_owner(self, owner: Owner) -> list[Animal]:
        if owner.id is None:
            return []
        return self._load(animals.c.owner_id == owner.id)

    def find_by_type(self, animal_type: object) -> list[Animal]:
        kind = AnimalType.parse(animal_type)
        return self._load(animals.c.type == kind.value)

    def find_by_age_range(self, min_age: int, max_age: int) -> list[Animal]:
        return [
            animal
            for animal in self._load()
            if min_age <= animal.calculate_age() <= max_age
        ]

    def count_all(self) -> int:
        with self._database.connect() as conn:
            return conn.execute(select(func.count()).select_from(animals)).scalar_one()

    # ── Writes ───────────────────────────────────────────────────────

    def save(self, animal: Animal) -> None:
        """Insert, update or, for an ownerless animal, remove the row.

        Raises:
            ValueError: If the owner has not been saved yet.
            StaleAggregateError: If the row changed since it was loaded.
        """
        if animal.owner is None:
            if animal.id is not None:
                with self._database.connect() as conn:
                    delete_animal_row(conn, animal.id)
                logger.debug("Removed released animal id=%s", animal.id)
                animal.mark_deleted()
            return
        if animal.owner.id is None:
            raise ValueError("The owner must be saved before their animals")

        with self._database.connect() as conn:
            if animal.id is None:
                insert_animal(conn, animal)
            else:
                update_animal(conn, animal)

    def delete(self, animal: Animal) -> None:
        if animal.id is not None:
            with self._database.connect() as conn:
                delete_animal_row(conn, animal.id)
        if animal.owner is not None:
            animal.remove_owner()
        animal.mark_deleted()
