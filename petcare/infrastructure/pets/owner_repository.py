"""
Adapter: Owner repository.

Implements OwnerRepository port on SQLAlchemy Core.
Every read returns freshly built owner graphs (owner plus animals).
"""

import logging
from typing import Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import IntegrityError

from petcare.domain.pets.entities import Owner
from petcare.domain.pets.errors import (
    EmailAlreadyInUseError,
    OwnerNotFoundError,
    StaleAggregateError,
)
from petcare.domain.pets.ports import OwnerPage, OwnerRepository
from petcare.infrastructure.pets.database import SqlDatabase
from petcare.infrastructure.pets.records import (
    insert_animal,
    load_owner_graphs,
    owner_values,
)
from petcare.infrastructure.pets.tables import animals, owners

logger = logging.getLogger(__name__)

OWNER_ORDER = (owners.c.last_name, owners.c.first_name, owners.c.id)


def _normalize_email(email: str) -> str:
    return str(email).strip().lower()


class OwnerRepositoryAdapter(OwnerRepository):
    """Persists owners and their animal collections.

    Implements the OwnerRepository port defined in the domain layer.
    """

    def __init__(self, database: SqlDatabase) -> None:
        self._database = database

    def _select(self, *criteria) -> list[Owner]:
        query = select(owners).order_by(*OWNER_ORDER)
        if criteria:
            query = query.where(*criteria)
        with self._database.connect() as conn:
            return load_owner_graphs(conn, conn.execute(query))

    # ── Reads ────────────────────────────────────────────────────────

    def find_by_id(self, owner_id: int) -> Owner:
        found = self._select(owners.c.id == owner_id)
        if not found:
            raise OwnerNotFoundError(owner_id=owner_id)
        return found[0]

    def find_by_email(self, email: str) -> Owner:
        normalized = _normalize_email(email)
        found = self._select(owners.c.email == normalized)
        if not found:
            raise OwnerNotFoundError(email=normalized)
        return found[0]

    def exists_by_email(self, email: str, exclude_owner_id: Optional[int] = None) -> bool:
        query = select(func.count()).select_from(owners).where(
            owners.c.email == _normalize_email(email)
        )
        if exclude_owner_id is not None:
            query = query.where(owners.c.id != exclude_owner_id)
        with self._database.connect() as conn:
            return conn.execute(query).scalar_one() > 0

    def find_all(self) -> list[Owner]:
        return self._select()

    def find_active_owners(self) -> list[Owner]:
        return self._select(owners.c.is_active.is_(True))

    def find_by_city(self, city: str) -> list[Owner]:
        return self._select(func.lower(owners.c.city) == city.strip().lower())

    def find_by_postal_code(self, postal_code: str) -> list[Owner]:
        return self._select(owners.c.postal_code == postal_code.strip())

    def search_by_name(self, term: str) -> list[Owner]:
        needle = term.strip().lower()
        return self._select(
            or_(
                func.lower(owners.c.first_name).contains(needle, autoescape=True),
                func.lower(owners.c.last_name).contains(needle, autoescape=True),
            )
        )

    def paginate(
        self, page: int = 1, per_page: int = 20, city: Optional[str] = None
    ) -> OwnerPage:
        """Return one page of owners.

        Args:
            page: 1-based page number.
            per_page: Page size.
            city: Optional case-insensitive city filter.
        """
        count_query = select(func.count()).select_from(owners)
        page_query = (
            select(owners)
            .order_by(*OWNER_ORDER)
            .limit(per_page)
            .offset((page - 1) * per_page)
        )
        if city:
            same_city = func.lower(owners.c.city) == city.strip().lower()
            count_query = count_query.where(same_city)
            page_query = page_query.where(same_city)
        with self._database.connect() as conn:
            total = conn.execute(count_query).scalar_one()
            items = load_owner_graphs(conn, conn.execute(page_query))
        return OwnerPage(items=items, total=total, page=page, per_page=per_page)

    def count(self) -> int:
        with self._database.connect() as conn:
            return conn.execute(select(func.count()).select_from(owners)).scalar_one()

    # ── Writes ───────────────────────────────────────────────────────

    def save(self, owner: Owner) -> None:
        """Insert or update the owner, then sync the animal rows.

        Raises:
            EmailAlreadyInUseError: If another owner holds the email.
            StaleAggregateError: If the row changed since it was loaded.
        """
        with self._database.connect() as conn:
            try:
                if owner.id is None:
                    result = conn.execute(
                        owners.insert().values(version=1, **owner_values(owner))
                    )
                    owner.mark_persisted(result.inserted_primary_key[0], 1)
                else:
                    next_version = owner.version + 1
                    result = conn.execute(
                        owners.update()
                        .where(owners.c.id == owner.id)
                        .where(owners.c.version == owner.version)
                        .values(version=next_version, **owner_values(owner))
                    )
                    if result.rowcount == 0:
                        raise StaleAggregateError("Owner", owner.id)
                    owner.mark_persisted(owner.id, next_version)
            except IntegrityError as exc:
                # email is the only unique constraint on owners
                raise EmailAlreadyInUseError(owner.email.value) from exc

            for animal in owner.animals:
                if animal.id is None:
                    insert_animal(conn, animal)

            kept = [animal.id for animal in owner.animals]
            orphans = conn.execute(
                animals.delete()
                .where(animals.c.owner_id == owner.id)
                .where(animals.c.id.not_in(kept))
            )
            if orphans.rowcount:
                logger.debug(
                    "Removed %d orphan animal row(s) of owner id=%s",
                    orphans.rowcount,
                    owner.id,
                )

    def delete(self, owner: Owner) -> None:
        """Delete the owner row and their animals; detach them in memory."""
        if owner.id is not None:
            with self._database.connect() as conn:
                conn.execute(animals.delete().where(animals.c.owner_id == owner.id))
                conn.execute(owners.delete().where(owners.c.id == owner.id))
        for animal in owner.animals:
            animal.remove_owner()
            animal.mark_deleted()
        owner.mark_deleted()
