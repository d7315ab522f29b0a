"""
Row <-> entity mapping for the pets tables.

Owners are always loaded as full graphs: the owner row plus every
animal row that references it. Animals are rebuilt through the domain
factory, so stored data goes through the same validation as new input.
"""

from datetime import datetime, timezone
from typing import Iterable, Optional

from sqlalchemy import select
from sqlalchemy.engine import Connection

from petcare.domain.pets.entities import Animal, Bird, Cat, Dog, Owner
from petcare.domain.pets.errors import StaleAggregateError
from petcare.domain.pets.factory import create_animal
from petcare.domain.pets.value_objects import Address, Email, PhoneNumber
from petcare.infrastructure.pets.tables import animals, owners


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes.
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


# ── Reading ──────────────────────────────────────────────────────────


def owner_from_row(row) -> Owner:
    return Owner(
        first_name=row.first_name,
        last_name=row.last_name,
        email=Email(row.email),
        phone_number=PhoneNumber(row.phone_number),
        address=Address(
            street=row.street,
            city=row.city,
            postal_code=row.postal_code,
            country=row.country,
        ),
        id=row.id,
        registration_date=_aware(row.registration_date),
        updated_at=_aware(row.updated_at),
        is_active=row.is_active,
        version=row.version,
    )


def animal_from_row(row, owner: Owner) -> Animal:
    return create_animal(
        row.type,
        name=row.name,
        birth_date=row.birth_date,
        weight=row.weight,
        color=row.color,
        owner=owner,
        breed=row.breed,
        is_dangerous=bool(row.is_dangerous),
        registration_number=row.registration_number,
        is_indoor=True if row.is_indoor is None else row.is_indoor,
        is_hypoallergenic=bool(row.is_hypoallergenic),
        species=row.species,
        wing_span=row.wing_span,
        can_talk=bool(row.can_talk),
        id=row.id,
        created_at=_aware(row.created_at),
        updated_at=_aware(row.updated_at),
        version=row.version,
    )


def load_owner_graphs(conn: Connection, owner_rows: Iterable) -> list[Owner]:
    """Rebuild owners from rows and attach all of their stored animals."""
    loaded = [owner_from_row(row) for row in owner_rows]
    if not loaded:
        return []
    by_id = {owner.id: owner for owner in loaded}
    animal_rows = conn.execute(
        select(animals)
        .where(animals.c.owner_id.in_(list(by_id)))
        .order_by(animals.c.id)
    )
    for row in animal_rows:
        animal_from_row(row, by_id[row.owner_id])
    return loaded


def load_owner_graphs_by_id(conn: Connection, owner_ids: Iterable[int]) -> list[Owner]:
    ids = sorted(set(owner_ids))
    if not ids:
        return []
    rows = conn.execute(select(owners).where(owners.c.id.in_(ids)).order_by(owners.c.id))
    return load_owner_graphs(conn, rows)


# ── Writing ──────────────────────────────────────────────────────────


def owner_values(owner: Owner) -> dict:
    address = owner.address
    return {
        "first_name": owner.first_name,
        "last_name": owner.last_name,
        "email": owner.email.value,
        "phone_number": owner.phone_number.value,
        "street": address.street,
        "city": address.city,
        "postal_code": address.postal_code,
        "country": address.country,
        "registration_date": owner.registration_date,
        "updated_at": owner.updated_at,
        "is_active": owner.is_active,
    }


def animal_values(animal: Animal) -> dict:
    values = {
        "type": animal.animal_type.value,
        "name": animal.name,
        "birth_date": animal.birth_date,
        "weight": animal.weight,
        "color": animal.color,
        "owner_id": animal.owner.id,
        "created_at": animal.created_at,
        "updated_at": animal.updated_at,
        "breed": None,
        "is_dangerous": None,
        "registration_number": None,
        "is_indoor": None,
        "is_hypoallergenic": None,
        "species": None,
        "wing_span": None,
        "can_talk": None,
    }
    if isinstance(animal, Dog):
        values.update(
            breed=animal.breed,
            is_dangerous=animal.is_dangerous,
            registration_number=animal.registration_number,
        )
    elif isinstance(animal, Cat):
        values.update(
            is_indoor=animal.is_indoor,
            is_hypoallergenic=animal.is_hypoallergenic,
        )
    elif isinstance(animal, Bird):
        values.update(
            species=animal.species,
            wing_span=animal.wing_span,
            can_talk=animal.can_talk,
        )
    return values


def insert_animal(conn: Connection, animal: Animal) -> None:
    result = conn.execute(animals.insert().values(version=1, **animal_values(animal)))
    animal.mark_persisted(result.inserted_primary_key[0], 1)


def update_animal(conn: Connection, animal: Animal) -> None:
    """Compare-and-swap update on the animal's version."""
    next_version = animal.version + 1
    result = conn.execute(
        animals.update()
        .where(animals.c.id == animal.id)
        .where(animals.c.version == animal.version)
        .values(version=next_version, **animal_values(animal))
    )
    if result.rowcount == 0:
        raise StaleAggregateError("Animal", animal.id)
    animal.mark_persisted(animal.id, next_version)


def delete_animal_row(conn: Connection, animal_id: Optional[int]) -> None:
    if animal_id is not None:
        conn.execute(animals.delete().where(animals.c.id == animal_id))
