"""
Animal variant construction.

Maps a type tag ("dog", "Chien", AnimalType.DOG, ...) to the matching
Animal subclass so callers never branch on variant names themselves.
"""

from datetime import date
from typing import Optional

from petcare.domain.pets.entities import Animal, AnimalType, Bird, Cat, Dog, Owner


def create_animal(
    animal_type: object,
    *,
    name: str,
    birth_date: date,
    weight: float,
    color: str,
    owner: Owner,
    breed: Optional[str] = None,
    is_dangerous: bool = False,
    registration_number: Optional[str] = None,
    is_indoor: bool = True,
    is_hypoallergenic: bool = False,
    species: Optional[str] = None,
    wing_span: Optional[float] = None,
    can_talk: bool = False,
    **identity,
) -> Animal:
    """Build the Animal variant named by ``animal_type``.

    Variant fields that do not apply to the resolved type are ignored.
    ``identity`` carries reconstitution values (id, created_at,
    updated_at, version) for animals loaded from storage.

    Raises:
        UnsupportedAnimalTypeError: If the type is not dog, cat or bird.
        InvalidAnimalDataError: If a field fails validation.
    """
    kind = AnimalType.parse(animal_type)
    common = dict(
        name=name,
        birth_date=birth_date,
        weight=weight,
        color=color,
        owner=owner,
        **identity,
    )
    if kind is AnimalType.DOG:
        return Dog(
            breed=breed,
            is_dangerous=is_dangerous,
            registration_number=registration_number,
            **common,
        )
    if kind is AnimalType.CAT:
        return Cat(is_indoor=is_indoor, is_hypoallergenic=is_hypoallergenic, **common)
    return Bird(species=species, wing_span=wing_span, can_talk=can_talk, **common)
