"""
Response assembly: entity -> result DTO mapping.

Derived values (age, needs, sound, description) are computed here at
assembly time, so every result reflects the current date. Variant data
is dispatched on the animal's type tag.
"""

from dataclasses import asdict
from typing import Any, Optional

from petcare.application.pets.dtos import (
    AddressResult,
    AnimalResult,
    AnimalSummary,
    OwnerRef,
    OwnerResult,
    OwnerStatistics,
)
from petcare.domain.pets.entities import Animal, AnimalType, Bird, Cat, Dog, Owner


def _camel(key: str) -> str:
    head, *rest = key.split("_")
    return head + "".join(part.title() for part in rest)


def _camelize(data: dict) -> dict:
    return {_camel(key): value for key, value in data.items()}


def _dog_data(dog: Dog) -> dict[str, Any]:
    cost = dog.estimated_annual_cost()
    return {
        "breed": dog.breed,
        "isDangerous": dog.is_dangerous,
        "registrationNumber": dog.registration_number,
        "isProperlyIdentified": dog.is_properly_identified(),
        "isLargeBreed": dog.is_large_breed(),
        "dangerCategory": dog.danger_category(),
        "requiresMunicipalDeclaration": dog.requires_municipal_declaration(),
        "minimumExerciseMinutes": dog.minimum_exercise_duration(),
        "dailyFood": _camelize(dog.daily_food_requirement()),
        "estimatedAnnualCost": {**asdict(cost), "total": cost.total},
    }


def _cat_data(cat: Cat) -> dict[str, Any]:
    return {
        "isIndoor": cat.is_indoor,
        "isHypoallergenic": cat.is_hypoallergenic,
        "habitat": cat.habitat_status(),
        "isOverweight": cat.is_overweight(),
        "activityLevel": cat.recommended_activity_level(),
        "vetVisitFrequency": cat.vet_visit_frequency(),
        "careAdvice": cat.care_advice(),
        "dailyFood": _camelize(cat.daily_food_requirement()),
    }


def _bird_data(bird: Bird) -> dict[str, Any]:
    return {
        "species": bird.species,
        "wingSpan": bird.wing_span,
        "canTalk": bird.can_talk,
        "isLargeBird": bird.is_large_bird(),
        "estimatedLifespan": bird.estimated_lifespan(),
        "recommendedCageSize": bird.recommended_cage_size(),
    }


SPECIFIC_DATA_BUILDERS = {
    AnimalType.DOG: _dog_data,
    AnimalType.CAT: _cat_data,
    AnimalType.BIRD: _bird_data,
}


def to_owner_ref(owner: Optional[Owner]) -> Optional[OwnerRef]:
    if owner is None:
        return None
    return OwnerRef(id=owner.id, name=owner.full_name)


def to_animal_result(animal: Animal, weight_alert: bool = False) -> AnimalResult:
    """Map an animal to its full output DTO."""
    return AnimalResult(
        id=animal.id,
        type=animal.animal_type.value,
        type_label=animal.get_type(),
        name=animal.name,
        birth_date=animal.birth_date,
        age=animal.calculate_age(),
        weight=animal.weight,
        color=animal.color,
        owner=to_owner_ref(animal.owner),
        special_needs=animal.get_special_needs(),
        sound=animal.make_sound(),
        description=animal.describe(),
        specific_data=SPECIFIC_DATA_BUILDERS[animal.animal_type](animal),
        created_at=animal.created_at,
        updated_at=animal.updated_at,
        weight_alert=weight_alert,
    )


def to_animal_summary(animal: Animal) -> AnimalSummary:
    return AnimalSummary(
        id=animal.id,
        type=animal.animal_type.value,
        name=animal.name,
        age=animal.calculate_age(),
        color=animal.color,
    )


def to_owner_statistics(owner: Owner) -> OwnerStatistics:
    return OwnerStatistics(
        total_animals=owner.get_total_animals(),
        animals_by_type=owner.count_animals_by_type(),
        average_age=owner.get_average_animal_age(),
        senior_animals=len(owner.get_senior_animals()),
    )


def to_owner_result(owner: Owner, include_details: bool = False) -> OwnerResult:
    """Map an owner to its output DTO.

    Args:
        owner: The owner aggregate, animals loaded.
        include_details: Add the animal list and statistics block.
    """
    address = owner.address
    return OwnerResult(
        id=owner.id,
        first_name=owner.first_name,
        last_name=owner.last_name,
        full_name=owner.full_name,
        email=owner.email.value,
        phone_number=owner.phone_number.formatted,
        address=AddressResult(
            street=address.street,
            city=address.city,
            postal_code=address.postal_code,
            country=address.country,
            full_address=address.full_address,
        ),
        total_animals=owner.get_total_animals(),
        is_active=owner.is_active,
        registration_date=owner.registration_date,
        updated_at=owner.updated_at,
        animals=(
            [to_animal_summary(animal) for animal in owner.animals]
            if include_details
            else None
        ),
        statistics=to_owner_statistics(owner) if include_details else None,
    )
