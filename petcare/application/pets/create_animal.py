"""
Use case: Register an animal for an existing owner.

Input: CreateAnimalCommand
Output: AnimalResult
Side effects: Inserts the animal.
Failure cases: OwnerNotFoundError, UnsupportedAnimalTypeError,
    InvalidAnimalDataError, DogLimitReachedError.
"""

import logging

from petcare.application.pets.assemblers import to_animal_result
from petcare.application.pets.dtos import AnimalResult, CreateAnimalCommand
from petcare.domain.pets.entities import DOG_LIMIT, AnimalType
from petcare.domain.pets.errors import DogLimitReachedError
from petcare.domain.pets.factory import create_animal
from petcare.domain.pets.ports import AnimalRepository, OwnerRepository

logger = logging.getLogger(__name__)


class CreateAnimalUseCase:
    """Builds the requested Animal variant and binds it to its owner.

    The owner is mandatory. An owner who already has five dogs cannot
    register another one.
    """

    def __init__(
        self,
        animal_repository: AnimalRepository,
        owner_repository: OwnerRepository,
    ) -> None:
        self._animal_repository = animal_repository
        self._owner_repository = owner_repository

    def execute(self, command: CreateAnimalCommand) -> AnimalResult:
        """Run the create-animal use case.

        Args:
            command: Common and variant-specific animal fields.

        Returns:
            The stored animal.

        Raises:
            DogLimitReachedError: If the owner already has five dogs.
        """
        animal_type = AnimalType.parse(command.animal_type)
        owner = self._owner_repository.find_by_id(command.owner_id)
        if animal_type is AnimalType.DOG and owner.has_reached_dog_limit():
            raise DogLimitReachedError(owner.id, DOG_LIMIT)

        animal = create_animal(
            animal_type,
            name=command.name,
            birth_date=command.birth_date,
            weight=command.weight,
            color=command.color,
            owner=owner,
            breed=command.breed,
            is_dangerous=command.is_dangerous,
            registration_number=command.registration_number,
            is_indoor=command.is_indoor,
            is_hypoallergenic=command.is_hypoallergenic,
            species=command.species,
            wing_span=command.wing_span,
            can_talk=command.can_talk,
        )
        self._animal_repository.save(animal)
        logger.info(
            "Created %s id=%s for owner id=%s", animal_type.value, animal.id, owner.id
        )
        return to_animal_result(animal)
