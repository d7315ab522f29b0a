"""
Use case: Transfer an animal to another owner.

Input: TransferOwnershipCommand (animal id, new owner id)
Output: AnimalResult
Side effects: Updates the animal and both owners in one transaction.
Failure cases: AnimalNotFoundError, OwnerNotFoundError, DogLimitReachedError,
    StaleAggregateError.
"""

import logging

from petcare.application.pets.assemblers import to_animal_result
from petcare.application.pets.dtos import AnimalResult, TransferOwnershipCommand
from petcare.domain.pets.entities import DOG_LIMIT, AnimalType
from petcare.domain.pets.errors import DogLimitReachedError
from petcare.domain.pets.management_service import AnimalManagementService
from petcare.domain.pets.ports import AnimalRepository, OwnerRepository

logger = logging.getLogger(__name__)


class TransferOwnershipUseCase:
    """Moves an animal to a new owner through the management service."""

    def __init__(
        self,
        animal_repository: AnimalRepository,
        owner_repository: OwnerRepository,
        management_service: AnimalManagementService,
    ) -> None:
        self._animal_repository = animal_repository
        self._owner_repository = owner_repository
        self._management_service = management_service

    def execute(self, command: TransferOwnershipCommand) -> AnimalResult:
        animal = self._animal_repository.find_by_id(command.animal_id)
        current = animal.owner
        if current is not None and current.id == command.new_owner_id:
            return to_animal_result(animal)

        new_owner = self._owner_repository.find_by_id(command.new_owner_id)
        if animal.animal_type is AnimalType.DOG and new_owner.has_reached_dog_limit():
            raise DogLimitReachedError(new_owner.id, DOG_LIMIT)

        self._management_service.transfer_ownership(animal, new_owner)
        logger.info(
            "Transferred animal id=%s from owner id=%s to owner id=%s",
            animal.id,
            current.id if current is not None else None,
            new_owner.id,
        )
        return to_animal_result(animal)
