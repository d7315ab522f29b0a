"""
Use case: Delete an animal.

Input: animal id
Output: None
Side effects: Removes the animal row.
Failure cases: AnimalNotFoundError.
"""

import logging

from petcare.domain.pets.ports import AnimalRepository

logger = logging.getLogger(__name__)


class DeleteAnimalUseCase:
    """Removes an animal from its owner and from storage."""

    def __init__(self, animal_repository: AnimalRepository) -> None:
        self._animal_repository = animal_repository

    def execute(self, animal_id: int) -> None:
        animal = self._animal_repository.find_by_id(animal_id)
        self._animal_repository.delete(animal)
        logger.info("Deleted animal id=%s", animal_id)
