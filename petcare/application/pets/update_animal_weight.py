"""
Use case: Record a new weight for an animal.

Input: UpdateAnimalWeightCommand (animal id, weight in kg)
Output: AnimalResult (weight_alert set when the change exceeds 10%)
Side effects: Updates the animal row. Logs a warning on a large change.
Failure cases: AnimalNotFoundError, InvalidAnimalDataError.
"""

import logging

from petcare.application.pets.assemblers import to_animal_result
from petcare.application.pets.dtos import AnimalResult, UpdateAnimalWeightCommand
from petcare.domain.pets.ports import AnimalRepository

logger = logging.getLogger(__name__)


class UpdateAnimalWeightUseCase:
    """Stores the new weight and reports sudden weight changes.

    A change of more than 10% does not block the update; it is logged
    and flagged on the result.
    """

    def __init__(self, animal_repository: AnimalRepository) -> None:
        self._animal_repository = animal_repository

    def execute(self, command: UpdateAnimalWeightCommand) -> AnimalResult:
        animal = self._animal_repository.find_by_id(command.animal_id)
        previous = animal.weight
        alert = animal.update_weight(command.weight)
        if alert:
            logger.warning(
                "Significant weight change for animal id=%s: %.2f kg -> %.2f kg",
                animal.id,
                previous,
                animal.weight,
            )
        self._animal_repository.save(animal)
        return to_animal_result(animal, weight_alert=alert)
