"""
Use case: Retrieve one animal.

Input: animal id
Output: AnimalResult
Side effects: None.
Failure cases: AnimalNotFoundError.
"""

from petcare.application.pets.assemblers import to_animal_result
from petcare.application.pets.dtos import AnimalResult
from petcare.domain.pets.ports import AnimalRepository


class GetAnimalUseCase:
    """Loads an animal and assembles its derived attributes."""

    def __init__(self, animal_repository: AnimalRepository) -> None:
        self._animal_repository = animal_repository

    def execute(self, animal_id: int) -> AnimalResult:
        return to_animal_result(self._animal_repository.find_by_id(animal_id))
