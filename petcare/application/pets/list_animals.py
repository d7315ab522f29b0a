"""
Use case: List animals.

Input: ListAnimalsQuery (optional type filter)
Output: list[AnimalResult]
Side effects: None.
Failure cases: UnsupportedAnimalTypeError for an unknown type filter.
"""

from petcare.application.pets.assemblers import to_animal_result
from petcare.application.pets.dtos import AnimalResult, ListAnimalsQuery
from petcare.domain.pets.ports import AnimalRepository


class ListAnimalsUseCase:
    """Returns every animal, or only those of one type."""

    def __init__(self, animal_repository: AnimalRepository) -> None:
        self._animal_repository = animal_repository

    def execute(self, query: ListAnimalsQuery) -> list[AnimalResult]:
        if query.animal_type:
            animals = self._animal_repository.find_by_type(query.animal_type)
        else:
            animals = self._animal_repository.find_all()
        return [to_animal_result(animal) for animal in animals]
