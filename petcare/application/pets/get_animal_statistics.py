"""
Use case: Collection-wide animal statistics.

Input: None
Output: AnimalStatisticsResult
Side effects: None.
"""

from petcare.application.pets.assemblers import to_animal_summary
from petcare.application.pets.dtos import AnimalStatisticsResult
from petcare.domain.pets.management_service import AnimalManagementService


class GetAnimalStatisticsUseCase:
    """Counts by type, average age and animals needing attention."""

    def __init__(self, management_service: AnimalManagementService) -> None:
        self._management_service = management_service

    def execute(self) -> AnimalStatisticsResult:
        by_type = self._management_service.get_animal_statistics_by_type()
        return AnimalStatisticsResult(
            total_animals=sum(by_type.values()),
            by_type=by_type,
            average_age=self._management_service.calculate_average_age(),
            needing_attention=[
                to_animal_summary(animal)
                for animal in self._management_service.find_animals_needing_attention()
            ],
        )
