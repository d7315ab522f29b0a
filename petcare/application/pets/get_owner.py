"""
Use case: Retrieve one owner.

Input: owner id
Output: OwnerResult (with animals and statistics by default)
Side effects: None.
Failure cases: OwnerNotFoundError.
"""

from petcare.application.pets.assemblers import to_owner_result
from petcare.application.pets.dtos import OwnerResult
from petcare.domain.pets.ports import OwnerRepository


class GetOwnerUseCase:
    """Loads an owner with their animals."""

    def __init__(self, owner_repository: OwnerRepository) -> None:
        self._owner_repository = owner_repository

    def execute(self, owner_id: int, include_animals: bool = True) -> OwnerResult:
        owner = self._owner_repository.find_by_id(owner_id)
        return to_owner_result(owner, include_details=include_animals)
