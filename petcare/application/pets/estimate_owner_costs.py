"""
Use case: Estimate the yearly cost of an owner's animals.

Input: owner id
Output: AnnualCostResult
Side effects: None.
Failure cases: OwnerNotFoundError.
"""

from petcare.application.pets.dtos import AnnualCostResult
from petcare.domain.pets.ports import OwnerRepository


class EstimateOwnerCostsUseCase:
    """Sums per-animal yearly cost estimates for one owner."""

    def __init__(self, owner_repository: OwnerRepository) -> None:
        self._owner_repository = owner_repository

    def execute(self, owner_id: int) -> AnnualCostResult:
        owner = self._owner_repository.find_by_id(owner_id)
        estimate = owner.get_estimated_total_annual_cost()
        return AnnualCostResult(
            owner_id=owner.id,
            total=estimate.total,
            breakdown=dict(estimate.breakdown),
            currency=estimate.currency,
            note=estimate.note,
        )
