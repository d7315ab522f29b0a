"""
Use case: List owners page by page.

Input: ListOwnersQuery (page, per_page, optional city)
Output: OwnerPageResult
Side effects: None.
"""

from petcare.application.pets.assemblers import to_owner_result
from petcare.application.pets.dtos import ListOwnersQuery, OwnerPageResult
from petcare.domain.pets.ports import OwnerRepository

MAX_PER_PAGE = 100


class ListOwnersUseCase:
    """Returns a page of owners ordered by name."""

    def __init__(self, owner_repository: OwnerRepository) -> None:
        self._owner_repository = owner_repository

    def execute(self, query: ListOwnersQuery) -> OwnerPageResult:
        page = max(query.page, 1)
        per_page = min(max(query.per_page, 1), MAX_PER_PAGE)
        result = self._owner_repository.paginate(
            page=page, per_page=per_page, city=query.city
        )
        return OwnerPageResult(
            items=[to_owner_result(owner) for owner in result.items],
            total=result.total,
            page=result.page,
            per_page=result.per_page,
            total_pages=result.total_pages,
        )
