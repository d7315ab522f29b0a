"""
Use case: Delete an owner and their animals.

Input: owner id
Output: None
Side effects: Removes the owner row; animals go with it.
Failure cases: OwnerNotFoundError.
"""

import logging

from petcare.domain.pets.ports import OwnerRepository

logger = logging.getLogger(__name__)


class DeleteOwnerUseCase:
    """Removes an owner. Their animals are deleted with them."""

    def __init__(self, owner_repository: OwnerRepository) -> None:
        self._owner_repository = owner_repository

    def execute(self, owner_id: int) -> None:
        owner = self._owner_repository.find_by_id(owner_id)
        removed = owner.get_total_animals()
        self._owner_repository.delete(owner)
        logger.info("Deleted owner id=%s with %d animal(s)", owner_id, removed)
