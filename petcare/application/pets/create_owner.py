"""
Use case: Register a new owner.

Input: CreateOwnerCommand
Output: OwnerResult
Side effects: Inserts the owner.
Failure cases: DomainValidationError (any field), EmailAlreadyInUseError.
"""

import logging

from petcare.application.pets.assemblers import to_owner_result
from petcare.application.pets.dtos import CreateOwnerCommand, OwnerResult
from petcare.domain.pets.entities import Owner
from petcare.domain.pets.errors import EmailAlreadyInUseError
from petcare.domain.pets.ports import OwnerRepository
from petcare.domain.pets.value_objects import Address, Email, PhoneNumber

logger = logging.getLogger(__name__)


class CreateOwnerUseCase:
    """Builds an Owner from raw input and stores it.

    Value objects are constructed first, so a malformed email or phone
    number fails before the owner exists. Email uniqueness is checked
    through the repository.
    """

    def __init__(self, owner_repository: OwnerRepository) -> None:
        self._owner_repository = owner_repository

    def execute(self, command: CreateOwnerCommand) -> OwnerResult:
        """Run the create-owner use case.

        Args:
            command: Owner identity, contact and address fields.

        Returns:
            The stored owner, with an empty animal list.

        Raises:
            EmailAlreadyInUseError: If the email belongs to another owner.
        """
        email = Email(command.email)
        phone_number = PhoneNumber(command.phone_number)
        address = Address(
            street=command.street,
            city=command.city,
            postal_code=command.postal_code,
            country=command.country,
        )
        if self._owner_repository.exists_by_email(email.value):
            raise EmailAlreadyInUseError(email.value)

        owner = Owner(
            first_name=command.first_name,
            last_name=command.last_name,
            email=email,
            phone_number=phone_number,
            address=address,
        )
        self._owner_repository.save(owner)
        logger.info("Created owner id=%s", owner.id)
        return to_owner_result(owner, include_details=True)
