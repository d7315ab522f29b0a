"""
Use case: Partially update an owner.

Input: UpdateOwnerCommand (owner id plus optional fields)
Output: OwnerResult
Side effects: Updates the owner row when something changed.
Failure cases: OwnerNotFoundError, DomainValidationError, EmailAlreadyInUseError.
"""

import logging

from petcare.application.pets.assemblers import to_owner_result
from petcare.application.pets.dtos import OwnerResult, UpdateOwnerCommand
from petcare.domain.pets.errors import EmailAlreadyInUseError
from petcare.domain.pets.ports import OwnerRepository
from petcare.domain.pets.value_objects import Address, Email, PhoneNumber

logger = logging.getLogger(__name__)


class UpdateOwnerUseCase:
    """Applies the provided fields through the owner's named mutators.

    Every new value is validated before the first mutator runs, so an
    invalid field leaves the owner untouched.
    """

    def __init__(self, owner_repository: OwnerRepository) -> None:
        self._owner_repository = owner_repository

    def execute(self, command: UpdateOwnerCommand) -> OwnerResult:
        owner = self._owner_repository.find_by_id(command.owner_id)

        email = Email(command.email) if command.email is not None else owner.email
        phone_number = (
            PhoneNumber(command.phone_number)
            if command.phone_number is not None
            else owner.phone_number
        )
        current = owner.address
        address = Address(
            street=_pick(command.street, current.street),
            city=_pick(command.city, current.city),
            postal_code=_pick(command.postal_code, current.postal_code),
            country=_pick(command.country, current.country),
        )
        if email != owner.email and self._owner_repository.exists_by_email(
            email.value, exclude_owner_id=owner.id
        ):
            raise EmailAlreadyInUseError(email.value)

        owner.update_name(
            _pick(command.first_name, owner.first_name),
            _pick(command.last_name, owner.last_name),
        )
        owner.update_contact_info(email, phone_number)
        owner.update_address(address)
        if command.is_active is True:
            owner.activate()
        elif command.is_active is False:
            owner.deactivate()

        self._owner_repository.save(owner)
        logger.info("Updated owner id=%s", owner.id)
        return to_owner_result(owner, include_details=True)


def _pick(value, fallback):
    return fallback if value is None else value
