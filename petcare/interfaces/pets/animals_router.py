"""
FastAPI router for animals.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from petcare.application.pets.create_animal import CreateAnimalUseCase
from petcare.application.pets.delete_animal import DeleteAnimalUseCase
from petcare.application.pets.dtos import (
    CreateAnimalCommand,
    ListAnimalsQuery,
    TransferOwnershipCommand,
    UpdateAnimalWeightCommand,
)
from petcare.application.pets.get_animal import GetAnimalUseCase
from petcare.application.pets.get_animal_statistics import GetAnimalStatisticsUseCase
from petcare.application.pets.list_animals import ListAnimalsUseCase
from petcare.application.pets.transfer_ownership import TransferOwnershipUseCase
from petcare.application.pets.update_animal_weight import UpdateAnimalWeightUseCase
from petcare.interfaces.pets.dependencies import (
    get_animal_statistics_use_case,
    get_create_animal_use_case,
    get_delete_animal_use_case,
    get_get_animal_use_case,
    get_list_animals_use_case,
    get_transfer_ownership_use_case,
    get_update_animal_weight_use_case,
)
from petcare.interfaces.pets.schemas import (
    AnimalListResponse,
    AnimalResponse,
    AnimalStatisticsResponse,
    CreateAnimalRequest,
    ErrorResponse,
    TransferOwnershipRequest,
    UpdateWeightRequest,
)

router = APIRouter(prefix="/animals", tags=["animals"])


@router.get(
    "",
    response_model=AnimalListResponse,
    responses={400: {"model": ErrorResponse}},
    summary="List animals",
    description="List every animal, optionally filtered by type (dog, cat, bird).",
)
def list_animals(
    animal_type: Optional[str] = Query(default=None, alias="type"),
    use_case: ListAnimalsUseCase = Depends(get_list_animals_use_case),
) -> AnimalListResponse:
    """List animals, optionally of one type."""
    results = use_case.execute(ListAnimalsQuery(animal_type=animal_type))
    return AnimalListResponse(
        items=[AnimalResponse.model_validate(r) for r in results],
        total=len(results),
    )


# Declared before "/{animal_id}" so the literal path wins.
@router.get(
    "/statistics",
    response_model=AnimalStatisticsResponse,
    summary="Animal statistics",
    description="Counts by type, average age and animals needing attention.",
)
def get_statistics(
    use_case: GetAnimalStatisticsUseCase = Depends(get_animal_statistics_use_case),
) -> AnimalStatisticsResponse:
    """Return collection-wide animal statistics."""
    return AnimalStatisticsResponse.model_validate(use_case.execute())


@router.get(
    "/{animal_id}",
    response_model=AnimalResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an animal",
    description="Return one animal with its derived care data.",
)
def get_animal(
    animal_id: int,
    use_case: GetAnimalUseCase = Depends(get_get_animal_use_case),
) -> AnimalResponse:
    """Return one animal."""
    return AnimalResponse.model_validate(use_case.execute(animal_id))


@router.post(
    "",
    response_model=AnimalResponse,
    status_code=status.HTTP_201_CREATED,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Register an animal",
    description="Register a dog, cat or bird for an existing owner.",
)
def create_animal(
    request: CreateAnimalRequest,
    use_case: CreateAnimalUseCase = Depends(get_create_animal_use_case),
) -> AnimalResponse:
    """Register an animal."""
    command = CreateAnimalCommand(
        animal_type=request.animal_type,
        name=request.name,
        birth_date=request.birth_date,
        weight=request.weight,
        color=request.color,
        owner_id=request.owner_id,
        breed=request.breed,
        is_dangerous=request.is_dangerous,
        registration_number=request.registration_number,
        is_indoor=request.is_indoor,
        is_hypoallergenic=request.is_hypoallergenic,
        species=request.species,
        wing_span=request.wing_span,
        can_talk=request.can_talk,
    )
    return AnimalResponse.model_validate(use_case.execute(command))


@router.patch(
    "/{animal_id}/weight",
    response_model=AnimalResponse,
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
    summary="Record a weight",
    description=(
        "Record a new weight. weightAlert is true when the change "
        "exceeds 10% of the previous weight."
    ),
)
def update_weight(
    animal_id: int,
    request: UpdateWeightRequest,
    use_case: UpdateAnimalWeightUseCase = Depends(get_update_animal_weight_use_case),
) -> AnimalResponse:
    """Record a new weight for an animal."""
    command = UpdateAnimalWeightCommand(animal_id=animal_id, weight=request.weight)
    return AnimalResponse.model_validate(use_case.execute(command))


@router.post(
    "/{animal_id}/transfer",
    response_model=AnimalResponse,
    responses={404: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Transfer an animal",
    description="Move an animal to another owner.",
)
def transfer_ownership(
    animal_id: int,
    request: TransferOwnershipRequest,
    use_case: TransferOwnershipUseCase = Depends(get_transfer_ownership_use_case),
) -> AnimalResponse:
    """Transfer an animal to another owner."""
    command = TransferOwnershipCommand(
        animal_id=animal_id, new_owner_id=request.new_owner_id
    )
    return AnimalResponse.model_validate(use_case.execute(command))


@router.delete(
    "/{animal_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete an animal",
)
def delete_animal(
    animal_id: int,
    use_case: DeleteAnimalUseCase = Depends(get_delete_animal_use_case),
) -> Response:
    """Delete an animal."""
    use_case.execute(animal_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
