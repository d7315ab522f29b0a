"""
FastAPI router for owners.

All routes delegate to use cases. No business logic here.
Input validation is handled by Pydantic schemas.
Error mapping is handled by centralized error handlers.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Response, status

from petcare.application.pets.create_owner import CreateOwnerUseCase
from petcare.application.pets.delete_owner import DeleteOwnerUseCase
from petcare.application.pets.dtos import (
    CreateOwnerCommand,
    ListOwnersQuery,
    UpdateOwnerCommand,
)
from petcare.application.pets.estimate_owner_costs import EstimateOwnerCostsUseCase
from petcare.application.pets.get_owner import GetOwnerUseCase
from petcare.application.pets.list_owners import ListOwnersUseCase
from petcare.application.pets.update_owner import UpdateOwnerUseCase
from petcare.core.config import settings
from petcare.interfaces.pets.dependencies import (
    get_create_owner_use_case,
    get_delete_owner_use_case,
    get_estimate_owner_costs_use_case,
    get_get_owner_use_case,
    get_list_owners_use_case,
    get_update_owner_use_case,
)
from petcare.interfaces.pets.schemas import (
    AnnualCostResponse,
    CreateOwnerRequest,
    ErrorResponse,
    OwnerPageResponse,
    OwnerResponse,
    UpdateOwnerRequest,
)

router = APIRouter(prefix="/owners", tags=["owners"])


@router.post(
    "",
    response_model=OwnerResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"model": ErrorResponse}, 409: {"model": ErrorResponse}},
    summary="Register an owner",
    description="Register an owner. The email address must not be in use.",
)
def create_owner(
    request: CreateOwnerRequest,
    use_case: CreateOwnerUseCase = Depends(get_create_owner_use_case),
) -> OwnerResponse:
    """Register an owner."""
    command = CreateOwnerCommand(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone_number=request.phone_number,
        street=request.street,
        city=request.city,
        postal_code=request.postal_code,
        country=request.country or settings.default_country,
    )
    return OwnerResponse.model_validate(use_case.execute(command))


@router.get(
    "",
    response_model=OwnerPageResponse,
    summary="List owners",
    description="List owners ordered by name, page by page, optionally by city.",
)
def list_owners(
    page: int = Query(default=1, ge=1),
    per_page: int = Query(default=20, ge=1, le=100, alias="perPage"),
    city: Optional[str] = Query(default=None, max_length=100),
    use_case: ListOwnersUseCase = Depends(get_list_owners_use_case),
) -> OwnerPageResponse:
    """List one page of owners."""
    result = use_case.execute(ListOwnersQuery(page=page, per_page=per_page, city=city))
    return OwnerPageResponse.model_validate(result)


@router.get(
    "/{owner_id}",
    response_model=OwnerResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Get an owner",
    description="Return one owner with their animals and statistics.",
)
def get_owner(
    owner_id: int,
    use_case: GetOwnerUseCase = Depends(get_get_owner_use_case),
) -> OwnerResponse:
    """Return one owner."""
    return OwnerResponse.model_validate(use_case.execute(owner_id))


@router.patch(
    "/{owner_id}",
    response_model=OwnerResponse,
    responses={
        400: {"model": ErrorResponse},
        404: {"model": ErrorResponse},
        409: {"model": ErrorResponse},
    },
    summary="Update an owner",
    description="Partially update an owner. Omitted fields are left unchanged.",
)
def update_owner(
    owner_id: int,
    request: UpdateOwnerRequest,
    use_case: UpdateOwnerUseCase = Depends(get_update_owner_use_case),
) -> OwnerResponse:
    """Partially update an owner."""
    command = UpdateOwnerCommand(
        owner_id=owner_id,
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        phone_number=request.phone_number,
        street=request.street,
        city=request.city,
        postal_code=request.postal_code,
        country=request.country,
        is_active=request.is_active,
    )
    return OwnerResponse.model_validate(use_case.execute(command))


@router.delete(
    "/{owner_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={404: {"model": ErrorResponse}},
    summary="Delete an owner",
    description="Delete an owner together with their animals.",
)
def delete_owner(
    owner_id: int,
    use_case: DeleteOwnerUseCase = Depends(get_delete_owner_use_case),
) -> Response:
    """Delete an owner and their animals."""
    use_case.execute(owner_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.get(
    "/{owner_id}/annual-cost",
    response_model=AnnualCostResponse,
    responses={404: {"model": ErrorResponse}},
    summary="Estimate yearly costs",
    description="Estimate the yearly cost of an owner's animals, in EUR.",
)
def get_annual_cost(
    owner_id: int,
    use_case: EstimateOwnerCostsUseCase = Depends(get_estimate_owner_costs_use_case),
) -> AnnualCostResponse:
    """Estimate the yearly cost of an owner's animals."""
    return AnnualCostResponse.model_validate(use_case.execute(owner_id))
