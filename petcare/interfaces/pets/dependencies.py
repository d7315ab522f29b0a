"""
Dependency injection for the pets bounded context.

Provides FastAPI dependency functions that wire infrastructure
adapters into use cases via constructor injection.
These are the composition root for the pets context.
"""

from functools import lru_cache

from fastapi import Depends

from petcare.application.pets.create_animal import CreateAnimalUseCase
from petcare.application.pets.create_owner import CreateOwnerUseCase
from petcare.application.pets.delete_animal import DeleteAnimalUseCase
from petcare.application.pets.delete_owner import DeleteOwnerUseCase
from petcare.application.pets.estimate_owner_costs import EstimateOwnerCostsUseCase
from petcare.application.pets.get_animal import GetAnimalUseCase
from petcare.application.pets.get_animal_statistics import GetAnimalStatisticsUseCase
from petcare.application.pets.get_owner import GetOwnerUseCase
from petcare.application.pets.list_animals import ListAnimalsUseCase
from petcare.application.pets.list_owners import ListOwnersUseCase
from petcare.application.pets.transfer_ownership import TransferOwnershipUseCase
from petcare.application.pets.update_animal_weight import UpdateAnimalWeightUseCase
from petcare.application.pets.update_owner import UpdateOwnerUseCase
from petcare.core.config import settings
from petcare.domain.pets.management_service import AnimalManagementService
from petcare.infrastructure.pets.animal_repository import AnimalRepositoryAdapter
from petcare.infrastructure.pets.database import SqlDatabase, build_engine
from petcare.infrastructure.pets.owner_repository import OwnerRepositoryAdapter


@lru_cache(maxsize=1)
def get_database() -> SqlDatabase:
    """Build the process-wide database from application settings."""
    return SqlDatabase(build_engine(settings.get_database_dsn()))


def get_animal_repository(
    database: SqlDatabase = Depends(get_database),
) -> AnimalRepositoryAdapter:
    return AnimalRepositoryAdapter(database)


def get_owner_repository(
    database: SqlDatabase = Depends(get_database),
) -> OwnerRepositoryAdapter:
    return OwnerRepositoryAdapter(database)


def get_management_service(
    database: SqlDatabase = Depends(get_database),
) -> AnimalManagementService:
    """Build the domain service with a unit of work over the same database."""
    return AnimalManagementService(
        animal_repository=AnimalRepositoryAdapter(database),
        owner_repository=OwnerRepositoryAdapter(database),
        unit_of_work=database,
    )


# ── Owners ───────────────────────────────────────────────────────────


def get_create_owner_use_case(
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> CreateOwnerUseCase:
    """Build CreateOwnerUseCase with its infrastructure dependencies."""
    return CreateOwnerUseCase(owner_repository=owner_repository)


def get_get_owner_use_case(
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> GetOwnerUseCase:
    """Build GetOwnerUseCase with its infrastructure dependencies."""
    return GetOwnerUseCase(owner_repository=owner_repository)


def get_list_owners_use_case(
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> ListOwnersUseCase:
    """Build ListOwnersUseCase with its infrastructure dependencies."""
    return ListOwnersUseCase(owner_repository=owner_repository)


def get_update_owner_use_case(
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> UpdateOwnerUseCase:
    """Build UpdateOwnerUseCase with its infrastructure dependencies."""
    return UpdateOwnerUseCase(owner_repository=owner_repository)


def get_delete_owner_use_case(
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> DeleteOwnerUseCase:
    """Build DeleteOwnerUseCase with its infrastructure dependencies."""
    return DeleteOwnerUseCase(owner_repository=owner_repository)


def get_estimate_owner_costs_use_case(
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> EstimateOwnerCostsUseCase:
    """Build EstimateOwnerCostsUseCase with its infrastructure dependencies."""
    return EstimateOwnerCostsUseCase(owner_repository=owner_repository)


# ── Animals ──────────────────────────────────────────────────────────


def get_create_animal_use_case(
    animal_repository: AnimalRepositoryAdapter = Depends(get_animal_repository),
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
) -> CreateAnimalUseCase:
    """Build CreateAnimalUseCase with its infrastructure dependencies."""
    return CreateAnimalUseCase(
        animal_repository=animal_repository,
        owner_repository=owner_repository,
    )


def get_get_animal_use_case(
    animal_repository: AnimalRepositoryAdapter = Depends(get_animal_repository),
) -> GetAnimalUseCase:
    """Build GetAnimalUseCase with its infrastructure dependencies."""
    return GetAnimalUseCase(animal_repository=animal_repository)


def get_list_animals_use_case(
    animal_repository: AnimalRepositoryAdapter = Depends(get_animal_repository),
) -> ListAnimalsUseCase:
    """Build ListAnimalsUseCase with its infrastructure dependencies."""
    return ListAnimalsUseCase(animal_repository=animal_repository)


def get_delete_animal_use_case(
    animal_repository: AnimalRepositoryAdapter = Depends(get_animal_repository),
) -> DeleteAnimalUseCase:
    """Build DeleteAnimalUseCase with its infrastructure dependencies."""
    return DeleteAnimalUseCase(animal_repository=animal_repository)


def get_update_animal_weight_use_case(
    animal_repository: AnimalRepositoryAdapter = Depends(get_animal_repository),
) -> UpdateAnimalWeightUseCase:
    """Build UpdateAnimalWeightUseCase with its infrastructure dependencies."""
    return UpdateAnimalWeightUseCase(animal_repository=animal_repository)


def get_transfer_ownership_use_case(
    animal_repository: AnimalRepositoryAdapter = Depends(get_animal_repository),
    owner_repository: OwnerRepositoryAdapter = Depends(get_owner_repository),
    management_service: AnimalManagementService = Depends(get_management_service),
) -> TransferOwnershipUseCase:
    """Build TransferOwnershipUseCase with its infrastructure dependencies."""
    return TransferOwnershipUseCase(
        animal_repository=animal_repository,
        owner_repository=owner_repository,
        management_service=management_service,
    )


def get_animal_statistics_use_case(
    management_service: AnimalManagementService = Depends(get_management_service),
) -> GetAnimalStatisticsUseCase:
    """Build GetAnimalStatisticsUseCase with its infrastructure dependencies."""
    return GetAnimalStatisticsUseCase(management_service=management_service)
