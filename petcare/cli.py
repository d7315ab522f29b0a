"""
CLI entry point for pet care administration.

Usage:
    # Create missing tables
    python -m petcare.cli init-db

    # Load the demonstration owners and animals
    python -m petcare.cli create-sample-data

    # Print collection statistics
    python -m petcare.cli stats
"""

import argparse
import logging
import sys
from datetime import date
from typing import Optional, Sequence

from petcare.application.pets.create_animal import CreateAnimalUseCase
from petcare.application.pets.create_owner import CreateOwnerUseCase
from petcare.application.pets.dtos import CreateAnimalCommand, CreateOwnerCommand
from petcare.application.pets.get_animal_statistics import GetAnimalStatisticsUseCase
from petcare.core.config import settings
from petcare.domain.pets.errors import PetDomainError
from petcare.domain.pets.management_service import AnimalManagementService
from petcare.infrastructure.pets.animal_repository import AnimalRepositoryAdapter
from petcare.infrastructure.pets.database import SqlDatabase, build_engine
from petcare.infrastructure.pets.owner_repository import OwnerRepositoryAdapter
from petcare.shared.logging import configure_logging

logger = logging.getLogger(__name__)

SAMPLE_OWNERS = (
    CreateOwnerCommand(
        first_name="Jean",
        last_name="Dupont",
        email="jean.dupont@example.com",
        phone_number="0612345678",
        street="123 Rue de la République",
        city="Paris",
        postal_code="75001",
    ),
    CreateOwnerCommand(
        first_name="Marie",
        last_name="Martin",
        email="marie.martin@example.com",
        phone_number="0623456789",
        street="456 Avenue des Champs",
        city="Lyon",
        postal_code="69001",
    ),
    CreateOwnerCommand(
        first_name="Pierre",
        last_name="Dubois",
        email="pierre.dubois@example.com",
        phone_number="0634567890",
        street="789 Boulevard du Centre",
        city="Marseille",
        postal_code="13001",
    ),
)

# (owner index in SAMPLE_OWNERS, animal fields)
SAMPLE_ANIMALS = (
    (0, dict(animal_type="dog", name="Rex", birth_date=date(2019, 3, 15),
             weight=25.5, color="Marron", breed="Berger Allemand")),
    (1, dict(animal_type="dog", name="Max", birth_date=date(2020, 7, 22),
             weight=8.2, color="Blanc", breed="Jack Russell")),
    (0, dict(animal_type="cat", name="Minou", birth_date=date(2018, 11, 5),
             weight=4.5, color="Gris", is_indoor=True)),
    (1, dict(animal_type="cat", name="Félix", birth_date=date(2021, 2, 14),
             weight=3.8, color="Noir et blanc", is_indoor=False)),
    (2, dict(animal_type="bird", name="Coco", birth_date=date(2017, 5, 20),
             weight=0.4, color="Vert et jaune", species="Perroquet",
             wing_span=35.0, can_talk=True)),
    (2, dict(animal_type="bird", name="Piou-Piou", birth_date=date(2022, 1, 10),
             weight=0.02, color="Jaune", species="Canari", wing_span=15.0)),
)


def _open_database() -> SqlDatabase:
    return SqlDatabase(build_engine(settings.get_database_dsn()))


def cmd_init_db(database: SqlDatabase, _args: argparse.Namespace) -> int:
    """Create missing tables."""
    database.create_schema()
    print("Database schema ready.")
    return 0


def cmd_create_sample_data(database: SqlDatabase, _args: argparse.Namespace) -> int:
    """Create the demonstration owners and animals through the use cases."""
    database.create_schema()
    owner_repository = OwnerRepositoryAdapter(database)
    create_owner = CreateOwnerUseCase(owner_repository=owner_repository)
    create_animal = CreateAnimalUseCase(
        animal_repository=AnimalRepositoryAdapter(database),
        owner_repository=owner_repository,
    )

    try:
        with database.transaction():
            owners = []
            for command in SAMPLE_OWNERS:
                owner = create_owner.execute(command)
                owners.append(owner)
                print(f"Owner created: {owner.full_name}")

            for owner_index, fields in SAMPLE_ANIMALS:
                animal = create_animal.execute(
                    CreateAnimalCommand(owner_id=owners[owner_index].id, **fields)
                )
                print(f"{animal.type_label} created: {animal.name} ({animal.sound})")
    except PetDomainError as exc:
        logger.error("Sample data could not be created: %s", type(exc).__name__)
        print(f"Error while creating sample data: {exc.message}", file=sys.stderr)
        return 1

    print(
        f"Sample data created: {len(SAMPLE_OWNERS)} owners, "
        f"{len(SAMPLE_ANIMALS)} animals."
    )
    return 0


def cmd_stats(database: SqlDatabase, _args: argparse.Namespace) -> int:
    """Print owner and animal counts."""
    database.create_schema()
    animal_repository = AnimalRepositoryAdapter(database)
    owner_repository = OwnerRepositoryAdapter(database)
    use_case = GetAnimalStatisticsUseCase(
        management_service=AnimalManagementService(
            animal_repository=animal_repository,
            owner_repository=owner_repository,
        )
    )
    stats = use_case.execute()

    print(f"Owners: {owner_repository.count()}")
    for label, count in stats.by_type.items():
        print(f"{label}: {count}")
    print(f"Total animals: {stats.total_animals}")
    print(f"Average age: {stats.average_age}")
    for animal in stats.needing_attention:
        print(f"Needs attention: {animal.name} ({animal.type}, {animal.age} years)")
    return 0


COMMANDS = {
    "init-db": cmd_init_db,
    "create-sample-data": cmd_create_sample_data,
    "stats": cmd_stats,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="petcare", description="PetCare administration commands"
    )
    sub = parser.add_subparsers(dest="command", required=True)
    sub.add_parser("init-db", help="Create missing database tables")
    sub.add_parser("create-sample-data", help="Create demonstration owners and animals")
    sub.add_parser("stats", help="Print owner and animal statistics")
    return parser


def main(
    argv: Optional[Sequence[str]] = None, database: Optional[SqlDatabase] = None
) -> int:
    """Parse arguments and dispatch to the selected command."""
    args = build_parser().parse_args(argv)
    configure_logging(level=settings.log_level)
    if database is None:
        database = _open_database()
    return COMMANDS[args.command](database, args)


if __name__ == "__main__":
    sys.exit(main())
