"""
Shared fixtures for the pets test suites.

Environment variables are set before the application is imported so
the settings singleton picks them up.
"""

import os

os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["AUTO_CREATE_SCHEMA"] = "false"

from datetime import date  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from petcare.domain.pets.entities import Bird, Cat, Dog, Owner  # noqa: E402
from petcare.domain.pets.value_objects import Address, Email, PhoneNumber  # noqa: E402
from petcare.infrastructure.pets.database import SqlDatabase, build_engine  # noqa: E402
from petcare.interfaces.pets.dependencies import get_database  # noqa: E402
from petcare.main import app  # noqa: E402


def _years_ago(years: int) -> date:
    today = date.today()
    try:
        return today.replace(year=today.year - years)
    except ValueError:
        return today.replace(year=today.year - years, day=28)


@pytest.fixture
def years_ago():
    """Return a helper building a birth date exactly N years before today."""
    return _years_ago


@pytest.fixture
def make_owner():
    """Return a builder for valid owners; keyword arguments override fields."""

    def _make(
        first_name: str = "Jean",
        last_name: str = "Dupont",
        email: str = "jean.dupont@example.com",
        phone_number: str = "0612345678",
        street: str = "123 Rue de la République",
        city: str = "Paris",
        postal_code: str = "75001",
        **identity,
    ) -> Owner:
        return Owner(
            first_name=first_name,
            last_name=last_name,
            email=Email(email),
            phone_number=PhoneNumber(phone_number),
            address=Address(street=street, city=city, postal_code=postal_code),
            **identity,
        )

    return _make


@pytest.fixture
def owner(make_owner) -> Owner:
    return make_owner()


@pytest.fixture
def make_dog(years_ago):
    def _make(owner: Owner, **overrides) -> Dog:
        fields = dict(
            name="Rex",
            birth_date=years_ago(3),
            weight=25.5,
            color="Marron",
            breed="Berger Allemand",
        )
        fields.update(overrides)
        return Dog(owner=owner, **fields)

    return _make


@pytest.fixture
def make_cat(years_ago):
    def _make(owner: Owner, **overrides) -> Cat:
        fields = dict(name="Minou", birth_date=years_ago(4), weight=4.0, color="Gris")
        fields.update(overrides)
        return Cat(owner=owner, **fields)

    return _make


@pytest.fixture
def make_bird(years_ago):
    def _make(owner: Owner, **overrides) -> Bird:
        fields = dict(
            name="Coco",
            birth_date=years_ago(2),
            weight=0.4,
            color="Vert et jaune",
            species="Perroquet",
            wing_span=35.0,
        )
        fields.update(overrides)
        return Bird(owner=owner, **fields)

    return _make


@pytest.fixture
def database():
    """A fresh in-memory SQLite database with the schema created."""
    db = SqlDatabase(build_engine("sqlite://"))
    db.create_schema()
    yield db
    db.engine.dispose()


@pytest.fixture
def client(database):
    """API client wired to the per-test database."""
    app.dependency_overrides[get_database] = lambda: database
    yield TestClient(app)
    app.dependency_overrides.clear()
