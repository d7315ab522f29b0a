"""
Tests for the Owner aggregate.

Tests identity rules, the animal collection and owner-level statistics
in isolation. No external dependencies or IO required.
"""

from datetime import timedelta

import pytest

from petcare.domain.pets.entities import AnimalType, Owner
from petcare.domain.pets.errors import InvalidOwnerDataError
from petcare.domain.pets.value_objects import Address, Email, PhoneNumber


class TestOwnerIdentity:
    """Tests for owner construction and mutators."""

    def test_names_are_normalized(self, make_owner) -> None:
        """First name gets a capital letter, last name is upper-cased."""
        owner = make_owner(first_name="jean", last_name="dupont")
        assert owner.first_name == "Jean"
        assert owner.last_name == "DUPONT"
        assert owner.full_name == "Jean DUPONT"
        assert owner.initials == "JD"

    def test_new_owner_defaults(self, owner) -> None:
        assert owner.id is None
        assert owner.is_active
        assert owner.registration_date == owner.created_at
        assert owner.animals == ()

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"first_name": "J"}, "first_name"),
            ({"first_name": "J3an"}, "first_name"),
            ({"last_name": ""}, "last_name"),
            ({"last_name": "Dupont!"}, "last_name"),
        ],
    )
    def test_invalid_names_rejected(self, make_owner, overrides, field) -> None:
        with pytest.raises(InvalidOwnerDataError) as excinfo:
            make_owner(**overrides)
        assert excinfo.value.field == field

    def test_hyphenated_and_accented_names_accepted(self, make_owner) -> None:
        owner = make_owner(first_name="jean-françois", last_name="d'Arc")
        assert owner.first_name == "Jean-françois"
        assert owner.last_name == "D'ARC"

    def test_contact_fields_must_be_value_objects(self) -> None:
        """Raw strings are rejected where value objects are expected."""
        with pytest.raises(InvalidOwnerDataError) as excinfo:
            Owner(
                first_name="Jean",
                last_name="Dupont",
                email="jean.dupont@example.com",
                phone_number=PhoneNumber("0612345678"),
                address=Address("10 Rue de Rivoli", "Paris", "75001"),
            )
        assert excinfo.value.field == "email"

    def test_update_contact_and_address(self, owner) -> None:
        owner.update_contact_info(Email("jean@example.com"), PhoneNumber("0712345678"))
        owner.update_address(Address("5 Place Bellecour", "Lyon", "69002"))
        assert owner.email.value == "jean@example.com"
        assert owner.phone_number.value == "0712345678"
        assert owner.address.city == "Lyon"

    def test_update_name_validates_before_changing(self, owner) -> None:
        with pytest.raises(InvalidOwnerDataError):
            owner.update_name("Marie", "M")
        assert owner.full_name == "Jean DUPONT"

    def test_activation(self, owner) -> None:
        owner.deactivate()
        assert not owner.is_active
        owner.activate()
        assert owner.is_active

    def test_membership_duration(self, owner) -> None:
        later = owner.registration_date + timedelta(days=10, hours=2)
        assert owner.membership_duration_in_days(now=later) == 10
        assert owner.is_new_member(now=later)
        assert not owner.is_new_member(now=owner.registration_date + timedelta(days=45))


class TestOwnerAnimals:
    """Tests for the owner's animal collection and statistics."""

    def test_count_animals_by_type(self, owner, make_dog, make_cat) -> None:
        make_dog(owner)
        make_dog(owner, name="Max")
        make_cat(owner)
        assert owner.count_animals_by_type() == {"Chien": 2, "Chat": 1}
        assert owner.get_total_animals() == 3
        assert [a.name for a in owner.get_animals_by_type("dog")] == ["Rex", "Max"]
        assert owner.get_animals_by_type(AnimalType.BIRD) == []

    def test_dog_limit(self, owner, make_dog) -> None:
        """Five dogs reach the limit."""
        for index in range(4):
            make_dog(owner, name=f"Chien{'x' * (index + 1)}")
        assert not owner.has_reached_dog_limit()
        make_dog(owner, name="Dernier")
        assert owner.has_reached_dog_limit()

    def test_owns_dangerous_dogs(self, owner, make_dog, make_cat) -> None:
        make_cat(owner)
        assert not owner.owns_dangerous_dogs()
        make_dog(owner, breed="Rottweiler")
        assert owner.owns_dangerous_dogs()

    def test_average_age_and_seniors(self, owner, make_cat, years_ago) -> None:
        make_cat(owner, birth_date=years_ago(3))
        make_cat(owner, name="Félix", birth_date=years_ago(8))
        assert owner.get_average_animal_age() == 5.5
        assert [a.name for a in owner.get_senior_animals()] == ["Félix"]

    def test_average_age_without_animals(self, owner) -> None:
        assert owner.get_average_animal_age() == 0.0

    def test_estimated_total_annual_cost(self, owner, make_dog, make_cat, make_bird) -> None:
        """Dogs use their detailed estimate; other animals cost a flat 500."""
        make_dog(owner)
        make_cat(owner)
        make_cat(owner)
        make_bird(owner)
        estimate = owner.get_estimated_total_annual_cost()
        assert estimate.breakdown == {
            "Rex": 2125,
            "Minou": 500,
            "Minou (2)": 500,
            "Coco": 500,
        }
        assert estimate.total == 3625
        assert estimate.currency == "EUR"

    def test_profile_summary(self, owner, make_cat) -> None:
        make_cat(owner)
        summary = owner.get_profile_summary()
        assert summary["full_name"] == "Jean DUPONT"
        assert summary["city"] == "Paris"
        assert summary["total_animals"] == 1
        assert summary["animals_by_type"] == {"Chat": 1}
        assert summary["member_since"] == owner.registration_date.date().isoformat()
