"""
Tests for the animal entities.

Tests Dog, Cat and Bird construction, ownership and derived values
in isolation. No external dependencies or IO required.
"""

from datetime import date

import pytest

from petcare.domain.pets.entities import AnimalType, Bird, Cat, Dog
from petcare.domain.pets.errors import (
    InvalidAnimalDataError,
    UnsupportedAnimalTypeError,
)
from petcare.domain.pets.factory import create_animal


class TestAnimalType:
    """Tests for the AnimalType enum."""

    @pytest.mark.parametrize(
        "raw, expected",
        [
            ("dog", AnimalType.DOG),
            ("CHIEN", AnimalType.DOG),
            ("Chat", AnimalType.CAT),
            (" bird ", AnimalType.BIRD),
            (AnimalType.CAT, AnimalType.CAT),
        ],
    )
    def test_parse_accepts_values_and_labels(self, raw, expected) -> None:
        """Values and display labels resolve case-insensitively."""
        assert AnimalType.parse(raw) is expected

    def test_parse_rejects_unknown_type(self) -> None:
        """Anything outside the closed set is rejected."""
        with pytest.raises(UnsupportedAnimalTypeError) as excinfo:
            AnimalType.parse("fish")
        assert excinfo.value.field == "type"

    def test_labels(self) -> None:
        assert AnimalType.DOG.label == "Chien"
        assert AnimalType.CAT.label == "Chat"
        assert AnimalType.BIRD.label == "Oiseau"


class TestAnimalConstruction:
    """Tests for the shared Animal validation rules."""

    def test_dog_registration_scenario(self, owner) -> None:
        """A new dog is attached to its owner and reports its type and sound."""
        dog = Dog(
            name="Rex",
            birth_date=date(2019, 3, 15),
            weight=25.5,
            color="Marron",
            owner=owner,
            breed="Berger Allemand",
            is_dangerous=False,
        )
        assert dog.get_type() == "Chien"
        assert dog.make_sound() == "WOOF WOOF!"
        assert dog.calculate_age(today=date(2025, 3, 14)) == 5
        assert dog.calculate_age(today=date(2025, 3, 15)) == 6
        assert dog.owner is owner
        assert owner.get_total_animals() == 1

    def test_owner_is_mandatory(self, years_ago) -> None:
        """Constructing an animal without an owner fails on the owner field."""
        with pytest.raises(InvalidAnimalDataError) as excinfo:
            Cat(name="Minou", birth_date=years_ago(2), weight=4.0, color="Gris", owner=None)
        assert excinfo.value.field == "owner"

    @pytest.mark.parametrize(
        "overrides, field",
        [
            ({"name": "R"}, "name"),
            ({"name": "   "}, "name"),
            ({"name": "x" * 101}, "name"),
            ({"weight": 0}, "weight"),
            ({"weight": -3}, "weight"),
            ({"weight": 501}, "weight"),
            ({"color": ""}, "color"),
            ({"color": "c" * 31}, "color"),
            ({"breed": ""}, "breed"),
            ({"registration_number": "123"}, "registration_number"),
        ],
    )
    def test_invalid_fields_rejected(self, owner, make_dog, overrides, field) -> None:
        """Each rule reports its field and leaves the owner untouched."""
        with pytest.raises(InvalidAnimalDataError) as excinfo:
            make_dog(owner, **overrides)
        assert excinfo.value.field == field
        assert owner.get_total_animals() == 0

    def test_future_birth_date_rejected(self, owner, make_cat) -> None:
        with pytest.raises(InvalidAnimalDataError) as excinfo:
            make_cat(owner, birth_date=date(date.today().year + 1, 1, 1))
        assert excinfo.value.field == "birth_date"

    def test_birth_date_older_than_fifty_years_rejected(self, owner, make_cat, years_ago) -> None:
        with pytest.raises(InvalidAnimalDataError) as excinfo:
            make_cat(owner, birth_date=years_ago(51))
        assert excinfo.value.field == "birth_date"

    def test_stored_animal_skips_rolling_max_age(self, owner, make_cat, years_ago) -> None:
        """An animal rebuilt with an id may have aged past 50 years."""
        cat = make_cat(owner, birth_date=years_ago(51), id=3, version=1)
        assert cat.calculate_age() == 51

    def test_stored_animal_still_rejects_future_birth_date(self, owner, make_cat) -> None:
        with pytest.raises(InvalidAnimalDataError):
            make_cat(owner, birth_date=date(date.today().year + 1, 1, 1), id=3, version=1)

    def test_reconstitution_does_not_touch_owner(self, make_owner, make_dog) -> None:
        """Loading a stored animal leaves the owner's timestamp unchanged."""
        owner = make_owner(id=1, version=1)
        before = owner.updated_at
        make_dog(owner, id=7, version=3)
        assert owner.updated_at == before
        assert owner.get_total_animals() == 1


class TestOwnership:
    """Tests for assign_owner / remove_owner consistency."""

    def test_assign_owner_moves_animal(self, make_owner, make_dog) -> None:
        """The animal leaves its previous owner's collection."""
        first = make_owner()
        second = make_owner(first_name="Marie", email="marie.martin@example.com")
        dog = make_dog(first)

        dog.assign_owner(second)

        assert dog.owner is second
        assert not first.has_animal(dog)
        assert second.has_animal(dog)

    def test_assign_same_owner_is_idempotent(self, owner, make_dog) -> None:
        dog = make_dog(owner)
        dog.assign_owner(owner)
        owner.add_animal(dog)
        assert owner.get_total_animals() == 1

    def test_remove_owner(self, owner, make_dog) -> None:
        """Removing the owner clears both sides; a second call is a no-op."""
        dog = make_dog(owner)
        dog.remove_owner()
        assert dog.owner is None
        assert not owner.has_animals()
        dog.remove_owner()
        assert dog.owner is None

    def test_owner_remove_animal_delegates(self, owner, make_cat) -> None:
        cat = make_cat(owner)
        owner.remove_animal(cat)
        assert cat.owner is None
        assert owner.get_total_animals() == 0

    def test_links_stay_in_sync_across_mixed_calls(self, make_owner, make_dog, make_cat) -> None:
        """Both sides agree after every step of a mixed sequence."""
        first = make_owner()
        second = make_owner(first_name="Marie", email="marie.martin@example.com")
        dog = make_dog(first)
        cat = make_cat(first)

        def assert_linked(animal, expected, other) -> None:
            assert animal.owner is expected
            if expected is not None:
                assert expected.has_animal(animal)
            assert not other.has_animal(animal)

        second.add_animal(dog)
        assert_linked(dog, second, first)
        assert_linked(cat, first, second)

        cat.assign_owner(second)
        assert_linked(cat, second, first)
        assert second.animals == (dog, cat)

        second.remove_animal(dog)
        assert_linked(dog, None, second)
        assert not first.has_animal(dog)

        first.add_animal(dog)
        first.add_animal(dog)
        assert_linked(dog, first, second)

        cat.remove_owner()
        assert_linked(cat, None, second)
        assert not first.has_animal(cat)

        first.remove_animal(cat)
        dog.assign_owner(first)
        assert first.animals == (dog,)
        assert second.animals == ()

    def test_assign_none_rejected(self, owner, make_dog) -> None:
        dog = make_dog(owner)
        with pytest.raises(InvalidAnimalDataError):
            dog.assign_owner(None)
        assert dog.owner is owner


class TestAnimalBehavior:
    """Tests for shared mutators and age computations."""

    def test_update_weight_reports_large_changes(self, owner, make_dog) -> None:
        """Changes above 10% are flagged but applied either way."""
        dog = make_dog(owner, weight=10.0)
        assert dog.update_weight(10.5) is False
        assert dog.weight == 10.5
        assert dog.update_weight(13.0) is True
        assert dog.weight == 13.0

    def test_update_weight_validates(self, owner, make_dog) -> None:
        dog = make_dog(owner, weight=10.0)
        with pytest.raises(InvalidAnimalDataError):
            dog.update_weight(0)
        assert dog.weight == 10.0

    def test_rename_and_change_color(self, owner, make_cat) -> None:
        cat = make_cat(owner)
        cat.rename("Félix")
        cat.change_color("Noir et blanc")
        assert cat.name == "Félix"
        assert cat.color == "Noir et blanc"

    def test_age_in_months_and_days(self, owner, make_cat) -> None:
        cat = make_cat(owner, birth_date=date(2020, 1, 31))
        assert cat.calculate_age_in_months(today=date(2020, 3, 30)) == 1
        assert cat.calculate_age_in_months(today=date(2020, 3, 31)) == 2
        assert cat.calculate_age_in_days(today=date(2020, 2, 10)) == 10

    def test_leap_day_birth(self, owner, make_cat) -> None:
        """Born on Feb 29: one year old on Mar 1 of a non-leap year."""
        cat = make_cat(owner, birth_date=date(2020, 2, 29))
        assert cat.calculate_age(today=date(2021, 2, 28)) == 0
        assert cat.calculate_age_in_months(today=date(2021, 2, 28)) == 11
        assert cat.calculate_age(today=date(2021, 3, 1)) == 1
        assert cat.calculate_age_in_months(today=date(2021, 3, 1)) == 12

    def test_age_in_months_across_month_end(self, owner, make_cat) -> None:
        """A month counts once the birth day-of-month is reached."""
        cat = make_cat(owner, birth_date=date(2021, 1, 31))
        assert cat.calculate_age_in_months(today=date(2021, 2, 28)) == 0
        assert cat.calculate_age_in_months(today=date(2021, 3, 1)) == 1
        assert cat.calculate_age_in_days(today=date(2021, 2, 28)) == 28

    def test_senior_from_seven_years(self, owner, make_cat, years_ago) -> None:
        assert make_cat(owner, birth_date=years_ago(7)).is_senior()
        assert not make_cat(owner, birth_date=years_ago(6)).is_senior()

    def test_base_special_needs_always_present(self, owner, make_bird) -> None:
        needs = make_bird(owner).get_special_needs()
        assert needs[:2] == [
            "Visite vétérinaire annuelle",
            "Eau fraîche à disposition en permanence",
        ]


class TestDog:
    """Tests for the Dog variant."""

    def test_small_dog_barks_softly(self, owner, make_dog) -> None:
        assert make_dog(owner, weight=8.2, breed="Jack Russell").make_sound() == "Woof woof!"

    @pytest.mark.parametrize(
        "breed, category",
        [("Pitbull", 1), ("Tosa Inu", 1), ("Rottweiler", 2), ("American Staffordshire Terrier", 2)],
    )
    def test_deny_listed_breeds_are_dangerous(self, owner, make_dog, breed, category) -> None:
        """Deny-listed breeds are dangerous whatever the flag says."""
        dog = make_dog(owner, breed=breed, is_dangerous=False)
        assert dog.is_dangerous
        assert dog.danger_category() == category
        assert dog.requires_municipal_declaration()

    def test_deny_listed_breed_cannot_be_unflagged(self, owner, make_dog) -> None:
        dog = make_dog(owner, breed="Pitbull")
        dog.set_dangerous(False)
        assert dog.is_dangerous

    def test_regular_dog_can_be_flagged(self, owner, make_dog) -> None:
        dog = make_dog(owner, breed="Labrador")
        assert dog.danger_category() is None
        dog.set_dangerous(True)
        assert dog.danger_category() == 2
        dog.set_dangerous(False)
        assert not dog.is_dangerous

    def test_dangerous_dog_needs(self, owner, make_dog) -> None:
        needs = make_dog(owner, breed="Rottweiler").get_special_needs()
        assert "Port de la muselière obligatoire en public" in needs
        assert "Surveillance de la dysplasie de la hanche" in needs

    def test_breed_specific_needs(self, owner, make_dog) -> None:
        needs = make_dog(owner, breed="Husky", weight=22.0).get_special_needs()
        assert "Climat frais préférable" in needs

    def test_registration_number(self, owner, make_dog) -> None:
        dog = make_dog(owner, registration_number="ABC123456789012")
        assert dog.is_properly_identified()
        dog.set_registration_number("250269604123456")
        assert dog.registration_number == "250269604123456"
        dog.set_registration_number(None)
        assert not dog.is_properly_identified()

    def test_daily_food_and_exercise(self, owner, make_dog) -> None:
        """Young dogs eat 2.5% of their weight; large breeds exercise 60 min."""
        food = make_dog(owner).daily_food_requirement()
        assert food["daily_amount"] == 638
        assert food["meals"] == 2
        assert food["unit"] == "grammes"
        assert make_dog(owner).minimum_exercise_duration() == 60
        assert make_dog(owner, weight=15.0, breed="Beagle").minimum_exercise_duration() == 45

    def test_senior_dog_food_ratio(self, owner, make_dog, years_ago) -> None:
        dog = make_dog(owner, birth_date=years_ago(9), weight=20.0, breed="Beagle")
        assert dog.daily_food_requirement()["daily_amount"] == 400
        assert dog.minimum_exercise_duration() == 30

    def test_estimated_annual_cost(self, owner, make_dog) -> None:
        """Large non-dangerous dog of 25.5 kg."""
        cost = make_dog(owner).estimated_annual_cost()
        assert cost.veterinary == 200
        assert cost.food == 1275
        assert cost.insurance == 150
        assert cost.grooming == 300
        assert cost.miscellaneous == 200
        assert cost.total == 2125
        assert cost.currency == "EUR"

    def test_describe(self, owner, make_dog) -> None:
        description = make_dog(owner).describe()
        assert description.startswith("Chien grande race de race Berger Allemand")
        assert "non identifié" in description


class TestCat:
    """Tests for the Cat variant."""

    def test_indoor_cat(self, owner, make_cat) -> None:
        cat = make_cat(owner)
        assert cat.is_indoor
        assert cat.make_sound() == "Miaou!"
        assert cat.get_type() == "Chat"
        assert cat.habitat_status() == "Intérieur"
        assert "Arbre à chat pour grimper" in cat.get_special_needs()
        assert cat.vet_visit_frequency() == "Annuelle"

    def test_outdoor_cat(self, owner, make_cat) -> None:
        cat = make_cat(owner, is_indoor=False)
        assert "Collier avec identification" in cat.get_special_needs()
        assert cat.vet_visit_frequency() == "Tous les 6 mois (risques accrus)"
        assert cat.recommended_activity_level().startswith("Modéré")

    def test_hypoallergenic_cat(self, owner, make_cat) -> None:
        cat = make_cat(owner, is_hypoallergenic=True)
        assert any("Fel d1" in need for need in cat.get_special_needs())
        assert "Maintenir une routine de toilettage stricte" in cat.care_advice()

    def test_daily_food_requirement(self, owner, make_cat) -> None:
        """A 4 kg indoor cat needs 160 kcal."""
        food = make_cat(owner, weight=4.0).daily_food_requirement()
        assert food["daily_calories"] == 160
        assert food["dry_food"] == 43
        assert food["wet_food"] == 178

    def test_overweight(self, owner, make_cat) -> None:
        assert make_cat(owner, weight=7.0).is_overweight()
        assert not make_cat(owner, weight=4.0).is_overweight()

    def test_status_setters(self, owner, make_cat) -> None:
        cat = make_cat(owner)
        cat.set_indoor_status(False)
        cat.set_hypoallergenic(True)
        assert not cat.is_indoor
        assert cat.is_hypoallergenic


class TestBird:
    """Tests for the Bird variant."""

    def test_species_sound(self, owner, make_bird) -> None:
        assert make_bird(owner, species="Canari", wing_span=15.0).make_sound() == "Cui cui!"
        assert make_bird(owner, species="Moineau", wing_span=20.0).make_sound() == "Tweet tweet!"

    def test_talking_bird_greets(self, owner, make_bird) -> None:
        bird = make_bird(owner, can_talk=True)
        assert bird.make_sound() == "Hello! Coco veut un cracker!"
        assert "Apprentissage et répétition de mots" in bird.get_special_needs()

    def test_cage_and_size(self, owner, make_bird) -> None:
        bird = make_bird(owner, wing_span=35.0, can_talk=True)
        cage = bird.recommended_cage_size()
        assert cage["width"] == 140.0
        assert cage["unit"] == "cm"
        assert "Cage spacieuse (minimum 105 cm)" in bird.get_special_needs()
        assert not bird.is_large_bird()
        assert make_bird(owner, wing_span=90.0).is_large_bird()

    def test_estimated_lifespan(self, owner, make_bird) -> None:
        assert make_bird(owner).estimated_lifespan() == 60
        assert make_bird(owner, species="Moineau").estimated_lifespan() == 10

    @pytest.mark.parametrize("wing_span", [0, -1, 301])
    def test_invalid_wing_span(self, owner, make_bird, wing_span) -> None:
        with pytest.raises(InvalidAnimalDataError) as excinfo:
            make_bird(owner, wing_span=wing_span)
        assert excinfo.value.field == "wing_span"

    def test_describe(self, owner, make_bird) -> None:
        assert make_bird(owner).describe().startswith("Oiseau de type Perroquet, non parleur")


class TestFactory:
    """Tests for create_animal."""

    def test_builds_variant_from_label(self, owner, years_ago) -> None:
        animal = create_animal(
            "Chat",
            name="Minou",
            birth_date=years_ago(2),
            weight=4.0,
            color="Gris",
            owner=owner,
            breed="ignored",
        )
        assert isinstance(animal, Cat)
        assert animal.owner is owner

    def test_builds_bird(self, owner, years_ago) -> None:
        animal = create_animal(
            "bird",
            name="Piou-Piou",
            birth_date=years_ago(1),
            weight=0.02,
            color="Jaune",
            owner=owner,
            species="Canari",
            wing_span=15.0,
        )
        assert isinstance(animal, Bird)

    def test_unknown_type_rejected(self, owner, years_ago) -> None:
        with pytest.raises(UnsupportedAnimalTypeError):
            create_animal(
                "fish",
                name="Nemo",
                birth_date=years_ago(1),
                weight=0.1,
                color="Orange",
                owner=owner,
            )
        assert owner.get_total_animals() == 0

    def test_dog_requires_breed(self, owner, years_ago) -> None:
        with pytest.raises(InvalidAnimalDataError) as excinfo:
            create_animal(
                "dog", name="Rex", birth_date=years_ago(1), weight=10, color="Noir", owner=owner
            )
        assert excinfo.value.field == "breed"
