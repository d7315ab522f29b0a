"""
Domain entities for the pets bounded context.

Entities are identified by an id assigned on first save and compared
by identity. They validate every field at construction and in each
named mutator. Derived values (age, needs, costs) are computed on
demand and never stored.

Ownership between Animal and Owner is bidirectional. The single
authority for changing it is Animal.assign_owner / Animal.remove_owner;
Owner.add_animal / Owner.remove_animal delegate to them, and the
owner's collection is only edited through its private attach/detach
helpers, which never call back.

No IO, no framework imports, no logging.
"""

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from enum import Enum
from typing import Optional

from petcare.domain.pets.errors import (
    InvalidAnimalDataError,
    InvalidOwnerDataError,
    UnsupportedAnimalTypeError,
)
from petcare.domain.pets.value_objects import (
    Address,
    Email,
    PhoneNumber,
    capitalize_first,
)

NAME_MIN_LEN = 2
NAME_MAX_LEN = 100
COLOR_MAX_LEN = 30
MAX_WEIGHT_KG = 500
MAX_AGE_YEARS = 50
SENIOR_AGE_YEARS = 7
WEIGHT_CHANGE_ALERT_RATIO = 0.10
CURRENCY = "EUR"


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero, as shown to users (2.5 -> 3)."""
    quantum = Decimal(1).scaleb(-digits)
    return float(Decimal(str(value)).quantize(quantum, rounding=ROUND_HALF_UP))


def _years_before(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # Feb 29 in a non-leap target year.
        return day.replace(year=day.year - years, day=28)


# ══════════════════════════════════════════════════════════════════════
# Animal type
# ══════════════════════════════════════════════════════════════════════


class AnimalType(str, Enum):
    """Closed set of animal variants.

    The value is the persisted/API discriminator; ``label`` is the
    display label returned by ``Animal.get_type()``.
    """

    DOG = "dog"
    CAT = "cat"
    BIRD = "bird"

    @property
    def label(self) -> str:
        return TYPE_LABELS[self]

    @classmethod
    def parse(cls, value: object) -> "AnimalType":
        """Resolve an enum member from a member, a value or a label.

        Raises:
            UnsupportedAnimalTypeError: If nothing matches.
        """
        if isinstance(value, cls):
            return value
        text = str(value).strip().lower()
        for member in cls:
            if text in (member.value, member.label.lower()):
                return member
        raise UnsupportedAnimalTypeError(value)


TYPE_LABELS = {
    AnimalType.DOG: "Chien",
    AnimalType.CAT: "Chat",
    AnimalType.BIRD: "Oiseau",
}


# ══════════════════════════════════════════════════════════════════════
# Cost estimates
# ══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class AnnualCostEstimate:
    """Yearly cost breakdown for a dog, in whole euros."""

    veterinary: int
    food: int
    insurance: int
    grooming: int
    miscellaneous: int
    currency: str = CURRENCY

    @property
    def total(self) -> int:
        return (
            self.veterinary + self.food + self.insurance
            + self.grooming + self.miscellaneous
        )


@dataclass(frozen=True)
class OwnerCostEstimate:
    """Yearly cost for all animals of an owner, keyed by animal name."""

    total: int
    breakdown: dict[str, int] = field(default_factory=dict)
    currency: str = CURRENCY
    note: str = "Estimation basée sur les coûts moyens"


# ══════════════════════════════════════════════════════════════════════
# Entity base
# ══════════════════════════════════════════════════════════════════════


class Entity:
    """Identity, timestamps and optimistic-lock version shared by aggregates."""

    def __init__(
        self,
        *,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        version: int = 0,
    ) -> None:
        self.id = id
        self.created_at = created_at or utcnow()
        self.updated_at = updated_at or self.created_at
        self.version = version

    def _touch(self) -> None:
        """Mark the entity as modified. Called only on an actual change."""
        self.updated_at = utcnow()

    def mark_persisted(
        self, entity_id: int, version: int, updated_at: Optional[datetime] = None
    ) -> None:
        """Record the identity and version assigned by a repository save."""
        self.id = entity_id
        self.version = version
        if updated_at is not None:
            self.updated_at = updated_at

    def mark_deleted(self) -> None:
        """Forget the persisted identity after the row has been removed."""
        self.id = None
        self.version = 0

    def __repr__(self) -> str:
        return f"<{type(self).__name__} id={self.id}>"


# ══════════════════════════════════════════════════════════════════════
# Animal
# ══════════════════════════════════════════════════════════════════════


def _validate_animal_name(name: str) -> str:
    value = str(name or "").strip()
    if not value:
        raise InvalidAnimalDataError("name", "must not be empty")
    if not NAME_MIN_LEN <= len(value) <= NAME_MAX_LEN:
        raise InvalidAnimalDataError(
            "name", f"must be {NAME_MIN_LEN}-{NAME_MAX_LEN} characters"
        )
    return value


def _validate_birth_date(birth_date: date, check_max_age: bool = True) -> date:
    """Check a birth date.

    The maximum-age limit moves with today, so it only applies to new
    animals; a stored animal that has aged past it must still load.
    """
    if isinstance(birth_date, datetime):
        birth_date = birth_date.date()
    if not isinstance(birth_date, date):
        raise InvalidAnimalDataError("birth_date", "must be a date")
    today = date.today()
    if birth_date > today:
        raise InvalidAnimalDataError("birth_date", "cannot be in the future")
    if check_max_age and birth_date < _years_before(today, MAX_AGE_YEARS):
        raise InvalidAnimalDataError(
            "birth_date", f"cannot be more than {MAX_AGE_YEARS} years ago"
        )
    return birth_date


def _validate_weight(weight: float) -> float:
    if isinstance(weight, bool) or not isinstance(weight, (int, float)):
        raise InvalidAnimalDataError("weight", "must be a number")
    if weight <= 0:
        raise InvalidAnimalDataError("weight", "must be greater than 0 kg")
    if weight > MAX_WEIGHT_KG:
        raise InvalidAnimalDataError(
            "weight", f"must be at most {MAX_WEIGHT_KG} kg"
        )
    return float(weight)


def _validate_color(color: str) -> str:
    value = str(color or "").strip()
    if not value:
        raise InvalidAnimalDataError("color", "must not be empty")
    if len(value) > COLOR_MAX_LEN:
        raise InvalidAnimalDataError(
            "color", f"must be at most {COLOR_MAX_LEN} characters"
        )
    return value


def _validate_label(field_name: str, value: str, max_len: int = 100) -> str:
    text = str(value or "").strip()
    if not text:
        raise InvalidAnimalDataError(field_name, "must not be empty")
    if len(text) > max_len:
        raise InvalidAnimalDataError(
            field_name, f"must be at most {max_len} characters"
        )
    return text


class Animal(Entity, ABC):
    """Common state and behavior of every animal variant.

    An owner is mandatory at construction. Fields are validated before
    the animal is attached to the owner, so a rejected construction
    never leaves a trace in the owner's collection. An animal rebuilt
    with an ``id`` is a stored one: the maximum-age limit is not re-checked.
    """

    animal_type: AnimalType

    def __init__(
        self,
        name: str,
        birth_date: date,
        weight: float,
        color: str,
        owner: "Owner",
        *,
        id: Optional[int] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        version: int = 0,
    ) -> None:
        super().__init__(
            id=id, created_at=created_at, updated_at=updated_at, version=version
        )
        self._name = _validate_animal_name(name)
        self._birth_date = _validate_birth_date(birth_date, check_max_age=id is None)
        self._weight = _validate_weight(weight)
        self._color = _validate_color(color)
        if owner is None:
            raise InvalidAnimalDataError("owner", "an animal must have an owner")
        if not isinstance(owner, Owner):
            raise InvalidAnimalDataError("owner", "must be an Owner")
        self._owner: Optional[Owner] = owner
        owner._attach(self, touch=id is None)

    # ── Accessors ────────────────────────────────────────────────────

    @property
    def name(self) -> str:
        return self._name

    @property
    def birth_date(self) -> date:
        return self._birth_date

    @property
    def weight(self) -> float:
        return self._weight

    @property
    def color(self) -> str:
        return self._color

    @property
    def owner(self) -> Optional["Owner"]:
        return self._owner

    def get_type(self) -> str:
        """Display label of the variant ("Chien", "Chat", "Oiseau")."""
        return self.animal_type.label

    # ── Ownership ────────────────────────────────────────────────────

    def assign_owner(self, owner: "Owner") -> None:
        """Bind the animal to ``owner``, detaching it from any previous one.

        Idempotent: assigning the current owner again only repairs a
        missing collection entry.
        """
        if owner is None:
            raise InvalidAnimalDataError("owner", "an animal must have an owner")
        if owner is self._owner:
            owner._attach(self)
            return
        previous = self._owner
        if previous is not None:
            previous._detach(self)
        self._owner = owner
        owner._attach(self)
        self._touch()

    def remove_owner(self) -> None:
        """Detach the animal from its owner. No-op when already ownerless."""
        previous = self._owner
        if previous is None:
            return
        self._owner = None
        previous._detach(self)
        self._touch()

    # ── Mutators ─────────────────────────────────────────────────────

    def rename(self, name: str) -> None:
        value = _validate_animal_name(name)
        if value != self._name:
            self._name = value
            self._touch()

    def change_color(self, color: str) -> None:
        value = _validate_color(color)
        if value != self._color:
            self._color = value
            self._touch()

    def update_weight(self, new_weight: float) -> bool:
        """Store a new weight.

        Returns:
            True when the weight moved by more than 10%. The change is
            applied either way.
        """
        value = _validate_weight(new_weight)
        if value == self._weight:
            return False
        ratio = abs(value - self._weight) / self._weight
        self._weight = value
        self._touch()
        return ratio > WEIGHT_CHANGE_ALERT_RATIO

    # ── Age ──────────────────────────────────────────────────────────

    def calculate_age(self, today: Optional[date] = None) -> int:
        """Age in whole years; the birthday must have passed this year."""
        today = today or date.today()
        born = self._birth_date
        return today.year - born.year - ((today.month, today.day) < (born.month, born.day))

    def calculate_age_in_months(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        born = self._birth_date
        months = (today.year - born.year) * 12 + today.month - born.month
        if today.day < born.day:
            months -= 1
        return max(months, 0)

    def calculate_age_in_days(self, today: Optional[date] = None) -> int:
        today = today or date.today()
        return (today - self._birth_date).days

    def is_senior(self, today: Optional[date] = None) -> bool:
        return self.calculate_age(today) >= SENIOR_AGE_YEARS

    # ── Behavior ─────────────────────────────────────────────────────

    def get_special_needs(self) -> list[str]:
        """Care requirements. Variants extend this list, never replace it."""
        return [
            "Visite vétérinaire annuelle",
            "Eau fraîche à disposition en permanence",
        ]

    @abstractmethod
    def make_sound(self) -> str:
        raise NotImplementedError

    @abstractmethod
    def describe(self) -> str:
        """One-line French description of the animal."""
        raise NotImplementedError


# ── Dog ──────────────────────────────────────────────────────────────

DANGEROUS_BREEDS = (
    "Pitbull",
    "American Staffordshire Terrier",
    "Rottweiler",
    "Tosa",
    "Mastiff",
)
FIRST_CATEGORY_BREEDS = ("Pitbull", "Tosa", "Mastiff")
LARGE_BREEDS = (
    "Berger Allemand",
    "Labrador",
    "Golden Retriever",
    "Rottweiler",
    "Doberman",
    "Boxer",
    "Dogue",
)
REGISTRATION_NUMBER_PATTERN = re.compile(r"^[A-Z]{3}\d{12}$|^\d{15}$")
LOUD_BARK_WEIGHT_KG = 20
LARGE_BREED_WEIGHT_KG = 25
MEDIUM_DOG_WEIGHT_KG = 10

BREED_SPECIFIC_NEEDS = {
    "berger allemand": ["Exercice intense quotidien", "Stimulation mentale importante"],
    "husky": ["Exercice très intense (course)", "Climat frais préférable"],
    "malamute": ["Exercice très intense (course)", "Climat frais préférable"],
    "bulldog": ["Surveillance respiratoire", "Éviter la surchauffe"],
    "carlin": ["Surveillance respiratoire", "Éviter la surchauffe"],
    "border collie": [
        "Stimulation mentale intensive",
        "Travail ou sport canin recommandé",
    ],
}


def _breed_matches(breed: str, candidates: tuple[str, ...]) -> bool:
    lowered = breed.lower()
    return any(candidate.lower() in lowered for candidate in candidates)


def _validate_registration_number(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    if not text:
        return None
    if not REGISTRATION_NUMBER_PATTERN.match(text):
        raise InvalidAnimalDataError(
            "registration_number",
            "expected 3 uppercase letters and 12 digits, or 15 digits",
        )
    return text


class Dog(Animal):
    """A dog. Deny-listed breeds are always flagged dangerous."""

    animal_type = AnimalType.DOG

    def __init__(
        self,
        name: str,
        birth_date: date,
        weight: float,
        color: str,
        owner: "Owner",
        breed: str,
        is_dangerous: bool = False,
        registration_number: Optional[str] = None,
        **identity,
    ) -> None:
        self._breed = _validate_label("breed", breed)
        self._is_dangerous = bool(is_dangerous) or _breed_matches(
            self._breed, DANGEROUS_BREEDS
        )
        self._registration_number = _validate_registration_number(registration_number)
        super().__init__(name, birth_date, weight, color, owner, **identity)

    @property
    def breed(self) -> str:
        return self._breed

    @property
    def is_dangerous(self) -> bool:
        return self._is_dangerous

    @property
    def registration_number(self) -> Optional[str]:
        return self._registration_number

    def change_breed(self, breed: str) -> None:
        value = _validate_label("breed", breed)
        if value == self._breed:
            return
        self._breed = value
        self._is_dangerous = self._is_dangerous or _breed_matches(value, DANGEROUS_BREEDS)
        self._touch()

    def set_dangerous(self, is_dangerous: bool) -> None:
        """Flag or unflag the dog; deny-listed breeds stay dangerous."""
        value = bool(is_dangerous) or _breed_matches(self._breed, DANGEROUS_BREEDS)
        if value != self._is_dangerous:
            self._is_dangerous = value
            self._touch()

    def set_registration_number(self, registration_number: Optional[str]) -> None:
        value = _validate_registration_number(registration_number)
        if value != self._registration_number:
            self._registration_number = value
            self._touch()

    def is_properly_identified(self) -> bool:
        return self._registration_number is not None

    def is_large_breed(self) -> bool:
        return self.weight > LARGE_BREED_WEIGHT_KG or _breed_matches(
            self._breed, LARGE_BREEDS
        )

    def make_sound(self) -> str:
        return "WOOF WOOF!" if self.weight > LOUD_BARK_WEIGHT_KG else "Woof woof!"

    def get_special_needs(self) -> list[str]:
        needs = super().get_special_needs()
        needs += [
            "Promenade quotidienne minimum 30 minutes",
            "Éducation et socialisation",
            "Alimentation adaptée à la race et à l'âge",
        ]
        if self.is_large_breed():
            needs += [
                "Surveillance de la dysplasie de la hanche",
                "Alimentation spéciale grande race",
                "Espace de vie suffisant",
            ]
        if self._is_dangerous:
            needs += [
                "Port de la muselière obligatoire en public",
                "Tenue en laisse obligatoire (maximum 1,50m)",
                "Assurance responsabilité civile spécifique",
                "Permis de détention obligatoire",
                "Évaluation comportementale",
                "Interdiction dans certains lieux publics",
            ]
        if self.is_senior():
            needs += [
                "Contrôle vétérinaire bi-annuel (chien senior)",
                "Surveillance de l'arthrose",
                "Adaptation de l'exercice physique",
            ]
        needs += BREED_SPECIFIC_NEEDS.get(self._breed.lower(), [])
        return needs

    def daily_food_requirement(self) -> dict:
        """Daily kibble ration: 2.5% of body weight, 2% for seniors."""
        ratio = 0.02 if self.is_senior() else 0.025
        return {
            "daily_amount": int(round_half_up(self.weight * 1000 * ratio)),
            "unit": "grammes",
            "meals": 2 if self.weight > LOUD_BARK_WEIGHT_KG else 1,
            "note": "Adapter selon l'activité physique",
        }

    def minimum_exercise_duration(self) -> int:
        """Minutes of exercise per day."""
        if self.is_senior():
            return 30
        if self.is_large_breed():
            return 60
        if self.weight > MEDIUM_DOG_WEIGHT_KG:
            return 45
        return 30

    def requires_municipal_declaration(self) -> bool:
        return self._is_dangerous

    def estimated_annual_cost(self) -> AnnualCostEstimate:
        return AnnualCostEstimate(
            veterinary=200,
            food=int(round_half_up(self.weight * 50)),
            insurance=500 if self._is_dangerous else 150,
            grooming=300 if self.is_large_breed() else 150,
            miscellaneous=200,
        )

    def danger_category(self) -> Optional[int]:
        """Legal category: 1 (attack dogs), 2 (guard dogs), None if not dangerous."""
        if not self._is_dangerous:
            return None
        return 1 if _breed_matches(self._breed, FIRST_CATEGORY_BREEDS) else 2

    def describe(self) -> str:
        size = "grande race" if self.is_large_breed() else "petite/moyenne race"
        danger = ", catégorisé dangereux" if self._is_dangerous else ""
        identified = ", identifié" if self._registration_number else ", non identifié"
        return (
            f"Chien {size} de race {self._breed}, {self.weight:.1f} kg, "
            f"{self.calculate_age()} an(s){danger}{identified}"
        )


# ── Cat ──────────────────────────────────────────────────────────────

OVERWEIGHT_CAT_KG = 6.5
DRY_FOOD_KCAL_PER_100G = 375
WET_FOOD_KCAL_PER_100G = 90


class Cat(Animal):
    """A cat, indoor by default."""

    animal_type = AnimalType.CAT

    def __init__(
        self,
        name: str,
        birth_date: date,
        weight: float,
        color: str,
        owner: "Owner",
        is_indoor: bool = True,
        is_hypoallergenic: bool = False,
        **identity,
    ) -> None:
        self._is_indoor = bool(is_indoor)
        self._is_hypoallergenic = bool(is_hypoallergenic)
        super().__init__(name, birth_date, weight, color, owner, **identity)

    @property
    def is_indoor(self) -> bool:
        return self._is_indoor

    @property
    def is_hypoallergenic(self) -> bool:
        return self._is_hypoallergenic

    def set_indoor_status(self, is_indoor: bool) -> None:
        if bool(is_indoor) != self._is_indoor:
            self._is_indoor = bool(is_indoor)
            self._touch()

    def set_hypoallergenic(self, is_hypoallergenic: bool) -> None:
        if bool(is_hypoallergenic) != self._is_hypoallergenic:
            self._is_hypoallergenic = bool(is_hypoallergenic)
            self._touch()

    def habitat_status(self) -> str:
        return "Intérieur" if self._is_indoor else "Intérieur/Extérieur"

    def make_sound(self) -> str:
        return "Miaou!"

    def get_special_needs(self) -> list[str]:
        needs = super().get_special_needs()
        needs += [
            "Litière à nettoyer quotidiennement",
            "Griffoir pour préserver les meubles",
            "Points d'eau fraîche multiples",
            "Zones de repos en hauteur",
        ]
        if self._is_indoor:
            needs += [
                "Stimulation mentale accrue (jouets interactifs)",
                "Arbre à chat pour grimper",
                "Sessions de jeu quotidiennes (15-30 min)",
            ]
        else:
            needs += [
                "Accès sécurisé à l'extérieur (chatière, jardin clos)",
                "Traitement anti-puces et tiques renforcé (mensuel)",
                "Vaccination supplémentaire (FeLV, rage)",
                "Vermifugation plus fréquente",
                "Collier avec identification",
            ]
        if self._is_hypoallergenic:
            needs += [
                "Brossage régulier pour minimiser les allergènes (2-3x/semaine)",
                "Bain occasionnel (mensuel) pour réduire les protéines Fel d1",
                "Nettoyage fréquent de l'environnement",
            ]
        if self.is_senior():
            needs += [
                "Contrôle vétérinaire bi-annuel (chat senior)",
                "Surveillance du poids et de l'appétit",
                "Alimentation adaptée aux seniors",
            ]
        return needs

    def daily_food_requirement(self) -> dict:
        """Calories at 40 kcal/kg indoors, 50 outdoors, as dry or wet food."""
        calories = self.weight * (40 if self._is_indoor else 50)
        return {
            "daily_calories": int(round_half_up(calories)),
            "dry_food": int(round_half_up(calories / DRY_FOOD_KCAL_PER_100G * 100)),
            "wet_food": int(round_half_up(calories / WET_FOOD_KCAL_PER_100G * 100)),
            "unit": "grammes",
            "note": "Chat d'intérieur" if self._is_indoor else "Chat d'extérieur",
        }

    def is_overweight(self) -> bool:
        return self.weight > OVERWEIGHT_CAT_KG

    def recommended_activity_level(self) -> str:
        if self.is_senior():
            return "Modéré - Privilégier des jeux calmes"
        if self._is_indoor:
            return "Élevé - Compenser le manque d'espace extérieur"
        return "Modéré - Activité naturelle à l'extérieur"

    def vet_visit_frequency(self) -> str:
        if self.is_senior():
            return "Tous les 6 mois"
        if not self._is_indoor:
            return "Tous les 6 mois (risques accrus)"
        return "Annuelle"

    def care_advice(self) -> list[str]:
        advice = [
            "Brossage régulier pour éviter les boules de poils",
            "Contrôle des dents et des gencives",
            "Vérification des griffes",
        ]
        if self._is_indoor:
            advice += [
                "Attention à la prise de poids (sédentarité)",
                "Enrichissement de l'environnement essentiel",
            ]
        else:
            advice += [
                "Inspection régulière du pelage (parasites)",
                "Surveillance des blessures éventuelles",
            ]
        if self._is_hypoallergenic:
            advice.append("Maintenir une routine de toilettage stricte")
        return advice

    def describe(self) -> str:
        habitat = "d'intérieur" if self._is_indoor else "d'intérieur/extérieur"
        hypoallergenic = ", race hypoallergénique" if self._is_hypoallergenic else ""
        senior = ", senior" if self.is_senior() else ""
        return (
            f'Chat {habitat} nommé(e) "{self.name}", {self.weight:.1f} kg, '
            f"{self.calculate_age()} an(s){hypoallergenic}{senior}"
        )


# ── Bird ─────────────────────────────────────────────────────────────

MAX_WING_SPAN_CM = 300
LARGE_BIRD_WING_SPAN_CM = 50

SPECIES_SOUNDS = {
    "perroquet": "Squawk!",
    "parrot": "Squawk!",
    "canari": "Cui cui!",
    "canary": "Cui cui!",
    "perruche": "Chirp chirp!",
    "parakeet": "Chirp chirp!",
    "cacatoès": "Screech!",
    "cockatoo": "Screech!",
    "ara": "Awk awk!",
    "macaw": "Awk awk!",
    "colombe": "Coo coo!",
    "dove": "Coo coo!",
}
DEFAULT_BIRD_SOUND = "Tweet tweet!"

SPECIES_NEEDS = {
    "perroquet": [
        "Attention particulière au bec (risque de blessures)",
        "Surveillance du plumage",
        "Bain ou douche régulière",
    ],
    "canari": [
        "Lumière naturelle importante",
        "Chant stimulé par d'autres canaris",
    ],
    "perruche": [
        "Compagnie recommandée (vie en groupe)",
        "Accessoires pour grimper",
    ],
}
SPECIES_NEEDS["ara"] = SPECIES_NEEDS["perroquet"]

SPECIES_LIFESPAN_YEARS = {
    "perroquet": 60,
    "ara": 50,
    "cacatoès": 40,
    "canari": 10,
    "perruche": 15,
    "colombe": 12,
}
DEFAULT_LIFESPAN_YEARS = 10


def _validate_wing_span(wing_span: float) -> float:
    if isinstance(wing_span, bool) or not isinstance(wing_span, (int, float)):
        raise InvalidAnimalDataError("wing_span", "must be a number")
    if wing_span <= 0:
        raise InvalidAnimalDataError("wing_span", "must be greater than 0 cm")
    if wing_span > MAX_WING_SPAN_CM:
        raise InvalidAnimalDataError(
            "wing_span", f"must be at most {MAX_WING_SPAN_CM} cm"
        )
    return float(wing_span)


class Bird(Animal):
    """A bird; talking birds greet instead of using their species call."""

    animal_type = AnimalType.BIRD

    def __init__(
        self,
        name: str,
        birth_date: date,
        weight: float,
        color: str,
        owner: "Owner",
        species: str,
        wing_span: float,
        can_talk: bool = False,
        **identity,
    ) -> None:
        self._species = _validate_label("species", species)
        self._wing_span = _validate_wing_span(wing_span)
        self._can_talk = bool(can_talk)
        super().__init__(name, birth_date, weight, color, owner, **identity)

    @property
    def species(self) -> str:
        return self._species

    @property
    def wing_span(self) -> float:
        return self._wing_span

    @property
    def can_talk(self) -> bool:
        return self._can_talk

    def update_wing_span(self, wing_span: float) -> None:
        value = _validate_wing_span(wing_span)
        if value != self._wing_span:
            self._wing_span = value
            self._touch()

    def set_can_talk(self, can_talk: bool) -> None:
        if bool(can_talk) != self._can_talk:
            self._can_talk = bool(can_talk)
            self._touch()

    def make_sound(self) -> str:
        if self._can_talk:
            return f"Hello! {self.name} veut un cracker!"
        return SPECIES_SOUNDS.get(self._species.lower(), DEFAULT_BIRD_SOUND)

    def get_special_needs(self) -> list[str]:
        needs = super().get_special_needs()
        needs += [
            f"Cage spacieuse (minimum {self._wing_span * 3:.0f} cm)",
            "Exercice quotidien hors cage (minimum 2h)",
            "Alimentation variée avec graines et fruits frais",
            "Température stable (18-25°C)",
            "Éviter les courants d'air",
        ]
        if self._can_talk:
            needs += [
                "Stimulation mentale et sociale quotidienne",
                "Interaction humaine régulière (minimum 1h/jour)",
                "Jouets interactifs pour éviter l'ennui",
                "Apprentissage et répétition de mots",
            ]
        needs += SPECIES_NEEDS.get(self._species.lower(), [])
        return needs

    def recommended_cage_size(self) -> dict:
        """Cage dimensions in cm; talking birds get a larger cage."""
        width = self._wing_span * (4 if self._can_talk else 3)
        return {
            "width": width,
            "height": width * 1.5,
            "depth": width * 0.8,
            "unit": "cm",
        }

    def is_large_bird(self) -> bool:
        return self._wing_span > LARGE_BIRD_WING_SPAN_CM

    def estimated_lifespan(self) -> int:
        return SPECIES_LIFESPAN_YEARS.get(self._species.lower(), DEFAULT_LIFESPAN_YEARS)

    def describe(self) -> str:
        talking = "parleur" if self._can_talk else "non parleur"
        size = "grand" if self.is_large_bird() else "petit"
        return (
            f"{self.get_type()} de type {self._species}, {talking} ({size}), "
            f"envergure de {self._wing_span:.1f} cm, {self.calculate_age()} an(s)"
        )


# ══════════════════════════════════════════════════════════════════════
# Owner
# ══════════════════════════════════════════════════════════════════════

OWNER_NAME_PATTERN = re.compile(r"^(?:[^\W\d_]|[\s\-'])+$")
DOG_LIMIT = 5
NEW_MEMBER_DAYS = 30
FLAT_ANNUAL_COST = 500


def _validate_person_name(field_name: str, value: str) -> str:
    text = str(value or "").strip()
    if not text:
        raise InvalidOwnerDataError(field_name, "must not be empty")
    if not NAME_MIN_LEN <= len(text) <= NAME_MAX_LEN:
        raise InvalidOwnerDataError(
            field_name, f"must be {NAME_MIN_LEN}-{NAME_MAX_LEN} characters"
        )
    if not OWNER_NAME_PATTERN.match(text):
        raise InvalidOwnerDataError(
            field_name, "only letters, spaces, hyphens and apostrophes are allowed"
        )
    return text


def _require(field_name: str, value: object, kind: type) -> None:
    if not isinstance(value, kind):
        raise InvalidOwnerDataError(field_name, f"must be a {kind.__name__}")


class Owner(Entity):
    """Aggregate root holding a person's contact data and their animals.

    ``registration_date`` is the creation timestamp and never changes.
    """

    def __init__(
        self,
        first_name: str,
        last_name: str,
        email: Email,
        phone_number: PhoneNumber,
        address: Address,
        *,
        id: Optional[int] = None,
        registration_date: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
        is_active: bool = True,
        version: int = 0,
    ) -> None:
        first = capitalize_first(_validate_person_name("first_name", first_name))
        last = _validate_person_name("last_name", last_name).upper()
        _require("email", email, Email)
        _require("phone_number", phone_number, PhoneNumber)
        _require("address", address, Address)
        super().__init__(
            id=id, created_at=registration_date, updated_at=updated_at, version=version
        )
        self._first_name = first
        self._last_name = last
        self._email = email
        self._phone_number = phone_number
        self._address = address
        self._is_active = bool(is_active)
        self._animals: list[Animal] = []

    # ── Accessors ────────────────────────────────────────────────────

    @property
    def first_name(self) -> str:
        return self._first_name

    @property
    def last_name(self) -> str:
        return self._last_name

    @property
    def email(self) -> Email:
        return self._email

    @property
    def phone_number(self) -> PhoneNumber:
        return self._phone_number

    @property
    def address(self) -> Address:
        return self._address

    @property
    def is_active(self) -> bool:
        return self._is_active

    @property
    def registration_date(self) -> datetime:
        return self.created_at

    @property
    def animals(self) -> tuple[Animal, ...]:
        return tuple(self._animals)

    @property
    def full_name(self) -> str:
        return f"{self._first_name} {self._last_name}"

    @property
    def initials(self) -> str:
        return (self._first_name[:1] + self._last_name[:1]).upper()

    # ── Animal collection ────────────────────────────────────────────

    def has_animal(self, animal: Animal) -> bool:
        return any(owned is animal for owned in self._animals)

    def add_animal(self, animal: Animal) -> None:
        animal.assign_owner(self)

    def remove_animal(self, animal: Animal) -> None:
        if animal.owner is self:
            animal.remove_owner()
        else:
            self._detach(animal)

    def _attach(self, animal: Animal, touch: bool = True) -> None:
        if self.has_animal(animal):
            return
        self._animals.append(animal)
        if touch:
            self._touch()

    def _detach(self, animal: Animal) -> None:
        if not self.has_animal(animal):
            return
        self._animals = [owned for owned in self._animals if owned is not animal]
        self._touch()

    # ── Mutators ─────────────────────────────────────────────────────

    def update_name(self, first_name: str, last_name: str) -> None:
        first = capitalize_first(_validate_person_name("first_name", first_name))
        last = _validate_person_name("last_name", last_name).upper()
        if (first, last) != (self._first_name, self._last_name):
            self._first_name = first
            self._last_name = last
            self._touch()

    def update_contact_info(self, email: Email, phone_number: PhoneNumber) -> None:
        _require("email", email, Email)
        _require("phone_number", phone_number, PhoneNumber)
        if email != self._email or phone_number != self._phone_number:
            self._email = email
            self._phone_number = phone_number
            self._touch()

    def update_address(self, address: Address) -> None:
        _require("address", address, Address)
        if address != self._address:
            self._address = address
            self._touch()

    def activate(self) -> None:
        if not self._is_active:
            self._is_active = True
            self._touch()

    def deactivate(self) -> None:
        if self._is_active:
            self._is_active = False
            self._touch()

    # ── Queries ──────────────────────────────────────────────────────

    def get_animals_by_type(self, animal_type: object) -> list[Animal]:
        wanted = AnimalType.parse(animal_type)
        return [animal for animal in self._animals if animal.animal_type is wanted]

    def count_animals_by_type(self) -> dict[str, int]:
        """Counts keyed by display label, for types actually owned."""
        counts: dict[str, int] = {}
        for animal in self._animals:
            label = animal.get_type()
            counts[label] = counts.get(label, 0) + 1
        return counts

    def get_total_animals(self) -> int:
        return len(self._animals)

    def has_animals(self) -> bool:
        return bool(self._animals)

    def has_reached_dog_limit(self) -> bool:
        return len(self.get_animals_by_type(AnimalType.DOG)) >= DOG_LIMIT

    def owns_dangerous_dogs(self) -> bool:
        return any(
            isinstance(animal, Dog) and animal.is_dangerous for animal in self._animals
        )

    def get_average_animal_age(self) -> float:
        if not self._animals:
            return 0.0
        ages = [animal.calculate_age() for animal in self._animals]
        return round_half_up(sum(ages) / len(ages), 1)

    def get_senior_animals(self) -> list[Animal]:
        return [animal for animal in self._animals if animal.is_senior()]

    def get_estimated_total_annual_cost(self) -> OwnerCostEstimate:
        """Dogs use their detailed estimate; other animals a flat 500 EUR."""
        breakdown: dict[str, int] = {}
        for animal in self._animals:
            if isinstance(animal, Dog):
                cost = animal.estimated_annual_cost().total
            else:
                cost = FLAT_ANNUAL_COST
            key = animal.name
            suffix = 2
            while key in breakdown:
                key = f"{animal.name} ({suffix})"
                suffix += 1
            breakdown[key] = cost
        return OwnerCostEstimate(total=sum(breakdown.values()), breakdown=breakdown)

    def membership_duration_in_days(self, now: Optional[datetime] = None) -> int:
        now = now or utcnow()
        return abs((now - self.registration_date).days)

    def is_new_member(self, now: Optional[datetime] = None) -> bool:
        return self.membership_duration_in_days(now) < NEW_MEMBER_DAYS

    def get_profile_summary(self) -> dict:
        return {
            "full_name": self.full_name,
            "email": self._email.value,
            "city": self._address.city,
            "total_animals": self.get_total_animals(),
            "animals_by_type": self.count_animals_by_type(),
            "member_since": self.registration_date.date().isoformat(),
            "is_active": self._is_active,
        }
