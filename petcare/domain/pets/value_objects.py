"""
Value objects for the pets bounded context.

Immutable, self-validating primitives compared by value:
- Email: normalized, syntax-checked address.
- PhoneNumber: normalized number with French/international classification.
- Address: postal address with country-aware postal code rules.

The constructor is the single validation gate. Replacing a value
means building a new instance.
"""

import math
import re
from dataclasses import dataclass
from typing import Mapping, Optional
from urllib.parse import quote_plus

from email_validator import EmailNotValidError, validate_email

from petcare.domain.pets.errors import (
    InvalidAddressError,
    InvalidEmailError,
    InvalidPhoneNumberError,
)


def capitalize_first(value: str) -> str:
    """Upper-case the first character and leave the rest untouched."""
    return value[:1].upper() + value[1:]


def capitalize_words(value: str) -> str:
    """Lower-case the text, then upper-case the first letter of each word."""
    return re.sub(
        r"(^|\s)(\S)", lambda m: m.group(1) + m.group(2).upper(), value.lower()
    )


# ══════════════════════════════════════════════════════════════════════
# Email
# ══════════════════════════════════════════════════════════════════════


@dataclass(frozen=True)
class Email:
    """An email address, lower-cased and trimmed.

    Syntax is checked with email-validator; no DNS lookup is made.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = str(self.value).strip().lower()
        if not normalized:
            raise InvalidEmailError("email address must not be empty")
        try:
            validate_email(normalized, check_deliverability=False)
        except EmailNotValidError as exc:
            raise InvalidEmailError(str(exc)) from exc
        object.__setattr__(self, "value", normalized)

    @property
    def domain(self) -> str:
        return self.value.split("@", 1)[1]

    def __str__(self) -> str:
        return self.value


# ══════════════════════════════════════════════════════════════════════
# Phone number
# ══════════════════════════════════════════════════════════════════════

INTERNATIONAL_PATTERN = re.compile(r"^\+\d{10,15}$")
FRENCH_NATIONAL_PATTERN = re.compile(r"^0[1-9]\d{8}$")
GENERIC_PATTERN = re.compile(r"^\d{8,15}$")

FRENCH_PREFIX_TYPES = {
    "01": "fixe_ile_de_france",
    "02": "fixe_nord_ouest",
    "03": "fixe_nord_est",
    "04": "fixe_sud_est",
    "05": "fixe_sud_ouest",
    "06": "mobile",
    "07": "mobile",
    "08": "special",
    "09": "voip",
}

# Longest prefixes first so "+33" is not shadowed by a shorter code.
COUNTRY_CALLING_CODES = (
    ("+33", "France"),
    ("+44", "Royaume-Uni"),
    ("+49", "Allemagne"),
    ("+32", "Belgique"),
    ("+41", "Suisse"),
    ("+34", "Espagne"),
    ("+39", "Italie"),
    ("+1", "USA/Canada"),
)


def _normalize_phone(raw: str) -> str:
    normalized = re.sub(r"[^\d+]", "", raw.strip())
    if normalized.startswith("00"):
        normalized = "+" + normalized[2:]
    return normalized


def _is_valid_phone(number: str) -> bool:
    if not number:
        return False
    if number.startswith("+"):
        return bool(INTERNATIONAL_PATTERN.match(number))
    if len(number) == 10 and number.startswith("0"):
        return bool(FRENCH_NATIONAL_PATTERN.match(number))
    return bool(GENERIC_PATTERN.match(number))


def _format_french(number: str) -> str:
    return " ".join(number[i:i + 2] for i in range(0, 10, 2))


@dataclass(frozen=True)
class PhoneNumber:
    """A phone number normalized to digits with an optional leading '+'.

    Accepted shapes: international (+ and 10-15 digits), French national
    (0 and 9 digits) and generic national (8-15 digits). A "00" prefix
    is rewritten to "+".
    """

    value: str

    def __post_init__(self) -> None:
        normalized = _normalize_phone(str(self.value))
        if not _is_valid_phone(normalized):
            raise InvalidPhoneNumberError(
                "expected +<10-15 digits>, 0<9 digits> or 8-15 digits"
            )
        object.__setattr__(self, "value", normalized)

    @property
    def formatted(self) -> str:
        """Display form: "06 12 34 56 78", "+33 6 12 34 56 78", "+44 207 ..."."""
        if self.value.startswith("+33"):
            national = "0" + self.value[3:]
            if len(national) == 10:
                return "+33 " + _format_french(national)[1:]
        if self.value.startswith("+"):
            digits = self.value[1:]
            rest = digits[2:]
            groups = [rest[i:i + 3] for i in range(0, len(rest), 3)]
            return " ".join(["+" + digits[:2], *groups])
        if len(self.value) == 10 and self.value.startswith("0"):
            return _format_french(self.value)
        return self.value

    @property
    def phone_type(self) -> str:
        if self.value.startswith("+") or (
            len(self.value) == 10 and not self.value.startswith("0")
        ):
            return "international"
        if len(self.value) != 10:
            return "unknown"
        return FRENCH_PREFIX_TYPES.get(self.value[:2], "unknown")

    def is_mobile(self) -> bool:
        return self.phone_type in ("mobile", "international")

    @property
    def country(self) -> Optional[str]:
        """Country guessed from the calling code; national numbers are French."""
        if not self.value.startswith("+"):
            return "France"
        for prefix, country in COUNTRY_CALLING_CODES:
            if self.value.startswith(prefix):
                return country
        return None

    def to_international(self, default_country_code: str = "+33") -> str:
        if self.value.startswith("+"):
            return self.value
        if self.value.startswith("0"):
            return default_country_code + self.value[1:]
        return default_country_code + self.value

    @classmethod
    def from_international(cls, country_code: str, national_number: str) -> "PhoneNumber":
        """Build a number from a calling code and a national number.

        Leading zeros of the national part are dropped.
        """
        return cls(country_code + national_number.lstrip("0"))

    @property
    def masked(self) -> str:
        """Formatted number with every digit but the last four characters hidden."""
        formatted = self.formatted
        if len(formatted) <= 4:
            return "*" * len(formatted)
        return re.sub(r"\d", "*", formatted[:-4]) + formatted[-4:]

    def info(self) -> dict:
        return {
            "raw": self.value,
            "formatted": self.formatted,
            "type": self.phone_type,
            "country": self.country,
            "isMobile": self.is_mobile(),
            "international": self.to_international(),
        }

    def __str__(self) -> str:
        return self.formatted


# ══════════════════════════════════════════════════════════════════════
# Address
# ══════════════════════════════════════════════════════════════════════

DEFAULT_COUNTRY = "France"
STREET_MIN_LEN = 5
STREET_MAX_LEN = 255
CITY_MIN_LEN = 2
CITY_MAX_LEN = 100
COUNTRY_MIN_LEN = 2
EARTH_RADIUS_KM = 6371

CITY_PATTERN = re.compile(r"^(?:[^\W\d_]|[\s\-'])+$")

POSTAL_CODE_PATTERNS = {
    "france": re.compile(r"^\d{5}$"),
    "belgique": re.compile(r"^\d{4}$"),
    "belgium": re.compile(r"^\d{4}$"),
    "suisse": re.compile(r"^\d{4}$"),
    "switzerland": re.compile(r"^\d{4}$"),
    "canada": re.compile(r"^[A-Z]\d[A-Z]\s?\d[A-Z]\d$", re.IGNORECASE),
    "usa": re.compile(r"^\d{5}(-\d{4})?$"),
    "états-unis": re.compile(r"^\d{5}(-\d{4})?$"),
}

FRENCH_REGIONS = {
    "75": "Île-de-France",
    "13": "Provence-Alpes-Côte d'Azur",
    "69": "Auvergne-Rhône-Alpes",
    "33": "Nouvelle-Aquitaine",
    "59": "Hauts-de-France",
    "44": "Pays de la Loire",
    "31": "Occitanie",
    "35": "Bretagne",
    "67": "Grand Est",
    "68": "Grand Est",
}

MAJOR_CITIES = (
    "Paris", "Marseille", "Lyon", "Toulouse", "Nice",
    "Nantes", "Strasbourg", "Montpellier", "Bordeaux", "Lille",
)

# Rough department centers, (lat, lng).
DEPARTMENT_COORDINATES = {
    "75": (48.8566, 2.3522),
    "13": (43.2965, 5.3698),
    "69": (45.7640, 4.8357),
    "33": (44.8378, -0.5792),
    "59": (50.6292, 3.0573),
}
FRANCE_CENTER = (46.2276, 2.2137)

# ZIP+4 must be tried before the bare 5-digit form.
POSTAL_CODE_SEARCH_PATTERNS = (
    re.compile(r"\b\d{5}-\d{4}\b"),
    re.compile(r"\b\d{5}\b"),
    re.compile(r"\b\d{4}\b"),
    re.compile(r"\b[A-Z]\d[A-Z]\s?\d[A-Z]\d\b", re.IGNORECASE),
)


def _is_valid_postal_code(code: str, country: str) -> bool:
    pattern = POSTAL_CODE_PATTERNS.get(country.lower())
    if pattern is not None:
        return bool(pattern.match(code))
    return 3 <= len(code) <= 10


@dataclass(frozen=True)
class Address:
    """A postal address.

    Attributes:
        street: Street line, 5-255 characters.
        city: City name, letters/spaces/hyphens/apostrophes, stored title-cased.
        postal_code: Postal code, format checked against the country.
        country: Country name, stored with a capital first letter.
    """

    street: str
    city: str
    postal_code: str
    country: str = DEFAULT_COUNTRY

    def __post_init__(self) -> None:
        street = str(self.street).strip()
        city = str(self.city).strip()
        postal_code = str(self.postal_code).strip()
        country = str(self.country).strip()

        if not street:
            raise InvalidAddressError("street", "must not be empty")
        if len(street) < STREET_MIN_LEN:
            raise InvalidAddressError(
                "street", f"must be at least {STREET_MIN_LEN} characters"
            )
        if len(street) > STREET_MAX_LEN:
            raise InvalidAddressError(
                "street", f"must be at most {STREET_MAX_LEN} characters"
            )

        if not city:
            raise InvalidAddressError("city", "must not be empty")
        if not CITY_MIN_LEN <= len(city) <= CITY_MAX_LEN:
            raise InvalidAddressError(
                "city", f"must be {CITY_MIN_LEN}-{CITY_MAX_LEN} characters"
            )
        if not CITY_PATTERN.match(city):
            raise InvalidAddressError(
                "city", "only letters, spaces, hyphens and apostrophes are allowed"
            )

        if not postal_code:
            raise InvalidAddressError("postal_code", "must not be empty")
        if not _is_valid_postal_code(postal_code, country):
            raise InvalidAddressError(
                "postal_code", f"'{postal_code}' is not valid for {country or 'the country'}"
            )

        if not country:
            raise InvalidAddressError("country", "must not be empty")
        if len(country) < COUNTRY_MIN_LEN:
            raise InvalidAddressError(
                "country", f"must be at least {COUNTRY_MIN_LEN} characters"
            )

        object.__setattr__(self, "street", street)
        object.__setattr__(self, "city", capitalize_words(city))
        object.__setattr__(self, "postal_code", postal_code)
        object.__setattr__(self, "country", capitalize_first(country))

    # ── Renderings ───────────────────────────────────────────────────

    @property
    def full_address(self) -> str:
        return f"{self.street}, {self.postal_code} {self.city}, {self.country}"

    @property
    def multiline_address(self) -> str:
        return f"{self.street}\n{self.postal_code} {self.city}\n{self.country}"

    @property
    def short_address(self) -> str:
        return f"{self.street}, {self.postal_code} {self.city}"

    @property
    def google_maps_url(self) -> str:
        return (
            "https://www.google.com/maps/search/?api=1&query="
            + quote_plus(self.full_address)
        )

    def __str__(self) -> str:
        return self.full_address

    # ── French geography ─────────────────────────────────────────────

    def is_in_france(self) -> bool:
        return self.country.lower() == "france"

    @property
    def department(self) -> Optional[str]:
        if not self.is_in_france():
            return None
        return self.postal_code[:2]

    @property
    def region(self) -> Optional[str]:
        if not self.is_in_france():
            return None
        return FRENCH_REGIONS.get(self.department, "Autre région")

    def is_in_major_city(self) -> bool:
        city = self.city.lower()
        return any(major.lower() in city for major in MAJOR_CITIES)

    def approximate_coordinates(self) -> tuple[Optional[float], Optional[float]]:
        """Department-level (lat, lng) for French addresses, (None, None) otherwise."""
        if not self.is_in_france() or len(self.postal_code) != 5:
            return (None, None)
        return DEPARTMENT_COORDINATES.get(self.postal_code[:2], FRANCE_CENTER)

    def distance_to(self, other: "Address") -> Optional[float]:
        """Great-circle distance in km between approximate coordinates."""
        lat1, lng1 = self.approximate_coordinates()
        lat2, lng2 = other.approximate_coordinates()
        if lat1 is None or lat2 is None:
            return None

        lat_delta = math.radians(lat2 - lat1)
        lng_delta = math.radians(lng2 - lng1)
        a = (
            math.sin(lat_delta / 2) ** 2
            + math.cos(math.radians(lat1))
            * math.cos(math.radians(lat2))
            * math.sin(lng_delta / 2) ** 2
        )
        c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
        return round(EARTH_RADIUS_KM * c, 2)

    # ── Conversions ──────────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "street": self.street,
            "city": self.city,
            "postalCode": self.postal_code,
            "country": self.country,
            "fullAddress": self.full_address,
        }

    @classmethod
    def from_mapping(cls, data: Mapping[str, str]) -> "Address":
        """Build an address from a mapping using English or French keys."""

        def pick(*keys: str, default: str = "") -> str:
            for key in keys:
                if data.get(key) is not None:
                    return data[key]
            return default

        return cls(
            street=pick("street", "rue"),
            city=pick("city", "ville"),
            postal_code=pick("postalCode", "postal_code", "codePostal"),
            country=pick("country", "pays", default=DEFAULT_COUNTRY),
        )

    @classmethod
    def from_full_address(cls, full_address: str) -> "Address":
        """Parse "street, postal code city[, country]".

        The street is the first comma-separated part, the postal code is
        searched anywhere in the text, the city is what remains of the
        second part and the country is the last part when there are more
        than two. Missing pieces surface as validation errors.
        """
        parts = [part.strip() for part in full_address.split(",")]
        street = parts[0]

        postal_code = ""
        for pattern in POSTAL_CODE_SEARCH_PATTERNS:
            match = pattern.search(full_address)
            if match:
                postal_code = match.group(0).upper()
                break

        city = ""
        if len(parts) >= 2:
            middle = parts[1]
            if postal_code:
                middle = re.sub(re.escape(postal_code), "", middle, count=1, flags=re.IGNORECASE)
            middle = middle.strip()
            if middle and not re.search(r"\d", middle):
                city = middle

        country = (
            capitalize_first(parts[-1].lower()) if len(parts) > 2 else DEFAULT_COUNTRY
        )
        return cls(street=street, city=city, postal_code=postal_code, country=country)
