import re
from dataclasses import dataclass, field, replace
from typing import Callable, Dict, List, Mapping, Optional, Sequence, Tuple, Union

from django.conf import settings
from django.core.exceptions import ImproperlyConfigured

from base import Constants
from base.enums import INPUT_MODE
from base.values import Address

# None: free text, str: literal value, list: allowed values, dict: allowed value -> label
AllowedValues = Union[None, str, Sequence[str], Mapping[str, str]]


@dataclass(frozen=True)
class AddressConfig:
    """
    Controls how the region, country and postcode of an address are entered
    and validated.

    allowed_regions / allowed_countries take one of three shapes:

    - None: the user may type any value.
    - str: the value is fixed to the given literal and not shown to the user.
    - list or dict: the user picks from the given values. A dict maps each
      value to the label shown in the dropdown.

    postcode_regex is the pattern a non-empty postcode must match, or None to
    accept any postcode.

    Invalid configuration raises ImproperlyConfigured when the config is built.
    """
    allowed_regions: AllowedValues = None
    allowed_countries: AllowedValues = None
    postcode_regex: Optional[str] = Constants.DEFAULT_POSTCODE_REGEX
    _postcode_pattern: Optional[re.Pattern] = field(init=False, repr=False, compare=False, default=None)

    def __post_init__(self):
        object.__setattr__(self, "allowed_regions", _normalise_allowed("allowed_regions", self.allowed_regions))
        object.__setattr__(
            self, "allowed_countries",
            _normalise_allowed("allowed_countries", self.allowed_countries, country_codes=True),
        )

        pattern = None
        if self.postcode_regex is not None:
            try:
                pattern = re.compile(self.postcode_regex)
            except (re.error, TypeError) as e:
                raise ImproperlyConfigured(f"Invalid postcode_regex {self.postcode_regex!r}: {e}") from e
        object.__setattr__(self, "_postcode_pattern", pattern)

    @classmethod
    def from_settings(cls):
        """
        Build the default configuration from settings.ADDRESSABLE.
        """
        conf = getattr(settings, "ADDRESSABLE", {})
        return cls(
            allowed_regions=conf.get("ALLOWED_REGIONS"),
            allowed_countries=conf.get("ALLOWED_COUNTRIES"),
            postcode_regex=conf.get("POSTCODE_REGEX", Constants.DEFAULT_POSTCODE_REGEX),
        )

    def with_regions(self, regions: AllowedValues):
        return replace(self, allowed_regions=regions)

    def with_countries(self, countries: AllowedValues):
        return replace(self, allowed_countries=countries)

    def with_postcode_regex(self, regex: Optional[str]):
        return replace(self, postcode_regex=regex)

    @property
    def region_mode(self) -> INPUT_MODE:
        return _mode_of(self.allowed_regions)

    @property
    def country_mode(self) -> INPUT_MODE:
        return _mode_of(self.allowed_countries)

    def region_choices(self) -> List[Tuple[str, str]]:
        if self.region_mode != INPUT_MODE.CHOICE:
            return []
        return [(value, label or value) for value, label in self.allowed_regions]

    def country_choices(self, country_name: Callable[[str], str]) -> List[Tuple[str, str]]:
        if self.country_mode != INPUT_MODE.CHOICE:
            return []
        return [(code, label or country_name(code)) for code, label in self.allowed_countries]

    def literal_defaults(self) -> Dict[str, str]:
        """Field values that new records start with."""
        defaults = {}
        if self.region_mode == INPUT_MODE.LITERAL:
            defaults[Constants.FieldName.REGION] = self.allowed_regions
        if self.country_mode == INPUT_MODE.LITERAL:
            defaults[Constants.FieldName.COUNTRY] = self.allowed_countries
        return defaults

    def is_valid_postcode(self, postcode: str) -> bool:
        if not postcode or self._postcode_pattern is None:
            return True
        return self._postcode_pattern.search(postcode) is not None

    def validate(self, address: Address) -> Dict[str, List[str]]:
        """
        Check an address against this configuration.

        Returns:
            dict: field name -> list of error messages, empty when valid
        """
        errors = {}

        if not self.is_valid_postcode(address.postcode):
            errors[Constants.FieldName.POSTCODE] = ["Enter a valid postcode."]

        region_error = _check_allowed(address.region, self.allowed_regions, "region")
        if region_error:
            errors[Constants.FieldName.REGION] = [region_error]

        country_error = _check_allowed(address.country, self.allowed_countries, "country")
        if not country_error and address.country and not _is_country_code(address.country):
            country_error = "Enter a two letter country code."
        if country_error:
            errors[Constants.FieldName.COUNTRY] = [country_error]

        return errors


def _mode_of(allowed) -> INPUT_MODE:
    if allowed is None:
        return INPUT_MODE.FREE
    if isinstance(allowed, str):
        return INPUT_MODE.LITERAL
    return INPUT_MODE.CHOICE


def _is_country_code(value) -> bool:
    return isinstance(value, str) and len(value) == Constants.FieldLength.COUNTRY and value.isalpha()


def _normalise_allowed(name, allowed, country_codes=False):
    """
    Returns None, a literal string, or a tuple of (value, label) pairs where
    label is None when the value should be shown as-is.
    """
    if allowed is None:
        return None

    if isinstance(allowed, str):
        if not allowed:
            raise ImproperlyConfigured(f"{name} literal must not be empty")
        if country_codes:
            if not _is_country_code(allowed):
                raise ImproperlyConfigured(f"{name} literal {allowed!r} is not a two letter country code")
            return allowed.upper()
        return allowed

    if isinstance(allowed, Mapping):
        pairs = [(value, label) for value, label in allowed.items()]
    elif isinstance(allowed, (list, tuple)):
        pairs = [
            tuple(item) if isinstance(item, (list, tuple)) else (item, None)
            for item in allowed
        ]
    else:
        raise ImproperlyConfigured(f"{name} must be None, a string, a list or a dict, not {type(allowed).__name__}")

    if not pairs:
        raise ImproperlyConfigured(f"{name} must not be an empty list")

    normalised = []
    for pair in pairs:
        if len(pair) != 2:
            raise ImproperlyConfigured(f"{name} entry {pair!r} must be a value or a (value, label) pair")
        value, label = pair
        if not isinstance(value, str) or not value:
            raise ImproperlyConfigured(f"{name} values must be non-empty strings, got {value!r}")
        if country_codes:
            if not _is_country_code(value):
                raise ImproperlyConfigured(f"{name} value {value!r} is not a two letter country code")
            value = value.upper()
        normalised.append((value, label))

    values = [value for value, _ in normalised]
    if len(set(values)) != len(values):
        raise ImproperlyConfigured(f"{name} contains duplicate values")

    return tuple(normalised)


def _check_allowed(value, allowed, label) -> Optional[str]:
    mode = _mode_of(allowed)
    if mode == INPUT_MODE.LITERAL and value != allowed:
        return f"The {label} must be {allowed}."
    if mode == INPUT_MODE.CHOICE and value and value not in {v for v, _ in allowed}:
        return f"Select a valid {label}."
    return None
