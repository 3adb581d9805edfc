from dataclasses import replace

from django.core.exceptions import ValidationError
from django.db import models

from base import Constants
from base.config import AddressConfig
from base.services.address_renderer import render_address_html, render_address_map
from base.services.country_service import CountryService
from base.utils import addressable_setting
from base.values import Address


class AddressableModel(models.Model):
    """
    Abstract model adding postal address columns to a record, with validation,
    formatting and change tracking.

    Region, country and postcode input is controlled by an AddressConfig:
    settings.ADDRESSABLE gives the defaults, a subclass may set the
    address_config class attribute, and a single instance can be adjusted
    with set_allowed_regions(), set_allowed_countries() and
    set_postcode_regex().
    """
    address_line1 = models.CharField(max_length=Constants.FieldLength.ADDRESS_LINE, blank=True, default="")
    address_line2 = models.CharField(max_length=Constants.FieldLength.ADDRESS_LINE, blank=True, default="")
    city = models.CharField(max_length=Constants.FieldLength.CITY, blank=True, default="")
    region = models.CharField(max_length=Constants.FieldLength.REGION, blank=True, default="")
    postcode = models.CharField(max_length=Constants.FieldLength.POSTCODE, blank=True, default="")
    country = models.CharField(max_length=Constants.FieldLength.COUNTRY, blank=True, default="")  # ISO alpha-2

    # Class level override of the settings defaults
    address_config = None

    class Meta:
        abstract = True

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self._address_config = self.address_config or AddressConfig.from_settings()
        # Saved address states, newest last
        self._address_history = []

        # from_db() passes field values positionally, user code passes keywords
        if not args:
            self.populate_address_defaults()

    @classmethod
    def from_db(cls, db, field_names, values):
        instance = super().from_db(db, field_names, values)
        if not set(Constants.ADDRESS_FIELDS) & instance.get_deferred_fields():
            instance._remember_address()
        return instance

    def save(self, *args, **kwargs):
        super().save(*args, **kwargs)
        self._remember_address(kwargs.get("update_fields"))

    def _remember_address(self, update_fields=None):
        address = self.address
        if update_fields is not None:
            # Only the written columns reach the database
            written = set(update_fields) & set(Constants.ADDRESS_FIELDS)
            if not written:
                return
            address = replace(
                self._persisted_address(),
                **{name: getattr(address, name) for name in written},
            )

        depth = addressable_setting("ADDRESS_HISTORY_DEPTH", Constants.DEFAULT_ADDRESS_HISTORY_DEPTH)
        self._address_history.append(address)
        del self._address_history[:-max(depth, 1)]

    @property
    def address(self) -> Address:
        return Address.from_record(self)

    @property
    def address_settings(self) -> AddressConfig:
        return self._address_config

    def populate_address_defaults(self):
        """
        Fill literal region/country values into blank fields of a new record.
        """
        for name, value in self._address_config.literal_defaults().items():
            if not getattr(self, name):
                setattr(self, name, value)

    def set_allowed_regions(self, regions):
        """
        Sets the regions a user can enter for this record.

        Args:
            regions: None for free text, a string to fix the region to that
                value, or a list/dict of allowed values for a dropdown.
        """
        self._address_config = self._address_config.with_regions(regions)
        self.populate_address_defaults()

    def set_allowed_countries(self, countries):
        """
        Sets the countries a user can select for this record.

        Args:
            countries: None for free text, a two letter code to fix the
                country and hide it from the user, or a list/dict of allowed
                codes for a dropdown.
        """
        self._address_config = self._address_config.with_countries(countries)
        self.populate_address_defaults()

    def set_postcode_regex(self, regex):
        """
        Sets the pattern an entered postcode must match. None disables
        postcode validation. Defaults to numeric postcodes only.
        """
        self._address_config = self._address_config.with_postcode_regex(regex)

    def clean(self):
        super().clean()
        self.country = (self.country or "").upper()
        for name, value in self._address_config.literal_defaults().items():
            setattr(self, name, value)

        errors = self._address_config.validate(self.address)
        if errors:
            raise ValidationError(errors)

    def has_address(self) -> bool:
        return self.address.has_address()

    def get_country_name(self) -> str:
        """
        Returns the country name (not the 2 character code).
        """
        return CountryService.name_of(self.country)

    def get_full_address(self) -> str:
        """
        Returns the full address as a single comma separated string.
        """
        return self.address.format(CountryService.name_of)

    def get_full_address_html(self) -> str:
        return render_address_html(self.address, self.get_country_name(), localised=False)

    def get_localised_full_address_html(self) -> str:
        """
        Returns the address laid out the way the record's country writes it.
        """
        return render_address_html(self.address, self.get_country_name(), localised=True)

    def address_map(self, width, height) -> str:
        """
        Returns a static map of the address, linking out to the address.

        Args:
            width (int): Image width in pixels
            height (int): Image height in pixels
        """
        return render_address_map(self.get_full_address(), width, height, addressable_setting("MAP_API_KEY"))

    def is_address_changed(self, level=1) -> bool:
        """
        Returns True if any of the address fields differ from a saved state.

        Args:
            level (int): How many saves back to compare against. 1 compares
                with the state the record was loaded or last saved with. Levels
                beyond the remembered history compare with the oldest state
                remembered. Records never saved compare with an empty address.
                A save with update_fields only counts the address columns it
                wrote.
        """
        return bool(self.changed_address_fields(level))

    def changed_address_fields(self, level=1):
        """
        Names of the address fields that differ from the state `level` saves
        back. See is_address_changed().
        """
        if level < 1:
            raise ValueError("level must be 1 or greater")

        return self.address.changed_fields(self._persisted_address(level))

    def _persisted_address(self, level=1) -> Address:
        if not self._address_history:
            return Address()
        return self._address_history[-min(level, len(self._address_history))]
