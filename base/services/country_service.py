import logging

from django.db import DatabaseError

from base.countries import COUNTRY_NAMES

logger = logging.getLogger(__name__)


class CountryService:
    """
    Resolves two letter country codes to display names.
    The location table wins over the bundled ISO names so names can be customised.
    """

    @classmethod
    def name_of(cls, country_code: str) -> str:
        """
        Get the display name of a country.

        Args:
            country_code: Two letter ISO code, any case

        Returns:
            str: Country name, or the code itself when it is unknown
        """
        if not country_code:
            return ""

        code = country_code.upper()
        try:
            # Import here to avoid circular imports
            from base.models.location_model import LocationModel

            name = LocationModel.objects.name_of(code)
        except DatabaseError as e:
            logger.warning(f"Country lookup for {code} fell back to bundled names: {e}")
            name = None

        return name or COUNTRY_NAMES.get(code, country_code)

    @classmethod
    def is_known(cls, country_code: str) -> bool:
        return bool(country_code) and country_code.upper() in COUNTRY_NAMES
