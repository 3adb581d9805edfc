from django.db import models

class LocationManager(models.Manager):
    """
    Manager for LocationModel that resolves country codes to names.
    """
    # Allow this manager to be serialized into migrations
    use_in_migrations = True

    def name_of(self, country_code):
        """
        Look up the display name stored for a country code.

        Args:
            country_code (str): Two letter ISO country code, any case.

        Returns:
            str: The stored country name, or None when the code has no row.
        """
        if not country_code:
            return None

        return (
            self.filter(country_code=country_code.upper())
            .values_list("country_name", flat=True)
            .first()
        )

    def seed(self, names):
        """
        Create or rename a location for each code in `names`.

        Args:
            names (dict): country code -> country name

        Returns:
            tuple: (created count, updated count)
        """
        created = updated = 0
        for code, name in names.items():
            _, was_created = self.update_or_create(
                country_code=code.upper(),
                defaults={"country_name": name},
            )
            if was_created:
                created += 1
            else:
                updated += 1

        return created, updated
