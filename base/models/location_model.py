from django.db import models

from base.managers import LocationManager

class LocationModel(models.Model):
    """
    Country code to display name lookup used when formatting addresses.
    """
    country_code = models.CharField(max_length=2, primary_key=True)  # e.g. "US", "GB"
    country_name = models.CharField(max_length=100)

    objects = LocationManager()

    def save(self, *args, **kwargs):
        self.country_code = self.country_code.upper()
        super().save(*args, **kwargs)

    def __str__(self):
        return self.country_name

    class Meta:
        db_table = "location"
        ordering = ["country_name"]
