import uuid

from django.db import models

from base.abstractModels import GeocodableModel

class PlaceModel(GeocodableModel):
    """
    A named place with a postal address and a geocoded location.
    """
    id = models.UUIDField(default=uuid.uuid4, primary_key=True, editable=False)
    name = models.CharField(max_length=255)
    createdAt = models.DateTimeField(auto_now_add=True)
    updatedAt = models.DateTimeField(auto_now=True)

    class Meta:
        db_table = "place"
        ordering = ["-createdAt"]

    def __str__(self):
        return self.name
