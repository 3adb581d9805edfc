import uuid

import base.managers
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="LocationModel",
            fields=[
                ("country_code", models.CharField(max_length=2, primary_key=True, serialize=False)),
                ("country_name", models.CharField(max_length=100)),
            ],
            options={
                "db_table": "location",
                "ordering": ["country_name"],
            },
            managers=[
                ("objects", base.managers.LocationManager()),
            ],
        ),
        migrations.CreateModel(
            name="PlaceModel",
            fields=[
                ("address_line1", models.CharField(blank=True, default="", max_length=255)),
                ("address_line2", models.CharField(blank=True, default="", max_length=255)),
                ("city", models.CharField(blank=True, default="", max_length=64)),
                ("region", models.CharField(blank=True, default="", max_length=64)),
                ("postcode", models.CharField(blank=True, default="", max_length=16)),
                ("country", models.CharField(blank=True, default="", max_length=2)),
                ("coordinate_lat", models.FloatField(blank=True, null=True)),
                ("coordinate_lng", models.FloatField(blank=True, null=True)),
                ("coordinate_manually_set", models.BooleanField(default=False)),
                ("id", models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ("name", models.CharField(max_length=255)),
                ("createdAt", models.DateTimeField(auto_now_add=True)),
                ("updatedAt", models.DateTimeField(auto_now=True)),
            ],
            options={
                "db_table": "place",
                "ordering": ["-createdAt"],
            },
        ),
    ]
