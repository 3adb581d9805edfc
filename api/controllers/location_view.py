from django.shortcuts import get_object_or_404

from rest_framework import viewsets, status
from rest_framework.permissions import AllowAny, IsAdminUser
from rest_framework.response import Response

from api.serializers import LocationSerializer
from base.models.location_model import LocationModel

class LocationViewSet(viewsets.ViewSet):
    """
    A ViewSet for the country names used when formatting addresses.
    """
    def get_permissions(self):
        """
        Anyone can read country names, only staff can change them.
        """
        if self.action in ("list", "retrieve"):
            return [AllowAny()]

        return [IsAdminUser()]

    def list(self, request):
        """
        Returns the stored country names.
        GET /api/location
        """
        locations = LocationModel.objects.all()
        serializer = LocationSerializer(locations, many=True)
        return Response(serializer.data)

    def create(self, request):
        """
        Store a country name, overriding the bundled one.
        POST /api/location

        Body:
        {
            "country_code": "GB",
            "country_name": "Great Britain"
        }
        """
        serializer = LocationSerializer(data=request.data)

        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data, status=status.HTTP_201_CREATED)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

    def retrieve(self, request, pk=None):
        """
        Retrieve a specific location by country code.
        GET /api/location/{country_code}
        """
        location = get_object_or_404(LocationModel, country_code=pk.upper())
        serializer = LocationSerializer(location)
        return Response(serializer.data)

    def update(self, request, pk=None):
        """
        Rename a location (PUT).
        PUT /api/location/{country_code}

        Body:
        {
            "country_name": "United Kingdom"
        }
        """
        location = get_object_or_404(LocationModel, country_code=pk.upper())
        serializer = LocationSerializer(location, data=request.data, partial=True)

        if serializer.is_valid():
            serializer.save()
            return Response(serializer.data)

        return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)
