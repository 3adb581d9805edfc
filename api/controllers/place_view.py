import logging

from django.db import transaction
from django.shortcuts import get_object_or_404

from rest_framework import viewsets, status
from rest_framework.decorators import action
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response

from base import Constants
from base.abstractModels import PagedList
from base.models import PlaceModel
from base.services.address_renderer import map_link_url, static_map_url
from base.utils import addressable_setting

from api.serializers import PlaceSerializer

logger = logging.getLogger(__name__)

class PlaceViewSet(viewsets.ViewSet):
    placeSerializer = PlaceSerializer
    pagination_class = PagedList

    def get_permissions(self):
        """
        Reading places is public, changing them requires authentication.
        """
        if self.action in ("list", "retrieve", "map"):
            return [AllowAny()]

        return [IsAuthenticated()]

    def list(self, request):
        """
        GET /api/place?country=GB&page=1&pageSize=10
        List places, newest first, optionally filtered by country code
        """
        places = PlaceModel.objects.all()
        country = request.query_params.get("country")
        if country:
            places = places.filter(country=country.upper())

        paginator = self.pagination_class()
        page = paginator.paginate_queryset(places, request, view=self)
        return paginator.get_paginated_response(self.placeSerializer(page, many=True).data)

    def create(self, request):
        """
        POST /api/place
        Body:
        {
            "name": string,
            "address_line1": string,
            "address_line2": string,
            "city": string,
            "region": string,
            "postcode": string,
            "country": string (two letter code),
            "location": {"lat": float, "lng": float, "manually_set": boolean} (optional)
        }
        The location is geocoded from the address unless it is manually set.
        """
        serializer = self.placeSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            place = serializer.save()

        logger.debug(f"Created place {place.pk}")
        return Response(self.placeSerializer(place).data, status=status.HTTP_201_CREATED)

    def retrieve(self, request, pk=None):
        """
        GET /api/place/{id}
        """
        place = get_object_or_404(PlaceModel, pk=pk)
        return Response(self.placeSerializer(place).data)

    def update(self, request, pk=None):
        """
        PUT /api/place/{id}
        Same body as POST. A location that is not manually set keeps the
        stored coordinate, which is refreshed from the address when it changed.
        """
        return self._update(request, pk, partial=False)

    def partial_update(self, request, pk=None):
        """
        PATCH /api/place/{id}
        """
        return self._update(request, pk, partial=True)

    def _update(self, request, pk, partial):
        place = get_object_or_404(PlaceModel, pk=pk)
        serializer = self.placeSerializer(place, data=request.data, partial=partial)
        if not serializer.is_valid():
            return Response(serializer.errors, status=status.HTTP_400_BAD_REQUEST)

        with transaction.atomic():
            place = serializer.save()

        return Response(self.placeSerializer(place).data)

    def destroy(self, request, pk=None):
        """
        DELETE /api/place/{id}
        """
        place = get_object_or_404(PlaceModel, pk=pk)
        place.delete()
        return Response(status=status.HTTP_204_NO_CONTENT)

    @action(detail=True, methods=["get"])
    def map(self, request, pk=None):
        """
        GET /api/place/{id}/map?width=400&height=250
        Static map preview of the place's address
        """
        place = get_object_or_404(PlaceModel, pk=pk)

        try:
            width = int(request.query_params.get("width", Constants.MAP_PREVIEW_WIDTH))
            height = int(request.query_params.get("height", Constants.MAP_PREVIEW_HEIGHT))
        except ValueError:
            return Response(
                {"error": "width and height must be whole numbers of pixels"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not (0 < width <= Constants.MAX_MAP_SIZE and 0 < height <= Constants.MAX_MAP_SIZE):
            return Response(
                {"error": f"width and height must be between 1 and {Constants.MAX_MAP_SIZE}"},
                status=status.HTTP_400_BAD_REQUEST
            )

        if not place.has_address():
            return Response(
                {"error": "This place has no address to show on a map"},
                status=status.HTTP_404_NOT_FOUND
            )

        full_address = place.get_full_address()
        return Response({
            "address": full_address,
            "imageUrl": static_map_url(full_address, width, height, addressable_setting("MAP_API_KEY")),
            "linkUrl": map_link_url(full_address),
            "html": place.address_map(width, height),
        })
