from rest_framework.routers import DefaultRouter

from .controllers import *

router = DefaultRouter(trailing_slash="")  # No trailing slash
router.register(r"place", PlaceViewSet, "place")
router.register(r"location", LocationViewSet, "location")

urlpatterns = router.urls
