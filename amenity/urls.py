from rest_framework.routers import DefaultRouter

from amenity.views import AmenityTypeViewSet, RoomAmenityViewSet

app_name = "amenity"

router = DefaultRouter()
router.register("amenity-types", AmenityTypeViewSet, basename="amenity-types")
router.register("room-amenities", RoomAmenityViewSet, basename="room-amenities")

urlpatterns = router.urls
