from rest_framework.routers import DefaultRouter

from room_service.views import RoomServiceViewSet, ServiceTypeViewSet

app_name = "room_service"

router = DefaultRouter()
router.register("service-types", ServiceTypeViewSet, basename="service-types")
router.register("room-services", RoomServiceViewSet, basename="room-services")

urlpatterns = router.urls
