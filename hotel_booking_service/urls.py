from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularSwaggerView

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/user/", include(("guest.urls", "guest"), namespace="guest")),
    path("api/", include("booking.urls", namespace="booking")),
    path("api/", include(("room.urls", "room"), namespace="room")),
    path("api/", include("amenity.urls", namespace="amenity")),
    path("api/", include("room_service.urls", namespace="room_service")),
    path("api/schema/", SpectacularAPIView.as_view(), name="schema"),
    path(
        "api/schema/swagger-ui/",
        SpectacularSwaggerView.as_view(url_name="schema"),
        name="swagger-ui",
    ),
]
