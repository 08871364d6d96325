from django.apps import AppConfig


class AmenityConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "amenity"

    def ready(self):
        import amenity.signals  # noqa: F401
