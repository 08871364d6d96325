from django.apps import AppConfig


class RoomServiceConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "room_service"

    def ready(self):
        import room_service.signals  # noqa: F401
