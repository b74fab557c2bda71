from django.apps import AppConfig


class UnivistaConfig(AppConfig):
    default_auto_field = "django.db.models.BigAutoField"
    name = "univista"
    verbose_name = "UNIVISTA events"
