from django.apps import AppConfig
from django.utils.translation import gettext_lazy as _


class AssignableValuesConfig(AppConfig):
    name = "assignable_values"
    verbose_name = _("Assignable values")

    def ready(self):
        import assignable_values.signals  # noqa: F401
