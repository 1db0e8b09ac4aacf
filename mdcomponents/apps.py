from django.apps import AppConfig


class MdComponentsConfig(AppConfig):
    name = "mdcomponents"
    verbose_name = "Markdown components"

    def ready(self):
        """Import signal handlers when app is ready."""
        import mdcomponents.signals  # noqa: F401 - Register setting_changed handler
