from pathlib import Path

import django
import pytest
from django.conf import settings

TEMPLATE_DIR = Path(__file__).resolve().parent / "templates"

TEST_COMPONENTS = [
    "tests.components.Alert",
    "tests.components.Card",
    "tests.components.Badge",
    "tests.components.Echo",
    "tests.components.Greeting",
    "tests.components.Stats",
    "tests.components.Broken",
    "tests.components.ThreadName",
    "tests.components.Whoami",
    ("Notice", "tests.components.Alert"),
]


def pytest_configure():
    settings.configure(
        DEBUG=False,
        SECRET_KEY="mdcomponents-tests",
        INSTALLED_APPS=["mdcomponents.apps.MdComponentsConfig"],
        TEMPLATES=[
            {
                "BACKEND": "django.template.backends.django.DjangoTemplates",
                "DIRS": [TEMPLATE_DIR],
                "OPTIONS": {
                    "context_processors": ["django.template.context_processors.request"],
                },
            }
        ],
        MDCOMPONENTS={"COMPONENTS": TEST_COMPONENTS},
    )
    django.setup()


@pytest.fixture
def registry():
    from mdcomponents.components import ComponentRegistry
    from tests import components

    registry = ComponentRegistry()
    for component in (
        components.Alert,
        components.Card,
        components.Section,
        components.Panel,
        components.Badge,
        components.Echo,
        components.Greeting,
        components.Stats,
        components.Broken,
    ):
        registry.register(component)
    return registry
