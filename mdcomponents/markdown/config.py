# mdcomponents/markdown/config.py

from functools import lru_cache

from django.conf import settings

DEFAULTS = {
    "EXTENSIONS": ["extra", "sane_lists"],
    "EXTENSION_CONFIGS": {},
    "COMPONENTS": [],
    "TIMEOUT": None,
    "DEDICATED_HOST_THREAD": False,
    "SANITIZE": False,
    "SANITIZE_EXTRA_TAGS": [],
    "SANITIZE_EXTRA_ATTRIBUTES": {},
}


@lru_cache(maxsize=1)
def get_markdown_config():
    """
    Configuration for Python-Markdown rendering.

    Read from ``settings.MDCOMPONENTS``; every key is optional and falls
    back to ``DEFAULTS``. The component extension itself is not listed here:
    ``render_markdown`` always adds it last, configured with the registry
    and host for the call.
    """
    conf = dict(DEFAULTS)
    conf.update(getattr(settings, "MDCOMPONENTS", {}))
    return conf
