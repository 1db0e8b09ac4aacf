"""
Signal handlers for the mdcomponents app.

Registry, host and markdown configuration are built once from settings and
cached; they are rebuilt when ``MDCOMPONENTS`` changes (e.g. under
``override_settings`` in tests).
"""

import logging

from django.core.signals import setting_changed
from django.dispatch import receiver

from mdcomponents.components.host import get_default_host
from mdcomponents.components.registry import get_default_registry
from mdcomponents.markdown.config import get_markdown_config
from mdcomponents.markdown.postprocessors.sanitizer import _get_bleach_config

logger = logging.getLogger(__name__)


@receiver(setting_changed)
def reset_component_caches(sender, setting, **kwargs):
    if setting != "MDCOMPONENTS":
        return

    logger.debug("MDCOMPONENTS changed; clearing cached registry, host and configuration")
    if get_default_host.cache_info().currsize:
        get_default_host().shutdown()
    get_default_host.cache_clear()
    get_default_registry.cache_clear()
    get_markdown_config.cache_clear()
    _get_bleach_config.cache_clear()
