# mdcomponents/markdown/postprocessors/sanitizer.py

import logging
from functools import lru_cache

import bleach

from ..config import get_markdown_config

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def _get_bleach_config():
    """Cache bleach configuration for better performance."""
    config = get_markdown_config()

    allowed_tags = set(bleach.sanitizer.ALLOWED_TAGS).union(
        {
            # text
            "p",
            "br",
            "div",
            "span",
            "section",
            "article",
            "aside",
            "header",
            "footer",
            "mark",
            "ins",
            "del",
            "sup",
            "sub",
            # headings
            "h1",
            "h2",
            "h3",
            "h4",
            "h5",
            "h6",
            # lists
            "ul",
            "ol",
            "li",
            "hr",
            "blockquote",
            "dl",
            "dt",
            "dd",
            # code
            "pre",
            "code",
            "kbd",
            # tables
            "table",
            "thead",
            "tbody",
            "tr",
            "th",
            "td",
            # media
            "img",
            "figure",
            "figcaption",
            # interactive
            "a",
            "button",
            "details",
            "summary",
        }
    )
    allowed_tags.update(config["SANITIZE_EXTRA_TAGS"])

    allowed_attrs = {
        "*": ["class", "id", "title", "role", "data-*", "aria-*"],
        "a": ["href", "title", "rel", "target"],
        "img": ["src", "alt", "title", "width", "height", "loading"],
        "th": ["colspan", "rowspan", "scope", "align", "style"],
        "td": ["colspan", "rowspan", "align", "style"],
        "ol": ["start", "type", "class"],
        "button": ["type", "title"],
        "details": ["open"],
    }
    for tag, attrs in config["SANITIZE_EXTRA_ATTRIBUTES"].items():
        allowed_attrs[tag] = [*allowed_attrs.get(tag, []), *attrs]

    allowed_protocols = ["http", "https", "mailto", "tel"]

    return allowed_tags, allowed_attrs, allowed_protocols


def sanitize_html(html, context):
    """
    Sanitize HTML output using bleach.

    Only runs when ``MDCOMPONENTS["SANITIZE"]`` is on. Comments are kept so
    component error diagnostics stay visible in the output.
    """
    if not get_markdown_config()["SANITIZE"]:
        return html

    allowed_tags, allowed_attrs, allowed_protocols = _get_bleach_config()

    try:
        return bleach.clean(
            html,
            tags=allowed_tags,
            attributes=allowed_attrs,
            protocols=allowed_protocols,
            strip=False,  # Keep disallowed tags but escape them
            strip_comments=False,
        )
    except Exception as e:
        logger.error(f"Bleach sanitization failed: {e}", exc_info=True)
        return html
