# mdcomponents/templatetags/markdown_tags.py

from django import template
from django.utils.safestring import mark_safe

from mdcomponents.markdown.renderer import render_markdown

register = template.Library()


@register.filter(name="markdown")
def markdown_filter(value):
    return mark_safe(render_markdown(value or ""))


@register.simple_tag(takes_context=True)
def markdown_with_context(context, value):
    """Template tag that passes template context to components and processors"""
    processor_context = {
        "user": context.get("user"),
        "request": context.get("request"),
    }
    return mark_safe(render_markdown(value or "", context=processor_context))
