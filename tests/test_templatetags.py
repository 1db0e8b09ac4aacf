from django.template import Context, Template
from django.test import RequestFactory


def render_template(source, **context):
    return Template("{% load markdown_tags %}" + source).render(Context(context))


def test_markdown_filter():
    html = render_template("{{ text|markdown }}", text='<Alert type="note">\n**Hi**\n</Alert>')
    assert html == '<div class="alert alert-note" role="alert"><p><strong>Hi</strong></p></div>'


def test_markdown_filter_handles_none():
    assert render_template("{{ text|markdown }}", text=None) == ""


def test_markdown_with_context_passes_request():
    request = RequestFactory().get("/about/")
    html = render_template("{% markdown_with_context text %}", text="<Whoami />", request=request)
    assert html == '<span class="whoami">/about/</span>'
