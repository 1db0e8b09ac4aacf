from concurrent.futures import ThreadPoolExecutor

from django.test import override_settings

from mdcomponents.components import get_default_host, get_default_registry
from mdcomponents.markdown.config import get_markdown_config
from mdcomponents.markdown.renderer import render_markdown


def test_default_config():
    config = get_markdown_config()
    assert config["EXTENSIONS"] == ["extra", "sane_lists"]
    assert config["TIMEOUT"] is None
    assert config["SANITIZE"] is False


def test_uses_registry_from_settings():
    html = render_markdown('<Notice type="tip">\nUse settings.\n</Notice>')
    assert html == '<div class="alert alert-tip" role="alert"><p>Use settings.</p></div>'


def test_context_receives_component_errors():
    context = {"extra": 1}
    render_markdown("<Broken />", context)
    assert [failure.name for failure in context["component_errors"]] == ["Broken"]
    assert context["extra"] == 1


def test_empty_document():
    context = {}
    assert render_markdown("", context) == ""
    assert context["component_errors"] == []


def test_settings_change_rebuilds_registry():
    before = get_default_registry()
    with override_settings(MDCOMPONENTS={"COMPONENTS": ["tests.components.Echo"]}):
        registry = get_default_registry()
        assert registry is not before
        assert registry.names() == ["Echo"]
        html = render_markdown('<Alert type="x" />')
        assert html == '<alert type="x" />'
    assert "Alert" in get_default_registry()


def test_settings_change_rebuilds_host():
    settings = {"DEDICATED_HOST_THREAD": True, "COMPONENTS": ["tests.components.ThreadName"]}
    with override_settings(MDCOMPONENTS=settings):
        dedicated = get_default_host()
        html = render_markdown("<ThreadName />")
        assert "mdcomponents-host" in html
    assert get_default_host() is not dedicated


def test_extensions_are_configurable():
    text = "1. one\n\n* two"
    with override_settings(MDCOMPONENTS={"EXTENSIONS": [], "COMPONENTS": []}):
        plain = render_markdown(text)
    sane = render_markdown(text)
    assert "<ul>" not in plain
    assert "<ul>" in sane


def test_extension_configs_are_passed():
    with override_settings(
        MDCOMPONENTS={
            "EXTENSIONS": ["toc"],
            "EXTENSION_CONFIGS": {"toc": {"anchorlink": True}},
        }
    ):
        html = render_markdown("# Title")
    assert html == '<h1 id="title"><a class="toclink" href="#title">Title</a></h1>'


class TestSanitize:
    def test_off_by_default(self):
        html = render_markdown("<script>alert(1)</script>")
        assert "<script>" in html

    def test_sanitizes_output_and_keeps_diagnostics(self):
        with override_settings(
            MDCOMPONENTS={
                "SANITIZE": True,
                "COMPONENTS": ["tests.components.Broken", "tests.components.Alert"],
            }
        ):
            html = render_markdown(
                "<script>alert(1)</script>\n\n<Alert>\nok\n</Alert>\n\n<Broken />"
            )
        assert "<script>" not in html
        assert '<div class="alert alert-info" role="alert"><p>ok</p></div>' in html
        assert "<!-- Error rendering component Broken: boom -->" in html

    def test_extra_tags_and_attributes(self):
        with override_settings(
            MDCOMPONENTS={
                "SANITIZE": True,
                "SANITIZE_EXTRA_TAGS": ["card"],
                "SANITIZE_EXTRA_ATTRIBUTES": {"card": ["title"]},
            }
        ):
            html = render_markdown('<Card title="Hi" />')
        assert '<card title="Hi"></card>' in html


def test_concurrent_renders_are_isolated():
    documents = {
        i: f'<Echo text="document {i}" />\n\n<Broken />\n\nText <Badge label="{i}" />'
        for i in range(20)
    }

    def render(i):
        context = {}
        html = render_markdown(documents[i], context)
        return i, html, context["component_errors"]

    with ThreadPoolExecutor(max_workers=8) as pool:
        results = list(pool.map(render, documents))

    for i, html, errors in results:
        assert f'<p class="echo">document {i}</p>' in html
        assert f'<span class="badge">{i}</span>' in html
        assert len(errors) == 1
