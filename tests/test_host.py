import threading

import pytest
from django.test import override_settings

from mdcomponents.components import (
    BoundInvocation,
    ComponentHost,
    ComponentRegistry,
    TemplateComponentHost,
    invoke_component,
)
from mdcomponents.components.registry import ComponentSchema
from mdcomponents.exceptions import ComponentParameterError, ComponentTimeoutError
from mdcomponents.markdown.renderer import render_markdown
from tests.components import Echo, Slow, ThreadName


@pytest.fixture
def dedicated_host():
    host = TemplateComponentHost(dedicated_thread=True)
    yield host
    host.shutdown()


def test_template_host_renders_component():
    schema = ComponentSchema.for_component(Echo)
    html = invoke_component(TemplateComponentHost(), schema, BoundInvocation("Echo", {"text": "hi"}))
    assert html == '<p class="echo">hi</p>'


def test_host_validates_arguments():
    schema = ComponentSchema.for_component(Echo)
    with pytest.raises(ComponentParameterError):
        invoke_component(TemplateComponentHost(), schema, BoundInvocation("Echo", {"text": 3}))


def test_thread_sensitive_host_renders_on_calling_thread():
    schema = ComponentSchema.for_component(ThreadName)
    html = invoke_component(TemplateComponentHost(), schema, BoundInvocation("ThreadName", {}))
    assert threading.current_thread().name in html


def test_dedicated_host_renders_on_its_own_thread(dedicated_host):
    schema = ComponentSchema.for_component(ThreadName)
    html = invoke_component(dedicated_host, schema, BoundInvocation("ThreadName", {}))
    assert "mdcomponents-host" in html


def test_timeout(dedicated_host):
    schema = ComponentSchema.for_component(Slow)
    with pytest.raises(ComponentTimeoutError, match="Slow did not render within"):
        invoke_component(
            dedicated_host, schema, BoundInvocation("Slow", {"delay": 0.5}), timeout=0.05
        )


def test_timeout_is_a_render_failure(dedicated_host):
    registry = ComponentRegistry()
    registry.register(Slow)
    context = {}
    with override_settings(MDCOMPONENTS={"TIMEOUT": 0.05}):
        html = render_markdown(
            '<Slow delay="0.5" />', context, registry=registry, host=dedicated_host
        )
    assert html.startswith('<slow delay="0.5" /><!-- Error rendering component Slow:')
    assert context["component_errors"][0].name == "Slow"


def test_custom_host():
    class UpperHost(ComponentHost):
        async def invoke(self, schema, invocation):
            return invocation.parameters["text"].upper()

    registry = ComponentRegistry()
    registry.register(Echo)
    html = render_markdown('Say <Echo text="hi" />', registry=registry, host=UpperHost())
    assert html == "<p>Say HI</p>"


def test_request_is_passed_to_component():
    from django.test import RequestFactory

    from tests.components import Whoami

    registry = ComponentRegistry()
    registry.register(Whoami)
    request = RequestFactory().get("/docs/page/")
    html = render_markdown("<Whoami />", {"request": request}, registry=registry)
    assert html == '<span class="whoami">/docs/page/</span>'
