"""
Component host: where bound invocations become markup.

Rendering a markdown document is synchronous, but the host is reached
through an async boundary so it can keep its own execution context. The
markdown pipeline blocks on that boundary with ``async_to_sync``; this is
the only place in the project where sync code waits on async code.
"""

from __future__ import annotations

import asyncio
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any, Mapping, Optional

from asgiref.sync import async_to_sync, sync_to_async
from django.conf import settings

from ..exceptions import ComponentTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class BoundInvocation:
    """Arguments of a single component invocation; lives for one render call."""

    component_name: str
    parameters: dict[str, Any]
    slots: dict[str, str] = field(default_factory=dict)
    default_content: Optional[str] = None
    context: Mapping[str, Any] = field(default_factory=dict)


class ComponentHost:
    """Renders components. Implementations may raise any exception on failure."""

    async def invoke(self, schema, invocation: BoundInvocation) -> str:
        raise NotImplementedError


class TemplateComponentHost(ComponentHost):
    """
    Host that renders components through Django.

    By default the synchronous render runs thread-sensitively, i.e. on
    Django's sync thread for the current call chain. With
    ``dedicated_thread=True`` the host owns one worker thread and every
    render is marshalled onto it.
    """

    def __init__(self, dedicated_thread: bool = False):
        self._executor = None
        if dedicated_thread:
            self._executor = ThreadPoolExecutor(
                max_workers=1, thread_name_prefix="mdcomponents-host"
            )

    async def invoke(self, schema, invocation: BoundInvocation) -> str:
        if self._executor is None:
            render = sync_to_async(self.render, thread_sensitive=True)
        else:
            render = sync_to_async(self.render, thread_sensitive=False, executor=self._executor)
        return await render(schema, invocation)

    def render(self, schema, invocation: BoundInvocation) -> str:
        arguments = schema.build_arguments(invocation)
        component = schema.component()
        context = component.get_context_data(**arguments)
        return str(component.render(context, request=invocation.context.get("request")))

    def shutdown(self):
        if self._executor is not None:
            self._executor.shutdown(wait=False)


def invoke_component(host: ComponentHost, schema, invocation: BoundInvocation, timeout=None) -> str:
    """
    Invoke ``host`` and block until it yields markup.

    Must not be called from a thread that is running an event loop; async
    callers should wrap the whole markdown render in ``sync_to_async``.
    """

    async def call():
        if timeout is None:
            return await host.invoke(schema, invocation)
        try:
            return await asyncio.wait_for(host.invoke(schema, invocation), timeout)
        except asyncio.TimeoutError as e:
            raise ComponentTimeoutError(
                f"{invocation.component_name} did not render within {timeout}s"
            ) from e

    return str(async_to_sync(call)())


@lru_cache(maxsize=1)
def get_default_host() -> ComponentHost:
    conf = getattr(settings, "MDCOMPONENTS", {})
    dedicated = conf.get("DEDICATED_HOST_THREAD", False)
    logger.debug(f"Creating template component host (dedicated_thread={dedicated})")
    return TemplateComponentHost(dedicated_thread=dedicated)
