"""Prometheus implementation of the MetricsRenderer protocol.

Wraps a CollectorRegistry so the host application can serialize all
registered collectors into Prometheus text exposition format.  Collection
hooks (such as the pool snapshot collector) run before every
serialization; a hook that raises fails the scrape.
"""

from collections.abc import Callable, Iterable

from prometheus_client import CONTENT_TYPE_LATEST, CollectorRegistry, generate_latest

from dbmetrics.core.protocols.metrics_renderer import MetricsRenderer

CollectionHook = Callable[[], None]


class PrometheusMetricsRenderer(MetricsRenderer):
    """Render all metrics in a shared CollectorRegistry."""

    def __init__(
        self,
        registry: CollectorRegistry,
        hooks: Iterable[CollectionHook] = (),
    ) -> None:
        self._registry = registry
        self._hooks: list[CollectionHook] = list(hooks)

    def add_hook(self, hook: CollectionHook) -> None:
        """Run *hook* before every future ``generate()``."""
        self._hooks.append(hook)

    def remove_hook(self, hook: CollectionHook) -> None:
        """Stop running *hook*.  Unknown hooks are ignored."""
        if hook in self._hooks:
            self._hooks.remove(hook)

    @property
    def content_type(self) -> str:
        return CONTENT_TYPE_LATEST

    def generate(self) -> bytes:
        for hook in list(self._hooks):
            hook()
        return generate_latest(self._registry)
