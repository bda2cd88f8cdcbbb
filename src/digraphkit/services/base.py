"""BaseService — shared foundation for graph services.

Every service wraps one :class:`Digraph` and one frozen
:class:`DigraphSettings`. Services never copy the graph; mutations made
through a service are visible through ``service.graph``.

The ``[algorithms]`` and ``[telemetry]`` sections take effect per service.
``[logging]`` configures process-wide handlers, so the application applies
it once at startup with
:func:`digraphkit.config.logging.configure_from_settings`.
"""

from __future__ import annotations

import logging
from typing import Any

from digraphkit.config.settings import DigraphSettings
from digraphkit.core.digraph import Digraph
from digraphkit.domain.errors import DigraphError
from digraphkit.services.result import ServiceResult

logger = logging.getLogger(__name__)


class BaseService:
    """Abstract base for service-layer classes.

    Usage::

        class MyService(BaseService):
            def op(self) -> ServiceResult:
                try:
                    ...
                except DigraphError as exc:
                    return self._failure("op", exc)
    """

    def __init__(
        self,
        graph: Digraph[Any, Any] | None = None,
        settings: DigraphSettings | None = None,
    ) -> None:
        self._graph: Digraph[Any, Any] = graph if graph is not None else Digraph()
        self._settings = settings or DigraphSettings()

    @property
    def graph(self) -> Digraph[Any, Any]:
        return self._graph

    @property
    def settings(self) -> DigraphSettings:
        return self._settings

    @staticmethod
    def _failure(op: str, exc: DigraphError) -> ServiceResult:
        """Log a rejected operation and wrap it as an ``ok=False`` result."""
        logger.debug("%s rejected: %s (%s)", op, exc, exc.code)
        return ServiceResult.failure(op, exc)
