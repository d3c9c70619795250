from __future__ import annotations

import logging
from collections import defaultdict
from typing import Callable, DefaultDict

from rally.contracts import ActivityEvent

ActivityHandler = Callable[[ActivityEvent], None]

logger = logging.getLogger(__name__)


class EventBus:
    def __init__(self) -> None:
        self._handlers: list[ActivityHandler] = []
        self._counter: DefaultDict[str, int] = defaultdict(int)

    def subscribe(self, handler: ActivityHandler) -> None:
        self._handlers.append(handler)

    def publish(self, event: ActivityEvent) -> None:
        self._counter[event.scope] += 1
        logger.debug("%s.%s %s", event.scope, event.event_type, event.details)
        for handler in self._handlers:
            handler(event)

    def emitted_count(self, scope: str | None = None) -> int:
        if scope is None:
            return sum(self._counter.values())
        return self._counter[scope]
