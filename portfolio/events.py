"""Named event payloads and a minimal observer bus for the meta page."""

from __future__ import annotations
import logging
from collections import defaultdict
from dataclasses import dataclass
from typing import Callable, DefaultDict, List, Optional, Type

import pandas as pd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CutoffChanged:
    cutoff: pd.Timestamp
    source: str
    revision: int


@dataclass(frozen=True)
class SelectionChanged:
    region: Optional[object]
    commit_ids: tuple


@dataclass(frozen=True)
class StepActivated:
    index: int
    commit: str


class EventBus:
    def __init__(self):
        self._handlers: DefaultDict[Type, List[Callable]] = defaultdict(list)

    def subscribe(self, kind: Type, handler: Callable) -> Callable[[], None]:
        """Register ``handler`` for events of ``kind``; returns an unsubscribe callable."""
        self._handlers[kind].append(handler)

        def unsubscribe():
            if handler in self._handlers[kind]:
                self._handlers[kind].remove(handler)

        return unsubscribe

    def publish(self, event) -> None:
        logger.debug("event %s", event)
        for handler in list(self._handlers[type(event)]):
            handler(event)
