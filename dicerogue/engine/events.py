"""
Dice Rogue - Battle Event Definitions

Event types, payloads and the queue the host drains after each step.
"""

from collections import deque
from dataclasses import dataclass, field
from enum import Enum, auto
from typing import Any


class BattleEvent(Enum):
    """Events that can occur during a battle."""

    POOL_REFRESHED = auto()
    POOL_REPLACED = auto()
    HAND_COUNTER_CHANGED = auto()
    AVAILABLE_DICE_CHANGED = auto()
    HAND_STARTED = auto()
    DICE_ROLLED = auto()
    DIE_LOCK_TOGGLED = auto()
    HAND_SUBMITTED = auto()


@dataclass
class EventPayload:
    """Wrapper for battle event data."""

    event: BattleEvent
    data: dict[str, Any] = field(default_factory=dict)


class EventQueue:
    """FIFO of pending notifications, drained by the caller."""

    def __init__(self) -> None:
        self._pending: deque[EventPayload] = deque()

    def push(self, event: BattleEvent, **data: Any) -> EventPayload:
        payload = EventPayload(event=event, data=data)
        self._pending.append(payload)
        return payload

    def drain(self) -> list[EventPayload]:
        """Return and clear every pending event, oldest first."""
        drained = list(self._pending)
        self._pending.clear()
        return drained

    def __len__(self) -> int:
        return len(self._pending)
