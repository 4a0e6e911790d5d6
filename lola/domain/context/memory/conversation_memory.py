from typing import List, Sequence, Tuple
from langchain_core.messages import BaseMessage


class ConversationMemory:
    """Bounded, ordered turn history for one session.

    Appending past ``capacity`` evicts the oldest turns first, so the stored
    sequence is always a contiguous suffix of the full history. Only the
    owning session's job runner mutates it, under the session lock.
    """

    def __init__(self, capacity: int = 50):
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        self._turns: List[BaseMessage] = []

    def append(self, turns: Sequence[BaseMessage]) -> None:
        """Add turns to the tail in order, evicting from the head"""

        self._turns.extend(turns)

        if len(self._turns) > self.capacity:
            self._turns = self._turns[-self.capacity:]

    def all(self) -> Tuple[BaseMessage, ...]:
        """Current history, oldest first"""
        return tuple(self._turns)

    def count(self) -> int:
        return len(self._turns)

    def clear(self) -> None:
        self._turns = []

    def __len__(self) -> int:
        return len(self._turns)
