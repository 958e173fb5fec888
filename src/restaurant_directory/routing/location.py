"""
Location: the current fragment plus back/forward history.

Every change (assignment, back, forward) is announced to listeners as a
fragment-change event. Events are delivered strictly one at a time: a
listener that assigns a new fragment while handling an event has its
change queued until the current event has been fully handled.
"""

from collections import deque
from collections.abc import Callable

from restaurant_directory.logging_config import get_logger

logger = get_logger(__name__)

FragmentListener = Callable[[str], None]


class Location:
    def __init__(self, fragment: str = ""):
        self._entries: list[str] = [fragment]
        self._position = 0
        self._listeners: list[FragmentListener] = []
        self._pending: deque[str] = deque()
        self._delivering = False

    @property
    def fragment(self) -> str:
        return self._entries[self._position]

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._entries)

    @property
    def can_go_back(self) -> bool:
        return self._position > 0

    @property
    def can_go_forward(self) -> bool:
        return self._position < len(self._entries) - 1

    def subscribe(self, listener: FragmentListener) -> Callable[[], None]:
        """Register a change listener. Returns a function that unsubscribes it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def assign(self, fragment: str) -> None:
        """Navigate to ``fragment``: forward entries are discarded and a change event fires."""
        del self._entries[self._position + 1:]
        self._entries.append(fragment)
        self._position += 1
        self._emit(fragment)

    def replace(self, fragment: str) -> None:
        """Swap the current entry for ``fragment`` without growing history, then emit."""
        self._entries[self._position] = fragment
        self._emit(fragment)

    def reload(self) -> None:
        """Re-announce the current fragment."""
        self._emit(self.fragment)

    def back(self) -> bool:
        """Step back one entry. Returns False (and emits nothing) at the start of history."""
        if not self.can_go_back:
            return False
        self._position -= 1
        self._emit(self.fragment)
        return True

    def forward(self) -> bool:
        """Step forward one entry. Returns False (and emits nothing) at the end of history."""
        if not self.can_go_forward:
            return False
        self._position += 1
        self._emit(self.fragment)
        return True

    def _emit(self, fragment: str) -> None:
        self._pending.append(fragment)
        if self._delivering:
            logger.debug("Queued fragment change %r", fragment)
            return
        self._delivering = True
        try:
            while self._pending:
                current = self._pending.popleft()
                for listener in list(self._listeners):
                    listener(current)
        finally:
            self._delivering = False
            self._pending.clear()
