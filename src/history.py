"""
Navigation history for the Kanji Browser application.

Browser-style history: a linear list of pages and a cursor. Pushing a
page while looking at an older one throws away everything after it.
"""

import logging
from typing import List, Optional

from config import config
from errors import NoHistoryError
from models import NavigationState, PageState

logger = logging.getLogger(__name__)


class NavigationHistory:
    """
    Bounded back/forward stack of page states.

    The cursor is -1 exactly when the history is empty, and otherwise
    always points at a stored page.
    """

    def __init__(self, limit: Optional[int] = None):
        """
        Initialize the history.

        Args:
            limit: Maximum number of pages kept, defaults to the configured limit
        """
        self.limit = limit if limit is not None else config.browser.history_limit
        if self.limit < 1:
            raise ValueError(f"History limit must be positive, got {self.limit}")
        self._entries: List[PageState] = []
        self._cursor = -1

    def __len__(self) -> int:
        return len(self._entries)

    @property
    def cursor(self) -> int:
        return self._cursor

    @property
    def entries(self) -> List[PageState]:
        """A copy of the stored pages, oldest first."""
        return list(self._entries)

    def push(self, state: PageState) -> None:
        """Make `state` the current page, discarding any forward history."""
        del self._entries[self._cursor + 1:]
        self._entries.append(state)
        if len(self._entries) > self.limit:
            dropped = len(self._entries) - self.limit
            del self._entries[:dropped]
            logger.debug(f"History full, dropped {dropped} oldest page(s)")
        self._cursor = len(self._entries) - 1

    def back(self) -> PageState:
        if not self.can_go_back():
            raise NoHistoryError("No page to go back to")
        self._cursor -= 1
        return self._entries[self._cursor]

    def forward(self) -> PageState:
        if not self.can_go_forward():
            raise NoHistoryError("No page to go forward to")
        self._cursor += 1
        return self._entries[self._cursor]

    def current(self) -> Optional[PageState]:
        if self._cursor < 0:
            return None
        return self._entries[self._cursor]

    def can_go_back(self) -> bool:
        return self._cursor > 0

    def can_go_forward(self) -> bool:
        return 0 <= self._cursor < len(self._entries) - 1

    def reset(self, initial_state: PageState) -> None:
        """Replace the whole history with a single page."""
        self._entries = [initial_state]
        self._cursor = 0

    def clear(self) -> None:
        self._entries = []
        self._cursor = -1

    def navigation_state(self) -> NavigationState:
        return NavigationState(
            can_go_back=self.can_go_back(),
            can_go_forward=self.can_go_forward()
        )
