"""
Page controller for the Kanji Browser application.

The controller is the only thing user actions talk to. It queries the
dictionary, assembles the page through the aggregator, records it in
the navigation history and hands it to the presentation layer.
"""

import logging
from dataclasses import replace
from typing import Any, Callable, List, Optional, Protocol

from aggregator import build_character_view, build_kanji_breakdown, build_word_view
from config import config
from errors import NoHistoryError, OracleFailure
from history import NavigationHistory
from models import (
    CharacterView, DictionaryEntry, MatchMode, NavigationState, PageKind,
    PageState, SearchResultsView, WordView
)
from utils import parse_link, read_clipboard

logger = logging.getLogger(__name__)


class SearchOracle(Protocol):
    def search(self, query: str, match_mode: MatchMode) -> List[DictionaryEntry]:
        ...


class PresentationSink(Protocol):
    def show_search_results(self, view: SearchResultsView, nav: NavigationState) -> None:
        ...

    def show_character_view(self, view: CharacterView, nav: NavigationState) -> None:
        ...

    def show_word_view(self, view: WordView, nav: NavigationState) -> None:
        ...

    def update_navigation(self, nav: NavigationState) -> None:
        ...


class PageController:
    """Handles navigation intents and keeps the history in step with the display."""

    def __init__(
        self,
        oracle: SearchOracle,
        sink: PresentationSink,
        history: Optional[NavigationHistory] = None
    ):
        """
        Initialize the controller.

        Args:
            oracle: Dictionary search
            sink: Receives every page that should be displayed
            history: Navigation history, a fresh one if not given
        """
        self.oracle = oracle
        self.sink = sink
        self.history = history if history is not None else NavigationHistory()
        self._replaying = False
        self._generation = 0

    @property
    def current_page(self) -> Optional[PageState]:
        return self.history.current()

    def navigation_state(self) -> NavigationState:
        return self.history.navigation_state()

    # User intents

    def kanji_selected(self, character: str) -> Optional[CharacterView]:
        """Open the kanji page of a character."""
        return self._navigate(PageState.kanji(character), self.history.push)

    def word_selected(self, word: str, reading_hint: str = '') -> Optional[WordView]:
        """Open the word page of a word, preferring the hinted reading."""
        return self._navigate(PageState.word(word, reading_hint), self.history.push)

    def search_submitted(self, query: str) -> Optional[SearchResultsView]:
        """Run a fresh search from the search bar. This restarts the history."""
        query = query.strip()
        if not query:
            logger.debug("Ignoring empty search")
            return None
        return self._navigate(PageState.search_results(query), self.history.reset)

    def follow_link(self, url: str) -> Any:
        """Open the page a cross-reference link points to."""
        state = parse_link(url)
        if state is None:
            logger.debug(f"Ignoring unusable link {url!r}")
            return None
        return self._navigate(state, self.history.push)

    def search_clipboard(self) -> Optional[SearchResultsView]:
        """Search for whatever text is on the clipboard."""
        text = read_clipboard()
        if not text:
            return None
        return self.search_submitted(text)

    def back_requested(self) -> Any:
        return self._step(self.history.back, self.history.forward)

    def forward_requested(self) -> Any:
        return self._step(self.history.forward, self.history.back)

    def reload(self) -> Any:
        """Show the current page again without touching the history."""
        state = self.history.current()
        if state is None:
            return None
        return self._replay(state)

    # Internals

    def _step(self, move: Callable[[], PageState], undo: Callable[[], PageState]) -> Any:
        try:
            state = move()
        except NoHistoryError as e:
            logger.debug(f"{e}")
            self.sink.update_navigation(self.history.navigation_state())
            return None
        try:
            return self._replay(state)
        except OracleFailure:
            # Keep the cursor on the page that is still displayed
            undo()
            raise

    def _replay(self, state: PageState) -> Any:
        return self._navigate(state, None, replaying=True)

    def _navigate(
        self,
        state: PageState,
        record: Optional[Callable[[PageState], None]],
        replaying: bool = False
    ) -> Any:
        """
        Load a page, record it and hand it to the sink.

        Only rendering a replayed page counts as replaying. A user intent
        issued while the lookups run supersedes the replay and is recorded.

        Args:
            state: Page to show
            record: History operation storing the page, None to leave history alone
            replaying: Whether the page is shown again through back, forward or reload

        Returns:
            The view shown, or None if a newer navigation superseded this one
        """
        if record is not None and self._replaying:
            logger.debug(f"Not recording {state} while replaying history")
            record = None

        self._generation += 1
        generation = self._generation

        view = self._load(state)

        if generation != self._generation:
            logger.debug(f"Discarding stale response for {state}")
            return None

        if record is not None:
            record(state)
        logger.debug(f"Showing {state.kind.value} page {state.key!r}")
        previous, self._replaying = self._replaying, replaying or self._replaying
        try:
            self._publish(state, view)
        finally:
            self._replaying = previous
        return view

    def _load(self, state: PageState) -> Any:
        if state.kind is PageKind.KANJI:
            return self._load_kanji(state.key)
        if state.kind is PageKind.WORD:
            return self._load_word(state.key, state.reading)
        return SearchResultsView(
            query=state.key,
            entries=tuple(self.oracle.search(state.key, config.search.match_mode))
        )

    def _load_kanji(self, character: str) -> CharacterView:
        reference_results = self.oracle.search(character, MatchMode.EXACT)
        compound_results = self.oracle.search(character, MatchMode.ANYWHERE)
        return build_character_view(character, reference_results, compound_results)

    def _load_word(self, word: str, reading_hint: str) -> WordView:
        view = build_word_view(word, reading_hint, self.oracle.search(word, MatchMode.EXACT))
        if view.best_entry is None:
            return view
        breakdown = build_kanji_breakdown(
            view.best_entry.word,
            lambda char: self.oracle.search(char, MatchMode.EXACT)
        )
        return replace(view, kanji_breakdown=tuple(breakdown))

    def _publish(self, state: PageState, view: Any) -> None:
        nav = self.history.navigation_state()
        if state.kind is PageKind.KANJI:
            self.sink.show_character_view(view, nav)
        elif state.kind is PageKind.WORD:
            self.sink.show_word_view(view, nav)
        else:
            self.sink.show_search_results(view, nav)
