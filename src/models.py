"""
Data model for the Kanji Browser application.

Dictionary entries come out of the search oracle and are never mutated.
Views are assembled per lookup and handed to the presentation layer;
page states are what the navigation history remembers.
"""

from enum import Enum
from dataclasses import dataclass
from typing import Optional, Tuple


class EntryKind(Enum):
    """Variant tag of a dictionary entry."""
    REFERENCE = 'reference'
    WORD = 'word'


class MatchMode(Enum):
    """How the search oracle matches a query."""
    EXACT = 'exact'
    ANYWHERE = 'anywhere'


class PageKind(Enum):
    """The three kinds of page the browser can show."""
    SEARCH_RESULTS = 'search'
    KANJI = 'kanji'
    WORD = 'word'


@dataclass(frozen=True)
class DictionaryEntry:
    """
    One dictionary record.

    Reference entries (one per kanji) additionally carry grade, stroke
    count, frequency rank, JLPT level and the on/kun/nanori/radical reading groups.
    Those fields stay empty on word entries.
    """
    word: str
    readings: Tuple[str, ...] = ()
    meanings: Tuple[str, ...] = ()
    is_common: bool = False
    kind: EntryKind = EntryKind.WORD
    grade: Optional[str] = None
    stroke_count: Optional[str] = None
    frequency: Optional[str] = None
    jlpt: Optional[str] = None
    onyomi: Tuple[str, ...] = ()
    kunyomi: Tuple[str, ...] = ()
    nanori: Tuple[str, ...] = ()
    radical_readings: Tuple[str, ...] = ()
    stroke_order_svg: Optional[str] = None

    @property
    def is_reference(self) -> bool:
        return self.kind is EntryKind.REFERENCE

    @property
    def reading_text(self) -> str:
        return '、'.join(self.readings)

    @property
    def meaning_text(self) -> str:
        return '; '.join(self.meanings)


@dataclass(frozen=True)
class CompoundCandidate:
    """A word entry reduced to what the compound list displays."""
    word: str
    reading: str
    meaning_summary: str
    is_common: bool


@dataclass(frozen=True)
class CharacterView:
    character: str
    reference_entry: Optional[DictionaryEntry]
    compound_candidates: Tuple[CompoundCandidate, ...]
    remaining_count: int


@dataclass(frozen=True)
class KanjiBreakdownItem:
    character: str
    reference_entry: Optional[DictionaryEntry]


@dataclass(frozen=True)
class WordView:
    word: str
    reading_hint: str
    best_entry: Optional[DictionaryEntry]
    kanji_breakdown: Tuple[KanjiBreakdownItem, ...] = ()


@dataclass(frozen=True)
class SearchResultsView:
    query: str
    entries: Tuple[DictionaryEntry, ...]


@dataclass(frozen=True)
class PageState:
    """
    A page remembered by the navigation history.

    `key` holds the query of a search page, the character of a kanji
    page or the word of a word page. Only word pages use `reading`.
    """
    kind: PageKind
    key: str
    reading: str = ''

    @classmethod
    def search_results(cls, query: str) -> 'PageState':
        return cls(PageKind.SEARCH_RESULTS, query)

    @classmethod
    def kanji(cls, character: str) -> 'PageState':
        return cls(PageKind.KANJI, character)

    @classmethod
    def word(cls, word: str, reading: str = '') -> 'PageState':
        return cls(PageKind.WORD, word, reading)


@dataclass(frozen=True)
class NavigationState:
    """Enabled state of the back and forward controls."""
    can_go_back: bool
    can_go_forward: bool
