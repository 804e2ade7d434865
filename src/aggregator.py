"""
Assembly of kanji and word pages from raw search results.

Everything here works on results the search oracle has already
returned: nothing performs I/O except through the lookup callable
handed to build_kanji_breakdown.
"""

import logging
from typing import Callable, Iterable, List, Optional, Sequence

from config import config
from models import (
    CharacterView, CompoundCandidate, DictionaryEntry, EntryKind,
    KanjiBreakdownItem, WordView
)
from utils import decompose_word, summarize_meanings

logger = logging.getLogger(__name__)


def first_reference_entry(results: Iterable[DictionaryEntry]) -> Optional[DictionaryEntry]:
    """Return the first reference entry of a result set, if any."""
    for entry in results:
        if entry.kind is EntryKind.REFERENCE:
            return entry
    return None


def to_compound_candidate(entry: DictionaryEntry) -> CompoundCandidate:
    """Reduce a word entry to the fields shown in a compound list."""
    return CompoundCandidate(
        word=entry.word,
        reading=entry.readings[0] if entry.readings else '',
        meaning_summary=summarize_meanings(entry.meanings),
        is_common=entry.is_common
    )


def rank_compounds(candidates: Iterable[CompoundCandidate]) -> List[CompoundCandidate]:
    """Common words first, then by word. Equal keys keep their order."""
    return sorted(candidates, key=lambda c: (not c.is_common, c.word))


def build_character_view(
    character: str,
    reference_results: Sequence[DictionaryEntry],
    compound_results: Sequence[DictionaryEntry],
    limit: Optional[int] = None
) -> CharacterView:
    """
    Build the kanji page for a character.

    Args:
        character: The kanji being shown
        reference_results: Results of the exact search for the character
        compound_results: Results of the search for words containing it
        limit: Maximum number of compounds, defaults to the configured limit

    Returns:
        CharacterView with the reference entry (or None), the ranked
        compounds and how many compounds were left out
    """
    if limit is None:
        limit = config.browser.compound_limit

    # A compound search returns the character's own reference record too
    candidates = rank_compounds(
        to_compound_candidate(entry) for entry in compound_results
        if entry.kind is not EntryKind.REFERENCE
    )

    return CharacterView(
        character=character,
        reference_entry=first_reference_entry(reference_results),
        compound_candidates=tuple(candidates[:limit]),
        remaining_count=max(0, len(candidates) - limit)
    )


def select_best_entry(
    word: str,
    reading_hint: str,
    results: Sequence[DictionaryEntry]
) -> Optional[DictionaryEntry]:
    """
    Pick the entry a word page should describe.

    An entry for the same word carrying the hinted reading wins outright.
    Otherwise the first entry for the same word is used, and failing
    that the first word entry of any kind.
    """
    first_word_match = None
    for entry in results:
        if entry.kind is not EntryKind.WORD or entry.word != word:
            continue
        if reading_hint and reading_hint in entry.readings:
            return entry
        if first_word_match is None:
            first_word_match = entry

    if first_word_match is not None:
        return first_word_match

    return next(
        (entry for entry in results if entry.kind is EntryKind.WORD),
        None
    )


def build_word_view(
    word: str,
    reading_hint: str,
    word_results: Sequence[DictionaryEntry]
) -> WordView:
    """Build the word page, without the kanji breakdown."""
    best_entry = select_best_entry(word, reading_hint, word_results)
    if best_entry is None:
        logger.debug(f"No word entry found for {word!r}")
    return WordView(word=word, reading_hint=reading_hint, best_entry=best_entry)


def build_kanji_breakdown(
    word: str,
    lookup: Callable[[str], Sequence[DictionaryEntry]]
) -> List[KanjiBreakdownItem]:
    """
    Look up every kanji of a word.

    Args:
        word: Word to break down
        lookup: Returns the reference search results for one character

    Returns:
        One item per kanji, in order, repeated kanji included
    """
    return [
        KanjiBreakdownItem(character=char, reference_entry=first_reference_entry(lookup(char)))
        for char in decompose_word(word)
    ]
