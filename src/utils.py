"""
Utility functions for the Kanji Browser application.

This module contains helper functions used throughout the application,
including character classification, word decomposition, link handling
and clipboard access.
"""

import logging
from typing import List, Optional, Sequence

import pyperclip

from config import config
from models import PageState

logger = logging.getLogger(__name__)

KANA_FIRST = 0x3040
KANA_LAST = 0x30FF

KANJI_SCHEME = 'kanji:'
WORD_SCHEME = 'word:'


def is_ideograph(char: str) -> bool:
    """
    Check whether a character should be treated as a kanji.

    Anything outside Latin-1 that is not hiragana or katakana counts,
    so most other non-Latin scripts are classified as ideographs too.

    Args:
        char: A single character

    Returns:
        True if the character is clickable as a kanji
    """
    value = ord(char)
    if value < 255:
        return False
    return not KANA_FIRST <= value <= KANA_LAST


def decompose_word(word: str) -> List[str]:
    """
    Split a word into the kanji it is written with.

    Order and duplicates are kept, so a repeated kanji shows up twice.

    Args:
        word: Word to decompose

    Returns:
        List of ideographs in the order they appear
    """
    return [char for char in word if is_ideograph(char)]


def summarize_meanings(meanings: Sequence[str], limit: Optional[int] = None) -> str:
    """
    Join meanings into a single line no longer than `limit` characters.

    Args:
        meanings: Glosses of an entry
        limit: Maximum length, defaults to the configured summary length

    Returns:
        The joined glosses, cut short and ending in an ellipsis if too long
    """
    if limit is None:
        limit = config.browser.meaning_summary_length
    ellipsis = config.browser.ellipsis
    text = '; '.join(meanings)
    if len(text) > limit:
        return text[:max(limit - len(ellipsis), 0)] + ellipsis
    return text


def kanji_link(char: str) -> str:
    return f'{KANJI_SCHEME}{char}'


def word_link(word: str, reading: str = '') -> str:
    return f'{WORD_SCHEME}{word}:{reading}'


def parse_link(url: str) -> Optional[PageState]:
    """
    Turn a link clicked on a page into the page it points to.

    Recognized forms:
        kanji:<char>            kanji page of the first character
        word:<word>:<reading>   word page, reading may be empty
        <single ideograph>      kanji page
        <anything else>         search for the text

    Args:
        url: Link target

    Returns:
        Page state to navigate to, or None if the link is unusable
    """
    if url.startswith(KANJI_SCHEME):
        rest = url[len(KANJI_SCHEME):]
        return PageState.kanji(rest[0]) if rest else None

    if url.startswith(WORD_SCHEME):
        rest = url[len(WORD_SCHEME):]
        word, sep, reading = rest.partition(':')
        if not sep or not word:
            return None
        return PageState.word(word, reading)

    if len(url) == 1 and is_ideograph(url):
        return PageState.kanji(url)

    text = url.strip()
    return PageState.search_results(text) if text else None


def read_clipboard() -> str:
    """
    Read the clipboard as a search query.

    Returns:
        Clipboard text truncated to the configured length, or an empty
        string if the clipboard cannot be read
    """
    try:
        text = pyperclip.paste() or ''
    except pyperclip.PyperclipException as e:
        logger.warning(f"Failed to open clipboard: {e}")
        return ''
    return text.strip()[:config.search.max_clipboard_chars]
