"""Tests for entry and page state helpers."""

import dataclasses

import pytest

from models import DictionaryEntry, EntryKind, PageKind, PageState


def test_page_state_constructors():
    assert PageState.search_results("ねこ") == PageState(PageKind.SEARCH_RESULTS, "ねこ")
    assert PageState.kanji("猫") == PageState(PageKind.KANJI, "猫")
    word = PageState.word("猫", "ねこ")
    assert word.kind is PageKind.WORD
    assert (word.key, word.reading) == ("猫", "ねこ")


def test_page_states_are_immutable():
    with pytest.raises(dataclasses.FrozenInstanceError):
        PageState.kanji("猫").key = "犬"


def test_entry_helpers(make_word, make_reference):
    word = make_word("日本", "にほん", "にっぽん", meanings=("Japan", "Nippon"))
    assert not word.is_reference
    assert word.reading_text == "にほん、にっぽん"
    assert word.meaning_text == "Japan; Nippon"
    assert make_reference("日").is_reference


def test_entry_defaults_to_word():
    entry = DictionaryEntry(word="猫")
    assert entry.kind is EntryKind.WORD
    assert entry.readings == ()
    assert entry.grade is None
