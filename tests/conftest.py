"""Shared fixtures for kanji browser tests."""

import pytest

from controller import PageController
from database import DictionaryDatabase
from history import NavigationHistory
from models import DictionaryEntry, EntryKind, MatchMode


def _word(word, *readings, meanings=('meaning',), common=False):
    return DictionaryEntry(
        word=word,
        readings=tuple(readings),
        meanings=tuple(meanings),
        is_common=common,
        kind=EntryKind.WORD
    )


def _reference(character, meanings=('meaning',), onyomi=(), kunyomi=(), strokes=None):
    return DictionaryEntry(
        word=character,
        readings=tuple(onyomi) + tuple(kunyomi),
        meanings=tuple(meanings),
        kind=EntryKind.REFERENCE,
        stroke_count=strokes,
        onyomi=tuple(onyomi),
        kunyomi=tuple(kunyomi)
    )


@pytest.fixture
def make_word():
    """Factory for word entries: make_word(word, *readings, meanings=..., common=...)."""
    return _word


@pytest.fixture
def make_reference():
    """Factory for reference entries: make_reference(character, meanings=..., ...)."""
    return _reference


class FakeOracle:
    """Search oracle answering from a dict keyed by (query, match_mode)."""

    def __init__(self, results=None):
        self.results = dict(results or {})
        self.calls = []
        self.on_search = None

    def search(self, query, match_mode):
        self.calls.append((query, match_mode))
        if self.on_search is not None:
            self.on_search(query, match_mode)
        return list(self.results.get((query, match_mode), []))


class RecordingSink:
    """Presentation sink remembering everything it was asked to show."""

    def __init__(self):
        self.pages = []
        self.nav_updates = []
        self.on_show = None

    def _record(self, kind, view, nav):
        self.pages.append((kind, view, nav))
        if self.on_show is not None:
            self.on_show(kind, view)

    def show_search_results(self, view, nav):
        self._record('search', view, nav)

    def show_character_view(self, view, nav):
        self._record('kanji', view, nav)

    def show_word_view(self, view, nav):
        self._record('word', view, nav)

    def update_navigation(self, nav):
        self.nav_updates.append(nav)

    @property
    def last(self):
        return self.pages[-1]


@pytest.fixture
def oracle():
    sun = _reference('日', meanings=('day', 'sun', 'Japan'), onyomi=('ニチ', 'ジツ'),
                     kunyomi=('ひ', 'か'), strokes='4')
    book = _reference('本', meanings=('book', 'origin'), onyomi=('ホン',), kunyomi=('もと',),
                      strokes='5')
    nihon = _word('日本', 'にほん', 'にっぽん', meanings=('Japan',), common=True)
    return FakeOracle({
        ('日', MatchMode.EXACT): [sun],
        ('日', MatchMode.ANYWHERE): [
            sun,
            _word('日光', 'にっこう', meanings=('sunlight',)),
            nihon,
        ],
        ('本', MatchMode.EXACT): [book],
        ('本', MatchMode.ANYWHERE): [book, nihon],
        ('日本', MatchMode.EXACT): [nihon],
    })


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def controller(oracle, sink):
    return PageController(oracle, sink, NavigationHistory(limit=100))


@pytest.fixture
def database(tmp_path):
    """A small SQLite dictionary."""
    db = DictionaryDatabase(tmp_path / "dictionary.db")
    db.create_tables()
    db.insert_kanji([
        {'literal': '日', 'grade': '1', 'stroke_count': '4', 'frequency': '1', 'jlpt': '4',
         'onyomi': ['ニチ', 'ジツ'], 'kunyomi': ['ひ', '-び', '-か'], 'nanori': ['あ', 'あき'],
         'radical_readings': [], 'meanings': ['day', 'sun', 'Japan'],
         'svg': '<svg xmlns="http://www.w3.org/2000/svg"/>'},
        {'literal': '本', 'grade': '1', 'stroke_count': '5', 'frequency': '10',
         'onyomi': ['ホン'], 'kunyomi': ['もと'], 'meanings': ['book', 'present', 'main']},
        {'literal': '語', 'grade': '2', 'stroke_count': '14',
         'onyomi': ['ゴ'], 'kunyomi': ['かた.る'], 'meanings': ['word', 'speech']},
    ])
    db.insert_words([
        {'word': '日本', 'readings': ['にほん', 'にっぽん'], 'meanings': ['Japan'], 'common': True},
        {'word': '日本語', 'readings': ['にほんご'], 'meanings': ['Japanese language'], 'common': True},
        {'word': '日光', 'readings': ['にっこう'], 'meanings': ['sunlight', 'sunshine'], 'common': False},
        {'word': '本日', 'readings': ['ほんじつ'], 'meanings': ['today', 'this day'], 'common': True},
        {'word': '猫', 'readings': ['ねこ'], 'meanings': ['cat'], 'common': True},
        {'word': 'CD', 'readings': ['シーディー'], 'meanings': ['compact disc', 'CD'], 'common': True},
    ])
    return db
