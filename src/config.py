"""
Configuration module for the Kanji Browser application.

This module centralizes all configuration constants and settings
used throughout the application using dataclasses for type safety.
"""

import os
from pathlib import Path
from dataclasses import dataclass, field, asdict
from typing import Dict, Any

from models import MatchMode


def _default_database_path() -> Path:
    override = os.environ.get("KANJI_BROWSER_DB")
    if override:
        return Path(override)
    return Path(__file__).parent / "dictionary.db"


@dataclass
class Paths:
    """Configuration for file and directory paths."""
    data_dir: Path = field(default_factory=lambda: Path(__file__).parent / "data")
    database_path: Path = field(default_factory=_default_database_path)


@dataclass
class UIConfig:
    """Configuration for UI dimensions and layout."""
    window_width: int = 640
    window_height: int = 720
    toolbar_height: int = 48
    nav_button_size: int = 36
    stroke_image_size: int = 140
    title: str = "Kanji Browser"


@dataclass
class Colors:
    """Configuration for application colors."""
    background: str = '#abcdef'
    page_background: str = 'white'
    text: str = 'black'
    link: str = 'darkblue'
    link_hover: str = 'maroon'
    muted: str = 'DarkSlateGray'
    common_tag: str = 'darkgreen'
    error: str = 'red'
    fill_green: str = 'green'
    fill_yellow: str = 'yellow'
    fill_disabled: str = 'light gray'
    text_white: str = 'white'


@dataclass
class Fonts:
    """Configuration for application fonts."""
    kanji: str = 'Verdana 48'
    word: str = 'Verdana 28'
    heading: str = 'Verdana 12 bold'
    medium: str = 'Verdana 14'
    small: str = 'Verdana 10'
    button: str = 'Verdana 14 bold'


@dataclass
class BrowserConfig:
    """Fixed policy for page assembly and history."""
    compound_limit: int = 50
    meaning_summary_length: int = 80
    ellipsis: str = '...'
    history_limit: int = 100


@dataclass
class SearchConfig:
    """Configuration for search functionality."""
    match_mode: MatchMode = MatchMode.EXACT
    max_results: int = 500
    max_clipboard_chars: int = 32


@dataclass
class DatabaseQueries:
    """Configuration for database queries."""
    create_kanji: str = '''
        CREATE TABLE IF NOT EXISTS kanji (
            literal TEXT NOT NULL PRIMARY KEY,
            grade TEXT,
            stroke_count TEXT,
            frequency TEXT,
            jlpt TEXT,
            onyomi TEXT,
            kunyomi TEXT,
            nanori TEXT,
            radical_readings TEXT,
            meanings TEXT,
            svg TEXT
        )
    '''
    create_words: str = '''
        CREATE TABLE IF NOT EXISTS words (
            idx INTEGER PRIMARY KEY AUTOINCREMENT,
            word TEXT NOT NULL,
            readings TEXT,
            meanings TEXT,
            common INTEGER NOT NULL DEFAULT 0
        )
    '''
    create_words_index: str = 'CREATE INDEX IF NOT EXISTS words_word ON words(word)'
    create_settings: str = '''
        CREATE TABLE IF NOT EXISTS settings (
            idx INTEGER PRIMARY KEY,
            window_x INTEGER,
            window_y INTEGER,
            last_query TEXT
        )
    '''
    insert_kanji: str = '''
        REPLACE INTO kanji(literal, grade, stroke_count, frequency, jlpt, onyomi,
            kunyomi, nanori, radical_readings, meanings, svg)
        VALUES(:literal, :grade, :stroke_count, :frequency, :jlpt, :onyomi,
            :kunyomi, :nanori, :radical_readings, :meanings, :svg)
    '''
    insert_word: str = '''
        INSERT INTO words(word, readings, meanings, common)
        VALUES(:word, :readings, :meanings, :common)
    '''
    kanji_exact: str = '''
        SELECT * FROM kanji
        WHERE literal = :query
    '''
    kanji_anywhere: str = '''
        SELECT * FROM kanji
        WHERE instr(:query, literal) > 0
        ORDER BY CAST(frequency AS INT) IS NULL, CAST(frequency AS INT)
    '''
    words_exact: str = '''
        SELECT * FROM words
        WHERE word = :query
            OR instr(char(10) || readings || char(10), char(10) || :query || char(10)) > 0
        ORDER BY common DESC, idx
        LIMIT :limit
    '''
    words_anywhere: str = '''
        SELECT * FROM words
        WHERE instr(word, :query) > 0 OR instr(readings, :query) > 0
        ORDER BY common DESC, idx
        LIMIT :limit
    '''
    words_meaning_exact: str = '''
        SELECT * FROM words
        WHERE instr(char(10) || lower(meanings) || char(10), char(10) || lower(:query) || char(10)) > 0
        ORDER BY common DESC, idx
        LIMIT :limit
    '''
    words_meaning_anywhere: str = '''
        SELECT * FROM words
        WHERE instr(lower(meanings), lower(:query)) > 0
        ORDER BY common DESC, idx
        LIMIT :limit
    '''
    load_settings: str = 'SELECT window_x, window_y, last_query FROM settings WHERE idx = 1'
    update_settings: str = '''
        REPLACE INTO settings(idx, window_x, window_y, last_query)
        VALUES(1, :window_x, :window_y, :last_query)
    '''


@dataclass
class LoggingConfig:
    """Configuration for the logging module."""
    level: str = 'INFO'
    format: str = '%(asctime)s - %(levelname)s - %(message)s'
    datefmt: str = '%Y-%m-%d %H:%M:%S'


@dataclass
class AppConfig:
    """Main application configuration combining all settings."""
    paths: Paths = field(default_factory=Paths)
    ui: UIConfig = field(default_factory=UIConfig)
    colors: Colors = field(default_factory=Colors)
    fonts: Fonts = field(default_factory=Fonts)
    browser: BrowserConfig = field(default_factory=BrowserConfig)
    search: SearchConfig = field(default_factory=SearchConfig)
    database_queries: DatabaseQueries = field(default_factory=DatabaseQueries)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


# Global configuration instance
config = AppConfig()

# Convenience accessors
DATABASE_PATH = config.paths.database_path
COMPOUND_LIMIT = config.browser.compound_limit
MEANING_SUMMARY_LENGTH = config.browser.meaning_summary_length
HISTORY_LIMIT = config.browser.history_limit


def get_logging_config() -> Dict[str, Any]:
    """Get keyword arguments for logging.basicConfig."""
    return asdict(config.logging)
