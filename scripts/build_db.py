import xml.etree.ElementTree as ET
import tqdm
import logging
from pathlib import Path
from typing import Dict, List, Any, Iterator, Optional
from dataclasses import dataclass

from config import config, get_logging_config
from database import DictionaryDatabase

logger = logging.getLogger(__name__)

# JMdict priority tags that mark a word as common (the "(P)" marker in EDICT)
COMMON_PRIORITIES = frozenset({'news1', 'ichi1', 'spec1', 'spec2', 'gai1'})

BATCH_SIZE = 5000


@dataclass
class Paths:
    """
    Data class to hold all file and directory paths used in the database build process.

    Source files are expected under the application's data directory:
    lex/kanjidic2.xml, lex/JMdict_e.xml and the KanjiVG stroke order
    files in img/svg.
    """
    lex_path: Path  # Lexical data files directory
    svg_path: Path  # SVG stroke order files directory
    db_path: Path   # Output database file path

    @property
    def kanjidic(self) -> Path:
        return self.lex_path / "kanjidic2.xml"

    @property
    def jmdict(self) -> Path:
        return self.lex_path / "JMdict_e.xml"


class PathManager:
    """Manages file and directory paths for the database build process."""

    def __init__(self):
        self.paths = self._setup_paths()

    def _setup_paths(self) -> Paths:
        """Setup all necessary file paths for the database build process."""
        data_dir = config.paths.data_dir
        return Paths(
            lex_path=data_dir / "lex",
            svg_path=data_dir / "img" / "svg",
            db_path=config.paths.database_path
        )


class CharacterParser:
    """
    Handles parsing of individual kanji character data from KANJIDIC2 XML elements.

    Only the fields a kanji page shows are extracted: grade, stroke
    count, frequency, JLPT level, readings, English meanings and the
    stroke order drawing.
    """

    def __init__(self, svg_path: Path):
        """
        Initialize the CharacterParser.

        Args:
            svg_path (Path): Path to the directory containing SVG stroke order files.
        """
        self.svg_path = svg_path

    @staticmethod
    def _text(element: Optional[ET.Element]) -> Optional[str]:
        return element.text if element is not None else None

    def parse_misc_info(self, element: ET.Element, character: Dict[str, Any]) -> None:
        """
        Parse miscellaneous character information and update the character dictionary in-place.

        Extracts:
        - grade: Japanese school grade level (1-6, 8, 9, 10)
        - stroke_count: Number of strokes in the character (first value is the accepted one)
        - frequency: Usage frequency ranking (1-2500)
        - jlpt: Japanese Language Proficiency Test level (1-4)
        - radical_readings: Names of the character when used as a radical
        """
        if (misc := element.find('misc')) is None:
            return
        character['grade'] = self._text(misc.find('grade'))
        character['stroke_count'] = self._text(misc.find('stroke_count'))
        character['frequency'] = self._text(misc.find('freq'))
        character['jlpt'] = self._text(misc.find('jlpt'))
        character['radical_readings'] = [elem.text or '' for elem in misc.findall('rad_name')]

    def parse_readings_and_meanings(self, element: ET.Element, character: Dict[str, Any]) -> None:
        """
        Parse readings and meanings and update the character dictionary in-place.

        Extracts on and kun readings, English meanings (meanings without an
        m_lang attribute) and nanori (name readings).
        """
        character['onyomi'] = []
        character['kunyomi'] = []
        character['meanings'] = []
        character['nanori'] = []
        if (reading_meaning := element.find('reading_meaning')) is None:
            return
        for rm_group in reading_meaning.findall('rmgroup'):
            for val in rm_group.findall('reading'):
                r_type = val.attrib.get('r_type')
                if r_type == 'ja_on':
                    character['onyomi'].append(val.text or '')
                elif r_type == 'ja_kun':
                    character['kunyomi'].append(val.text or '')
            for val in rm_group.findall('meaning'):
                if val.attrib.get('m_lang', 'en') == 'en':
                    character['meanings'].append(val.text or '')
        character['nanori'] = [elem.text or '' for elem in reading_meaning.findall('nanori')]

    def parse_svg_file(self, character: Dict[str, Any]) -> None:
        """
        Attach the KanjiVG stroke order drawing of the character, if present.

        KanjiVG names its files after the zero-padded hex codepoint,
        e.g. "065e5.svg" for 日.
        """
        svg_file_path = self.svg_path / f"{ord(character['literal']):05x}.svg"
        character['svg'] = svg_file_path.read_text(encoding='utf-8') if svg_file_path.exists() else None

    def parse_character(self, element: ET.Element) -> Dict[str, Any]:
        """Parse a complete character element from the KANJIDIC XML."""
        character: Dict[str, Any] = {'literal': self._text(element.find('literal')) or ''}
        self.parse_misc_info(element, character)
        self.parse_readings_and_meanings(element, character)
        if character['literal']:
            self.parse_svg_file(character)
        return character


class WordParser:
    """Handles parsing of JMdict entries into word records."""

    @staticmethod
    def is_common(entry: ET.Element) -> bool:
        priorities = {
            elem.text for elem in entry.iter()
            if elem.tag in ('ke_pri', 're_pri')
        }
        return bool(priorities & COMMON_PRIORITIES)

    def parse_entry(self, entry: ET.Element) -> Optional[Dict[str, Any]]:
        """
        Parse a JMdict <entry> element.

        The headword is the first kanji form, or the first kana form for
        words written in kana only.

        Returns:
            Word record, or None if the entry has no usable form
        """
        kanji_forms = [elem.text for elem in entry.findall('k_ele/keb') if elem.text]
        readings = [elem.text for elem in entry.findall('r_ele/reb') if elem.text]
        word = kanji_forms[0] if kanji_forms else (readings[0] if readings else None)
        if not word:
            return None
        meanings = [
            gloss.text for gloss in entry.findall('sense/gloss')
            if gloss.text and gloss.attrib.get('{http://www.w3.org/XML/1998/namespace}lang', 'eng') == 'eng'
        ]
        return {
            'word': word,
            'readings': readings,
            'meanings': meanings,
            'common': self.is_common(entry)
        }


def iter_entries(xml_path: Path) -> Iterator[ET.Element]:
    """
    Stream <entry> elements from JMdict without loading the whole tree.

    Each entry is cleared after use and the root is emptied along with it,
    so memory stays flat over the whole file.
    """
    root = None
    for event, element in ET.iterparse(xml_path, events=('start', 'end')):
        if root is None:
            root = element
        if event == 'end' and element.tag == 'entry':
            yield element
            element.clear()
            root.clear()


class KanjiDatabaseBuilder:
    """Main class that orchestrates the entire database building process."""

    def __init__(self):
        self.path_manager = PathManager()
        self.db_manager = DictionaryDatabase(self.path_manager.paths.db_path)
        self.character_parser = CharacterParser(self.path_manager.paths.svg_path)
        self.word_parser = WordParser()

    def load_xml_data(self) -> List[ET.Element]:
        """Load and parse the KANJIDIC XML file."""
        logger.info("Parsing kanjidic XML...")
        tree: ET.ElementTree = ET.parse(self.path_manager.paths.kanjidic)
        root: ET.Element = tree.getroot()
        characters: List[ET.Element] = root.findall('character')
        logger.info(f"Found {len(characters)} characters in XML")
        return characters

    def iter_jmdict_entries(self) -> Iterator[ET.Element]:
        return iter_entries(self.path_manager.paths.jmdict)

    def process_characters(self, characters: List[ET.Element]) -> None:
        """Process all characters and insert them into the database."""
        logger.info(f"Processing {len(characters)} characters...")

        records = []
        for character in tqdm.tqdm(characters, desc="Processing characters"):
            char = self.character_parser.parse_character(character)
            if not char['literal']:
                logger.warning("Skipping character without literal")
                continue
            records.append(char)

        processed_count = self.db_manager.insert_kanji(records)
        with_svg = sum(1 for record in records if record.get('svg'))
        logger.info(f"Successfully processed {processed_count} characters ({with_svg} with SVG files)")

    def process_words(self) -> None:
        """Process all JMdict entries and insert them into the database."""
        if not self.path_manager.paths.jmdict.exists():
            logger.warning(f"{self.path_manager.paths.jmdict} not found, skipping words")
            return

        logger.info("Processing JMdict entries...")
        processed_count = 0
        batch: List[Dict[str, Any]] = []
        for entry in tqdm.tqdm(self.iter_jmdict_entries(), desc="Processing words", unit=" entries"):
            if (word := self.word_parser.parse_entry(entry)) is None:
                continue
            batch.append(word)
            if len(batch) >= BATCH_SIZE:
                processed_count += self.db_manager.insert_words(batch)
                batch = []
        processed_count += self.db_manager.insert_words(batch)
        logger.info(f"Successfully processed {processed_count} words")

    def build_database(self) -> None:
        """Main method to build the complete dictionary database."""
        db_path = self.path_manager.paths.db_path
        logger.info("Starting database build process...")
        logger.info(f"Database will be created at: {db_path}")

        # Start from a clean database
        if db_path.exists():
            db_path.unlink()
        self.db_manager.create_tables()

        characters = self.load_xml_data()
        self.process_characters(characters)
        self.process_words()

        logger.info("Database build completed successfully!")


def main() -> None:
    """Main function to orchestrate the complete database building process."""
    logging.basicConfig(**get_logging_config())
    builder = KanjiDatabaseBuilder()
    builder.build_database()


if __name__ == "__main__":
    main()
