"""Tests for the KANJIDIC2 and JMdict parsers of the database build script."""

import importlib.util
import xml.etree.ElementTree as ET
from pathlib import Path

import pytest

SCRIPT = Path(__file__).resolve().parent.parent / "scripts" / "build_db.py"


@pytest.fixture(scope="module")
def build_db():
    spec = importlib.util.spec_from_file_location("build_db", SCRIPT)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


CHARACTER = """
<character>
  <literal>日</literal>
  <misc>
    <grade>1</grade>
    <stroke_count>4</stroke_count>
    <freq>1</freq>
    <jlpt>4</jlpt>
  </misc>
  <reading_meaning>
    <rmgroup>
      <reading r_type="pinyin">ri4</reading>
      <reading r_type="ja_on">ニチ</reading>
      <reading r_type="ja_on">ジツ</reading>
      <reading r_type="ja_kun">ひ</reading>
      <meaning>day</meaning>
      <meaning>sun</meaning>
      <meaning m_lang="fr">jour</meaning>
    </rmgroup>
    <nanori>あき</nanori>
  </reading_meaning>
</character>
"""

ENTRY = """
<entry>
  <ent_seq>1582710</ent_seq>
  <k_ele><keb>日本</keb><ke_pri>news1</ke_pri></k_ele>
  <r_ele><reb>にほん</reb></r_ele>
  <r_ele><reb>にっぽん</reb></r_ele>
  <sense><gloss>Japan</gloss></sense>
</entry>
"""

KANA_ENTRY = """
<entry>
  <r_ele><reb>ありがとう</reb><re_pri>spec1</re_pri></r_ele>
  <sense><gloss>thank you</gloss><gloss>thanks</gloss></sense>
</entry>
"""

RARE_ENTRY = """
<entry>
  <k_ele><keb>日光</keb><ke_pri>news2</ke_pri></k_ele>
  <r_ele><reb>にっこう</reb></r_ele>
  <sense><gloss>sunlight</gloss></sense>
</entry>
"""


def test_parse_character(build_db, tmp_path):
    (tmp_path / "065e5.svg").write_text("<svg/>", encoding="utf-8")
    parser = build_db.CharacterParser(tmp_path)
    character = parser.parse_character(ET.fromstring(CHARACTER))
    assert character["literal"] == "日"
    assert character["grade"] == "1"
    assert character["stroke_count"] == "4"
    assert character["frequency"] == "1"
    assert character["onyomi"] == ["ニチ", "ジツ"]
    assert character["kunyomi"] == ["ひ"]
    assert character["meanings"] == ["day", "sun"]
    assert character["nanori"] == ["あき"]
    assert character["radical_readings"] == []
    assert character["svg"] == "<svg/>"


def test_parse_character_without_svg(build_db, tmp_path):
    character = build_db.CharacterParser(tmp_path).parse_character(ET.fromstring(CHARACTER))
    assert character["svg"] is None


def test_parse_word_entry(build_db):
    word = build_db.WordParser().parse_entry(ET.fromstring(ENTRY))
    assert word == {
        "word": "日本",
        "readings": ["にほん", "にっぽん"],
        "meanings": ["Japan"],
        "common": True,
    }


def test_parse_kana_only_entry(build_db):
    word = build_db.WordParser().parse_entry(ET.fromstring(KANA_ENTRY))
    assert word["word"] == "ありがとう"
    assert word["meanings"] == ["thank you", "thanks"]
    assert word["common"] is True


def test_uncommon_entry(build_db):
    assert build_db.WordParser().parse_entry(ET.fromstring(RARE_ENTRY))["common"] is False


def test_entry_without_forms(build_db):
    assert build_db.WordParser().parse_entry(ET.fromstring("<entry><sense/></entry>")) is None


def test_iter_entries_streams_and_releases(build_db, tmp_path, monkeypatch):
    jmdict = tmp_path / "JMdict_e.xml"
    jmdict.write_text(
        "<JMdict>" + ENTRY + KANA_ENTRY + RARE_ENTRY + "</JMdict>",
        encoding="utf-8"
    )
    roots = []
    iterparse = build_db.ET.iterparse

    def recording_iterparse(*args, **kwargs):
        for event, element in iterparse(*args, **kwargs):
            if not roots:
                roots.append(element)
            yield event, element

    monkeypatch.setattr(build_db.ET, "iterparse", recording_iterparse)
    parser = build_db.WordParser()
    seen = []
    words = []
    for entry in build_db.iter_entries(jmdict):
        assert list(roots[0]) == [entry]
        words.append(parser.parse_entry(entry)["word"])
        seen.append(entry)
    assert words == ["日本", "ありがとう", "日光"]
    assert all(len(entry) == 0 for entry in seen)
