"""
Read-only access to the SQLite songs database.

A song is addressed by (source_skid, source_sequence_nbr): the hymnal it is
printed in and its number there. Verse text lives in StanzaSentence, chorus
text in ChorusSentence, and a stanza that references a chorus shows that
chorus right after its own lines (if any).
"""

import logging
import math
import sqlite3
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from .song import Section, Song

log = logging.getLogger(__name__)

TITLE_SQL = """
  SELECT Song.TitleName, Song.LanguageSkid
  FROM Song
  INNER JOIN SourceSong ON (
    SourceSong.SongSkid = Song.SongSkid
    AND SourceSong.LanguageSkid = Song.LanguageSkid
  )
  INNER JOIN Source ON (
    Source.SourceSkid = SourceSong.SourceSkid
    AND Source.LanguageSkid = SourceSong.LanguageSkid
  )
  WHERE Source.SourceSkid = ? AND SourceSong.SourceSequenceNbr = ?
  ORDER BY Song.LanguageSkid
"""

STANZAS_SQL = """
  SELECT Stanza.StanzaSequenceNbr AS StanzaNbr, Sentence.Content,
    StanzaSentence.SentenceSequenceNbr AS SentenceSequenceNbr,
    Stanza.LanguageSkid AS LanguageSkid
  FROM Sentence
  INNER JOIN StanzaSentence ON (
    StanzaSentence.SentenceSkid = Sentence.SentenceSkid
  )
  INNER JOIN Stanza ON (
    Stanza.SongSkid = StanzaSentence.SongSkid
    AND Stanza.LanguageSkid = StanzaSentence.LanguageSkid
    AND Stanza.StanzaSequenceNbr = StanzaSentence.StanzaSequenceNbr
  )
  INNER JOIN SourceSong ON (
    SourceSong.SongSkid = Stanza.SongSkid
    AND SourceSong.LanguageSkid = Stanza.LanguageSkid
  )
  INNER JOIN Source ON (
    Source.SourceSkid = SourceSong.SourceSkid
    AND Source.LanguageSkid = SourceSong.LanguageSkid
  )
  WHERE Source.SourceSkid = ? AND SourceSong.SourceSequenceNbr = ?
  ORDER BY Stanza.StanzaSequenceNbr, StanzaSentence.SentenceSequenceNbr, Stanza.LanguageSkid
"""

CHORUS_SENTENCES_SQL = """
  SELECT Stanza.StanzaSequenceNbr AS StanzaNbr, Sentence.Content,
    ChorusSentence.SentenceSequenceNbr AS SentenceSequenceNbr,
    ChorusSentence.LanguageSkid AS LanguageSkid
  FROM Sentence
  INNER JOIN ChorusSentence ON (
    ChorusSentence.SentenceSkid = Sentence.SentenceSkid
  )
  INNER JOIN Chorus ON (
    Chorus.ChorusSkid = ChorusSentence.ChorusSkid
    AND Chorus.LanguageSkid = ChorusSentence.LanguageSkid
  )
  INNER JOIN Stanza ON (
    Stanza.ChorusSkid = Chorus.ChorusSkid
    AND Stanza.LanguageSkid = ChorusSentence.LanguageSkid
  )
  INNER JOIN SourceSong ON (
    SourceSong.SongSkid = Stanza.SongSkid
    AND SourceSong.LanguageSkid = Stanza.LanguageSkid
  )
  INNER JOIN Source ON (
    Source.SourceSkid = SourceSong.SourceSkid
    AND Source.LanguageSkid = SourceSong.LanguageSkid
  )
  WHERE Source.SourceSkid = ? AND SourceSong.SourceSequenceNbr = ?
  ORDER BY Stanza.StanzaSequenceNbr, ChorusSentence.SentenceSequenceNbr, ChorusSentence.LanguageSkid
"""

# (sentence sequence, language skid, content)
LineItem = Tuple[int, int, str]


# Song numbers are bound as SQL integers; keep them inside the exact float range.
MAX_SAFE_INT = 2 ** 53 - 1


def safe_int(value) -> int:
    """Floor a numeric parameter to an int; ValueError for anything else."""
    try:
        i = math.floor(float(value))
    except (TypeError, ValueError, OverflowError):
        raise ValueError(f"Invalid integer parameter: {value!r}") from None
    if abs(i) > MAX_SAFE_INT:
        raise ValueError(f"Invalid integer parameter: {value!r}")
    return i


def open_database(path: Path) -> sqlite3.Connection:
    """Open the songs database read-only."""
    uri = f"{Path(path).resolve().as_uri()}?mode=ro"
    return sqlite3.connect(uri, uri=True)


def language_order(items: Iterable[LineItem]) -> List[int]:
    """Language skids in order of first appearance (by sentence, then language)."""
    order: List[int] = []
    for _, lang, _ in sorted(items, key=lambda x: (x[0], x[1])):
        if lang not in order:
            order.append(lang)
    return order


def build_section(items: Iterable[LineItem], lang_order: List[int]) -> Section:
    by_seq: Dict[int, Dict[int, str]] = {}
    for seq, lang, content in items:
        by_seq.setdefault(seq, {}).setdefault(lang, content)
    return [[by_seq[seq].get(lang, "") for lang in lang_order] for seq in sorted(by_seq)]


def _group_by_stanza(rows) -> Dict[int, List[LineItem]]:
    out: Dict[int, List[LineItem]] = {}
    for row in rows:
        stanza_nbr, content, seq, lang = row
        if stanza_nbr is None:
            continue
        out.setdefault(int(stanza_nbr), []).append((int(seq or 0), int(lang or 0), content or ""))
    return out


class SongQueries:
    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def get_song_data(self, source_skid: int, source_sequence_nbr: int) -> dict:
        params = (safe_int(source_skid), safe_int(source_sequence_nbr))

        titles: Dict[int, str] = {}
        for name, lang in self.conn.execute(TITLE_SQL, params):
            if name:
                titles[int(lang)] = name

        verse_items = _group_by_stanza(self.conn.execute(STANZAS_SQL, params))
        try:
            chorus_items = _group_by_stanza(self.conn.execute(CHORUS_SENTENCES_SQL, params))
        except sqlite3.OperationalError as e:
            log.warning("[songdb] chorus query failed, showing verses only: %s", e)
            chorus_items = {}

        sections: List[Section] = []
        is_chorus: List[bool] = []
        lang_skids: List[int] = []
        for n in sorted(set(verse_items) | set(chorus_items)):
            for items, chorus in ((verse_items.get(n), False), (chorus_items.get(n), True)):
                if not items:
                    continue
                if not lang_skids:
                    lang_skids = language_order(items)
                sections.append(build_section(items, lang_skids))
                is_chorus.append(chorus)

        return {
            "source_skid": params[0],
            "source_sequence_nbr": params[1],
            "title_by_language_skid": titles,
            "sections": sections,
            "is_chorus": is_chorus,
            "language_skids": lang_skids,
        }

    def get_song(self, source_skid: int, source_sequence_nbr: int) -> Song:
        return Song.from_data(self.get_song_data(source_skid, source_sequence_nbr))


def load_song(db_path: Path, source_skid: int, source_sequence_nbr: int) -> Optional[Song]:
    """One-shot load; None when the number has no lyrics."""
    conn = open_database(db_path)
    try:
        song = SongQueries(conn).get_song(source_skid, source_sequence_nbr)
    finally:
        conn.close()
    log.info(
        "[songdb] song %s/%s: %d stanzas, %d language(s)",
        source_skid, source_sequence_nbr, len(song.sections), song.language_count,
    )
    return None if song.is_empty else song
