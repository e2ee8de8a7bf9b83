from dataclasses import dataclass, field
from typing import Dict, List

# section[sentence_index][language_index] = line text
Section = List[List[str]]


@dataclass
class Song:
    source_skid: int
    source_sequence_nbr: int
    title_by_language_skid: Dict[int, str] = field(default_factory=dict)
    sections: List[Section] = field(default_factory=list)
    is_chorus: List[bool] = field(default_factory=list)
    language_skids: List[int] = field(default_factory=list)

    @classmethod
    def from_data(cls, data: dict) -> "Song":
        sections = [[list(row) for row in section] for section in (data.get("sections") or [])]
        is_chorus = [bool(c) for c in (data.get("is_chorus") or [])]
        if len(is_chorus) != len(sections):
            is_chorus = [False] * len(sections)
        titles = {int(k): v for k, v in (data.get("title_by_language_skid") or {}).items()}
        return cls(
            source_skid=int(data.get("source_skid", 0)),
            source_sequence_nbr=int(data.get("source_sequence_nbr", 0)),
            title_by_language_skid=titles,
            sections=sections,
            is_chorus=is_chorus,
            language_skids=list(data.get("language_skids") or []),
        )

    @property
    def stanzas(self) -> List[List[str]]:
        """Flat lines per section; the languages of a sentence sit next to each other."""
        return [[text for row in section for text in row] for section in self.sections]

    @property
    def language_count(self) -> int:
        return max(1, len(self.language_skids))

    @property
    def is_empty(self) -> bool:
        return not any(self.stanzas)

    def get_title(self, language_skid: int) -> str:
        title = self.title_by_language_skid.get(language_skid)
        if title is None and self.language_skids:
            title = self.title_by_language_skid.get(self.language_skids[0])
        return title or ""

    @property
    def display_title(self) -> str:
        if not self.language_skids:
            return ""
        return self.get_title(self.language_skids[0])

    @property
    def title_line(self) -> str:
        """All titles in language order, e.g. for a bilingual header."""
        titles = [self.title_by_language_skid.get(s) for s in self.language_skids]
        return " / ".join(t for t in titles if t)
