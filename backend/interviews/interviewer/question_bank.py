from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

import jsonschema

logger = logging.getLogger(__name__)

# Static role-keyed catalogue. Loaded once at startup, never mutated.
# Each entry carries an expected answer used as the scoring reference.

DEFAULT_BANK_PATH = Path(__file__).resolve().parent / "data" / "question_bank.json"

QUESTION_TYPES = ["technical", "problem-solving", "experience"]
DIFFICULTY_LEVELS = ["easy", "medium", "hard"]

QUESTION_BANK_SCHEMA = {
    "type": "object",
    "properties": {
        "roles": {
            "type": "object",
            "additionalProperties": {
                "type": "array",
                "items": {
                    "type": "object",
                    "properties": {
                        "text": {"type": "string", "minLength": 1},
                        "type": {"type": "string", "enum": QUESTION_TYPES},
                        "difficulty": {"type": "string", "enum": DIFFICULTY_LEVELS},
                        "expected_answer": {"type": "string"},
                        "technologies": {"type": "array", "items": {"type": "string"}},
                    },
                    "required": ["text", "type", "difficulty", "expected_answer", "technologies"],
                },
            },
        }
    },
    "required": ["roles"],
}


@dataclass(frozen=True)
class QuestionBankEntry:
    text: str
    type: str
    difficulty: str
    expected_answer: str
    technologies: Tuple[str, ...] = ()

    def matches_any(self, technologies: Sequence[str]) -> bool:
        """Case-insensitive substring match, in either direction, against any requested tech."""
        wanted = [t.lower() for t in technologies]
        for tag in self.technologies:
            tag = tag.lower()
            if any(tag in tech or tech in tag for tech in wanted):
                return True
        return False


class QuestionBank:
    """Pure lookup/filter over an immutable role -> entries mapping."""

    def __init__(self, entries_by_role: Mapping[str, Sequence[QuestionBankEntry]], default_role: str):
        if default_role not in entries_by_role:
            raise ValueError(f"Default role '{default_role}' is not in the question bank")
        self._entries = MappingProxyType({role: tuple(entries) for role, entries in entries_by_role.items()})
        self.default_role = default_role

    @classmethod
    def from_dict(cls, data: Dict[str, Any], default_role: str) -> QuestionBank:
        """Validate a catalogue dict against QUESTION_BANK_SCHEMA and build the bank."""
        jsonschema.validate(instance=data, schema=QUESTION_BANK_SCHEMA)
        entries_by_role = {
            role: [
                QuestionBankEntry(
                    text=item["text"],
                    type=item["type"],
                    difficulty=item["difficulty"],
                    expected_answer=item["expected_answer"],
                    technologies=tuple(item["technologies"]),
                )
                for item in items
            ]
            for role, items in data["roles"].items()
        }
        return cls(entries_by_role, default_role)

    @classmethod
    def load(cls, path: Optional[str | Path] = None, default_role: str = "Full Stack Developer") -> QuestionBank:
        bank_path = Path(path) if path else DEFAULT_BANK_PATH
        with bank_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
        bank = cls.from_dict(data, default_role)
        logger.info(f"Loaded question bank from {bank_path} ({len(bank.roles())} roles)")
        return bank

    def roles(self) -> List[str]:
        return list(self._entries)

    def lookup(self, role: str, technologies: Sequence[str] = (), count: int = 5) -> List[QuestionBankEntry]:
        """Return up to `count` entries for `role`, preferring ones tagged with `technologies`.

        Unknown roles use the default role's list. A technology filter that
        matches nothing is dropped, so a non-empty role list never yields an
        empty result. Order is the catalogue's declared order.
        """
        role_entries = self._entries.get(role)
        if role_entries is None:
            role_entries = self._entries[self.default_role]

        selected = role_entries
        if technologies:
            filtered = tuple(e for e in role_entries if e.matches_any(technologies))
            if filtered:
                selected = filtered

        return list(selected[:max(count, 0)])
