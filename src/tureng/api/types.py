"""Dictionary service types."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any


class Lang(str, enum.Enum):
    """Language pair served by the dictionary."""

    ENDE = "ende"
    ENES = "enes"
    ENFR = "enfr"
    ENTR = "entr"

    @classmethod
    def default(cls) -> Lang:
        return cls.ENTR

    @classmethod
    def parse(cls, code: str) -> Lang:
        """Parse a short code such as ``"ende"``; raises ``ValueError``."""
        try:
            return cls(code.strip().lower())
        except ValueError:
            codes = "|".join(lang.value for lang in cls)
            raise ValueError(f"unknown language {code!r} (expected {codes})") from None

    def __str__(self) -> str:
        return self.value


@dataclass
class TranslationResult:
    """One row of a translation: a term and its counterpart."""

    term_a: str
    term_b: str
    category_text_a: str = ""
    category_text_b: str = ""
    term_type_text_a: str | None = None
    term_type_text_b: str | None = None

    def swapped(self) -> TranslationResult:
        """Return the same row read from the B side."""
        return TranslationResult(
            term_a=self.term_b,
            term_b=self.term_a,
            category_text_a=self.category_text_b,
            category_text_b=self.category_text_a,
            term_type_text_a=self.term_type_text_b,
            term_type_text_b=self.term_type_text_a,
        )


@dataclass
class TranslationDocument:
    """Translations from A to B (``a_results``) and from B to A (``b_results``)."""

    a_results: list[TranslationResult] = field(default_factory=list)
    b_results: list[TranslationResult] = field(default_factory=list)


def result_from_dict(data: dict[str, Any]) -> TranslationResult:
    """Deserialize a TranslationResult from the service's JSON object."""
    return TranslationResult(
        term_a=data["TermA"],
        term_b=data["TermB"],
        category_text_a=data.get("CategoryTextA") or "",
        category_text_b=data.get("CategoryTextB") or "",
        term_type_text_a=data.get("TermTypeTextA"),
        term_type_text_b=data.get("TermTypeTextB"),
    )


def document_from_dict(data: dict[str, Any]) -> TranslationDocument:
    """Deserialize a TranslationDocument from the service's JSON object."""
    return TranslationDocument(
        a_results=[result_from_dict(r) for r in data.get("AResults") or []],
        b_results=[result_from_dict(r) for r in data.get("BResults") or []],
    )
