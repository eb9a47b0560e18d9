"""
RU: Таксономия ошибок кодирования штрихкодов (накопление, а не fail-fast).
EN: Encoding error taxonomy. Input problems are collected as EncodingIssue
values; exceptions are reserved for programmer and render errors.

Иерархия:
    BarcodeGenError (базовое)
    ├── InvalidChecksumInput (also ValueError)
    ├── PatternNotFound (also LookupError)
    └── EncodingFailed (carries the collected issues)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Iterable, Optional, Sequence, Tuple

__all__ = [
    "ErrorKind",
    "EncodingIssue",
    "BarcodeGenError",
    "InvalidChecksumInput",
    "PatternNotFound",
    "EncodingFailed",
]


class ErrorKind(str, Enum):
    UNSUPPORTED_SYMBOLOGY = "unsupported_symbology"
    UNSUPPORTED_CHARACTER = "unsupported_character"
    INVALID_LENGTH = "invalid_length"
    INVALID_CHECKSUM_INPUT = "invalid_checksum_input"
    CHECKSUM_MISMATCH = "checksum_mismatch"
    INVALID_VALUE = "invalid_value"


@dataclass(frozen=True)
class EncodingIssue:
    """
    One validation failure of a single encode attempt.

    Attributes:
        kind: Error category.
        code: Stable short code, e.g. ``"EUPCA-2"``.
        message: Human readable text.
        position: Index of the offending character in the raw data, if any.
    """

    kind: ErrorKind
    code: str
    message: str
    position: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "kind": self.kind.value,
            "code": self.code,
            "message": self.message,
            "position": self.position,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EncodingIssue":
        return cls(
            kind=ErrorKind(d["kind"]),
            code=d["code"],
            message=d["message"],
            position=d.get("position"),
        )


class BarcodeGenError(Exception):
    """Barcode generation/rendering error."""


class InvalidChecksumInput(BarcodeGenError, ValueError):
    """Checksum function got empty or non-numeric input."""


class PatternNotFound(BarcodeGenError, LookupError):
    """No bar pattern registered for a symbology/character pair."""

    def __init__(self, symbology: Any, character: str) -> None:
        super().__init__(f"No pattern for {character!r} in {symbology}")
        self.symbology = symbology
        self.character = character


class EncodingFailed(BarcodeGenError):
    """Raised by an encoder when validation produced issues; the facade unwraps it."""

    def __init__(self, issues: Iterable[EncodingIssue]) -> None:
        self.issues: Tuple[EncodingIssue, ...] = tuple(issues)
        super().__init__("; ".join(str(i) for i in self.issues) or "encoding failed")

    @property
    def messages(self) -> Sequence[str]:
        return [str(i) for i in self.issues]
