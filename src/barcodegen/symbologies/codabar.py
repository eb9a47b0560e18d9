"""
RU: Codabar: данные 0-9 -$:/.+, старт/стоп символы A-D.
EN: Codabar encoder. Characters are separated by a one-module gap.
"""

from __future__ import annotations

from typing import List, Optional

from src.barcodegen.errors import EncodingIssue, ErrorKind
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import CODABAR_START_STOP

__all__ = ["CodabarEncoder"]

_BODY_CHARS = frozenset("0123456789-$:/.+")


def _fold(ch: str) -> str:
    return ch.upper() if ch in "abcd" else ch


class CodabarEncoder(SymbologyEncoder):
    code_prefix = "ECODABAR"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        if len(raw) < 3:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_LENGTH,
                    2,
                    "Data must hold start, stop and at least one data character",
                )
            )
            return None
        # str.upper() may change length ('ß' -> 'SS'); only a-d are folded
        data = _fold(raw[0]) + raw[1:-1] + _fold(raw[-1])
        ok = True
        for pos in (0, len(data) - 1):
            if data[pos] not in CODABAR_START_STOP:
                ok = False
                issues.append(
                    self._issue(
                        ErrorKind.UNSUPPORTED_CHARACTER,
                        8,
                        f"Start/stop character must be A, B, C or D, got {raw[pos]!r}",
                        position=pos,
                    )
                )
        body_issues: List[EncodingIssue] = []
        self._require_alphabet(data[1:-1], _BODY_CHARS, body_issues, "0-9 -$:/.+")
        # Positions are reported against the full input, not the body slice.
        for issue in body_issues:
            pos = (issue.position or 0) + 1
            issues.append(
                self._issue(
                    issue.kind,
                    3,
                    f"Invalid character {raw[pos]!r} at position {pos} (0-9 -$:/.+)",
                    position=pos,
                )
            )
        if not ok or body_issues:
            return None
        return EncodedSymbol(pattern="", data=data)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        pattern = "0".join(self._pattern(c) for c in prepared.data)
        return EncodedSymbol(pattern=pattern, data=prepared.data)
