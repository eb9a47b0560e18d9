"""
RU: Pharmacode (Laetus): целое 3..131070, узкий штрих 1 модуль, широкий 3, промежуток 2.
EN: Pharmacode (one-track) encoder. No table: bars are derived from the value.
"""

from __future__ import annotations

from typing import List, Optional

from src.barcodegen.errors import EncodingIssue, ErrorKind
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.model.enums import MAX_PHARMACODE, MIN_PHARMACODE

__all__ = ["PharmacodeEncoder", "pharmacode_pattern"]

NARROW = "1"
WIDE = "111"
GAP = "00"
_MAX_DIGITS = len(str(MAX_PHARMACODE))


def pharmacode_pattern(value: int) -> str:
    bars: List[str] = []
    n = value
    while n > 0:
        if n % 2 == 0:
            bars.append(WIDE)
            n = (n - 2) // 2
        else:
            bars.append(NARROW)
            n = (n - 1) // 2
    return GAP.join(reversed(bars))


class PharmacodeEncoder(SymbologyEncoder):
    code_prefix = "EPHARMA"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        if not self._require_digits(raw, issues):
            return None
        digits = raw.lstrip("0")
        # Length is checked before int(): very long digit strings exceed
        # the interpreter's int conversion limit.
        in_range = (
            len(digits) <= _MAX_DIGITS
            and MIN_PHARMACODE <= int(digits or "0") <= MAX_PHARMACODE
        )
        if not in_range:
            shown = digits if len(digits) <= _MAX_DIGITS else f"{digits[:_MAX_DIGITS]}..."
            issues.append(
                self._issue(
                    ErrorKind.INVALID_VALUE,
                    8,
                    f"Value {shown or '0'} out of range {MIN_PHARMACODE}..{MAX_PHARMACODE}",
                )
            )
            return None
        value = int(digits)
        return EncodedSymbol(pattern="", data=str(value))

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        return EncodedSymbol(
            pattern=pharmacode_pattern(int(prepared.data)), data=prepared.data
        )
