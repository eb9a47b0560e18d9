"""
RU: Telepen (полный ASCII 0-127), контрольный символ по модулю 127.
EN: Telepen encoder: start '_', data, check, stop 'z'.
"""

from __future__ import annotations

from typing import ClassVar, FrozenSet, List, Optional

from src.barcodegen.checksums import telepen_mod127
from src.barcodegen.errors import EncodingIssue
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import TELEPEN_START, TELEPEN_STOP
from src.model.enums import CheckDigitPolicy

__all__ = ["TelepenEncoder"]


class TelepenEncoder(SymbologyEncoder):
    code_prefix = "ETELEPEN"
    supported_policies: ClassVar[FrozenSet[CheckDigitPolicy]] = frozenset(
        {CheckDigitPolicy.APPEND}
    )

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        if not self._require_ascii(raw, issues) or policy is None:
            return None
        return EncodedSymbol(pattern="", data=raw)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        check = chr(telepen_mod127([ord(c) for c in prepared.data]))
        chars = TELEPEN_START + prepared.data + check + TELEPEN_STOP
        # Trailing spaces of the stop character belong to the quiet zone.
        pattern = "".join(self._pattern(c) for c in chars).rstrip("0")
        return EncodedSymbol(pattern=pattern, data=prepared.data, check=check)
