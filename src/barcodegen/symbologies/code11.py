"""
RU: Code 11 / USD-8: цифры и дефис, контрольный символ C, а также K для данных от 10 символов.
EN: Code 11 (USD-8) encoder.
"""

from __future__ import annotations

from typing import List, Optional

from src.barcodegen.checksums import CODE11_C_WEIGHT, CODE11_K_WEIGHT, code11_mod11
from src.barcodegen.errors import EncodingIssue
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import CODE11_START_STOP

__all__ = ["Code11Encoder", "code11_checks"]

_CHARS = "0123456789-"
K_CHECK_MIN_LENGTH = 10


def code11_checks(payload: str) -> str:
    """C check, plus K when the payload has 10 or more characters."""
    values = [_CHARS.index(c) for c in payload]
    c = code11_mod11(values, CODE11_C_WEIGHT)
    if len(payload) < K_CHECK_MIN_LENGTH:
        return _CHARS[c]
    k = code11_mod11([*values, c], CODE11_K_WEIGHT)
    return _CHARS[c] + _CHARS[k]


class Code11Encoder(SymbologyEncoder):
    code_prefix = "EC11"
    check_lengths = (1, 2)

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        if not self._require_alphabet(raw, _CHARS, issues, "0-9 and '-'"):
            return None
        if policy is None:
            return None
        split = self._apply_policy(raw, code11_checks, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        body = "0".join(self._pattern(c) for c in prepared.data)
        pattern = CODE11_START_STOP + "0" + body + "0" + CODE11_START_STOP
        return EncodedSymbol(pattern=pattern, data=prepared.data, check=prepared.check)
