"""
RU: Code 39, LOGMARS, Code 39 Mod43 и Code 39 Extended (полный ASCII).
EN: Code 39 family: 12-module characters, '*' start/stop, 1-module gaps.
"""

from __future__ import annotations

import logging
import string
from typing import List, Optional

from src.barcodegen.checksums import code39_mod43
from src.barcodegen.errors import EncodingIssue, ErrorKind
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import CODE39_CHARS, CODE39_FULL_ASCII

logger = logging.getLogger(__name__)

__all__ = ["Code39Encoder", "Code39Mod43Encoder", "Code39ExtendedEncoder"]

_CODE39_SET = frozenset(CODE39_CHARS)
_ASCII_LOWER = frozenset(string.ascii_lowercase)
_GAP = "0"


def _mod43_char(payload: str) -> str:
    return CODE39_CHARS[code39_mod43([CODE39_CHARS.index(c) for c in payload])]


class Code39Encoder(SymbologyEncoder):
    """Code 39 / LOGMARS: `0-9A-Z-. $/+%`, no check character."""

    code_prefix = "EC39"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        ok = True
        for pos, ch in enumerate(raw):
            if ch in _CODE39_SET:
                continue
            ok = False
            if ch in _ASCII_LOWER:
                number, message = 8, f"Lowercase {ch!r} at position {pos} needs Code 39 Extended"
            else:
                number, message = 3, f"Invalid character {ch!r} at position {pos} (0-9A-Z-. $/+%)"
            issues.append(
                self._issue(ErrorKind.UNSUPPORTED_CHARACTER, number, message, position=pos)
            )
        if not ok:
            return None
        return self._with_check(raw, opts, issues)

    def _with_check(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        return EncodedSymbol(pattern="", data=raw)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        return EncodedSymbol(
            pattern=self._frame(prepared.data),
            data=prepared.data,
            check=prepared.check,
        )

    def _frame(self, chars: str) -> str:
        body = [self._pattern(c) for c in f"*{chars}*"]
        return _GAP.join(body)


class Code39Mod43Encoder(Code39Encoder):
    """Code 39 with the mod-43 check character appended."""

    code_prefix = "EC39M43"

    def _with_check(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        policy = self._policy(opts, issues)
        if policy is None:
            return None
        split = self._apply_policy(raw, _mod43_char, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)


class Code39ExtendedEncoder(Code39Encoder):
    """
    Full ASCII Code 39.

    Characters outside the native set are written as escape pairs
    (`$`, `%`, `/`, `+` followed by a letter); the label keeps the raw text.
    """

    code_prefix = "EC39EXT"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        if not self._require_ascii(raw, issues):
            return None
        return EncodedSymbol(pattern="", data=raw)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        escaped = "".join(CODE39_FULL_ASCII[ord(c)] for c in prepared.data)
        logger.debug("Code 39 extended %r -> %r", prepared.data, escaped)
        return EncodedSymbol(pattern=self._frame(escaped), data=prepared.data)
