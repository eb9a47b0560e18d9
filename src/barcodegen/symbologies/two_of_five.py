"""
RU: Семейство «2 из 5»: Interleaved (ITF), ITF-14, Standard и Industrial, с вариантами Mod10.
EN: 2 of 5 family encoders.

Interleaved 2 of 5 pairs digits: bars come from the first digit of a pair,
spaces from the second. Standard and Industrial 2 of 5 encode every element
as a bar followed by a narrow space; they differ only in the wide factor.
"""

from __future__ import annotations

import logging
from typing import ClassVar, List, Optional

from src.barcodegen.checksums import digits_of, gs1_mod10
from src.barcodegen.errors import EncodingIssue, ErrorKind
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import nw_to_modules
from src.model.enums import CheckDigitPolicy

logger = logging.getLogger(__name__)

__all__ = [
    "Interleaved2of5Encoder",
    "Interleaved2of5Mod10Encoder",
    "ITF14Encoder",
    "Standard2of5Encoder",
    "Standard2of5Mod10Encoder",
    "Industrial2of5Encoder",
    "Industrial2of5Mod10Encoder",
]

ITF_START = "1010"
ITF_STOP = "1101"
ITF_WIDE = 2


def _mod10_char(payload: str) -> str:
    return str(gs1_mod10(digits_of(payload)))


class Interleaved2of5Encoder(SymbologyEncoder):
    """
    Interleaved 2 of 5 (optionally with a GS1 mod-10 check digit).

    Option ``pad_odd`` prepends "0" when the symbol would otherwise carry an
    odd number of digits.
    """

    code_prefix = "EI25"
    with_check: ClassVar[bool] = False

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        if not self._require_digits(raw, issues):
            return None
        pad = bool(opts.get("pad_odd", False))
        if not self.with_check:
            data = raw
            if len(data) % 2 and pad:
                data = "0" + data
            if not self._even(data, issues):
                return None
            return EncodedSymbol(pattern="", data=data)

        policy = self._policy(opts, issues)
        if policy is None:
            return None
        data = raw
        if policy is CheckDigitPolicy.APPEND:
            if len(data) % 2 == 0 and pad:
                data = "0" + data
            if len(data) % 2 == 0:
                issues.append(
                    self._issue(
                        ErrorKind.INVALID_LENGTH,
                        2,
                        "Data length must be odd when a check digit is appended",
                    )
                )
                return None
        elif not self._even(data, issues):
            return None
        split = self._apply_policy(data, _mod10_char, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)

    def _even(self, data: str, issues: List[EncodingIssue]) -> bool:
        if len(data) % 2:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_LENGTH, 2, "Data length must be even (use pad_odd)"
                )
            )
            return False
        return True

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        data = prepared.data
        body: List[str] = []
        for i in range(0, len(data), 2):
            bars = self._pattern(data[i])
            spaces = self._pattern(data[i + 1])
            interleaved = "".join(b + s for b, s in zip(bars, spaces))
            body.append(nw_to_modules(interleaved, ITF_WIDE))
        pattern = ITF_START + "".join(body) + ITF_STOP
        return EncodedSymbol(pattern=pattern, data=data, check=prepared.check)


class Interleaved2of5Mod10Encoder(Interleaved2of5Encoder):
    code_prefix = "EI25M10"
    with_check = True


class ITF14Encoder(Interleaved2of5Encoder):
    """ITF-14 (GTIN-14): 13 digits plus GS1 check digit, interleaved."""

    code_prefix = "EITF14"
    default_policy: ClassVar[CheckDigitPolicy] = CheckDigitPolicy.VALIDATE

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        digits_ok = self._require_digits(raw, issues)
        length_ok = self._require_length(raw, (13, 14), issues)
        if not (digits_ok and length_ok) or policy is None:
            return None
        if len(raw) == 13:
            check = self._checksum(_mod10_char, raw, issues)
            if check is None:
                return None
            return EncodedSymbol(pattern="", data=raw + check, check=check)
        if policy is CheckDigitPolicy.APPEND:
            policy = CheckDigitPolicy.VALIDATE
        split = self._apply_policy(raw, _mod10_char, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)


class Standard2of5Encoder(SymbologyEncoder):
    """Standard 2 of 5, bars only, wide = 2 modules."""

    code_prefix = "ES25"
    wide: ClassVar[int] = 2
    with_check: ClassVar[bool] = False
    start_bars: ClassVar[str] = "WWN"
    stop_bars: ClassVar[str] = "WNW"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        if not self._require_digits(raw, issues):
            return None
        if not self.with_check:
            return EncodedSymbol(pattern="", data=raw)
        policy = self._policy(opts, issues)
        if policy is None:
            return None
        split = self._apply_policy(raw, _mod10_char, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        parts = [nw_to_modules(self.start_bars, self.wide, bars_only=True)]
        parts.extend(
            nw_to_modules(self._pattern(d), self.wide, bars_only=True)
            for d in prepared.data
        )
        parts.append(nw_to_modules(self.stop_bars, self.wide, bars_only=True))
        # The last narrow space is quiet zone, not part of the symbol.
        pattern = "".join(parts).rstrip("0")
        return EncodedSymbol(pattern=pattern, data=prepared.data, check=prepared.check)


class Standard2of5Mod10Encoder(Standard2of5Encoder):
    code_prefix = "ES25M10"
    with_check = True


class Industrial2of5Encoder(Standard2of5Encoder):
    """Industrial 2 of 5: same bar structure, wide = 3 modules."""

    code_prefix = "EIND25"
    wide = 3


class Industrial2of5Mod10Encoder(Industrial2of5Encoder):
    code_prefix = "EIND25M10"
    with_check = True
