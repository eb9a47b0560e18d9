"""
RU: Кодировщики семейства UPC/EAN: UPC-A, UPC-E, EAN-13, EAN-8, JAN-13, Bookland/ISBN и дополнения 2/5.
EN: UPC/EAN family encoders (fixed module counts: 95 / 51 / 67, add-ons 20 / 47).
"""

from __future__ import annotations

import logging
from typing import ClassVar, FrozenSet, List, Optional, Tuple

from src.barcodegen.checksums import digits_of, gs1_mod10, upc5_addon
from src.barcodegen.errors import EncodingIssue, ErrorKind
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import (
    ADDON2_PARITY,
    ADDON5_PARITY,
    ADDON_SEPARATOR,
    ADDON_START,
    EAN13_PARITY,
    EAN_CENTER,
    EAN_GUARD,
    UPCE_END,
    UPCE_PARITY,
)
from src.model.enums import CheckDigitPolicy

logger = logging.getLogger(__name__)

__all__ = [
    "UPCAEncoder",
    "UPCEEncoder",
    "EAN13Encoder",
    "JAN13Encoder",
    "BooklandEncoder",
    "EAN8Encoder",
    "UPCAddOn2Encoder",
    "UPCAddOn5Encoder",
    "expand_upce",
    "compress_upca",
]

_SWAP_PARITY = str.maketrans("LG", "GL")


def _gs1_check(payload: str) -> str:
    return str(gs1_mod10(digits_of(payload)))


class _GS1FixedEncoder(SymbologyEncoder):
    """Fixed-length GS1 symbol: `data_length` digits plus one check digit."""

    data_length: ClassVar[int] = 12
    default_policy: ClassVar[CheckDigitPolicy] = CheckDigitPolicy.VALIDATE

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        digits_ok = self._require_digits(raw, issues)
        length_ok = self._require_length(
            raw, (self.data_length, self.data_length + 1), issues
        )
        if not (digits_ok and length_ok) or policy is None:
            return None
        if not self._extra_rules(raw, issues):
            return None
        split = self._split_check(raw, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)

    def _split_check(
        self, raw: str, policy: CheckDigitPolicy, issues: List[EncodingIssue]
    ) -> Optional[Tuple[str, str]]:
        if len(raw) == self.data_length:
            check = self._checksum(_gs1_check, raw, issues)
            return None if check is None else (raw, check)
        # The length already says a check digit is present; APPEND cannot apply.
        if policy is CheckDigitPolicy.APPEND:
            policy = CheckDigitPolicy.VALIDATE
        return self._apply_policy(raw, _gs1_check, policy, issues)

    def _extra_rules(self, raw: str, issues: List[EncodingIssue]) -> bool:
        return True

    def _digits(self, data: str, parity: str) -> str:
        return "".join(self._pattern(f"{p}{d}") for p, d in zip(parity, data))


class UPCAEncoder(_GS1FixedEncoder):
    """UPC-A / UCC-12: 11 data digits + check, 95 modules."""

    code_prefix = "EUPCA"
    data_length = 11

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        data = prepared.data
        pattern = (
            EAN_GUARD
            + self._digits(data[:6], "L" * 6)
            + EAN_CENTER
            + self._digits(data[6:], "R" * 6)
            + EAN_GUARD
        )
        return EncodedSymbol(pattern=pattern, data=data, check=prepared.check)


class EAN13Encoder(_GS1FixedEncoder):
    """EAN-13 / UCC-13: 12 data digits + check; first digit sets left-half parity."""

    code_prefix = "EEAN13"
    data_length = 12

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        data = prepared.data
        parity = EAN13_PARITY[int(data[0])]
        pattern = (
            EAN_GUARD
            + self._digits(data[1:7], parity)
            + EAN_CENTER
            + self._digits(data[7:], "R" * 6)
            + EAN_GUARD
        )
        return EncodedSymbol(pattern=pattern, data=data, check=prepared.check)


class JAN13Encoder(EAN13Encoder):
    """JAN-13: EAN-13 restricted to the Japanese prefixes 45 and 49."""

    code_prefix = "EJAN13"

    def _extra_rules(self, raw: str, issues: List[EncodingIssue]) -> bool:
        if raw[:2] not in ("45", "49"):
            issues.append(
                self._issue(ErrorKind.INVALID_VALUE, 8, "Invalid country code (must start with 45 or 49)")
            )
            return False
        return True


class BooklandEncoder(EAN13Encoder):
    """
    Bookland / ISBN as EAN-13.

    Accepts an ISBN-10 (9 digits, or 10 with its own check digit or 'X', which
    is dropped) and prefixes 978; or a 12/13 digit EAN starting with 978/979.
    Hyphens and spaces are ignored.
    """

    code_prefix = "EBOOKLAND"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        cleaned = raw.replace("-", "").replace(" ", "")
        if len(cleaned) == 10 and cleaned[-1] in "Xx":
            cleaned = cleaned[:9]
        if len(cleaned) in (9, 10):
            if not self._require_digits(cleaned, issues):
                return None
            cleaned = "978" + cleaned[:9]
        elif len(cleaned) in (12, 13):
            if cleaned[:3] not in ("978", "979"):
                issues.append(
                    self._issue(ErrorKind.INVALID_VALUE, 8, "Bookland data must start with 978 or 979")
                )
                return None
        else:
            self._require_length(cleaned, (9, 10, 12, 13), issues)
            return None
        return super()._prepare(cleaned, opts, issues)


class EAN8Encoder(_GS1FixedEncoder):
    """EAN-8: 7 data digits + check, 67 modules."""

    code_prefix = "EEAN8"
    data_length = 7

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        data = prepared.data
        pattern = (
            EAN_GUARD
            + self._digits(data[:4], "LLLL")
            + EAN_CENTER
            + self._digits(data[4:], "RRRR")
            + EAN_GUARD
        )
        return EncodedSymbol(pattern=pattern, data=data, check=prepared.check)


# ==============================================================================
# UPC-E
# ==============================================================================


def expand_upce(number_system: str, body: str) -> str:
    """Expand a 6-digit UPC-E body to the 11 UPC-A data digits (no check)."""
    d1, d2, d3, d4, d5, d6 = body
    if d6 in "012":
        tail = d1 + d2 + d6 + "0000" + d3 + d4 + d5
    elif d6 == "3":
        tail = d1 + d2 + d3 + "00000" + d4 + d5
    elif d6 == "4":
        tail = d1 + d2 + d3 + d4 + "00000" + d5
    else:
        tail = d1 + d2 + d3 + d4 + d5 + "0000" + d6
    return number_system + tail


def compress_upca(data: str) -> Optional[str]:
    """
    Zero-suppress 11 UPC-A data digits to a 6-digit UPC-E body.

    Returns None when the manufacturer/product split has no UPC-E form.
    """
    m, p = data[1:6], data[6:11]
    if m[2] in "012" and m[3:] == "00" and p[:2] == "00":
        return m[:2] + p[2:] + m[2]
    if m[3:] == "00" and p[:3] == "000":
        return m[:3] + p[3:] + "3"
    if m[4] == "0" and p[:4] == "0000":
        return m[:4] + p[4] + "4"
    if p[:4] == "0000" and p[4] in "56789":
        return m + p[4]
    return None


class UPCEEncoder(SymbologyEncoder):
    """
    UPC-E (zero-suppressed UPC-A), 51 modules.

    Input forms: 6 digits (number system 0), 7 digits (number system + 6),
    8 digits (number system + 6 + check), or an 11/12 digit UPC-A that can be
    zero-suppressed. The check digit is that of the expanded UPC-A.
    """

    code_prefix = "EUPCE"
    default_policy: ClassVar[CheckDigitPolicy] = CheckDigitPolicy.VALIDATE

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        digits_ok = self._require_digits(raw, issues)
        length_ok = self._require_length(raw, (6, 7, 8, 11, 12), issues)
        if not (digits_ok and length_ok) or policy is None:
            return None
        if policy is CheckDigitPolicy.APPEND:
            policy = CheckDigitPolicy.VALIDATE

        given: Optional[str] = None
        if len(raw) in (11, 12):
            ns, upca = raw[0], raw[:11]
            body = compress_upca(upca)
            if body is None:
                issues.append(
                    self._issue(ErrorKind.INVALID_VALUE, 9, "UPC-A data cannot be zero-suppressed to UPC-E")
                )
                return None
            given = raw[11] if len(raw) == 12 else None
        else:
            if len(raw) == 6:
                ns, body = "0", raw
            else:
                ns, body = raw[0], raw[1:7]
            given = raw[7] if len(raw) == 8 else None

        if ns not in "01":
            issues.append(
                self._issue(ErrorKind.INVALID_VALUE, 10, f"Invalid number system {ns!r} (must be 0 or 1)")
            )
            return None
        check = self._checksum(_gs1_check, expand_upce(ns, body), issues)
        if check is None:
            return None
        if given is not None and given != check and policy is CheckDigitPolicy.VALIDATE:
            issues.append(self._mismatch(given, check))
            return None
        return EncodedSymbol(pattern="", data=ns + body + check, check=check)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        data = prepared.data
        ns, body, check = data[0], data[1:7], data[7]
        parity = UPCE_PARITY[int(check)]
        if ns == "1":
            parity = parity.translate(_SWAP_PARITY)
        pattern = (
            EAN_GUARD
            + "".join(self._pattern(f"{p}{d}") for p, d in zip(parity, body))
            + UPCE_END
        )
        return EncodedSymbol(pattern=pattern, data=data, check=check)


# ==============================================================================
# ADD-ONS
# ==============================================================================


class _AddOnEncoder(SymbologyEncoder):
    digits: ClassVar[int] = 2
    supported_policies: ClassVar[FrozenSet[CheckDigitPolicy]] = frozenset(
        {CheckDigitPolicy.APPEND}
    )

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        digits_ok = self._require_digits(raw, issues)
        length_ok = self._require_length(raw, (self.digits,), issues)
        if not (digits_ok and length_ok) or policy is None:
            return None
        return EncodedSymbol(pattern="", data=raw)

    def _parity(self, data: str) -> str:
        raise NotImplementedError

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        data = prepared.data
        parity = self._parity(data)
        body = ADDON_SEPARATOR.join(
            self._pattern(f"{p}{d}") for p, d in zip(parity, data)
        )
        return EncodedSymbol(pattern=ADDON_START + body, data=data)


class UPCAddOn2Encoder(_AddOnEncoder):
    """2-digit supplement; parity from the value mod 4."""

    code_prefix = "EUPC-SUP2"
    digits = 2

    def _parity(self, data: str) -> str:
        return ADDON2_PARITY[int(data) % 4]


class UPCAddOn5Encoder(_AddOnEncoder):
    """5-digit supplement; parity from the implicit add-on check digit."""

    code_prefix = "EUPC-SUP5"
    digits = 5

    def _parity(self, data: str) -> str:
        return ADDON5_PARITY[upc5_addon(digits_of(data))]
