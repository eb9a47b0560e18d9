"""
RU: Code 128 с автоматическим выбором наборов A/B/C и принудительные варианты A, B, C.
EN: Code 128 encoders.

Auto mode rules:
    - Set C for digit runs of 4+ at the start or end of the data, 6+ in the middle.
      An odd run gives its first digit to the current set before switching.
    - Start in A when a control character (ASCII < 32) appears before any
      lowercase character, otherwise B.
    - A single character that needs the other of A/B is written with SHIFT;
      two or more in a row switch the set.

Checksum: mod 103 over the start code and every following symbol value,
switch and SHIFT codes included.
"""

from __future__ import annotations

import logging
from typing import ClassVar, FrozenSet, List, Optional

from src.barcodegen.checksums import Mod103Accumulator
from src.barcodegen.errors import EncodingIssue, ErrorKind
from src.barcodegen.symbologies.base import DIGITS, EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import CODE128_STOP
from src.model.enums import CheckDigitPolicy

logger = logging.getLogger(__name__)

__all__ = [
    "Code128Encoder",
    "Code128AEncoder",
    "Code128BEncoder",
    "Code128CEncoder",
    "code128_values",
]

SET_A, SET_B, SET_C = "A", "B", "C"

START = {SET_A: 103, SET_B: 104, SET_C: 105}
SHIFT = 98
# (from, to) -> switch code
SWITCH = {
    (SET_A, SET_B): 100,
    (SET_A, SET_C): 99,
    (SET_B, SET_A): 101,
    (SET_B, SET_C): 99,
    (SET_C, SET_A): 101,
    (SET_C, SET_B): 100,
}


def _in_a(ch: str) -> bool:
    return ord(ch) <= 95


def _in_b(ch: str) -> bool:
    return 32 <= ord(ch) <= 127


def _value(ch: str, subset: str) -> int:
    o = ord(ch)
    if subset == SET_A:
        return o + 64 if o < 32 else o - 32
    return o - 32


def _digit_run(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] in DIGITS:
        end += 1
    return end - start


def _initial_ab(text: str) -> str:
    for ch in text:
        if ord(ch) < 32:
            return SET_A
        if ord(ch) >= 96:
            return SET_B
    return SET_B


def _fits(ch: str, subset: str) -> bool:
    return _in_a(ch) if subset == SET_A else _in_b(ch)


def code128_values(text: str) -> List[int]:
    """
    Symbol values for `text` in auto mode, start code first, no check/stop.

    `text` must already be limited to ASCII 0..127.
    """
    n = len(text)
    run = _digit_run(text, 0)
    if run >= 4 or (run == n and run % 2 == 0):
        subset = SET_C
    else:
        subset = _initial_ab(text)
    values = [START[subset]]

    i = 0
    while i < n:
        if subset == SET_C:
            if _digit_run(text, i) >= 2:
                values.append(int(text[i : i + 2]))
                i += 2
                continue
            subset_next = _initial_ab(text[i:])
            values.append(SWITCH[(SET_C, subset_next)])
            subset = subset_next
            continue

        run = _digit_run(text, i)
        at_end = i + run == n
        if run >= 6 or (run >= 4 and at_end):
            if run % 2:
                values.append(_value(text[i], subset))
                i += 1
            values.append(SWITCH[(subset, SET_C)])
            subset = SET_C
            continue

        ch = text[i]
        if _fits(ch, subset):
            values.append(_value(ch, subset))
            i += 1
            continue

        other = SET_B if subset == SET_A else SET_A
        nxt = text[i + 1] if i + 1 < n else None
        if nxt is not None and _fits(nxt, subset):
            values.append(SHIFT)
            values.append(_value(ch, other))
            i += 1
            continue
        values.append(SWITCH[(subset, other)])
        subset = other
    return values


class Code128Encoder(SymbologyEncoder):
    """Code 128, automatic subset selection."""

    code_prefix = "EC128"
    supported_policies: ClassVar[FrozenSet[CheckDigitPolicy]] = frozenset(
        {CheckDigitPolicy.APPEND}
    )

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        if not self._check_subset(raw, issues) or policy is None:
            return None
        return EncodedSymbol(pattern="", data=raw)

    def _check_subset(self, raw: str, issues: List[EncodingIssue]) -> bool:
        return self._require_ascii(raw, issues)

    def _values(self, data: str) -> List[int]:
        return code128_values(data)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        values = self._values(prepared.data)
        acc = Mod103Accumulator(values[0])
        for v in values[1:]:
            acc.add(v)
        check = acc.value
        logger.debug("Code 128 values %s, check %d", values, check)
        pattern = "".join(
            self._pattern(v) for v in [*values, check, CODE128_STOP]
        )
        return EncodedSymbol(pattern=pattern, data=prepared.data, check=str(check))


class Code128AEncoder(Code128Encoder):
    """Forced subset A: ASCII 0..95 (control characters and uppercase)."""

    code_prefix = "EC128A"

    def _check_subset(self, raw: str, issues: List[EncodingIssue]) -> bool:
        return self._require_ascii(raw, issues, 0, 95)

    def _values(self, data: str) -> List[int]:
        return [START[SET_A], *(_value(c, SET_A) for c in data)]


class Code128BEncoder(Code128Encoder):
    """Forced subset B: ASCII 32..127."""

    code_prefix = "EC128B"

    def _check_subset(self, raw: str, issues: List[EncodingIssue]) -> bool:
        return self._require_ascii(raw, issues, 32, 127)

    def _values(self, data: str) -> List[int]:
        return [START[SET_B], *(_value(c, SET_B) for c in data)]


class Code128CEncoder(Code128Encoder):
    """Forced subset C: digit pairs, so the data length must be even."""

    code_prefix = "EC128C"

    def _check_subset(self, raw: str, issues: List[EncodingIssue]) -> bool:
        if not self._require_digits(raw, issues):
            return False
        if len(raw) % 2:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_LENGTH, 2, "Code 128-C needs an even number of digits"
                )
            )
            return False
        return True

    def _values(self, data: str) -> List[int]:
        return [START[SET_C], *(int(data[i : i + 2]) for i in range(0, len(data), 2))]
