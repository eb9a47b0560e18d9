"""
RU: Базовый класс кодировщиков символогий: проверка, политика контрольных цифр, сборка шаблона.
EN: Encoder base: {validate, encode} capability shared by every symbology.

Encoders are stateless; one instance per symbology lives in the dispatch
table and is shared by all callers. Per-call state travels in local lists.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    Callable,
    ClassVar,
    FrozenSet,
    Iterable,
    List,
    Optional,
    Tuple,
    TypedDict,
)

from src.barcodegen.errors import (
    BarcodeGenError,
    EncodingFailed,
    EncodingIssue,
    ErrorKind,
    InvalidChecksumInput,
    PatternNotFound,
)
from src.barcodegen.tables import lookup
from src.model.enums import CheckDigitPolicy, SymbologyType

logger = logging.getLogger(__name__)

__all__ = [
    "EncodeOptions",
    "EncodedSymbol",
    "SymbologyEncoder",
    "DIGITS",
]

DIGITS = "0123456789"

_ALL_POLICIES: FrozenSet[CheckDigitPolicy] = frozenset(CheckDigitPolicy)


class EncodeOptions(TypedDict, total=False):
    """Per-request encoder switches."""

    check_digit_policy: CheckDigitPolicy  # or its string value
    pad_odd: bool  # Interleaved 2 of 5: prepend "0" to reach an even count


@dataclass(frozen=True)
class EncodedSymbol:
    """
    Encoder output.

    Attributes:
        pattern: Module string ('1' bar, '0' space).
        data: Text the default label shows (check digits included where customary).
        check: Check characters computed for this encode ("" when none).
        height_modulated: Tokens are bar heights, not widths (PostNet).
    """

    pattern: str
    data: str
    check: str = ""
    height_modulated: bool = False


class SymbologyEncoder:
    """
    Base encoder.

    Subclasses implement `_prepare` (validation + check digits, appending
    issues) and `_render` (module string for already validated data).
    """

    code_prefix: ClassVar[str] = "E"
    default_policy: ClassVar[CheckDigitPolicy] = CheckDigitPolicy.APPEND
    supported_policies: ClassVar[FrozenSet[CheckDigitPolicy]] = _ALL_POLICIES
    check_lengths: ClassVar[Tuple[int, ...]] = (1,)

    def __init__(self, symbology: SymbologyType) -> None:
        self.symbology = symbology

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.symbology.value})"

    # ------------------------------------------------------------------
    # Public capability
    # ------------------------------------------------------------------

    def validate(
        self, raw: str, options: Optional[EncodeOptions] = None
    ) -> List[EncodingIssue]:
        """Return every problem with `raw`; an empty list means encodable."""
        issues: List[EncodingIssue] = []
        self._prepare(raw, dict(options or {}), issues)
        return issues

    def encode(
        self, raw: str, options: Optional[EncodeOptions] = None
    ) -> EncodedSymbol:
        """
        Validate and encode.

        Raises:
            EncodingFailed: Validation or table lookup failed; carries all issues.
        """
        opts = dict(options or {})
        issues: List[EncodingIssue] = []
        prepared = self._prepare(raw, opts, issues)
        if issues or prepared is None:
            raise EncodingFailed(issues)
        try:
            symbol = self._render(prepared, opts)
        except PatternNotFound as e:
            raise EncodingFailed(
                [
                    self._issue(
                        ErrorKind.UNSUPPORTED_CHARACTER,
                        90,
                        f"No bar pattern for {e.character!r}",
                    )
                ]
            ) from e
        self._check_modules(symbol.pattern)
        return symbol

    # ------------------------------------------------------------------
    # Hooks
    # ------------------------------------------------------------------

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        raise NotImplementedError

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        raise NotImplementedError

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _issue(
        self,
        kind: ErrorKind,
        number: int,
        message: str,
        position: Optional[int] = None,
    ) -> EncodingIssue:
        return EncodingIssue(
            kind=kind,
            code=f"{self.code_prefix}-{number}",
            message=f"{self.symbology.localized_name('en')}: {message}",
            position=position,
        )

    def _pattern(self, key: object) -> str:
        return lookup(self.symbology, key)  # type: ignore[arg-type]

    def _require_text(self, raw: object, issues: List[EncodingIssue]) -> bool:
        if not isinstance(raw, str) or not raw:
            issues.append(
                self._issue(ErrorKind.INVALID_LENGTH, 1, "Data must be a non-empty string")
            )
            return False
        return True

    def _require_alphabet(
        self,
        raw: str,
        allowed: Iterable[str],
        issues: List[EncodingIssue],
        what: str = "",
    ) -> bool:
        allowed_set = allowed if isinstance(allowed, (set, frozenset)) else set(allowed)
        ok = True
        for pos, ch in enumerate(raw):
            if ch not in allowed_set:
                ok = False
                issues.append(
                    self._issue(
                        ErrorKind.UNSUPPORTED_CHARACTER,
                        3,
                        f"Invalid character {ch!r} at position {pos}"
                        + (f" ({what})" if what else ""),
                        position=pos,
                    )
                )
        return ok

    def _require_digits(self, raw: str, issues: List[EncodingIssue]) -> bool:
        return self._require_alphabet(raw, DIGITS, issues, "digits only")

    def _require_ascii(
        self, raw: str, issues: List[EncodingIssue], low: int = 0, high: int = 127
    ) -> bool:
        return self._require_alphabet(
            raw,
            frozenset(chr(c) for c in range(low, high + 1)),
            issues,
            f"ASCII {low}-{high} only",
        )

    def _require_length(
        self, raw: str, lengths: Iterable[int], issues: List[EncodingIssue]
    ) -> bool:
        allowed = tuple(lengths)
        if len(raw) not in allowed:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_LENGTH,
                    2,
                    f"Data length invalid: {len(raw)} (expected "
                    + " or ".join(str(n) for n in allowed)
                    + ")",
                )
            )
            return False
        return True

    def _policy(
        self, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[CheckDigitPolicy]:
        value = opts.get("check_digit_policy")
        if value is None:
            return self.default_policy
        try:
            policy = CheckDigitPolicy(value)
        except ValueError:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_VALUE, 5, f"Unknown check digit policy {value!r}"
                )
            )
            return None
        if policy not in self.supported_policies:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_VALUE,
                    5,
                    f"Check digit policy {policy.value!r} not supported",
                )
            )
            return None
        return policy

    def _checksum(
        self,
        compute: Callable[[str], str],
        payload: str,
        issues: List[EncodingIssue],
    ) -> Optional[str]:
        try:
            return compute(payload)
        except InvalidChecksumInput as e:
            issues.append(self._issue(ErrorKind.INVALID_CHECKSUM_INPUT, 4, str(e)))
            return None

    def _mismatch(self, given: str, expected: str) -> EncodingIssue:
        return self._issue(
            ErrorKind.CHECKSUM_MISMATCH,
            6,
            f"Check digit {given!r} does not match computed {expected!r}",
        )

    def _apply_policy(
        self,
        raw: str,
        compute: Callable[[str], str],
        policy: CheckDigitPolicy,
        issues: List[EncodingIssue],
    ) -> Optional[Tuple[str, str]]:
        """
        Split `raw` into (payload, check) according to the policy.

        APPEND treats all of `raw` as payload. VALIDATE and RECOMPUTE treat the
        trailing `check_lengths` characters as an embedded check.
        """
        if policy is CheckDigitPolicy.APPEND:
            check = self._checksum(compute, raw, issues)
            return None if check is None else (raw, check)

        candidates: List[Tuple[str, str, str]] = []
        for n in self.check_lengths:
            if len(raw) <= n:
                continue
            payload, given = raw[:-n], raw[-n:]
            expected = self._checksum(compute, payload, [])
            if expected is not None and len(expected) == n:
                candidates.append((payload, given, expected))
        if not candidates:
            issues.append(
                self._issue(
                    ErrorKind.INVALID_LENGTH, 7, "Data too short to carry a check digit"
                )
            )
            return None
        if policy is CheckDigitPolicy.RECOMPUTE:
            payload, _, expected = candidates[0]
            return payload, expected
        for payload, given, expected in candidates:
            if given == expected:
                return payload, expected
        payload, given, expected = candidates[0]
        issues.append(self._mismatch(given, expected))
        return None

    def _check_modules(self, pattern: str) -> None:
        expected = self.symbology.fixed_module_count
        if expected is not None and len(pattern) != expected:
            logger.error(
                "%s produced %d modules, expected %d",
                self.symbology.value,
                len(pattern),
                expected,
            )
            raise BarcodeGenError(
                f"{self.symbology.value}: pattern has {len(pattern)} modules, expected {expected}"
            )
