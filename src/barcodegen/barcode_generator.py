from __future__ import annotations

import logging
import time
from typing import Any, Dict, List, Optional, Set, Tuple

from src import default_config
from src.barcodegen.errors import (
    BarcodeGenError,
    EncodingFailed,
    EncodingIssue,
    ErrorKind,
)
from src.barcodegen.labels import format_label
from src.barcodegen.result import EncodingResult
from src.barcodegen.symbologies import ENCODERS, EncodedSymbol, EncodeOptions, get_encoder
from src.barcodegen.tables import country_for_prefix
from src.model.enums import SymbologyType, coerce_symbology

logger = logging.getLogger(__name__)

__all__ = [
    "BarcodeGenerator",
    "BarcodeGenError",
    "EncodeOptions",
    "country_for",
    "generate",
]

_GEN_PREFIX = "EGEN"

_SUPPLEMENT_TYPES = {
    2: SymbologyType.UPC_SUPPLEMENTAL_2DIGIT,
    5: SymbologyType.UPC_SUPPLEMENTAL_5DIGIT,
}


def country_for(data: str) -> Optional[str]:
    """
    Country assigning the manufacturer code of a 13-digit EAN.

    Returns None for anything that is not 13 digits or has no known prefix.
    """
    if not isinstance(data, str) or len(data) != 13 or not data.isdigit():
        return None
    return country_for_prefix(data)


def _gen_issue(kind: ErrorKind, number: int, message: str) -> EncodingIssue:
    return EncodingIssue(kind=kind, code=f"{_GEN_PREFIX}-{number}", message=message)


class BarcodeGenerator:
    """
    Encoding facade: one entry point for every 1D symbology.

    Input problems never raise; they come back in `EncodingResult.errors`
    with an empty pattern. The generator keeps only the most recent result.

    Args:
        config: Settings as returned by `src.load_config()`; missing keys fall
            back to the defaults (`standardize_label`, `itf_pad_odd`,
            `supplement_gap_modules`, ...).

    Example:
        >>> gen = BarcodeGenerator()
        >>> r = gen.generate(SymbologyType.UPCA, "12345678901")
        >>> r.label, r.module_count
        ('123456789012', 95)
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None) -> None:
        self.config: Dict[str, Any] = default_config()
        if config:
            self.config.update(config)
        self._last_result: Optional[EncodingResult] = None

    @property
    def last_result(self) -> Optional[EncodingResult]:
        return self._last_result

    def _options(self, options: Optional[EncodeOptions]) -> Dict[str, Any]:
        opts: Dict[str, Any] = dict(options or {})
        if "pad_odd" not in opts and self.config.get("itf_pad_odd"):
            opts["pad_odd"] = True
        return opts

    def validate(
        self,
        symbology: Any,
        raw: str,
        options: Optional[EncodeOptions] = None,
    ) -> List[EncodingIssue]:
        """Issues `generate` would report for this input, without encoding."""
        sym = coerce_symbology(symbology)
        encoder = get_encoder(sym)
        if encoder is None:
            return [self._unsupported(symbology)]
        return encoder.validate(raw, self._options(options))

    def generate(
        self,
        symbology: Any,
        raw: str,
        *,
        alternate_label: Optional[str] = None,
        standardize_label: Optional[bool] = None,
        supplement: Optional[str] = None,
        options: Optional[EncodeOptions] = None,
    ) -> EncodingResult:
        """
        Кодирование данных в шаблон модулей.

        Args:
            symbology: SymbologyType (or its string value).
            raw: Data to encode.
            alternate_label: Label text overriding the formatted one.
            standardize_label: Grouped UPC/EAN label; None uses the config.
            supplement: 2 or 5 digit add-on for UPC/EAN types.
            options: Encoder options (`check_digit_policy`, `pad_odd`).

        Returns:
            EncodingResult; `errors` non-empty means `pattern` is empty.
        """
        started = time.perf_counter()
        sym = coerce_symbology(symbology)
        encoder = get_encoder(sym)
        if encoder is None:
            result = EncodingResult(
                symbology=sym,
                raw_data=raw if isinstance(raw, str) else "",
                errors=(self._unsupported(symbology),),
                encoding_time_ms=_elapsed_ms(started),
            )
            return self._finish(result)
        assert sym is not None

        issues: List[EncodingIssue] = []
        symbol: Optional[EncodedSymbol] = None
        try:
            symbol = encoder.encode(raw, self._options(options))
        except EncodingFailed as e:
            issues.extend(e.issues)

        addon: Optional[EncodedSymbol] = None
        if supplement:
            addon, addon_issues = self._encode_supplement(sym, supplement)
            issues.extend(addon_issues)

        if issues or symbol is None:
            result = EncodingResult(
                symbology=sym,
                raw_data=raw if isinstance(raw, str) else "",
                errors=tuple(issues),
                encoding_time_ms=_elapsed_ms(started),
            )
            return self._finish(result)

        standardize = (
            self.config.get("standardize_label", False)
            if standardize_label is None
            else standardize_label
        )
        label = format_label(sym, symbol.data, symbol.check, bool(standardize))
        pattern = symbol.pattern
        encoded = symbol.data
        if addon is not None:
            gap = int(self.config.get("supplement_gap_modules", 9))
            pattern = pattern + "0" * gap + addon.pattern
            label = f"{label} {addon.data}"
            encoded = f"{encoded} {addon.data}"
        if alternate_label is not None:
            label = alternate_label

        result = EncodingResult(
            symbology=sym,
            raw_data=raw,
            encoded_data=encoded,
            pattern=pattern,
            label=label,
            check_digits=symbol.check,
            country=country_for(symbol.data) if sym.is_ean13_family else None,
            height_modulated=symbol.height_modulated,
            encoding_time_ms=_elapsed_ms(started),
        )
        return self._finish(result)

    def _encode_supplement(
        self, symbology: SymbologyType, supplement: str
    ) -> Tuple[Optional[EncodedSymbol], List[EncodingIssue]]:
        if not symbology.accepts_supplement:
            return None, [
                _gen_issue(
                    ErrorKind.INVALID_VALUE,
                    2,
                    f"{symbology.localized_name('en')} does not take a supplement",
                )
            ]
        addon_type = _SUPPLEMENT_TYPES.get(len(supplement))
        if addon_type is None:
            return None, [
                _gen_issue(
                    ErrorKind.INVALID_LENGTH,
                    3,
                    f"Supplement must be 2 or 5 digits, got {len(supplement)}",
                )
            ]
        try:
            return ENCODERS[addon_type].encode(supplement), []
        except EncodingFailed as e:
            return None, list(e.issues)

    @staticmethod
    def _unsupported(symbology: Any) -> EncodingIssue:
        return _gen_issue(
            ErrorKind.UNSUPPORTED_SYMBOLOGY,
            1,
            f"Unsupported symbology: {symbology!r}",
        )

    def _finish(self, result: EncodingResult) -> EncodingResult:
        if result.ok:
            logger.debug(
                "Encoded %s %r: %d modules in %.3f ms",
                result.symbology.value if result.symbology else None,
                result.raw_data,
                result.module_count,
                result.encoding_time_ms,
            )
        else:
            logger.warning(
                "Encoding failed for %r: %s",
                result.raw_data,
                "; ".join(result.error_messages),
            )
        self._last_result = result
        return result

    @classmethod
    def supported_types(cls) -> Set[SymbologyType]:
        return set(ENCODERS)


def _elapsed_ms(started: float) -> float:
    return (time.perf_counter() - started) * 1000.0


def generate(
    symbology: Any,
    raw: str,
    *,
    alternate_label: Optional[str] = None,
    standardize_label: Optional[bool] = None,
    supplement: Optional[str] = None,
    options: Optional[EncodeOptions] = None,
) -> EncodingResult:
    """Module-level shortcut: encode with a fresh default-configured generator."""
    return BarcodeGenerator().generate(
        symbology,
        raw,
        alternate_label=alternate_label,
        standardize_label=standardize_label,
        supplement=supplement,
        options=options,
    )
