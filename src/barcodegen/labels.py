"""
RU: Формирование подписи (human readable text) под штрихкодом.
EN: Label formatter. Deterministic, no I/O.

Example:
    >>> format_label(SymbologyType.EAN13, "4006381333931", "1", standardize=True)
    '4-006381-33393-1'
    >>> format_label(SymbologyType.UPCA, "123456789012", "2", standardize=False)
    '123456789012'
"""

from __future__ import annotations

from typing import Callable, Dict, Optional, Tuple

from src.model.enums import SymbologyType

__all__ = ["format_label"]


def _ean13(d: str) -> str:
    return f"{d[0]}-{d[1:7]}-{d[7:12]}-{d[12]}"


def _upca(d: str) -> str:
    return f"{d[0]}-{d[1:6]}-{d[6:11]}-{d[11]}"


def _ean8(d: str) -> str:
    return f"{d[:4]}-{d[4:]}"


def _upce(d: str) -> str:
    return f"{d[0]}-{d[1:7]}-{d[7]}"


# Standardized layouts and the data length each one needs.
_STANDARD: Dict[SymbologyType, Tuple[int, Callable[[str], str]]] = {
    SymbologyType.EAN13: (13, _ean13),
    SymbologyType.UCC13: (13, _ean13),
    SymbologyType.JAN13: (13, _ean13),
    SymbologyType.BOOKLAND: (13, _ean13),
    SymbologyType.ISBN: (13, _ean13),
    SymbologyType.UPCA: (12, _upca),
    SymbologyType.UCC12: (12, _upca),
    SymbologyType.EAN8: (8, _ean8),
    SymbologyType.UPCE: (8, _upce),
}


def format_label(
    symbology: SymbologyType,
    data: str,
    check: str = "",
    standardize: bool = False,
    alternate_label: Optional[str] = None,
) -> str:
    """
    Build the display label.

    Args:
        symbology: Symbology of the encoded data.
        data: Encoded data, check characters already included where customary.
        check: Check characters of this encode (kept for callers that show
            them separately; `data` already carries them).
        standardize: Use the grouped GS1 layout for UPC/EAN types.
        alternate_label: Caller-supplied text; wins over everything else.
    """
    if alternate_label is not None:
        return alternate_label
    if standardize:
        entry = _STANDARD.get(symbology)
        if entry is not None and len(data) == entry[0]:
            return entry[1](data)
    return data
