"""
RU: Результат кодирования: шаблон модулей, подпись, ошибки, контрольные символы, сериализация в dict/XML.
EN: EncodingResult value object returned by the encoding facade.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, ClassVar, Dict, List, Optional, Tuple

from lxml import etree

from src.barcodegen.errors import EncodingIssue
from src.model.enums import SymbologyType

logger = logging.getLogger(__name__)

__all__ = ["EncodingResult"]


@dataclass(frozen=True)
class EncodingResult:
    """
    Outcome of one encode call.

    Attributes:
        symbology: Requested symbology (None if the request carried an unknown tag).
        raw_data: Input text as given.
        encoded_data: Data actually encoded, check characters included.
        pattern: Module string; empty whenever `errors` is non-empty.
        label: Display text.
        errors: Issues collected during validation.
        check_digits: Check characters computed for this encode.
        country: Country assigning the manufacturer code (EAN-13 family only).
        height_modulated: Pattern tokens are bar heights (PostNet).
        encoding_time_ms: Wall time of the encode in milliseconds.

    Example:
        >>> r = generate(SymbologyType.UPCA, "12345678901")
        >>> r.ok, r.module_count, r.label
        (True, 95, '123456789012')
    """

    schema_version: ClassVar[str] = "1.0"

    symbology: Optional[SymbologyType]
    raw_data: str
    encoded_data: str = ""
    pattern: str = ""
    label: str = ""
    errors: Tuple[EncodingIssue, ...] = ()
    check_digits: str = ""
    country: Optional[str] = None
    height_modulated: bool = False
    encoding_time_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def module_count(self) -> int:
        return len(self.pattern)

    @property
    def error_messages(self) -> List[str]:
        return [str(e) for e in self.errors]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "symbology": self.symbology.value if self.symbology else None,
            "raw_data": self.raw_data,
            "encoded_data": self.encoded_data,
            "pattern": self.pattern,
            "label": self.label,
            "errors": [e.to_dict() for e in self.errors],
            "check_digits": self.check_digits,
            "country": self.country,
            "height_modulated": self.height_modulated,
            "encoding_time_ms": self.encoding_time_ms,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "EncodingResult":
        d = dict(d)
        version = d.pop("schema_version", cls.schema_version)
        if version != cls.schema_version:
            logger.warning(
                "Schema version mismatch (expected %s, got %s)",
                cls.schema_version,
                version,
            )
        symbology = d.get("symbology")
        return cls(
            symbology=SymbologyType(symbology) if symbology else None,
            raw_data=d.get("raw_data", ""),
            encoded_data=d.get("encoded_data", ""),
            pattern=d.get("pattern", ""),
            label=d.get("label", ""),
            errors=tuple(EncodingIssue.from_dict(e) for e in d.get("errors", [])),
            check_digits=d.get("check_digits", ""),
            country=d.get("country"),
            height_modulated=bool(d.get("height_modulated", False)),
            encoding_time_ms=float(d.get("encoding_time_ms", 0.0)),
        )

    def to_xml(self, pretty: bool = True) -> str:
        """
        Serialize as an XML document (root ``<BarcodeResult>``).

        XML 1.0 cannot carry most control characters (possible in Code 128
        and Telepen data), so they are written as ``\\xNN``.
        """
        root = etree.Element("BarcodeResult", version=self.schema_version)
        for key, value in self.to_dict().items():
            if key in ("schema_version", "errors"):
                continue
            node = etree.SubElement(root, _xml_tag(key))
            node.text = "" if value is None else _xml_text(value)
        errors = etree.SubElement(root, "Errors")
        for issue in self.errors:
            node = etree.SubElement(errors, "Error", kind=issue.kind.value, code=issue.code)
            if issue.position is not None:
                node.set("position", str(issue.position))
            node.text = _xml_text(issue.message)
        return etree.tostring(root, pretty_print=pretty, encoding="unicode")


def _xml_tag(key: str) -> str:
    return "".join(part.capitalize() for part in key.split("_"))


def _xml_text(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    text = str(value)
    return "".join(
        c if ord(c) >= 32 or c in "\t\n" else f"\\x{ord(c):02x}" for c in text
    )
