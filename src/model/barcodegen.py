# RU: Домейн-модель штрихкода: запрос на кодирование + кэш результата, валидация с опциональной записью ошибки.
# EN: Domain barcode model: encode request, cached result, validation with optional error recording.

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Dict, Optional

from PIL import Image

from src.barcodegen.barcode_generator import BarcodeGenerator
from src.barcodegen.renderer import RenderOptions, render_image
from src.barcodegen.result import EncodingResult

from .enums import CheckDigitPolicy, SymbologyType, coerce_symbology

logger = logging.getLogger(__name__)


@dataclass
class Barcode:
    """
    Domain-level barcode object:
        - Request fields (symbology, data, label options, supplement, policy)
        - Render fields passed to the renderer as RenderOptions
        - Cached EncodingResult, refreshed by `encode()`
        - GUI-/API-friendly: errors recordable instead of throwing

    Examples (integration):
        bc = Barcode(symbology=SymbologyType.EAN13, data="400638133393")
        ok = bc.validate(record_error=True)
        if not ok:
            print(bc.validation_error_message)
        img = bc.render()
    """

    schema_version: ClassVar[str] = "1.0"

    symbology: SymbologyType
    data: str
    alternate_label: Optional[str] = None
    standardize_label: Optional[bool] = None
    supplement: Optional[str] = None
    check_digit_policy: Optional[CheckDigitPolicy] = None
    pad_odd: Optional[bool] = None
    render_options: Dict[str, Any] = field(default_factory=dict)

    validation_state: Optional[str] = None
    validation_error_message: Optional[str] = None

    _result: Optional[EncodingResult] = field(default=None, repr=False, compare=False)

    @property
    def result(self) -> Optional[EncodingResult]:
        """Last encoding of this barcode (None until `encode()` or `validate()`)."""
        return self._result

    def _encode_options(self) -> Dict[str, Any]:
        opts: Dict[str, Any] = {}
        if self.check_digit_policy is not None:
            opts["check_digit_policy"] = self.check_digit_policy
        if self.pad_odd is not None:
            opts["pad_odd"] = self.pad_odd
        return opts

    def encode(self, generator: Optional[BarcodeGenerator] = None) -> EncodingResult:
        gen = generator or BarcodeGenerator()
        self._result = gen.generate(
            self.symbology,
            self.data,
            alternate_label=self.alternate_label,
            standardize_label=self.standardize_label,
            supplement=self.supplement,
            options=self._encode_options(),  # type: ignore[arg-type]
        )
        return self._result

    def validate(self, record_error: bool = False) -> bool:
        """
        Validates the barcode object:
        - Field validation (symbology tag, data, render option keys)
        - Encoding through the facade; any EncodingIssue fails validation
        - If record_error: on error, sets self.validation_error_message instead of raising

        Returns: True if ok, False if error (when record_error)
        Raises: ValueError if error and not record_error
        """
        logger.info("Validating Barcode: symbology=%r data=%r", self.symbology, self.data)
        try:
            if coerce_symbology(self.symbology) is None:
                raise ValueError(f"Invalid symbology: {self.symbology!r}")
            if not isinstance(self.data, str) or not self.data:
                raise ValueError("Data must be a non-empty string")
            unknown = set(self.render_options) - set(RenderOptions.__annotations__)
            if unknown:
                raise ValueError(f"Unknown render options: {sorted(unknown)}")

            result = self.encode()
            if not result.ok:
                raise ValueError("; ".join(result.error_messages))

            self.validation_state = "ok"
            self.validation_error_message = None
            return True
        except ValueError as ex:
            msg: str = str(ex)
            logger.warning("Barcode validation error: %s", msg)
            self.validation_state = "invalid"
            self.validation_error_message = msg
            if record_error:
                return False
            raise

    def render(self) -> Image.Image:
        result = self._result if self._result is not None else self.encode()
        return render_image(result, self.render_options)  # type: ignore[arg-type]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_version": self.schema_version,
            "symbology": SymbologyType(self.symbology).value,
            "data": self.data,
            "alternate_label": self.alternate_label,
            "standardize_label": self.standardize_label,
            "supplement": self.supplement,
            "check_digit_policy": (
                CheckDigitPolicy(self.check_digit_policy).value
                if self.check_digit_policy is not None
                else None
            ),
            "pad_odd": self.pad_odd,
            "render_options": {
                k: (v.value if hasattr(v, "value") else v)
                for k, v in self.render_options.items()
            },
            "validation_state": self.validation_state,
            "validation_error_message": self.validation_error_message,
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> "Barcode":
        d = dict(d)
        if "schema_version" in d and d["schema_version"] != cls.schema_version:
            logger.warning(
                "Schema version mismatch (expected %s, got %s)",
                cls.schema_version,
                d["schema_version"],
            )
        d.pop("schema_version", None)
        d["symbology"] = SymbologyType(d["symbology"])
        if d.get("check_digit_policy") is not None:
            d["check_digit_policy"] = CheckDigitPolicy(d["check_digit_policy"])
        return cls(**d)

    def __str__(self) -> str:
        datashow: str = self.data[:16] + ("..." if len(self.data) > 16 else "")
        return f"Barcode({SymbologyType(self.symbology).value}, data={datashow})"
