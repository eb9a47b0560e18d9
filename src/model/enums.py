"""
model/enums.py

(Краткое RU: Перечисления доменной модели штрихкодов: символогии, политика контрольных цифр, параметры отрисовки.)

EN: Domain enums for the 1D barcode engine (fully type-safe, closed sets).
NO encoding/bar-pattern logic here!

- Only supported symbologies, plus aliases (ISBN, UCC-12, UCC-13, LOGMARS, USD-8).
- Per-symbology check digit policy.
- Render-side enums: alignment, label anchor, rotation, raster formats.

See Also:
    - src/barcodegen/tables.py (bar-pattern tables)
    - src/barcodegen/symbologies (encoders)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Final, FrozenSet, Literal, Mapping, Optional

_logger: Final[logging.Logger] = logging.getLogger(__name__)

# === SYMBOL CONSTANTS ===
EAN13_MODULES: Final[int] = 95
EAN8_MODULES: Final[int] = 67
UPCE_MODULES: Final[int] = 51
UPC_ADDON2_MODULES: Final[int] = 20
UPC_ADDON5_MODULES: Final[int] = 47
MIN_PHARMACODE: Final[int] = 3
MAX_PHARMACODE: Final[int] = 131070

# === DOMAINS ===


class SymbologyType(str, Enum):
    UNSPECIFIED = "unspecified"
    UPCA = "upca"
    UPCE = "upce"
    UPC_SUPPLEMENTAL_2DIGIT = "upc_supplemental_2digit"
    UPC_SUPPLEMENTAL_5DIGIT = "upc_supplemental_5digit"
    EAN13 = "ean13"
    EAN8 = "ean8"
    INTERLEAVED2OF5 = "interleaved2of5"
    INTERLEAVED2OF5_MOD10 = "interleaved2of5_mod10"
    STANDARD2OF5 = "standard2of5"
    STANDARD2OF5_MOD10 = "standard2of5_mod10"
    INDUSTRIAL2OF5 = "industrial2of5"
    INDUSTRIAL2OF5_MOD10 = "industrial2of5_mod10"
    CODE39 = "code39"
    CODE39_EXTENDED = "code39_extended"
    CODE39_MOD43 = "code39_mod43"
    CODABAR = "codabar"
    POSTNET = "postnet"
    BOOKLAND = "bookland"
    ISBN = "isbn"
    JAN13 = "jan13"
    MSI_MOD10 = "msi_mod10"
    MSI_2MOD10 = "msi_2mod10"
    MSI_MOD11 = "msi_mod11"
    MSI_MOD11_MOD10 = "msi_mod11_mod10"
    MODIFIED_PLESSEY = "modified_plessey"
    CODE11 = "code11"
    USD8 = "usd8"  # Code 11 under its USD-8 name
    UCC12 = "ucc12"  # UPC-A
    UCC13 = "ucc13"  # EAN-13
    LOGMARS = "logmars"  # Code 39, military marking
    CODE128 = "code128"
    CODE128A = "code128a"
    CODE128B = "code128b"
    CODE128C = "code128c"
    ITF14 = "itf14"
    CODE93 = "code93"
    TELEPEN = "telepen"
    FIM = "fim"
    PHARMACODE = "pharmacode"

    @property
    def is_ean13_family(self) -> bool:
        return self in _EAN13_FAMILY

    @property
    def is_upca_family(self) -> bool:
        return self in {SymbologyType.UPCA, SymbologyType.UCC12}

    @property
    def accepts_supplement(self) -> bool:
        """UPC/EAN symbols that may carry a 2- or 5-digit add-on."""
        return self.is_ean13_family or self.is_upca_family or self in {
            SymbologyType.UPCE,
            SymbologyType.EAN8,
        }

    @property
    def fixed_module_count(self) -> Optional[int]:
        return _FIXED_MODULES.get(self)

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_en = _NAMES_EN
        names_ru = {
            **names_en,
            SymbologyType.UNSPECIFIED: "Не задано",
            SymbologyType.UPC_SUPPLEMENTAL_2DIGIT: "UPC, 2-значное дополнение",
            SymbologyType.UPC_SUPPLEMENTAL_5DIGIT: "UPC, 5-значное дополнение",
            SymbologyType.INTERLEAVED2OF5: "Чередующийся 2 из 5",
            SymbologyType.INTERLEAVED2OF5_MOD10: "Чередующийся 2 из 5 (Mod 10)",
            SymbologyType.STANDARD2OF5: "Стандартный 2 из 5",
            SymbologyType.STANDARD2OF5_MOD10: "Стандартный 2 из 5 (Mod 10)",
            SymbologyType.INDUSTRIAL2OF5: "Промышленный 2 из 5",
            SymbologyType.INDUSTRIAL2OF5_MOD10: "Промышленный 2 из 5 (Mod 10)",
            SymbologyType.CODE39_EXTENDED: "Code 39 (полный ASCII)",
            SymbologyType.BOOKLAND: "Bookland (книжный EAN)",
        }
        return (
            names_ru.get(self, self.value)
            if lang == "ru"
            else names_en.get(self, self.value)
        )


_EAN13_FAMILY: Final[FrozenSet[SymbologyType]] = frozenset(
    {
        SymbologyType.EAN13,
        SymbologyType.UCC13,
        SymbologyType.JAN13,
        SymbologyType.BOOKLAND,
        SymbologyType.ISBN,
    }
)

_FIXED_MODULES: Final[Mapping[SymbologyType, int]] = {
    SymbologyType.UPCA: EAN13_MODULES,
    SymbologyType.UCC12: EAN13_MODULES,
    SymbologyType.EAN13: EAN13_MODULES,
    SymbologyType.UCC13: EAN13_MODULES,
    SymbologyType.JAN13: EAN13_MODULES,
    SymbologyType.BOOKLAND: EAN13_MODULES,
    SymbologyType.ISBN: EAN13_MODULES,
    SymbologyType.EAN8: EAN8_MODULES,
    SymbologyType.UPCE: UPCE_MODULES,
    SymbologyType.UPC_SUPPLEMENTAL_2DIGIT: UPC_ADDON2_MODULES,
    SymbologyType.UPC_SUPPLEMENTAL_5DIGIT: UPC_ADDON5_MODULES,
}

_NAMES_EN: Final[Mapping[SymbologyType, str]] = {
    SymbologyType.UNSPECIFIED: "Unspecified",
    SymbologyType.UPCA: "UPC-A",
    SymbologyType.UPCE: "UPC-E",
    SymbologyType.UPC_SUPPLEMENTAL_2DIGIT: "UPC 2-digit supplement",
    SymbologyType.UPC_SUPPLEMENTAL_5DIGIT: "UPC 5-digit supplement",
    SymbologyType.EAN13: "EAN-13",
    SymbologyType.EAN8: "EAN-8",
    SymbologyType.INTERLEAVED2OF5: "Interleaved 2 of 5",
    SymbologyType.INTERLEAVED2OF5_MOD10: "Interleaved 2 of 5 (Mod 10)",
    SymbologyType.STANDARD2OF5: "Standard 2 of 5",
    SymbologyType.STANDARD2OF5_MOD10: "Standard 2 of 5 (Mod 10)",
    SymbologyType.INDUSTRIAL2OF5: "Industrial 2 of 5",
    SymbologyType.INDUSTRIAL2OF5_MOD10: "Industrial 2 of 5 (Mod 10)",
    SymbologyType.CODE39: "Code 39",
    SymbologyType.CODE39_EXTENDED: "Code 39 Extended",
    SymbologyType.CODE39_MOD43: "Code 39 (Mod 43)",
    SymbologyType.CODABAR: "Codabar",
    SymbologyType.POSTNET: "POSTNET",
    SymbologyType.BOOKLAND: "Bookland",
    SymbologyType.ISBN: "ISBN",
    SymbologyType.JAN13: "JAN-13",
    SymbologyType.MSI_MOD10: "MSI (Mod 10)",
    SymbologyType.MSI_2MOD10: "MSI (2 x Mod 10)",
    SymbologyType.MSI_MOD11: "MSI (Mod 11)",
    SymbologyType.MSI_MOD11_MOD10: "MSI (Mod 11, Mod 10)",
    SymbologyType.MODIFIED_PLESSEY: "Modified Plessey",
    SymbologyType.CODE11: "Code 11",
    SymbologyType.USD8: "USD-8",
    SymbologyType.UCC12: "UCC-12",
    SymbologyType.UCC13: "UCC-13",
    SymbologyType.LOGMARS: "LOGMARS",
    SymbologyType.CODE128: "Code 128",
    SymbologyType.CODE128A: "Code 128-A",
    SymbologyType.CODE128B: "Code 128-B",
    SymbologyType.CODE128C: "Code 128-C",
    SymbologyType.ITF14: "ITF-14",
    SymbologyType.CODE93: "Code 93",
    SymbologyType.TELEPEN: "Telepen",
    SymbologyType.FIM: "FIM",
    SymbologyType.PHARMACODE: "Pharmacode",
}


class CheckDigitPolicy(str, Enum):
    """What to do with a check character the caller already put in the data."""

    APPEND = "append"  # all input is payload, check is always appended
    VALIDATE = "validate"  # trailing check must match the recomputed one
    RECOMPUTE = "recompute"  # trailing check is replaced silently

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        names_ru = {
            CheckDigitPolicy.APPEND: "Дописывать",
            CheckDigitPolicy.VALIDATE: "Проверять",
            CheckDigitPolicy.RECOMPUTE: "Пересчитывать",
        }
        return names_ru[self] if lang == "ru" else self.value


class Alignment(str, Enum):
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"

    def localized_name(self, lang: Literal["ru", "en"] = "ru") -> str:
        return self.value


class LabelPosition(str, Enum):
    TOP_LEFT = "top_left"
    TOP_CENTER = "top_center"
    TOP_RIGHT = "top_right"
    BOTTOM_LEFT = "bottom_left"
    BOTTOM_CENTER = "bottom_center"
    BOTTOM_RIGHT = "bottom_right"

    @property
    def is_top(self) -> bool:
        return self.value.startswith("top")

    @property
    def horizontal(self) -> Alignment:
        return Alignment(self.value.split("_", 1)[1])


class RotateFlip(str, Enum):
    NONE = "none"
    ROTATE_90 = "rotate_90"
    ROTATE_180 = "rotate_180"
    ROTATE_270 = "rotate_270"
    FLIP_X = "flip_x"
    FLIP_Y = "flip_y"


class ImageFormat(str, Enum):
    PNG = "png"
    JPEG = "jpeg"
    BMP = "bmp"
    GIF = "gif"
    TIFF = "tiff"

    @property
    def pil_format(self) -> str:
        return self.value.upper()

    @property
    def extension(self) -> str:
        return ".jpg" if self == ImageFormat.JPEG else f".{self.value}"

    @property
    def supports_alpha(self) -> bool:
        return self in {ImageFormat.PNG, ImageFormat.TIFF, ImageFormat.GIF}


DEFAULT_SYMBOLOGY: Final[SymbologyType] = SymbologyType.CODE128
DEFAULT_ALIGNMENT: Final[Alignment] = Alignment.CENTER
DEFAULT_LABEL_POSITION: Final[LabelPosition] = LabelPosition.BOTTOM_CENTER
DEFAULT_IMAGE_FORMAT: Final[ImageFormat] = ImageFormat.PNG
DEFAULT_ROTATE_FLIP: Final[RotateFlip] = RotateFlip.NONE


# === VALIDATION ===
def validate_symbology(symbology: object) -> bool:
    """True for every encodable symbology; UNSPECIFIED and foreign values are rejected."""
    return (
        isinstance(symbology, SymbologyType)
        and symbology is not SymbologyType.UNSPECIFIED
    )


def coerce_symbology(value: object) -> Optional[SymbologyType]:
    """Map a SymbologyType or its string value to the enum; None when unknown."""
    if isinstance(value, SymbologyType):
        return value
    if isinstance(value, str):
        try:
            return SymbologyType(value.lower())
        except ValueError:
            _logger.debug("Unknown symbology tag %r", value)
            return None
    return None


__all__ = [
    "SymbologyType",
    "CheckDigitPolicy",
    "Alignment",
    "LabelPosition",
    "RotateFlip",
    "ImageFormat",
    "EAN13_MODULES",
    "EAN8_MODULES",
    "UPCE_MODULES",
    "UPC_ADDON2_MODULES",
    "UPC_ADDON5_MODULES",
    "MIN_PHARMACODE",
    "MAX_PHARMACODE",
    "DEFAULT_SYMBOLOGY",
    "DEFAULT_ALIGNMENT",
    "DEFAULT_LABEL_POSITION",
    "DEFAULT_IMAGE_FORMAT",
    "DEFAULT_ROTATE_FLIP",
    "validate_symbology",
    "coerce_symbology",
]
