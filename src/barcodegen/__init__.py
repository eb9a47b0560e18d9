"""
barcodegen

Модуль кодирования одномерных штрихкодов с типизированным API.

- Около сорока символогий (UPC/EAN, 2 из 5, Code 39/93/128, Codabar, MSI, Code 11,
  PostNet, FIM, Pharmacode, Telepen) в единое представление: строку модулей '1'/'0'.
- Контрольные цифры с политикой APPEND / VALIDATE / RECOMPUTE.
- Ошибки ввода накапливаются в результате, исключения не выбрасываются.

Public API:
    - BarcodeGenerator: фасад кодирования (class)
    - generate: функция-обёртка над BarcodeGenerator().generate
    - EncodingResult: результат (шаблон, подпись, ошибки)
    - BarcodeGenError: исключение для ошибок рендеринга и программных ошибок
    - RenderOptions, render_image, save_image, image_bytes, image_size: рендеринг Pillow

Примеры:
    >>> from src.barcodegen import generate, render_image
    >>> result = generate(SymbologyType.CODE39, "HELLO")
    >>> img = render_image(result, {"bar_width": 2, "height": 80})

Зависимости:
    Pillow, lxml
"""

from src.barcodegen.barcode_generator import BarcodeGenerator, country_for, generate
from src.barcodegen.errors import (
    BarcodeGenError,
    EncodingFailed,
    EncodingIssue,
    ErrorKind,
    InvalidChecksumInput,
    PatternNotFound,
)
from src.barcodegen.labels import format_label
from src.barcodegen.renderer import (
    ImageSize,
    RenderOptions,
    image_bytes,
    image_size,
    render_image,
    save_image,
)
from src.barcodegen.result import EncodingResult

__all__ = [
    "BarcodeGenerator",
    "generate",
    "country_for",
    "format_label",
    "EncodingResult",
    "EncodingIssue",
    "ErrorKind",
    "BarcodeGenError",
    "EncodingFailed",
    "InvalidChecksumInput",
    "PatternNotFound",
    "RenderOptions",
    "ImageSize",
    "render_image",
    "save_image",
    "image_bytes",
    "image_size",
]
