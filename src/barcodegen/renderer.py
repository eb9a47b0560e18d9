"""
RU: Растровый рендеринг результата кодирования через Pillow, экспорт и физический размер.
EN: Pillow renderer for EncodingResult. Consumes the pattern, never changes it.
"""

from __future__ import annotations

import logging
from io import BytesIO
from pathlib import Path
from typing import IO, Any, Dict, List, NamedTuple, Optional, Tuple, TypedDict, Union

from PIL import Image, ImageDraw, ImageFont
from PIL.ImageFont import FreeTypeFont
from PIL.ImageFont import ImageFont as PILImageFont

from src import default_config
from src.barcodegen.errors import BarcodeGenError
from src.barcodegen.result import EncodingResult
from src.model.enums import (
    DEFAULT_ALIGNMENT,
    DEFAULT_LABEL_POSITION,
    Alignment,
    ImageFormat,
    LabelPosition,
    RotateFlip,
)

logger = logging.getLogger(__name__)

__all__ = [
    "RenderOptions",
    "ImageSize",
    "render_image",
    "save_image",
    "image_bytes",
    "image_size",
]

LABEL_MARGIN = 2  # px between bars and label text
SHORT_BAR_RATIO = 0.4  # PostNet short bar height relative to a tall bar
MM_PER_INCH = 25.4

_TRANSPOSE = {
    RotateFlip.ROTATE_90: Image.Transpose.ROTATE_90,
    RotateFlip.ROTATE_180: Image.Transpose.ROTATE_180,
    RotateFlip.ROTATE_270: Image.Transpose.ROTATE_270,
    RotateFlip.FLIP_X: Image.Transpose.FLIP_LEFT_RIGHT,
    RotateFlip.FLIP_Y: Image.Transpose.FLIP_TOP_BOTTOM,
}


class RenderOptions(TypedDict, total=False):
    """Типобезопасные опции рендеринга штрихкода."""

    bar_width: int  # Ширина модуля в пикселях; задаёт ширину изображения
    width: int  # Ширина изображения в пикселях
    height: int  # Высота изображения в пикселях
    aspect_ratio: float  # width / height; если задан, высота вычисляется
    alignment: Alignment  # Положение символа по горизонтали
    rotate_flip: RotateFlip
    foreground: str  # Цвет штрихов (имя или #rrggbb)
    background: str  # Цвет фона
    include_label: bool
    label_position: LabelPosition
    font_size: int
    font_path: str  # TrueType шрифт подписи; иначе встроенный шрифт Pillow


class ImageSize(NamedTuple):
    """Physical image size in inches, or millimetres when `metric` is True."""

    width: float
    height: float
    metric: bool


def _load_font(size: int, path: Optional[str]) -> Union[FreeTypeFont, PILImageFont]:
    if path:
        try:
            return ImageFont.truetype(path, size)
        except OSError as e:
            logger.warning("Failed to load label font (%r): %r", path, e)
    return ImageFont.load_default(size=size)


def _units(result: EncodingResult) -> int:
    """Horizontal units: modules, or bar + gap per token when height-modulated."""
    n = len(result.pattern)
    return 2 * n - 1 if result.height_modulated else n


def render_image(
    result: EncodingResult,
    options: Optional[RenderOptions] = None,
    config: Optional[Dict[str, Any]] = None,
) -> Image.Image:
    """
    Отрисовать результат кодирования в изображение Pillow (RGB).

    Args:
        result: Successful EncodingResult.
        options: Render switches; missing ones come from `config`.
        config: Settings as from `src.load_config()`.

    Returns:
        Image.Image in RGB mode.

    Raises:
        BarcodeGenError: Result carries errors or the image is too narrow
            for one pixel per module.
    """
    if not result.ok or not result.pattern:
        raise BarcodeGenError(
            "Cannot render a failed encoding: " + "; ".join(result.error_messages)
        )
    cfg = default_config()
    if config:
        cfg.update(config)
    opts: Dict[str, Any] = dict(options or {})

    units = _units(result)
    bar_width = opts.get("bar_width", cfg.get("default_bar_width"))
    width = int(opts.get("width", cfg["default_width"]))
    if bar_width:
        width = int(bar_width) * units
    else:
        bar_width = width // units
        if bar_width < 1:
            raise BarcodeGenError(
                f"Image width {width}px is too small for {units} modules"
            )
    bar_width = int(bar_width)

    aspect_ratio = opts.get("aspect_ratio")
    if aspect_ratio:
        height = max(1, int(width / float(aspect_ratio)))
    else:
        height = int(opts.get("height", cfg["default_height"]))

    fg = opts.get("foreground", cfg["foreground"])
    bg = opts.get("background", cfg["background"])
    alignment = Alignment(opts.get("alignment", DEFAULT_ALIGNMENT))
    position = LabelPosition(opts.get("label_position", DEFAULT_LABEL_POSITION))
    include_label = bool(opts.get("include_label", True)) and bool(result.label)

    img = Image.new("RGB", (width, height), bg)
    draw = ImageDraw.Draw(img)

    bar_top, bar_bottom = 0, height
    font = None
    text_h = 0
    if include_label:
        font = _load_font(int(opts.get("font_size", cfg["label_font_size"])), opts.get("font_path"))
        bbox = font.getbbox(result.label)
        text_h = bbox[3] - bbox[1]
        if position.is_top:
            bar_top = text_h + LABEL_MARGIN
        else:
            bar_bottom = height - text_h - LABEL_MARGIN
        if bar_bottom - bar_top < 1:
            raise BarcodeGenError(f"Image height {height}px leaves no room for bars")

    symbol_w = units * bar_width
    x0 = _aligned(alignment, width, symbol_w)
    _draw_bars(draw, result, x0, bar_width, bar_top, bar_bottom, fg)

    if font is not None:
        bbox = font.getbbox(result.label)
        text_w = bbox[2] - bbox[0]
        tx = _aligned(position.horizontal, width, text_w) - bbox[0]
        ty = (0 if position.is_top else bar_bottom + LABEL_MARGIN) - bbox[1]
        draw.text((tx, ty), result.label, font=font, fill=fg)

    rotate = RotateFlip(opts.get("rotate_flip", RotateFlip.NONE))
    if rotate is not RotateFlip.NONE:
        img = img.transpose(_TRANSPOSE[rotate])

    logger.debug(
        "Rendered %s: %d units x %dpx -> %dx%d",
        result.symbology.value if result.symbology else None,
        units,
        bar_width,
        img.width,
        img.height,
    )
    return img


def _aligned(alignment: Alignment, total: int, inner: int) -> int:
    if alignment is Alignment.LEFT:
        return 0
    if alignment is Alignment.RIGHT:
        return max(0, total - inner)
    return max(0, (total - inner) // 2)


def _draw_bars(
    draw: ImageDraw.ImageDraw,
    result: EncodingResult,
    x0: int,
    bar_width: int,
    top: int,
    bottom: int,
    fill: Any,
) -> None:
    if result.height_modulated:
        short_top = bottom - int((bottom - top) * SHORT_BAR_RATIO)
        for i, token in enumerate(result.pattern):
            x = x0 + 2 * i * bar_width
            y = top if token == "1" else short_top
            draw.rectangle((x, y, x + bar_width - 1, bottom - 1), fill=fill)
        return
    for run_start, run_len in _bar_runs(result.pattern):
        x = x0 + run_start * bar_width
        draw.rectangle((x, top, x + run_len * bar_width - 1, bottom - 1), fill=fill)


def _bar_runs(pattern: str) -> List[Tuple[int, int]]:
    """(start, length) of every run of '1' modules."""
    runs: List[Tuple[int, int]] = []
    start = None
    for i, m in enumerate(pattern):
        if m == "1" and start is None:
            start = i
        elif m != "1" and start is not None:
            runs.append((start, i - start))
            start = None
    if start is not None:
        runs.append((start, len(pattern) - start))
    return runs


def _image_format(fmt: Union[ImageFormat, str, None]) -> ImageFormat:
    if fmt is None:
        return ImageFormat(str(default_config()["image_format"]).lower())
    if isinstance(fmt, ImageFormat):
        return fmt
    value = fmt.lower().lstrip(".")
    if value == "jpg":
        value = "jpeg"
    elif value == "tif":
        value = "tiff"
    try:
        return ImageFormat(value)
    except ValueError as e:
        raise BarcodeGenError(f"Unsupported image format: {fmt!r}") from e


def save_image(
    image: Image.Image,
    target: Union[str, Path, IO[bytes]],
    fmt: Union[ImageFormat, str, None] = None,
) -> None:
    """
    Save to a path or binary file object.

    With a path and no `fmt`, the format comes from the file extension.
    """
    if fmt is None and isinstance(target, (str, Path)) and Path(target).suffix:
        fmt = Path(target).suffix
    image_format = _image_format(fmt)
    out = image
    if not image_format.supports_alpha and out.mode not in ("RGB", "L"):
        out = out.convert("RGB")
    try:
        out.save(target, format=image_format.pil_format)
    except (OSError, ValueError) as e:
        raise BarcodeGenError(f"Failed to save image as {image_format.value}") from e
    logger.debug("Saved image as %s", image_format.value)


def image_bytes(image: Image.Image, fmt: Union[ImageFormat, str, None] = None) -> bytes:
    buf = BytesIO()
    save_image(image, buf, fmt or ImageFormat.PNG)
    buf.seek(0)
    return buf.read()


def image_size(
    image: Image.Image, dpi: Optional[float] = None, metric: bool = False
) -> ImageSize:
    """
    Physical size of `image` at `dpi` (config default when None).

    Simple unit conversion; no print calibration.
    """
    dots = float(dpi if dpi is not None else default_config()["default_dpi"])
    if dots <= 0:
        raise BarcodeGenError(f"DPI must be positive, got {dpi!r}")
    scale = MM_PER_INCH if metric else 1.0
    return ImageSize(
        width=image.width / dots * scale,
        height=image.height / dots * scale,
        metric=metric,
    )
