from io import BytesIO
from pathlib import Path
from unittest.mock import patch

import pytest
from PIL import Image

from src.barcodegen import renderer as renderer_module
from src.barcodegen.barcode_generator import generate
from src.barcodegen.errors import BarcodeGenError
from src.barcodegen.renderer import image_bytes, image_size, render_image, save_image
from src.barcodegen.result import EncodingResult
from src.model.enums import Alignment, ImageFormat, LabelPosition, RotateFlip, SymbologyType

BLACK = (0, 0, 0)
WHITE = (255, 255, 255)


@pytest.fixture
def hello() -> EncodingResult:
    return generate(SymbologyType.CODE39, "HELLO")


class TestRenderImage:
    """Pillow rendering of module patterns."""

    # === Geometry ===
    def test_bar_width_sets_image_width(self, hello: EncodingResult) -> None:
        img = render_image(hello, {"bar_width": 2, "height": 60, "include_label": False})
        assert img.size == (180, 60)
        assert img.mode == "RGB"
        assert img.getpixel((0, 0)) == BLACK
        assert img.getpixel((1, 59)) == BLACK
        # second module is a space
        assert img.getpixel((2, 0)) == WHITE

    def test_width_is_divided_into_modules(self, hello: EncodingResult) -> None:
        img = render_image(hello, {"width": 300, "height": 20, "include_label": False})
        assert img.size == (300, 20)
        # 3px modules, 270px symbol centred
        assert img.getpixel((14, 0)) == WHITE
        assert img.getpixel((15, 0)) == BLACK

    @pytest.mark.parametrize(
        "alignment,first_bar", [(Alignment.LEFT, 0), (Alignment.RIGHT, 20)]
    )
    def test_alignment(self, hello: EncodingResult, alignment: Alignment, first_bar: int) -> None:
        img = render_image(
            hello, {"width": 200, "height": 10, "alignment": alignment, "include_label": False}
        )
        assert img.getpixel((first_bar, 0)) == BLACK
        if first_bar:
            assert img.getpixel((first_bar - 1, 0)) == WHITE

    def test_too_narrow(self, hello: EncodingResult) -> None:
        with pytest.raises(BarcodeGenError, match="too small"):
            render_image(hello, {"width": 50})

    def test_aspect_ratio(self, hello: EncodingResult) -> None:
        img = render_image(hello, {"bar_width": 1, "aspect_ratio": 3.0, "include_label": False})
        assert img.size == (90, 30)

    def test_config_defaults(self, hello: EncodingResult) -> None:
        img = render_image(
            hello,
            {"include_label": False},
            config={"default_width": 90, "default_height": 10},
        )
        assert img.size == (90, 10)

    @pytest.mark.parametrize(
        "rotate,size",
        [
            (RotateFlip.NONE, (180, 60)),
            (RotateFlip.ROTATE_90, (60, 180)),
            (RotateFlip.ROTATE_180, (180, 60)),
            (RotateFlip.ROTATE_270, (60, 180)),
            (RotateFlip.FLIP_X, (180, 60)),
        ],
    )
    def test_rotate_flip(self, hello: EncodingResult, rotate: RotateFlip, size) -> None:
        img = render_image(
            hello,
            {"bar_width": 2, "height": 60, "include_label": False, "rotate_flip": rotate},
        )
        assert img.size == size

    def test_colors(self, hello: EncodingResult) -> None:
        img = render_image(
            hello,
            {
                "bar_width": 1,
                "height": 10,
                "include_label": False,
                "foreground": "#ff0000",
                "background": "#0000ff",
            },
        )
        assert img.getpixel((0, 0)) == (255, 0, 0)
        assert img.getpixel((1, 0)) == (0, 0, 255)

    # === Label ===
    def test_label_below_bars(self, hello: EncodingResult) -> None:
        img = render_image(hello, {"bar_width": 2, "height": 100})
        assert img.getpixel((0, 0)) == BLACK
        assert img.getpixel((0, 99)) == WHITE

    def test_label_above_bars(self, hello: EncodingResult) -> None:
        img = render_image(
            hello, {"bar_width": 2, "height": 100, "label_position": LabelPosition.TOP_LEFT}
        )
        assert img.getpixel((179, 0)) == WHITE
        assert img.getpixel((179, 99)) == BLACK

    def test_label_needs_room(self, hello: EncodingResult) -> None:
        with pytest.raises(BarcodeGenError, match="no room"):
            render_image(hello, {"bar_width": 2, "height": 5, "font_size": 12})

    def test_missing_font_falls_back(self, hello: EncodingResult) -> None:
        with patch.object(renderer_module.logger, "warning") as warning:
            img = render_image(hello, {"bar_width": 2, "font_path": "/nonexistent/font.ttf"})
        warning.assert_called_once()
        assert img.width == 180

    # === Special cases ===
    def test_postnet_heights(self) -> None:
        result = generate(SymbologyType.POSTNET, "12345")
        img = render_image(result, {"bar_width": 1, "height": 50, "include_label": False})
        assert img.size == (2 * 32 - 1, 50)
        # frame bar: full height
        assert img.getpixel((0, 0)) == BLACK
        # gap between bars
        assert img.getpixel((1, 49)) == WHITE
        # digit '1' starts with a short bar
        assert img.getpixel((2, 0)) == WHITE
        assert img.getpixel((2, 49)) == BLACK

    def test_failed_result(self) -> None:
        result = generate(SymbologyType.EAN13, "abc")
        with pytest.raises(BarcodeGenError, match="failed encoding"):
            render_image(result)


class TestExport:
    @pytest.fixture
    def image(self, hello: EncodingResult) -> Image.Image:
        return render_image(hello, {"bar_width": 1, "height": 20, "include_label": False})

    def test_png_bytes(self, image: Image.Image) -> None:
        assert image_bytes(image).startswith(b"\x89PNG")

    @pytest.mark.parametrize(
        "fmt,pil_format",
        [(ImageFormat.BMP, "BMP"), ("gif", "GIF"), ("jpg", "JPEG"), ("tif", "TIFF")],
    )
    def test_formats(self, image: Image.Image, fmt, pil_format: str) -> None:
        data = image_bytes(image, fmt)
        assert Image.open(BytesIO(data)).format == pil_format

    def test_save_infers_format_from_suffix(self, image: Image.Image, tmp_path: Path) -> None:
        target = tmp_path / "code.jpg"
        save_image(image, target)
        with Image.open(target) as saved:
            assert saved.format == "JPEG"
            assert saved.size == image.size

    def test_save_rgba_as_jpeg(self, image: Image.Image, tmp_path: Path) -> None:
        save_image(image.convert("RGBA"), tmp_path / "code.jpeg")
        assert (tmp_path / "code.jpeg").exists()

    def test_unknown_format(self, image: Image.Image) -> None:
        with pytest.raises(BarcodeGenError, match="Unsupported image format"):
            image_bytes(image, "svg")

    def test_save_error_wrapped(self, image: Image.Image, tmp_path: Path) -> None:
        with pytest.raises(BarcodeGenError, match="Failed to save"):
            save_image(image, tmp_path / "missing" / "code.png")


class TestImageSize:
    @pytest.fixture
    def image(self) -> Image.Image:
        return Image.new("RGB", (96, 192))

    def test_inches(self, image: Image.Image) -> None:
        assert image_size(image, dpi=96) == (1.0, 2.0, False)

    def test_default_dpi(self, image: Image.Image) -> None:
        assert image_size(image).width == pytest.approx(1.0)

    def test_metric_is_millimetres(self, image: Image.Image) -> None:
        size = image_size(image, dpi=96, metric=True)
        assert size.metric
        assert size.width == pytest.approx(25.4)
        assert size.height == pytest.approx(50.8)

    @pytest.mark.parametrize("dpi", [0, -72])
    def test_bad_dpi(self, image: Image.Image, dpi: float) -> None:
        with pytest.raises(BarcodeGenError):
            image_size(image, dpi=dpi)
