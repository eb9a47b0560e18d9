from unittest.mock import Mock

import pytest

from src.barcodegen.barcode_generator import BarcodeGenerator
from src.model.barcodegen import Barcode
from src.model.enums import Alignment, CheckDigitPolicy, SymbologyType


def test_barcode_minimal() -> None:
    b = Barcode(symbology=SymbologyType.EAN13, data="400638133393")
    assert b.symbology == SymbologyType.EAN13
    assert b.data == "400638133393"
    assert b.result is None
    assert b.render_options == {}
    assert b.validation_state is None


def test_barcode_encode_caches_result() -> None:
    b = Barcode(symbology=SymbologyType.EAN13, data="400638133393", standardize_label=True)
    result = b.encode()
    assert b.result is result
    assert result.label == "4-006381-33393-1"


def test_barcode_encode_uses_given_generator() -> None:
    gen = BarcodeGenerator()
    b = Barcode(symbology=SymbologyType.CODE39, data="ABC")
    b.encode(gen)
    assert gen.last_result is b.result


def test_barcode_passes_encoder_options() -> None:
    gen = Mock(spec=BarcodeGenerator)
    b = Barcode(
        symbology=SymbologyType.MSI_MOD10,
        data="12344",
        check_digit_policy=CheckDigitPolicy.VALIDATE,
        pad_odd=False,
        supplement=None,
    )
    b.encode(gen)
    gen.generate.assert_called_once_with(
        SymbologyType.MSI_MOD10,
        "12344",
        alternate_label=None,
        standardize_label=None,
        supplement=None,
        options={"check_digit_policy": CheckDigitPolicy.VALIDATE, "pad_odd": False},
    )


def test_barcode_validate_ok() -> None:
    b = Barcode(symbology=SymbologyType.UPCA, data="12345678901")
    assert b.validate() is True
    assert b.validation_state == "ok"
    assert b.validation_error_message is None
    assert b.result is not None and b.result.ok


def test_barcode_validate_encoding_error_raises() -> None:
    b = Barcode(symbology=SymbologyType.UPCA, data="123")
    with pytest.raises(ValueError, match="EUPCA-2"):
        b.validate()
    assert b.validation_state == "invalid"


def test_barcode_validate_record_error() -> None:
    b = Barcode(symbology=SymbologyType.CODE39, data="abc")
    assert b.validate(record_error=True) is False
    assert b.validation_state == "invalid"
    assert b.validation_error_message and "EC39-8" in b.validation_error_message


@pytest.mark.parametrize(
    "kwargs,message",
    [
        ({"symbology": "bogus", "data": "1"}, "Invalid symbology"),
        ({"symbology": SymbologyType.CODE39, "data": ""}, "non-empty"),
        (
            {"symbology": SymbologyType.CODE39, "data": "A", "render_options": {"dpi": 3}},
            "Unknown render options",
        ),
    ],
)
def test_barcode_validate_field_errors(kwargs, message: str) -> None:
    b = Barcode(**kwargs)
    assert b.validate(record_error=True) is False
    assert message in (b.validation_error_message or "")


def test_barcode_render() -> None:
    b = Barcode(
        symbology=SymbologyType.CODE39,
        data="HELLO",
        render_options={"bar_width": 2, "height": 40, "include_label": False},
    )
    img = b.render()
    assert img.size == (180, 40)
    assert b.result is not None


def test_barcode_dict_round_trip() -> None:
    b = Barcode(
        symbology=SymbologyType.EAN13,
        data="400638133393",
        supplement="12",
        check_digit_policy=CheckDigitPolicy.RECOMPUTE,
        render_options={"alignment": Alignment.LEFT, "height": 80},
    )
    d = b.to_dict()
    assert d["symbology"] == "ean13"
    assert d["check_digit_policy"] == "recompute"
    assert d["render_options"] == {"alignment": "left", "height": 80}
    restored = Barcode.from_dict(d)
    assert restored.symbology is SymbologyType.EAN13
    assert restored.check_digit_policy is CheckDigitPolicy.RECOMPUTE
    assert restored.supplement == "12"
    assert restored.render_options == {"alignment": "left", "height": 80}
    assert restored.encode().label == b.encode().label


def test_barcode_str() -> None:
    b = Barcode(symbology=SymbologyType.CODE128, data="X" * 20)
    assert str(b) == f"Barcode(code128, data={'X' * 16}...)"
