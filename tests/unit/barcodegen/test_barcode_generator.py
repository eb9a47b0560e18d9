from typing import Dict
from unittest.mock import patch

import pytest

from src.barcodegen import barcode_generator as generator_module
from src.barcodegen.barcode_generator import BarcodeGenerator, country_for, generate
from src.barcodegen.errors import ErrorKind
from src.barcodegen.result import EncodingResult
from src.model.enums import CheckDigitPolicy, SymbologyType

SAMPLES: Dict[SymbologyType, str] = {
    SymbologyType.UPCA: "12345678901",
    SymbologyType.UCC12: "12345678901",
    SymbologyType.UPCE: "0123456",
    SymbologyType.UPC_SUPPLEMENTAL_2DIGIT: "12",
    SymbologyType.UPC_SUPPLEMENTAL_5DIGIT: "52495",
    SymbologyType.EAN13: "400638133393",
    SymbologyType.UCC13: "400638133393",
    SymbologyType.JAN13: "490123456789",
    SymbologyType.BOOKLAND: "0306406152",
    SymbologyType.ISBN: "0306406152",
    SymbologyType.EAN8: "9638507",
    SymbologyType.INTERLEAVED2OF5: "1234",
    SymbologyType.INTERLEAVED2OF5_MOD10: "123",
    SymbologyType.ITF14: "1234567890123",
    SymbologyType.STANDARD2OF5: "123",
    SymbologyType.STANDARD2OF5_MOD10: "123",
    SymbologyType.INDUSTRIAL2OF5: "123",
    SymbologyType.INDUSTRIAL2OF5_MOD10: "123",
    SymbologyType.CODE39: "HELLO",
    SymbologyType.LOGMARS: "HELLO",
    SymbologyType.CODE39_MOD43: "CODE39",
    SymbologyType.CODE39_EXTENDED: "Hello",
    SymbologyType.CODE93: "TEST93",
    SymbologyType.CODE128: "Hello 123",
    SymbologyType.CODE128A: "HELLO",
    SymbologyType.CODE128B: "Hello",
    SymbologyType.CODE128C: "1234",
    SymbologyType.CODABAR: "A123B",
    SymbologyType.MSI_MOD10: "1234",
    SymbologyType.MSI_2MOD10: "1234",
    SymbologyType.MSI_MOD11: "1234",
    SymbologyType.MSI_MOD11_MOD10: "1234",
    SymbologyType.MODIFIED_PLESSEY: "1234",
    SymbologyType.CODE11: "123-45",
    SymbologyType.USD8: "123-45",
    SymbologyType.POSTNET: "12345",
    SymbologyType.FIM: "A",
    SymbologyType.PHARMACODE: "1234",
    SymbologyType.TELEPEN: "ABC",
}


class TestBarcodeGenerator:
    """Encoding facade: dispatch, error collection, labels, supplements."""

    @pytest.fixture
    def gen(self) -> BarcodeGenerator:
        return BarcodeGenerator()

    # === Dispatch ===
    def test_every_symbology_has_a_sample(self) -> None:
        assert set(SAMPLES) == BarcodeGenerator.supported_types()
        assert SymbologyType.UNSPECIFIED not in BarcodeGenerator.supported_types()

    @pytest.mark.parametrize("symbology,raw", sorted(SAMPLES.items()))
    def test_samples_encode(
        self, gen: BarcodeGenerator, symbology: SymbologyType, raw: str
    ) -> None:
        result = gen.generate(symbology, raw)
        assert result.ok, result.error_messages
        assert result.pattern
        assert set(result.pattern) <= {"0", "1"}
        assert result.pattern[0] == "1" and result.pattern[-1] == "1"
        assert result.symbology is symbology
        assert result.raw_data == raw
        if symbology.fixed_module_count is not None:
            assert result.module_count == symbology.fixed_module_count

    def test_unspecified(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.UNSPECIFIED, "123")
        assert result.pattern == ""
        assert [e.kind for e in result.errors] == [ErrorKind.UNSUPPORTED_SYMBOLOGY]
        assert result.errors[0].code == "EGEN-1"

    def test_string_tags(self, gen: BarcodeGenerator) -> None:
        assert gen.generate("ean13", "400638133393").ok
        assert gen.generate("EAN13", "400638133393").ok
        result = gen.generate("qr", "x")
        assert result.symbology is None
        assert result.errors[0].kind is ErrorKind.UNSUPPORTED_SYMBOLOGY

    def test_non_string_data(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.CODE39, None)  # type: ignore[arg-type]
        assert not result.ok
        assert result.raw_data == ""
        assert result.errors[0].kind is ErrorKind.INVALID_LENGTH

    # === Worked examples ===
    def test_upca(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.UPCA, "12345678901")
        assert result.label == "123456789012"
        assert result.encoded_data == "123456789012"
        assert result.check_digits == "2"
        assert result.module_count == 95
        assert result.pattern.startswith("101")

    def test_ean13_standardized(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.EAN13, "400638133393", standardize_label=True)
        assert result.check_digits == "1"
        assert result.label == "4-006381-33393-1"
        assert result.country == "GERMANY"

    def test_code39_hello(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.CODE39, "HELLO")
        assert result.module_count == 90
        assert result.label == "HELLO"
        assert result.country is None

    def test_msi_mod10(self, gen: BarcodeGenerator) -> None:
        assert gen.generate(SymbologyType.MSI_MOD10, "1234").check_digits == "4"
        result = gen.generate(
            SymbologyType.MSI_MOD10,
            "1235",
            options={"check_digit_policy": CheckDigitPolicy.VALIDATE},
        )
        assert [e.kind for e in result.errors] == [ErrorKind.CHECKSUM_MISMATCH]
        assert result.pattern == ""

    def test_postnet_height_modulated(self, gen: BarcodeGenerator) -> None:
        assert gen.generate(SymbologyType.POSTNET, "12345").height_modulated
        assert not gen.generate(SymbologyType.CODE39, "A").height_modulated

    # === Errors ===
    def test_all_errors_collected(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.CODE39, "A#B?")
        assert [e.position for e in result.errors] == [1, 3]
        assert result.pattern == ""
        assert result.label == ""

    def test_failure_is_logged(self, gen: BarcodeGenerator) -> None:
        with patch.object(generator_module.logger, "warning") as warning:
            gen.generate(SymbologyType.EAN8, "12")
        warning.assert_called_once()

    def test_validate_does_not_encode(self, gen: BarcodeGenerator) -> None:
        assert gen.validate(SymbologyType.CODE39, "HELLO") == []
        assert gen.last_result is None
        issues = gen.validate(SymbologyType.CODE39, "hello")
        assert [i.kind for i in issues] == [ErrorKind.UNSUPPORTED_CHARACTER] * 5
        assert [i.code for i in gen.validate(SymbologyType.UNSPECIFIED, "1")] == ["EGEN-1"]

    # === Labels ===
    def test_alternate_label(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.CODE128, "ABC", alternate_label="Part #1")
        assert result.label == "Part #1"
        assert result.encoded_data == "ABC"

    def test_standardize_from_config(self) -> None:
        gen = BarcodeGenerator({"standardize_label": True})
        assert gen.generate(SymbologyType.EAN8, "9638507").label == "9638-5074"
        assert (
            gen.generate(SymbologyType.EAN8, "9638507", standardize_label=False).label
            == "96385074"
        )

    # === Supplements ===
    def test_supplement_appended(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.EAN13, "400638133393", supplement="12")
        assert result.ok
        assert result.module_count == 95 + 9 + 20
        assert result.pattern[95:104] == "0" * 9
        assert result.label == "4006381333931 12"
        assert result.encoded_data == "4006381333931 12"

    def test_five_digit_supplement(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.UPCA, "12345678901", supplement="52495")
        assert result.module_count == 95 + 9 + 47

    def test_supplement_gap_from_config(self) -> None:
        gen = BarcodeGenerator({"supplement_gap_modules": 7})
        result = gen.generate(SymbologyType.UPCE, "0123456", supplement="12")
        assert result.module_count == 51 + 7 + 20

    def test_supplement_not_allowed(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.CODE39, "HELLO", supplement="12")
        assert [e.code for e in result.errors] == ["EGEN-2"]

    def test_supplement_bad_length(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.EAN13, "400638133393", supplement="123")
        assert [e.code for e in result.errors] == ["EGEN-3"]

    def test_supplement_bad_digits(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.EAN13, "400638133393", supplement="1a")
        assert [e.kind for e in result.errors] == [ErrorKind.UNSUPPORTED_CHARACTER]
        assert result.pattern == ""

    def test_main_and_supplement_errors_combined(self, gen: BarcodeGenerator) -> None:
        result = gen.generate(SymbologyType.EAN13, "4006", supplement="1")
        assert {e.code for e in result.errors} == {"EEAN13-2", "EGEN-3"}

    # === Options and state ===
    def test_itf_pad_odd_config(self) -> None:
        assert not BarcodeGenerator().generate(SymbologyType.INTERLEAVED2OF5, "123").ok
        result = BarcodeGenerator({"itf_pad_odd": True}).generate(
            SymbologyType.INTERLEAVED2OF5, "123"
        )
        assert result.encoded_data == "0123"

    def test_explicit_option_beats_config(self) -> None:
        gen = BarcodeGenerator({"itf_pad_odd": True})
        result = gen.generate(
            SymbologyType.INTERLEAVED2OF5, "123", options={"pad_odd": False}
        )
        assert not result.ok

    def test_last_result(self, gen: BarcodeGenerator) -> None:
        assert gen.last_result is None
        first = gen.generate(SymbologyType.CODE39, "A")
        assert gen.last_result is first
        second = gen.generate(SymbologyType.UNSPECIFIED, "A")
        assert gen.last_result is second

    def test_deterministic(self, gen: BarcodeGenerator) -> None:
        a = gen.generate(SymbologyType.CODE128, "Hello 123456")
        b = BarcodeGenerator().generate(SymbologyType.CODE128, "Hello 123456")
        assert (a.pattern, a.label, a.check_digits) == (b.pattern, b.label, b.check_digits)
        assert a.encoding_time_ms >= 0.0

    def test_config_is_copied(self) -> None:
        gen = BarcodeGenerator({"standardize_label": True})
        assert BarcodeGenerator().config["standardize_label"] is False
        assert gen.config["itf_pad_odd"] is False


# === Module-level helpers ===


def test_generate_shortcut() -> None:
    result = generate(SymbologyType.UPCA, "12345678901")
    assert isinstance(result, EncodingResult)
    assert result.label == "123456789012"


@pytest.mark.parametrize(
    "data,expected",
    [
        ("4006381333931", "GERMANY"),
        ("4901234567894", "JAPAN"),
        ("400638133393", None),
        ("40063813339X1", None),
    ],
)
def test_country_for(data: str, expected) -> None:
    assert country_for(data) == expected
