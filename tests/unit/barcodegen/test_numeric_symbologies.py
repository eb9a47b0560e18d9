import pytest

from src.barcodegen.barcode_generator import generate
from src.barcodegen.errors import ErrorKind
from src.barcodegen.symbologies import ENCODERS
from src.barcodegen.symbologies.code11 import code11_checks
from src.barcodegen.symbologies.pharmacode import pharmacode_pattern
from src.barcodegen.tables import CODE11_START_STOP, MSI_START, MSI_STOP, lookup
from src.model.enums import CheckDigitPolicy, SymbologyType


def _encode(symbology: SymbologyType, raw: str, **options):
    return ENCODERS[symbology].encode(raw, options)


def _kinds(symbology: SymbologyType, raw: str, **options):
    return [i.kind for i in ENCODERS[symbology].validate(raw, options)]


# === 2 of 5 ===


class TestInterleaved2of5:
    def test_even_digits(self) -> None:
        sym = _encode(SymbologyType.INTERLEAVED2OF5, "1234")
        assert sym.pattern.startswith("1010")
        assert sym.pattern.endswith("1101")
        assert len(sym.pattern) == 4 + 2 * 14 + 4

    def test_odd_rejected_without_padding(self) -> None:
        assert _kinds(SymbologyType.INTERLEAVED2OF5, "123") == [ErrorKind.INVALID_LENGTH]

    def test_pad_odd(self) -> None:
        sym = _encode(SymbologyType.INTERLEAVED2OF5, "123", pad_odd=True)
        assert sym.data == "0123"

    def test_mod10_append(self) -> None:
        sym = _encode(SymbologyType.INTERLEAVED2OF5_MOD10, "123")
        assert sym.data == "1236"
        assert sym.check == "6"

    def test_mod10_append_even_needs_padding(self) -> None:
        assert _kinds(SymbologyType.INTERLEAVED2OF5_MOD10, "12") == [ErrorKind.INVALID_LENGTH]
        sym = _encode(SymbologyType.INTERLEAVED2OF5_MOD10, "12", pad_odd=True)
        assert sym.data == "012" + sym.check

    def test_mod10_validate(self) -> None:
        options = {"check_digit_policy": CheckDigitPolicy.VALIDATE}
        assert _kinds(SymbologyType.INTERLEAVED2OF5_MOD10, "1236", **options) == []
        assert _kinds(SymbologyType.INTERLEAVED2OF5_MOD10, "1235", **options) == [
            ErrorKind.CHECKSUM_MISMATCH
        ]


class TestITF14:
    def test_thirteen_digits(self) -> None:
        sym = _encode(SymbologyType.ITF14, "1234567890123")
        assert sym.data == "12345678901231"
        assert len(sym.pattern) == 4 + 7 * 14 + 4

    def test_embedded_check_validated(self) -> None:
        assert _kinds(SymbologyType.ITF14, "12345678901231") == []
        assert _kinds(SymbologyType.ITF14, "12345678901239") == [ErrorKind.CHECKSUM_MISMATCH]

    def test_length(self) -> None:
        assert _kinds(SymbologyType.ITF14, "123") == [ErrorKind.INVALID_LENGTH]


class TestStandardIndustrial2of5:
    def test_standard(self) -> None:
        sym = _encode(SymbologyType.STANDARD2OF5, "12")
        assert sym.pattern.startswith("11011010")
        assert len(sym.pattern) == 8 + 2 * 12 + 7
        assert sym.pattern.endswith("1")

    def test_industrial_uses_wider_bars(self) -> None:
        sym = _encode(SymbologyType.INDUSTRIAL2OF5, "12")
        assert sym.pattern.startswith("1110111010")
        assert len(sym.pattern) == 10 + 2 * 14 + 9

    @pytest.mark.parametrize(
        "symbology", [SymbologyType.STANDARD2OF5_MOD10, SymbologyType.INDUSTRIAL2OF5_MOD10]
    )
    def test_mod10_variants(self, symbology: SymbologyType) -> None:
        sym = _encode(symbology, "123")
        assert sym.data == "1236"

    def test_any_length(self) -> None:
        assert _kinds(SymbologyType.STANDARD2OF5, "1") == []
        assert _kinds(SymbologyType.STANDARD2OF5, "1A") == [ErrorKind.UNSUPPORTED_CHARACTER]

    def test_trailing_space_not_trimmed(self) -> None:
        issues = ENCODERS[SymbologyType.STANDARD2OF5].validate("123 ")
        assert [(i.kind, i.position) for i in issues] == [(ErrorKind.UNSUPPORTED_CHARACTER, 3)]


# === Codabar ===


class TestCodabar:
    def test_pattern(self) -> None:
        sym = _encode(SymbologyType.CODABAR, "A123B")
        assert len(sym.pattern) == 10 + 3 * 9 + 10 + 4
        assert sym.pattern.startswith(lookup(SymbologyType.CODABAR, "A") + "0")

    def test_lowercase_start_stop_normalized(self) -> None:
        assert _encode(SymbologyType.CODABAR, "a123b").data == "A123B"

    def test_missing_stop(self) -> None:
        issues = ENCODERS[SymbologyType.CODABAR].validate("A123")
        assert [(i.code, i.position) for i in issues] == [("ECODABAR-8", 3)]

    def test_start_stop_inside_data(self) -> None:
        issues = ENCODERS[SymbologyType.CODABAR].validate("A1A2B")
        assert [(i.code, i.position) for i in issues] == [("ECODABAR-3", 2)]

    def test_too_short(self) -> None:
        assert _kinds(SymbologyType.CODABAR, "AB") == [ErrorKind.INVALID_LENGTH]

    @pytest.mark.parametrize(
        "raw,expected",
        [
            ("A1\u00df", [("ECODABAR-8", 2)]),
            ("\u00dfA1B", [("ECODABAR-8", 0), ("ECODABAR-3", 1)]),
        ],
    )
    def test_case_folding_keeps_positions(self, raw: str, expected) -> None:
        issues = ENCODERS[SymbologyType.CODABAR].validate(raw)
        assert [(i.code, i.position) for i in issues] == expected
        assert generate(SymbologyType.CODABAR, raw).pattern == ""


# === MSI ===


class TestMSI:
    def test_mod10(self) -> None:
        sym = _encode(SymbologyType.MSI_MOD10, "1234")
        assert sym.data == "12344"
        assert sym.check == "4"
        assert sym.pattern.startswith(MSI_START)
        assert sym.pattern.endswith(MSI_STOP)
        assert len(sym.pattern) == 3 + 5 * 12 + 4

    def test_mod10_validate(self) -> None:
        options = {"check_digit_policy": CheckDigitPolicy.VALIDATE}
        assert _kinds(SymbologyType.MSI_MOD10, "12344", **options) == []
        assert _kinds(SymbologyType.MSI_MOD10, "12345", **options) == [
            ErrorKind.CHECKSUM_MISMATCH
        ]

    def test_2mod10(self) -> None:
        assert _encode(SymbologyType.MSI_2MOD10, "1234").check == "48"

    def test_mod11_ten(self) -> None:
        sym = _encode(SymbologyType.MSI_MOD11, "6")
        assert sym.data == "610"
        assert sym.check == "10"

    def test_mod11_validate_two_digit_check(self) -> None:
        sym = _encode(
            SymbologyType.MSI_MOD11, "610", check_digit_policy=CheckDigitPolicy.VALIDATE
        )
        assert sym.data == "610"

    def test_mod11_mod10(self) -> None:
        assert _encode(SymbologyType.MSI_MOD11_MOD10, "1234").check == "30"

    def test_plain(self) -> None:
        sym = _encode(SymbologyType.MODIFIED_PLESSEY, "1234")
        assert sym.data == "1234"
        assert sym.check == ""

    def test_too_short_to_validate(self) -> None:
        kinds = _kinds(
            SymbologyType.MSI_MOD10, "1", check_digit_policy=CheckDigitPolicy.VALIDATE
        )
        assert kinds == [ErrorKind.INVALID_LENGTH]


# === Code 11 ===


class TestCode11:
    def test_single_check(self) -> None:
        assert code11_checks("123-45") == "5"
        sym = _encode(SymbologyType.CODE11, "123-45")
        assert sym.data == "123-455"
        assert sym.pattern.startswith(CODE11_START_STOP + "0")
        assert sym.pattern.endswith("0" + CODE11_START_STOP)
        assert len(sym.pattern) == 7 + 1 + (6 * 7 + 6) + 6 + 1 + 7

    def test_two_checks_from_ten_characters(self) -> None:
        assert code11_checks("0123456789") == "03"

    def test_usd8_alias(self) -> None:
        assert _encode(SymbologyType.USD8, "12").pattern == _encode(
            SymbologyType.CODE11, "12"
        ).pattern

    def test_validate(self) -> None:
        options = {"check_digit_policy": CheckDigitPolicy.VALIDATE}
        assert _kinds(SymbologyType.CODE11, "123-455", **options) == []
        assert _kinds(SymbologyType.CODE11, "0123456789" + "03", **options) == []

    def test_bad_character(self) -> None:
        assert _kinds(SymbologyType.CODE11, "12A") == [ErrorKind.UNSUPPORTED_CHARACTER]


# === Postal ===


class TestPostNet:
    def test_zip(self) -> None:
        sym = _encode(SymbologyType.POSTNET, "12345")
        assert sym.data == "123455"
        assert sym.height_modulated
        assert len(sym.pattern) == 1 + 6 * 5 + 1
        assert sym.pattern.startswith("1" + lookup(SymbologyType.POSTNET, "1"))

    def test_zip_plus_four_with_hyphen(self) -> None:
        assert _encode(SymbologyType.POSTNET, "12345-6789").check == "5"

    def test_each_digit_has_two_tall_bars(self) -> None:
        for d in "0123456789":
            assert lookup(SymbologyType.POSTNET, d).count("1") == 2

    def test_validate(self) -> None:
        options = {"check_digit_policy": CheckDigitPolicy.VALIDATE}
        assert _kinds(SymbologyType.POSTNET, "123455", **options) == []
        assert _kinds(SymbologyType.POSTNET, "123456", **options) == [
            ErrorKind.CHECKSUM_MISMATCH
        ]

    @pytest.mark.parametrize("raw", ["1234", "123456", "1234567890"])
    def test_bad_lengths(self, raw: str) -> None:
        assert _kinds(SymbologyType.POSTNET, raw) == [ErrorKind.INVALID_LENGTH]


class TestFIM:
    def test_pattern(self) -> None:
        sym = _encode(SymbologyType.FIM, "a")
        assert sym.data == "A"
        assert sym.pattern == "10100000100000101"
        assert not sym.height_modulated

    def test_unknown_letter(self) -> None:
        assert _kinds(SymbologyType.FIM, "E") == [ErrorKind.UNSUPPORTED_CHARACTER]

    def test_single_character_only(self) -> None:
        assert _kinds(SymbologyType.FIM, "AB") == [ErrorKind.INVALID_LENGTH]


# === Pharmacode ===


class TestPharmacode:
    @pytest.mark.parametrize(
        "value,pattern",
        [
            (3, "1001"),
            (4, "100111"),
            (5, "111001"),
            (131070, "00".join(["111"] * 16)),
        ],
    )
    def test_patterns(self, value: int, pattern: str) -> None:
        assert pharmacode_pattern(value) == pattern

    def test_encode(self) -> None:
        assert _encode(SymbologyType.PHARMACODE, "0003").data == "3"

    @pytest.mark.parametrize("raw", ["2", "131071"])
    def test_out_of_range(self, raw: str) -> None:
        issues = ENCODERS[SymbologyType.PHARMACODE].validate(raw)
        assert [i.code for i in issues] == ["EPHARMA-8"]

    @pytest.mark.parametrize("raw", ["1" * 5000, "0" * 4000 + "1" * 7])
    def test_overlong_value(self, raw: str) -> None:
        result = generate(SymbologyType.PHARMACODE, raw)
        assert [e.code for e in result.errors] == ["EPHARMA-8"]
        assert result.pattern == ""

    def test_leading_zeros_ignored(self) -> None:
        assert _encode(SymbologyType.PHARMACODE, "0" * 5000 + "5").pattern == "111001"

    def test_digits_only(self) -> None:
        assert _kinds(SymbologyType.PHARMACODE, "-5") == [ErrorKind.UNSUPPORTED_CHARACTER]


# === Telepen ===


class TestTelepen:
    def test_check_character(self) -> None:
        sym = _encode(SymbologyType.TELEPEN, "ABC")
        assert sym.check == chr(56)
        assert sym.data == "ABC"

    def test_frame(self) -> None:
        sym = _encode(SymbologyType.TELEPEN, "ABC")
        assert sym.pattern.startswith(lookup(SymbologyType.TELEPEN, "_"))
        assert sym.pattern.endswith("1")
        # start, A, B, C, check, stop
        assert 6 * 16 - 3 <= len(sym.pattern) <= 6 * 16

    def test_trailing_space_is_data(self) -> None:
        sym = _encode(SymbologyType.TELEPEN, "AB ")
        assert sym.data == "AB "
        assert sym.pattern != _encode(SymbologyType.TELEPEN, "AB").pattern

    def test_control_characters_allowed(self) -> None:
        assert _kinds(SymbologyType.TELEPEN, "A\x01") == []

    def test_non_ascii(self) -> None:
        assert _kinds(SymbologyType.TELEPEN, "€") == [ErrorKind.UNSUPPORTED_CHARACTER]
