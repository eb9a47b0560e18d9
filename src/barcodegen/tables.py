"""
RU: Реестр таблиц символогий: наборы символов, шаблоны штрихов, старт/стоп коды.
EN: Symbology table registry. Immutable process-wide constants, built once at
import time and never mutated, so concurrent readers need no locking.

Pattern notation:
    - Module strings: '1' = bar module, '0' = space module.
    - N/W strings (2 of 5): narrow/wide element tokens, rendered by the encoder
      with the symbology's wide factor.
    - PostNet/FIM: one token per bar position.

Example:
    >>> lookup(SymbologyType.CODE39, "*")
    '100101101101'
    >>> lookup(SymbologyType.EAN13, "R0")
    '1110010'
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Dict, Final, List, Mapping, Optional, Tuple, Union

from src.barcodegen.errors import PatternNotFound
from src.model.enums import SymbologyType

logger = logging.getLogger(__name__)

__all__ = [
    "lookup",
    "has_table",
    "alphabet",
    "widths_to_modules",
    "nw_to_modules",
    "country_for_prefix",
    "EAN_GUARD",
    "EAN_CENTER",
    "UPCE_END",
    "ADDON_START",
    "ADDON_SEPARATOR",
    "EAN13_PARITY",
    "UPCE_PARITY",
    "ADDON2_PARITY",
    "ADDON5_PARITY",
    "CODE39_CHARS",
    "CODE39_FULL_ASCII",
    "CODE93_TOKENS",
    "CODE93_FULL_ASCII",
    "CODE128_STOP",
    "CODABAR_START_STOP",
    "CODE11_START_STOP",
    "MSI_START",
    "MSI_STOP",
    "TELEPEN_START",
    "TELEPEN_STOP",
]


def widths_to_modules(widths: str) -> str:
    """'2122' -> '1101100': digits are element widths, bar first, alternating."""
    return "".join(("1" if i % 2 == 0 else "0") * int(w) for i, w in enumerate(widths))


def nw_to_modules(elements: str, wide: int, bars_only: bool = False) -> str:
    """
    Render N/W element tokens into modules.

    Args:
        elements: Tokens like "NNWWN".
        wide: Width of a wide element in modules.
        bars_only: Every token is a bar followed by a narrow space
            (Standard/Industrial 2 of 5). Otherwise tokens alternate bar/space.
    """
    out: List[str] = []
    for i, token in enumerate(elements):
        width = wide if token == "W" else 1
        if bars_only:
            out.append("1" * width + "0")
        else:
            out.append(("1" if i % 2 == 0 else "0") * width)
    return "".join(out)


# ==============================================================================
# EAN / UPC
# ==============================================================================

EAN_GUARD: Final[str] = "101"
EAN_CENTER: Final[str] = "01010"
UPCE_END: Final[str] = "010101"
ADDON_START: Final[str] = "1011"
ADDON_SEPARATOR: Final[str] = "01"

_EAN_L: Final[Tuple[str, ...]] = (
    "0001101",
    "0011001",
    "0010011",
    "0111101",
    "0100011",
    "0110001",
    "0101111",
    "0111011",
    "0110111",
    "0001011",
)
# R is the complement of L, G is R mirrored.
_EAN_R: Final[Tuple[str, ...]] = tuple(
    p.translate(str.maketrans("01", "10")) for p in _EAN_L
)
_EAN_G: Final[Tuple[str, ...]] = tuple(p[::-1] for p in _EAN_R)

_EAN_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        **{f"L{d}": p for d, p in enumerate(_EAN_L)},
        **{f"G{d}": p for d, p in enumerate(_EAN_G)},
        **{f"R{d}": p for d, p in enumerate(_EAN_R)},
    }
)

EAN13_PARITY: Final[Tuple[str, ...]] = (
    "LLLLLL",
    "LLGLGG",
    "LLGGLG",
    "LLGGGL",
    "LGLLGG",
    "LGGLLG",
    "LGGGLL",
    "LGLGLG",
    "LGLGGL",
    "LGGLGL",
)

# Number system 0, indexed by check digit; number system 1 swaps L and G.
UPCE_PARITY: Final[Tuple[str, ...]] = (
    "GGGLLL",
    "GGLGLL",
    "GGLLGL",
    "GGLLLG",
    "GLGGLL",
    "GLLGGL",
    "GLLLGG",
    "GLGLGL",
    "GLGLLG",
    "GLLGLG",
)

ADDON2_PARITY: Final[Tuple[str, ...]] = ("LL", "LG", "GL", "GG")

ADDON5_PARITY: Final[Tuple[str, ...]] = (
    "GGLLL",
    "GLGLL",
    "GLLGL",
    "GLLLG",
    "LGGLL",
    "LLGGL",
    "LLLGG",
    "LGLGL",
    "LGLLG",
    "LLGLG",
)

# ==============================================================================
# CODE 39
# ==============================================================================

CODE39_CHARS: Final[str] = "0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-. $/+%"

_CODE39_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "101001101101",
        "1": "110100101011",
        "2": "101100101011",
        "3": "110110010101",
        "4": "101001101011",
        "5": "110100110101",
        "6": "101100110101",
        "7": "101001011011",
        "8": "110100101101",
        "9": "101100101101",
        "A": "110101001011",
        "B": "101101001011",
        "C": "110110100101",
        "D": "101011001011",
        "E": "110101100101",
        "F": "101101100101",
        "G": "101010011011",
        "H": "110101001101",
        "I": "101101001101",
        "J": "101011001101",
        "K": "110101010011",
        "L": "101101010011",
        "M": "110110101001",
        "N": "101011010011",
        "O": "110101101001",
        "P": "101101101001",
        "Q": "101010110011",
        "R": "110101011001",
        "S": "101101011001",
        "T": "101011011001",
        "U": "110010101011",
        "V": "100110101011",
        "W": "110011010101",
        "X": "100101101011",
        "Y": "110010110101",
        "Z": "100110110101",
        "-": "100101011011",
        ".": "110010101101",
        " ": "100110101101",
        "$": "100100100101",
        "/": "100100101001",
        "+": "100101001001",
        "%": "101001001001",
        "*": "100101101101",
    }
)


def _build_full_ascii(shift: Mapping[str, str]) -> Mapping[int, str]:
    """Code 39 full-ASCII escape pairs; `shift` renames the four escape characters."""
    d, p, s, pl = shift["$"], shift["%"], shift["/"], shift["+"]
    m: Dict[int, str] = {0: p + "U", 32: " ", 45: "-", 46: ".", 47: s + "O"}
    m[58] = s + "Z"
    m[64] = p + "V"
    m[96] = p + "W"
    for code in range(1, 27):
        m[code] = d + chr(64 + code)
    for code, ch in zip(range(27, 32), "ABCDE"):
        m[code] = p + ch
    for code, ch in zip(range(33, 45), "ABCDEFGHIJKL"):
        m[code] = s + ch
    for code in range(48, 58):
        m[code] = chr(code)
    for code, ch in zip(range(59, 64), "FGHIJ"):
        m[code] = p + ch
    for code in range(65, 91):
        m[code] = chr(code)
    for code, ch in zip(range(91, 96), "KLMNO"):
        m[code] = p + ch
    for code in range(97, 123):
        m[code] = pl + chr(code - 32)
    for code, ch in zip(range(123, 128), "PQRST"):
        m[code] = p + ch
    return MappingProxyType(m)


CODE39_FULL_ASCII: Final[Mapping[int, str]] = _build_full_ascii(
    {"$": "$", "%": "%", "/": "/", "+": "+"}
)

# ==============================================================================
# CODE 93
# ==============================================================================

# Index in this tuple is the check-character value.
CODE93_TOKENS: Final[Tuple[str, ...]] = (
    *"0123456789ABCDEFGHIJKLMNOPQRSTUVWXYZ-. $/+%",
    "($)",
    "(%)",
    "(/)",
    "(+)",
)

_CODE93_PATTERNS: Final[Tuple[str, ...]] = (
    "100010100",
    "101001000",
    "101000100",
    "101000010",
    "100101000",
    "100100100",
    "100100010",
    "101010000",
    "100010010",
    "100001010",
    "110101000",
    "110100100",
    "110100010",
    "110010100",
    "110010010",
    "110001010",
    "101101000",
    "101100100",
    "101100010",
    "100110100",
    "100011010",
    "101011000",
    "101001100",
    "101000110",
    "100101100",
    "100010110",
    "110110100",
    "110110010",
    "110101100",
    "110100110",
    "110010110",
    "110011010",
    "101101100",
    "101100110",
    "100110110",
    "100111010",
    "100101110",
    "111010100",
    "111010010",
    "111001010",
    "101101110",
    "101110110",
    "110101110",
    "100100110",
    "111011010",
    "111010110",
    "100110010",
)

_CODE93_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {**dict(zip(CODE93_TOKENS, _CODE93_PATTERNS)), "*": "101011110"}
)


def _build_code93_ascii() -> Mapping[int, str]:
    shifted = _build_full_ascii({"$": "($)", "%": "(%)", "/": "(/)", "+": "(+)"})
    m = dict(shifted)
    # Native Code 93 characters need no shift pair.
    for ch in "$%+/":
        m[ord(ch)] = ch
    return MappingProxyType(m)


CODE93_FULL_ASCII: Final[Mapping[int, str]] = _build_code93_ascii()

# ==============================================================================
# CODE 128
# ==============================================================================

_CODE128_WIDTHS: Final[Tuple[str, ...]] = (
    "212222", "222122", "222221", "121223", "121322", "131222", "122213",
    "122312", "132212", "221213", "221312", "231212", "112232", "122132",
    "122231", "113222", "123122", "123221", "223211", "221132", "221231",
    "213212", "223112", "312131", "311222", "321122", "321221", "312212",
    "322112", "322211", "212123", "212321", "232121", "111323", "131123",
    "131321", "112313", "132113", "132311", "211313", "231113", "231311",
    "112133", "112331", "132131", "113123", "113321", "133121", "313121",
    "211331", "231131", "213113", "213311", "213131", "311123", "311321",
    "331121", "312113", "312311", "332111", "314111", "221411", "431111",
    "111224", "111422", "121124", "121421", "141122", "141221", "112214",
    "112412", "122114", "122411", "142112", "142211", "241211", "221114",
    "413111", "241112", "134111", "111242", "121142", "121241", "114212",
    "124112", "124211", "411212", "421112", "421211", "212141", "214121",
    "412121", "111143", "111341", "131141", "114113", "114311", "411113",
    "411311", "113141", "114131", "311141", "411131", "211412", "211214",
    "211232", "2331112",
)  # fmt: skip

_CODE128_TABLE: Final[Mapping[int, str]] = MappingProxyType(
    {value: widths_to_modules(w) for value, w in enumerate(_CODE128_WIDTHS)}
)

CODE128_STOP: Final[int] = 106

# ==============================================================================
# 2 OF 5 FAMILY
# ==============================================================================

_TWO_OF_FIVE_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "NNWWN",
        "1": "WNNNW",
        "2": "NWNNW",
        "3": "WWNNN",
        "4": "NNWNW",
        "5": "WNWNN",
        "6": "NWWNN",
        "7": "NNNWW",
        "8": "WNNWN",
        "9": "NWNWN",
    }
)

# ==============================================================================
# CODABAR / CODE 11 / MSI
# ==============================================================================

CODABAR_START_STOP: Final[str] = "ABCD"

_CODABAR_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "101010011",
        "1": "101011001",
        "2": "101001011",
        "3": "110010101",
        "4": "101101001",
        "5": "110101001",
        "6": "100101011",
        "7": "100101101",
        "8": "100110101",
        "9": "110100101",
        "-": "101001101",
        "$": "101100101",
        ":": "1101011011",
        "/": "1101101011",
        ".": "1101101101",
        "+": "1011011011",
        "A": "1011001001",
        "B": "1001001011",
        "C": "1010010011",
        "D": "1010011001",
    }
)

CODE11_START_STOP: Final[str] = "1011001"

_CODE11_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "101011",
        "1": "1101011",
        "2": "1001011",
        "3": "1100101",
        "4": "1011011",
        "5": "1101101",
        "6": "1001101",
        "7": "1010011",
        "8": "1101001",
        "9": "110101",
        "-": "101101",
    }
)

MSI_START: Final[str] = "110"
MSI_STOP: Final[str] = "1001"

_MSI_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        str(d): "".join("110" if bit == "1" else "100" for bit in format(d, "04b"))
        for d in range(10)
    }
)

# ==============================================================================
# POSTAL: POSTNET / FIM
# ==============================================================================

_POSTNET_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "0": "11000",
        "1": "00011",
        "2": "00101",
        "3": "00110",
        "4": "01001",
        "5": "01010",
        "6": "01100",
        "7": "10001",
        "8": "10010",
        "9": "10100",
    }
)

_FIM_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {
        "A": "110010011",
        "B": "101101101",
        "C": "110101011",
        "D": "111010111",
    }
)

# ==============================================================================
# TELEPEN
# ==============================================================================

TELEPEN_START: Final[str] = "_"
TELEPEN_STOP: Final[str] = "z"


def _telepen_pattern(code: int) -> str:
    """
    Modules for one ASCII code: 7 data bits plus even parity, LSB first.

    1 -> narrow bar, narrow space; 00 -> wide bar, narrow space;
    010 -> wide bar, wide space; 0 1..1 0 -> wide bar, narrow space,
    (narrow bar, narrow space)*, narrow bar, wide space. Narrow = 1, wide = 3.
    Zeros come in pairs inside each byte because of the even parity.
    """
    byte = code | (0x80 if bin(code).count("1") % 2 else 0)
    bits = [(byte >> i) & 1 for i in range(8)]
    out: List[str] = []
    i = 0
    while i < 8:
        if bits[i]:
            out.append("10")
            i += 1
            continue
        j = i + 1
        while bits[j]:
            j += 1
        ones = j - i - 1
        if ones == 0:
            out.append("1110")
        elif ones == 1:
            out.append("111000")
        else:
            out.append("1110" + "10" * (ones - 2) + "1000")
        i = j + 1
    return "".join(out)


_TELEPEN_TABLE: Final[Mapping[str, str]] = MappingProxyType(
    {chr(code): _telepen_pattern(code) for code in range(128)}
)

# ==============================================================================
# REGISTRY
# ==============================================================================

_S = SymbologyType

_SYMBOLOGY_TABLES: Final[Mapping[SymbologyType, Mapping]] = MappingProxyType(
    {
        **{
            t: _EAN_TABLE
            for t in (
                _S.UPCA,
                _S.UCC12,
                _S.UPCE,
                _S.EAN13,
                _S.UCC13,
                _S.JAN13,
                _S.BOOKLAND,
                _S.ISBN,
                _S.EAN8,
                _S.UPC_SUPPLEMENTAL_2DIGIT,
                _S.UPC_SUPPLEMENTAL_5DIGIT,
            )
        },
        **{
            t: _CODE39_TABLE
            for t in (_S.CODE39, _S.CODE39_EXTENDED, _S.CODE39_MOD43, _S.LOGMARS)
        },
        _S.CODE93: _CODE93_TABLE,
        **{
            t: _CODE128_TABLE
            for t in (_S.CODE128, _S.CODE128A, _S.CODE128B, _S.CODE128C)
        },
        **{
            t: _TWO_OF_FIVE_TABLE
            for t in (
                _S.INTERLEAVED2OF5,
                _S.INTERLEAVED2OF5_MOD10,
                _S.STANDARD2OF5,
                _S.STANDARD2OF5_MOD10,
                _S.INDUSTRIAL2OF5,
                _S.INDUSTRIAL2OF5_MOD10,
                _S.ITF14,
            )
        },
        _S.CODABAR: _CODABAR_TABLE,
        _S.CODE11: _CODE11_TABLE,
        _S.USD8: _CODE11_TABLE,
        **{
            t: _MSI_TABLE
            for t in (
                _S.MSI_MOD10,
                _S.MSI_2MOD10,
                _S.MSI_MOD11,
                _S.MSI_MOD11_MOD10,
                _S.MODIFIED_PLESSEY,
            )
        },
        _S.POSTNET: _POSTNET_TABLE,
        _S.FIM: _FIM_TABLE,
        _S.TELEPEN: _TELEPEN_TABLE,
    }
)


def has_table(symbology: SymbologyType) -> bool:
    return symbology in _SYMBOLOGY_TABLES


def lookup(symbology: SymbologyType, character: Union[str, int]) -> str:
    """
    Return the bar pattern for `character` in `symbology`.

    Keys are characters, except EAN/UPC ("L0", "G5", "R9": set + digit) and
    Code 128 (int symbol values 0..106).

    Raises:
        PatternNotFound: Unknown symbology table or character. Never falls
            back to a default glyph.
    """
    table = _SYMBOLOGY_TABLES.get(symbology)
    if table is None:
        raise PatternNotFound(symbology, str(character))
    try:
        return table[character]
    except KeyError:
        raise PatternNotFound(symbology, str(character)) from None


def alphabet(symbology: SymbologyType) -> Tuple[Union[str, int], ...]:
    """Keys of the symbology's table (empty for algorithmic symbologies)."""
    table = _SYMBOLOGY_TABLES.get(symbology)
    return tuple(table) if table is not None else ()


# ==============================================================================
# GS1 PREFIXES (country assigning the manufacturer code)
# ==============================================================================

_GS1_PREFIXES: Final[Tuple[Tuple[int, int, str], ...]] = (
    (0, 19, "US / CANADA"),
    (20, 29, "RESTRICTED DISTRIBUTION"),
    (30, 39, "US DRUGS"),
    (40, 49, "RESTRICTED DISTRIBUTION"),
    (50, 59, "COUPONS"),
    (60, 139, "US / CANADA"),
    (200, 299, "RESTRICTED DISTRIBUTION"),
    (300, 379, "FRANCE"),
    (380, 380, "BULGARIA"),
    (383, 383, "SLOVENIA"),
    (385, 385, "CROATIA"),
    (387, 387, "BOSNIA AND HERZEGOVINA"),
    (389, 389, "MONTENEGRO"),
    (400, 440, "GERMANY"),
    (450, 459, "JAPAN"),
    (460, 469, "RUSSIA"),
    (470, 470, "KYRGYZSTAN"),
    (471, 471, "TAIWAN"),
    (474, 474, "ESTONIA"),
    (475, 475, "LATVIA"),
    (476, 476, "AZERBAIJAN"),
    (477, 477, "LITHUANIA"),
    (478, 478, "UZBEKISTAN"),
    (479, 479, "SRI LANKA"),
    (480, 480, "PHILIPPINES"),
    (481, 481, "BELARUS"),
    (482, 482, "UKRAINE"),
    (484, 484, "MOLDOVA"),
    (485, 485, "ARMENIA"),
    (486, 486, "GEORGIA"),
    (487, 487, "KAZAKHSTAN"),
    (489, 489, "HONG KONG"),
    (490, 499, "JAPAN"),
    (500, 509, "UNITED KINGDOM"),
    (520, 521, "GREECE"),
    (528, 528, "LEBANON"),
    (529, 529, "CYPRUS"),
    (530, 530, "ALBANIA"),
    (531, 531, "NORTH MACEDONIA"),
    (535, 535, "MALTA"),
    (539, 539, "IRELAND"),
    (540, 549, "BELGIUM / LUXEMBOURG"),
    (560, 560, "PORTUGAL"),
    (569, 569, "ICELAND"),
    (570, 579, "DENMARK"),
    (590, 590, "POLAND"),
    (594, 594, "ROMANIA"),
    (599, 599, "HUNGARY"),
    (600, 601, "SOUTH AFRICA"),
    (603, 603, "GHANA"),
    (608, 608, "BAHRAIN"),
    (609, 609, "MAURITIUS"),
    (611, 611, "MOROCCO"),
    (613, 613, "ALGERIA"),
    (616, 616, "KENYA"),
    (618, 618, "IVORY COAST"),
    (619, 619, "TUNISIA"),
    (621, 621, "SYRIA"),
    (622, 622, "EGYPT"),
    (624, 624, "LIBYA"),
    (625, 625, "JORDAN"),
    (626, 626, "IRAN"),
    (627, 627, "KUWAIT"),
    (628, 628, "SAUDI ARABIA"),
    (629, 629, "UNITED ARAB EMIRATES"),
    (640, 649, "FINLAND"),
    (690, 699, "CHINA"),
    (700, 709, "NORWAY"),
    (729, 729, "ISRAEL"),
    (730, 739, "SWEDEN"),
    (740, 740, "GUATEMALA"),
    (741, 741, "EL SALVADOR"),
    (742, 742, "HONDURAS"),
    (743, 743, "NICARAGUA"),
    (744, 744, "COSTA RICA"),
    (745, 745, "PANAMA"),
    (746, 746, "DOMINICAN REPUBLIC"),
    (750, 750, "MEXICO"),
    (754, 755, "CANADA"),
    (759, 759, "VENEZUELA"),
    (760, 769, "SWITZERLAND"),
    (770, 771, "COLOMBIA"),
    (773, 773, "URUGUAY"),
    (775, 775, "PERU"),
    (777, 777, "BOLIVIA"),
    (779, 779, "ARGENTINA"),
    (780, 780, "CHILE"),
    (784, 784, "PARAGUAY"),
    (786, 786, "ECUADOR"),
    (789, 790, "BRAZIL"),
    (800, 839, "ITALY"),
    (840, 849, "SPAIN"),
    (850, 850, "CUBA"),
    (858, 858, "SLOVAKIA"),
    (859, 859, "CZECH REPUBLIC"),
    (860, 860, "SERBIA"),
    (865, 865, "MONGOLIA"),
    (867, 867, "NORTH KOREA"),
    (868, 869, "TURKEY"),
    (870, 879, "NETHERLANDS"),
    (880, 880, "SOUTH KOREA"),
    (884, 884, "CAMBODIA"),
    (885, 885, "THAILAND"),
    (888, 888, "SINGAPORE"),
    (890, 890, "INDIA"),
    (893, 893, "VIETNAM"),
    (896, 896, "PAKISTAN"),
    (899, 899, "INDONESIA"),
    (900, 919, "AUSTRIA"),
    (930, 939, "AUSTRALIA"),
    (940, 949, "NEW ZEALAND"),
    (950, 950, "GS1 GLOBAL OFFICE"),
    (955, 955, "MALAYSIA"),
    (958, 958, "MACAU"),
    (977, 977, "SERIAL PUBLICATIONS (ISSN)"),
    (978, 979, "BOOKLAND (ISBN)"),
    (980, 980, "REFUND RECEIPTS"),
    (981, 984, "COMMON CURRENCY COUPONS"),
    (990, 999, "COUPONS"),
)


def country_for_prefix(data: str) -> Optional[str]:
    """Country/region assigning the manufacturer code of a 13-digit GTIN, if known."""
    if len(data) < 3 or not data[:3].isdigit():
        return None
    prefix = int(data[:3])
    for lo, hi, country in _GS1_PREFIXES:
        if lo <= prefix <= hi:
            return country
    logger.debug("No GS1 prefix range for %s", data[:3])
    return None
