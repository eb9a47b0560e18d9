"""
RU: Таблица диспетчеризации SymbologyType -> кодировщик (один общий экземпляр на символогию).
EN: Closed dispatch mapping. UNSPECIFIED has no encoder on purpose.
"""

from __future__ import annotations

from types import MappingProxyType
from typing import Dict, Mapping, Optional, Type

from src.barcodegen.symbologies.base import (
    EncodedSymbol,
    EncodeOptions,
    SymbologyEncoder,
)
from src.barcodegen.symbologies.codabar import CodabarEncoder
from src.barcodegen.symbologies.code11 import Code11Encoder
from src.barcodegen.symbologies.code39 import (
    Code39Encoder,
    Code39ExtendedEncoder,
    Code39Mod43Encoder,
)
from src.barcodegen.symbologies.code93 import Code93Encoder
from src.barcodegen.symbologies.code128 import (
    Code128AEncoder,
    Code128BEncoder,
    Code128CEncoder,
    Code128Encoder,
)
from src.barcodegen.symbologies.msi import (
    ModifiedPlesseyEncoder,
    MSI2Mod10Encoder,
    MSIMod10Encoder,
    MSIMod11Encoder,
    MSIMod11Mod10Encoder,
)
from src.barcodegen.symbologies.pharmacode import PharmacodeEncoder
from src.barcodegen.symbologies.postal import FIMEncoder, PostNetEncoder
from src.barcodegen.symbologies.telepen import TelepenEncoder
from src.barcodegen.symbologies.two_of_five import (
    Industrial2of5Encoder,
    Industrial2of5Mod10Encoder,
    Interleaved2of5Encoder,
    Interleaved2of5Mod10Encoder,
    ITF14Encoder,
    Standard2of5Encoder,
    Standard2of5Mod10Encoder,
)
from src.barcodegen.symbologies.upc_ean import (
    BooklandEncoder,
    EAN8Encoder,
    EAN13Encoder,
    JAN13Encoder,
    UPCAddOn2Encoder,
    UPCAddOn5Encoder,
    UPCAEncoder,
    UPCEEncoder,
)
from src.model.enums import SymbologyType

__all__ = [
    "ENCODERS",
    "EncodedSymbol",
    "EncodeOptions",
    "SymbologyEncoder",
    "get_encoder",
]

_S = SymbologyType

_ENCODER_CLASSES: Dict[SymbologyType, Type[SymbologyEncoder]] = {
    _S.UPCA: UPCAEncoder,
    _S.UCC12: UPCAEncoder,
    _S.UPCE: UPCEEncoder,
    _S.UPC_SUPPLEMENTAL_2DIGIT: UPCAddOn2Encoder,
    _S.UPC_SUPPLEMENTAL_5DIGIT: UPCAddOn5Encoder,
    _S.EAN13: EAN13Encoder,
    _S.UCC13: EAN13Encoder,
    _S.JAN13: JAN13Encoder,
    _S.BOOKLAND: BooklandEncoder,
    _S.ISBN: BooklandEncoder,
    _S.EAN8: EAN8Encoder,
    _S.INTERLEAVED2OF5: Interleaved2of5Encoder,
    _S.INTERLEAVED2OF5_MOD10: Interleaved2of5Mod10Encoder,
    _S.ITF14: ITF14Encoder,
    _S.STANDARD2OF5: Standard2of5Encoder,
    _S.STANDARD2OF5_MOD10: Standard2of5Mod10Encoder,
    _S.INDUSTRIAL2OF5: Industrial2of5Encoder,
    _S.INDUSTRIAL2OF5_MOD10: Industrial2of5Mod10Encoder,
    _S.CODE39: Code39Encoder,
    _S.LOGMARS: Code39Encoder,
    _S.CODE39_MOD43: Code39Mod43Encoder,
    _S.CODE39_EXTENDED: Code39ExtendedEncoder,
    _S.CODE93: Code93Encoder,
    _S.CODE128: Code128Encoder,
    _S.CODE128A: Code128AEncoder,
    _S.CODE128B: Code128BEncoder,
    _S.CODE128C: Code128CEncoder,
    _S.CODABAR: CodabarEncoder,
    _S.MSI_MOD10: MSIMod10Encoder,
    _S.MSI_2MOD10: MSI2Mod10Encoder,
    _S.MSI_MOD11: MSIMod11Encoder,
    _S.MSI_MOD11_MOD10: MSIMod11Mod10Encoder,
    _S.MODIFIED_PLESSEY: ModifiedPlesseyEncoder,
    _S.CODE11: Code11Encoder,
    _S.USD8: Code11Encoder,
    _S.POSTNET: PostNetEncoder,
    _S.FIM: FIMEncoder,
    _S.PHARMACODE: PharmacodeEncoder,
    _S.TELEPEN: TelepenEncoder,
}

ENCODERS: Mapping[SymbologyType, SymbologyEncoder] = MappingProxyType(
    {t: cls(t) for t, cls in _ENCODER_CLASSES.items()}
)


def get_encoder(symbology: object) -> Optional[SymbologyEncoder]:
    """Shared encoder for `symbology`, or None for UNSPECIFIED and unknown tags."""
    if not isinstance(symbology, SymbologyType):
        return None
    return ENCODERS.get(symbology)
