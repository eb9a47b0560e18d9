"""
RU: MSI (Modified Plessey) с вариантами контрольных цифр Mod10, 2Mod10, Mod11, Mod11+Mod10.
EN: MSI / Modified Plessey. Each digit is 4 BCD bits, 1 -> 110, 0 -> 100.
"""

from __future__ import annotations

from typing import Callable, ClassVar, List, Optional, Sequence, Tuple

from src.barcodegen.checksums import (
    digits_of,
    msi_2mod10,
    msi_mod10,
    msi_mod11,
    msi_mod11_mod10,
)
from src.barcodegen.errors import EncodingIssue
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import MSI_START, MSI_STOP

__all__ = [
    "ModifiedPlesseyEncoder",
    "MSIMod10Encoder",
    "MSI2Mod10Encoder",
    "MSIMod11Encoder",
    "MSIMod11Mod10Encoder",
]


def _as_text(func: Callable[[Sequence[int]], object]) -> Callable[[str], str]:
    def compute(payload: str) -> str:
        result = func(digits_of(payload))
        if isinstance(result, tuple):
            return "".join(str(d) for d in result)
        return str(result)

    return compute


class ModifiedPlesseyEncoder(SymbologyEncoder):
    """Plain MSI, no check digit."""

    code_prefix = "EMSI"
    compute: ClassVar[Optional[Callable[[str], str]]] = None

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        if not self._require_digits(raw, issues):
            return None
        compute = type(self).compute
        if compute is None:
            return EncodedSymbol(pattern="", data=raw)
        policy = self._policy(opts, issues)
        if policy is None:
            return None
        split: Optional[Tuple[str, str]] = self._apply_policy(raw, compute, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        pattern = (
            MSI_START
            + "".join(self._pattern(d) for d in prepared.data)
            + MSI_STOP
        )
        return EncodedSymbol(pattern=pattern, data=prepared.data, check=prepared.check)


class MSIMod10Encoder(ModifiedPlesseyEncoder):
    code_prefix = "EMSI10"
    compute = staticmethod(_as_text(msi_mod10))


class MSI2Mod10Encoder(ModifiedPlesseyEncoder):
    code_prefix = "EMSI2X10"
    compute = staticmethod(_as_text(msi_2mod10))
    check_lengths = (2,)


class MSIMod11Encoder(ModifiedPlesseyEncoder):
    """Mod 11 check; a check value of 10 is written as two digits."""

    code_prefix = "EMSI11"
    compute = staticmethod(_as_text(msi_mod11))
    check_lengths = (1, 2)


class MSIMod11Mod10Encoder(ModifiedPlesseyEncoder):
    code_prefix = "EMSI11X10"
    compute = staticmethod(_as_text(msi_mod11_mod10))
    check_lengths = (2, 3)
