"""
RU: Почтовые символогии USPS: PostNet (модуляция высоты) и FIM (Facing Identification Mark).
EN: USPS PostNet and FIM encoders.

PostNet tokens are bar heights: every token is one bar, '1' tall and '0'
short. FIM tokens are bar positions: '1' is a bar, '0' an empty position.
"""

from __future__ import annotations

from typing import List, Optional

from src.barcodegen.checksums import digits_of, postnet_mod10
from src.barcodegen.errors import EncodingIssue
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.model.enums import CheckDigitPolicy

__all__ = ["PostNetEncoder", "FIMEncoder"]

POSTNET_FRAME = "1"
POSTNET_LENGTHS = (5, 9, 11)  # ZIP, ZIP+4, ZIP+4+delivery point


def _postnet_check(payload: str) -> str:
    return str(postnet_mod10(digits_of(payload)))


class PostNetEncoder(SymbologyEncoder):
    code_prefix = "EPOSTNET"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        data = raw.replace("-", "").replace(" ", "")
        if not self._require_digits(data, issues) or policy is None:
            return None
        lengths = POSTNET_LENGTHS
        if policy is not CheckDigitPolicy.APPEND:
            lengths = tuple(n + 1 for n in POSTNET_LENGTHS)
        if not self._require_length(data, lengths, issues):
            return None
        split = self._apply_policy(data, _postnet_check, policy, issues)
        if split is None:
            return None
        payload, check = split
        return EncodedSymbol(pattern="", data=payload + check, check=check)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        pattern = (
            POSTNET_FRAME
            + "".join(self._pattern(d) for d in prepared.data)
            + POSTNET_FRAME
        )
        return EncodedSymbol(
            pattern=pattern,
            data=prepared.data,
            check=prepared.check,
            height_modulated=True,
        )


class FIMEncoder(SymbologyEncoder):
    code_prefix = "EFIM"

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        data = raw.strip().upper()
        if not self._require_length(data, (1,), issues):
            return None
        if not self._require_alphabet(data, "ABCD", issues, "FIM A-D"):
            return None
        return EncodedSymbol(pattern="", data=data)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        pattern = "0".join(self._pattern(prepared.data))
        return EncodedSymbol(pattern=pattern, data=prepared.data)
