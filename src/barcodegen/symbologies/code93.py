"""
RU: Code 93 с полным ASCII через символы сдвига и двумя контрольными символами C/K.
EN: Code 93, full ASCII. Pattern: '*', data tokens, C, K, '*', termination bar.
"""

from __future__ import annotations

import logging
from typing import ClassVar, FrozenSet, List, Optional, Tuple

from src.barcodegen.checksums import CODE93_C_WEIGHT, CODE93_K_WEIGHT, code93_mod47
from src.barcodegen.errors import EncodingIssue
from src.barcodegen.symbologies.base import EncodedSymbol, SymbologyEncoder
from src.barcodegen.tables import CODE93_FULL_ASCII, CODE93_TOKENS
from src.model.enums import CheckDigitPolicy

logger = logging.getLogger(__name__)

__all__ = ["Code93Encoder", "code93_tokens", "code93_checks"]

_TERMINATION_BAR = "1"


def code93_tokens(text: str) -> List[str]:
    """Split the full-ASCII expansion of `text` into table tokens ("A", "($)", ...)."""
    expanded = "".join(CODE93_FULL_ASCII[ord(c)] for c in text)
    tokens: List[str] = []
    i = 0
    while i < len(expanded):
        # '(' is not a native character, so it always opens a shift token.
        if expanded[i] == "(":
            tokens.append(expanded[i : i + 3])
            i += 3
        else:
            tokens.append(expanded[i])
            i += 1
    return tokens


def code93_checks(tokens: List[str]) -> Tuple[str, str]:
    values = [CODE93_TOKENS.index(t) for t in tokens]
    c = code93_mod47(values, CODE93_C_WEIGHT)
    k = code93_mod47([*values, c], CODE93_K_WEIGHT)
    return CODE93_TOKENS[c], CODE93_TOKENS[k]


class Code93Encoder(SymbologyEncoder):
    code_prefix = "EC93"
    supported_policies: ClassVar[FrozenSet[CheckDigitPolicy]] = frozenset(
        {CheckDigitPolicy.APPEND}
    )

    def _prepare(
        self, raw: str, opts: dict, issues: List[EncodingIssue]
    ) -> Optional[EncodedSymbol]:
        if not self._require_text(raw, issues):
            return None
        policy = self._policy(opts, issues)
        if not self._require_ascii(raw, issues) or policy is None:
            return None
        return EncodedSymbol(pattern="", data=raw)

    def _render(self, prepared: EncodedSymbol, opts: dict) -> EncodedSymbol:
        tokens = code93_tokens(prepared.data)
        c, k = code93_checks(tokens)
        pattern = (
            "".join(self._pattern(t) for t in ["*", *tokens, c, k, "*"])
            + _TERMINATION_BAR
        )
        return EncodedSymbol(pattern=pattern, data=prepared.data, check=c + k)
