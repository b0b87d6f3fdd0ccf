"""
Core types for byte-level BPE.
"""

from collections import Counter
from typing import Final

type Token = int
type TokenBytes = bytes
type TokenPair = tuple[Token, Token]
type PairCounts = Counter[TokenPair]

# ids 0-255 are the raw byte tokens
BASE_VOCAB_SIZE: Final[int] = 256
