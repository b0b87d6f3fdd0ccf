"""bytepair: byte-level Byte Pair Encoding."""

from importlib.metadata import PackageNotFoundError, version

from ._progress import disable_progress, enable_progress
from .errors import BytePairError, InvalidTargetError, MergeError, VocabularyError
from .tokenizer import Tokenizer
from .trainer import PairFrequencyEngine, TrainingResult
from .types import BASE_VOCAB_SIZE, Token
from .vocab import Merge, MergeTable, VocabularyStore

try:
    __version__ = version("bytepair")
except PackageNotFoundError:
    __version__ = "dev"


def create() -> Tokenizer:
    """Return a fresh tokenizer holding only the 256 byte tokens."""
    return Tokenizer()


def train(
    tokenizer: Tokenizer, data: bytes | str, target_vocab_size: int, **kwargs
) -> TrainingResult:
    """
    Train ``tokenizer`` in place up to ``target_vocab_size``.

    Extra keyword arguments are forwarded to :meth:`Tokenizer.train`.

    :raises InvalidTargetError: If ``target_vocab_size`` is less than or equal to 256.
    """
    return tokenizer.train(data, target_vocab_size, **kwargs)


def encode(tokenizer: Tokenizer, data: bytes | str) -> list[Token]:
    """Encode bytes into token ids."""
    return tokenizer.encode(data)


def decode(tokenizer: Tokenizer, tokens: list[Token]) -> bytes:
    """Decode token ids into bytes, dropping unknown ids."""
    return tokenizer.decode(tokens)


__all__ = [
    "BASE_VOCAB_SIZE",
    "Tokenizer",
    "VocabularyStore",
    "Merge",
    "MergeTable",
    "PairFrequencyEngine",
    "TrainingResult",
    "BytePairError",
    "VocabularyError",
    "InvalidTargetError",
    "MergeError",
    "create",
    "train",
    "encode",
    "decode",
    "enable_progress",
    "disable_progress",
]
