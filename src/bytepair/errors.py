"""Custom exception hierarchy for bytepair errors."""

from .types import Token


class BytePairError(Exception):
    """Base exception for all bytepair errors."""


class VocabularyError(BytePairError):
    """Raised when vocabulary operations fail."""

    def __init__(
        self,
        message: str,
        *,
        vocab_size: int | None = None,
        invalid_tok: Token | None = None,
    ) -> None:
        """Initialize with optional token and vocab_size that get appended to the message."""
        extra = " "
        if vocab_size is not None:
            extra += f"(vocab size: {vocab_size}) "
        if invalid_tok is not None:
            extra += f"(invalid token: {invalid_tok}) "
        super().__init__(message + extra.rstrip())
        self.vocab_size = vocab_size
        self.invalid_tok = invalid_tok


class InvalidTargetError(VocabularyError):
    """Raised when training is asked for a vocab size that leaves no room for merges."""

    def __init__(self, message: str, *, vocab_size: int) -> None:
        super().__init__(message, vocab_size=vocab_size)


class MergeError(BytePairError):
    """Raised when a merge rule breaks the ordering of the merge table."""

    def __init__(
        self,
        message: str,
        *,
        pair: tuple[Token, Token] | None = None,
        merged_tok: Token | None = None,
    ) -> None:
        extra = " "
        if pair is not None:
            extra += f"(pair: {pair}) "
        if merged_tok is not None:
            extra += f"(merged token: {merged_tok}) "
        super().__init__(message + extra.rstrip())
        self.pair = pair
        self.merged_tok = merged_tok
