"""
Append-only vocabulary and merge table storage.
"""

import logging
from collections.abc import Iterator
from typing import NamedTuple

from ._sanitise import render_bytes
from .errors import MergeError, VocabularyError
from .types import BASE_VOCAB_SIZE, Token, TokenBytes, TokenPair

log = logging.getLogger(__name__)


class VocabularyStore:
    """
    Token id to byte sequence mapping.

    Starts with the 256 single-byte tokens and only ever grows: ids are
    assigned densely in creation order and existing entries never change.
    """

    def __init__(self) -> None:
        """Initialize the store with the base 256 byte tokens."""
        # index == token id
        self._entries: list[TokenBytes] = [
            bytes([btok]) for btok in range(BASE_VOCAB_SIZE)
        ]

    def add(self, tok: Token, data: TokenBytes) -> None:
        """
        Insert a new entry.

        :param tok: Token id, must equal the current store size.
        :param data: Byte expansion of the token.
        :raises VocabularyError: If ``tok`` is not the next free id.
        """
        if tok != len(self._entries):
            raise VocabularyError(
                "token id must be the next free id",
                vocab_size=len(self._entries),
                invalid_tok=tok,
            )
        self._entries.append(bytes(data))

    def lookup(self, tok: Token) -> TokenBytes | None:
        """Return the byte expansion of ``tok`` or ``None`` if it was never assigned."""
        if 0 <= tok < len(self._entries):
            return self._entries[tok]
        return None

    def __getitem__(self, tok: Token) -> TokenBytes:
        data = self.lookup(tok)
        if data is None:
            raise KeyError(tok)
        return data

    def __contains__(self, tok: object) -> bool:
        return isinstance(tok, int) and 0 <= tok < len(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def items(self) -> Iterator[tuple[Token, TokenBytes]]:
        """Iterate ``(id, bytes)`` pairs in id order."""
        return iter(enumerate(self._entries))


class Merge(NamedTuple):
    """A learned rule replacing adjacent ``(first, second)`` with ``result``."""

    first: Token
    second: Token
    result: Token

    @property
    def pair(self) -> TokenPair:
        return (self.first, self.second)


class MergeTable:
    """
    Ordered, append-only list of merge rules.

    Rule ``i`` always produces token ``256 + i``; encoding replays the rules
    in this order.
    """

    def __init__(self) -> None:
        self._merges: list[Merge] = []

    def append(self, merge: Merge) -> None:
        """
        Append a rule to the end of the table.

        :raises MergeError: If the result id is not ``256 + len(table)`` or does
            not exceed both operand ids.
        """
        expected = BASE_VOCAB_SIZE + len(self._merges)
        if merge.result != expected:
            raise MergeError(
                f"merge result must be {expected}",
                pair=merge.pair,
                merged_tok=merge.result,
            )
        if merge.first >= merge.result or merge.second >= merge.result:
            raise MergeError(
                "merge operands must precede the merged token",
                pair=merge.pair,
                merged_tok=merge.result,
            )
        self._merges.append(merge)

    def __iter__(self) -> Iterator[Merge]:
        return iter(self._merges)

    def __len__(self) -> int:
        return len(self._merges)

    def __getitem__(self, index: int) -> Merge:
        return self._merges[index]


def describe_merges(merges: MergeTable, vocab: VocabularyStore) -> list[str]:
    """
    Render merge rules as human-readable lines.

    Each line shows the derivation of a merged token from its two children,
    e.g. ``[256] [a][a] -> aa``. Control characters are escaped and partial
    UTF-8 sequences are replaced.
    """
    lines = []
    for merge in merges:
        subword0 = render_bytes(vocab[merge.first])
        subword1 = render_bytes(vocab[merge.second])
        subword = render_bytes(vocab[merge.result])
        lines.append(f"[{merge.result}] [{subword0}][{subword1}] -> {subword}")

    log.debug(f"rendered {len(lines)} merge rules")
    return lines


__all__ = ["VocabularyStore", "Merge", "MergeTable", "describe_merges"]
