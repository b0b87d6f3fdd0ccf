"""Incremental pair-frequency state for BPE training."""

from dataclasses import dataclass
import logging

from ._bpe import bpe_merge_with_freq_update, count_pairs, find_max_pair
from .types import PairCounts, Token, TokenPair

log = logging.getLogger(__name__)


@dataclass
class TrainingResult:
    """Summary of one training run."""

    n_merges_requested: int
    n_merges_completed: int
    n_tokens_before: int
    n_tokens_after: int

    @property
    def exhausted(self) -> bool:
        """``True`` if training ran out of pairs before reaching the target."""
        return self.n_merges_completed < self.n_merges_requested


class PairFrequencyEngine:
    """
    Token sequence plus the counts of its adjacent pairs.

    One engine is created per training run and owns both values exclusively.
    Pairs are counted once on construction; afterwards every :meth:`merge`
    rewrites the sequence and adjusts only the counts around merge sites.

    Example:
       >>> engine = PairFrequencyEngine(list(b"aaabdaaabac"))
       >>> engine.most_frequent()
       ((97, 97), 4)
       >>> engine.merge((97, 97), 256)
       >>> len(engine.tokens)
       9
    """

    def __init__(self, tokens: list[Token]) -> None:
        self._tokens: list[Token] = list(tokens)
        self._counts: PairCounts = count_pairs(self._tokens)
        log.debug(
            f"counted {len(self._counts)} distinct pairs over {len(self._tokens)} tokens"
        )

    @property
    def tokens(self) -> list[Token]:
        """Current token sequence (a copy)."""
        return list(self._tokens)

    @property
    def counts(self) -> dict[TokenPair, int]:
        """Current pair counts (a copy)."""
        return dict(self._counts)

    def __len__(self) -> int:
        return len(self._tokens)

    def most_frequent(self) -> tuple[TokenPair | None, int]:
        """Return the most frequent pair and its count, ``(None, 0)`` if none remain."""
        return find_max_pair(self._counts)

    def merge(self, pair: TokenPair, new_tok: Token) -> None:
        """Replace every occurrence of ``pair`` with ``new_tok`` and update counts."""
        self._tokens = bpe_merge_with_freq_update(
            self._tokens, pair, new_tok, self._counts
        )


__all__ = ["PairFrequencyEngine", "TrainingResult"]
