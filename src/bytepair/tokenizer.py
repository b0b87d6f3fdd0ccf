"""
Byte-level BPE tokenizer.
"""

import logging

from tqdm import tqdm

from . import _progress
from ._bpe import bpe_merge
from ._decorators import measure_time
from ._sanitise import render_bytes
from .errors import InvalidTargetError
from .trainer import PairFrequencyEngine, TrainingResult
from .types import BASE_VOCAB_SIZE, Token
from .vocab import Merge, MergeTable, VocabularyStore, describe_merges

log = logging.getLogger(__name__)


def _to_tokens(data: bytes | bytearray | memoryview | str) -> list[Token]:
    """Convert raw input into the base byte tokens [0-255]."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    return list(bytes(data))


class Tokenizer:
    """
    Tokenizer that learns byte pair merges directly on byte sequences.

    Holds the vocabulary (token id -> bytes), the ordered merge table and the
    current vocabulary size. Only :meth:`train` mutates a tokenizer; encode and
    decode are read-only and may run concurrently with each other once
    training has finished.
    """

    def __init__(self) -> None:
        """Initialize tokenizer with base 256 vocabulary."""
        # tokens -> bytes
        self.vocab = VocabularyStore()
        # learned merges in learn order; replayed in the same order
        self.merges = MergeTable()
        self.vocab_size: int = BASE_VOCAB_SIZE

    @measure_time
    def train(
        self,
        data: bytes | str,
        vocab_size: int,
        verbose: bool = False,
        show_progress: bool = True,
    ) -> TrainingResult:
        """
        Learn byte pair merges until the vocabulary reaches ``vocab_size``.

        Pairs are counted once up front and then maintained incrementally as
        each merge is applied. Training stops early, without error, once the
        sequence has no adjacent pairs left.

        A second call continues from the current vocabulary: the input is first
        encoded with the merges already learned, so new merges build on top of
        them and are appended after the existing ones.

        :param data: Training bytes. Strings are encoded as UTF-8.
        :param vocab_size: Target vocabulary size including the base 256 bytes.
        :param verbose: Log each learned merge when ``True``.
        :param show_progress: Display a progress bar when ``True``.
        :returns: Summary of the run.
        :raises InvalidTargetError: If ``vocab_size`` is less than or equal to 256.
        """
        if vocab_size <= BASE_VOCAB_SIZE:
            raise InvalidTargetError(
                "vocab size must be greater than 256", vocab_size=vocab_size
            )

        raw = _to_tokens(data)
        # start from the current merges so earlier rules are not learned again
        tokens = self._apply_merges(raw)
        n_merges = max(0, vocab_size - self.vocab_size)
        engine = PairFrequencyEngine(tokens)

        completed = 0
        with tqdm(
            total=n_merges,
            desc="training",
            unit="merge",
            disable=not (show_progress and _progress.is_enabled()),
        ) as pbar:
            while self.vocab_size < vocab_size:
                pair, count = engine.most_frequent()
                # 1. sequence compressed to a single token
                # 2. input too short to supply enough pairs
                if count == 0:
                    break

                new_tok = self.vocab_size
                self.vocab.add(new_tok, self.vocab[pair[0]] + self.vocab[pair[1]])
                self.merges.append(Merge(pair[0], pair[1], new_tok))
                engine.merge(pair, new_tok)
                self.vocab_size += 1
                completed += 1
                pbar.update(1)

                if verbose:
                    log.info(
                        f"merge {completed}/{n_merges}: {pair} -> {new_tok} "
                        f"({render_bytes(self.vocab[new_tok])}) had {count} occurrences"
                    )

        if completed < n_merges:
            log.warning(
                f"no more byte pairs to merge after {completed} merges "
                f"(requested {n_merges}) stopping early"
            )

        log.debug(f"compressed {len(raw)} bytes to {len(engine)} tokens")
        return TrainingResult(
            n_merges_requested=n_merges,
            n_merges_completed=completed,
            n_tokens_before=len(raw),
            n_tokens_after=len(engine),
        )

    def encode(self, data: bytes | str) -> list[Token]:
        """
        Encode bytes into tokens by replaying every merge in learn order.

        :param data: Input bytes. Strings are encoded as UTF-8.
        :returns: Encoded token sequence.
        """
        return self._apply_merges(_to_tokens(data))

    def _apply_merges(self, tokens: list[Token]) -> list[Token]:
        """Replay the merge table over byte tokens."""
        for merge in self.merges:
            # nothing left to merge
            if len(tokens) < 2:
                break
            tokens = bpe_merge(tokens, merge.pair, merge.result)
        return tokens

    def decode(self, tokens: list[Token]) -> bytes:
        """
        Decode tokens back into bytes.

        Ids that are not in the vocabulary are skipped silently.

        :param tokens: Token sequence to decode.
        :returns: Concatenated byte expansions in input order.
        """
        parts = []
        for tok in tokens:
            data = self.vocab.lookup(tok)
            if data is not None:
                parts.append(data)
        return b"".join(parts)

    def decode_text(self, tokens: list[Token], errors: str = "replace") -> str:
        """
        Decode tokens into UTF-8 text.

        :param errors: How to handle invalid UTF-8, as in ``bytes.decode``.
        """
        return self.decode(tokens).decode("utf-8", errors=errors)

    def describe_merges(self) -> list[str]:
        """Return one human-readable line per learned merge."""
        return describe_merges(self.merges, self.vocab)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}"
            f"(vocab_size={self.vocab_size}, merges={len(self.merges)})"
        )
