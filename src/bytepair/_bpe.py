"""
Core Byte Pair Encoding (BPE) operations.
"""

from collections import Counter

from .types import PairCounts, Token, TokenPair


def count_pairs(tokens: list[Token]) -> PairCounts:
    """
    Count every adjacent token pair in a single pass.

    :param tokens: Token sequence to analyze.
    :return: Mapping of token pairs to their occurrence counts.
    """
    counts: PairCounts = Counter()
    counts.update(zip(tokens, tokens[1:]))
    return counts


def find_max_pair(counts: PairCounts) -> tuple[TokenPair | None, int]:
    """
    Return the most frequent pair and its count.

    Ties between equally frequent pairs go to the lexicographically smallest
    pair so that training is reproducible regardless of dict insertion order.
    Returns ``(None, 0)`` when no pairs are left.
    """
    if not counts:
        return None, 0
    pair, count = min(counts.items(), key=lambda item: (-item[1], item[0]))
    return pair, count


def bpe_merge(tokens: list[Token], target: TokenPair, new_tok: Token) -> list[Token]:
    """
    Merge all occurrences of a target token pair into a single new token.

    The scan runs left to right and consumes two tokens per match, so
    overlapping occurrences such as ``(a, a)`` in ``a a a`` merge only once.

    Note that merged tokens may represent partial UTF-8 sequences. Use
    errors="replace" when decoding them to text.

    :param tokens: Original list of tokens.
    :param target: The consecutive pair of tokens to merge.
    :param new_tok: The new token that replaces the target pair.
    :return: New token list with all target pairs replaced by new_tok.
    """
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        # check if we can form a pair and it matches the target
        if i < n - 1 and tokens[i] == target[0] and tokens[i + 1] == target[1]:
            newtoks.append(new_tok)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


def _decrement(counts: PairCounts, pair: TokenPair) -> None:
    """Decrement a pair count, dropping the pair once it reaches zero."""
    counts[pair] -= 1
    if counts[pair] <= 0:
        del counts[pair]


def bpe_merge_with_freq_update(
    tokens: list[Token],
    target: TokenPair,
    new_tok: Token,
    counts: PairCounts,
) -> list[Token]:
    """
    Merge target pair into new token and incrementally update pair counts.

    Produces exactly the same sequence as :func:`bpe_merge`. For every merge
    site only the pairs touching that site are adjusted: the left neighbour is
    read from the rewritten output and the right neighbour from the original
    input, which keeps back-to-back merge sites consistent (``a b a b`` with
    target ``(a, b)`` ends up with a single ``(X, X)`` pair).

    Work on ``counts`` is O(1) per merge site, so a training run touches the
    counter in proportion to the total number of merge sites rather than
    ``merges * sequence length``.

    Counts that reach zero are deleted, so ``counts`` always holds exactly the
    adjacent pairs of the returned sequence.

    :param tokens: Current token sequence.
    :param target: The pair to merge.
    :param new_tok: The new token ID for the merged pair.
    :param counts: Pair counts of ``tokens``, updated in place.
    :return: New token sequence with merges applied.
    """
    first, second = target
    newtoks: list[Token] = []

    i = 0
    n = len(tokens)
    while i < n:
        if i < n - 1 and tokens[i] == first and tokens[i + 1] == second:
            # left neighbour: (left, first) becomes (left, new_tok)
            if newtoks:
                left = newtoks[-1]
                _decrement(counts, (left, first))
                counts[(left, new_tok)] += 1

            # the merged pair itself disappears
            _decrement(counts, target)

            # right neighbour: (second, right) becomes (new_tok, right)
            if i + 2 < n:
                right = tokens[i + 2]
                _decrement(counts, (second, right))
                counts[(new_tok, right)] += 1

            newtoks.append(new_tok)
            i += 2
        else:
            newtoks.append(tokens[i])
            i += 1

    return newtoks


__all__ = [
    "count_pairs",
    "find_max_pair",
    "bpe_merge",
    "bpe_merge_with_freq_update",
]
