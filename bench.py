"""Benchmark bytepair training, encoding and decoding.

Outputs one Markdown table row per (corpus size, vocab size) case:
  Corpus Size | Vocab Size | Training Time | Merges | Encoding Throughput |
  Decoding Throughput | Compression Ratio
"""

import argparse
import logging
import time

from datasets import load_dataset

import bytepair as bp

PATTERNS = [
    "the quick brown fox jumps over the lazy dog ",
    "hello world this is a test ",
    "byte pair encoding is used for tokenization ",
    "machine learning models need tokenizers ",
]

# (corpus bytes, target vocab size)
CASES = [
    (1024, 300),
    (10 * 1024, 300),
    (10 * 1024, 500),
    (100 * 1024, 500),
    (100 * 1024, 1000),
]


def make_text(size: int) -> bytes:
    """Build deterministic patterned text of exactly `size` bytes."""
    seed = "".join(PATTERNS).encode("utf-8")
    repeat = size // len(seed) + 1
    return (seed * repeat)[:size]


def load_corpus(dataset: str, num_docs: int) -> bytes:
    """Load `num_docs` documents from a Hugging Face dataset as one byte string."""
    print(f"Loading {dataset} (non-streaming) …")
    ds = load_dataset(dataset, split="train")
    return "".join(ds[:num_docs]["text"]).encode("utf-8")


def run_case(text: bytes, vocab_size: int, repeats: int) -> str:
    """Train once, then time encode/decode and format a table row."""
    tok = bp.create()
    t0 = time.perf_counter()
    result = tok.train(text, vocab_size, show_progress=False)
    train_secs = time.perf_counter() - t0

    t0 = time.perf_counter()
    for _ in range(repeats):
        tokens = tok.encode(text)
    encode_secs = (time.perf_counter() - t0) / repeats

    t0 = time.perf_counter()
    for _ in range(repeats):
        decoded = tok.decode(tokens)
    decode_secs = (time.perf_counter() - t0) / repeats

    if decoded != text:
        raise RuntimeError("round trip failed: decoded bytes differ from input")

    encode_mbps = len(text) / max(encode_secs, 1e-9) / (1024 * 1024)
    decode_mtps = len(tokens) / max(decode_secs, 1e-9) / 1_000_000
    ratio = len(text) / max(len(tokens), 1)

    return (
        f"| {f'{len(text) / 1024:.1f} KB':12} | {vocab_size:10,} "
        f"| {f'{train_secs:.3f} secs':14} | {result.n_merges_completed:6} "
        f"| {f'{encode_mbps:.2f} MB/sec':19} | {f'{decode_mtps:.1f}M tokens/sec':19} "
        f"| {f'{ratio:.2f}x':17} |"
    )


def main() -> None:
    """Run the benchmark cases and print a Markdown table."""
    parser = argparse.ArgumentParser(description="Benchmark bytepair training and encoding.")
    parser.add_argument(
        "--dataset",
        type=str,
        default=None,
        help="Optional Hugging Face dataset with a 'text' column (default: generated text).",
    )
    parser.add_argument(
        "--num-docs",
        type=int,
        default=100,
        help="Number of dataset documents to load when --dataset is set (default: 100).",
    )
    parser.add_argument(
        "--repeats",
        type=int,
        default=5,
        help="Encode/decode repetitions per case (default: 5).",
    )
    parser.add_argument("--verbose", action="store_true", help="Log training details.")
    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%H:%M:%S",
    )

    if args.dataset:
        corpus = load_corpus(args.dataset, args.num_docs)
        if not corpus:
            raise RuntimeError("No documents loaded from dataset.")
        texts = {size: corpus[:size] for size, _ in CASES}
    else:
        texts = {size: make_text(size) for size, _ in CASES}

    header = (
        f"| {'Corpus Size':12} | {'Vocab Size':10} | {'Training Time':14} | {'Merges':6} "
        f"| {'Encoding Throughput':19} | {'Decoding Throughput':19} "
        f"| {'Compression Ratio':17} |"
    )
    sep = (
        f"| {'-' * 12} | {'-' * 10} | {'-' * 14} | {'-' * 6} "
        f"| {'-' * 19} | {'-' * 19} | {'-' * 17} |"
    )
    print()
    print(header)
    print(sep)
    for size, vocab_size in CASES:
        print(run_case(texts[size], vocab_size, args.repeats))
    print()


if __name__ == "__main__":
    main()
