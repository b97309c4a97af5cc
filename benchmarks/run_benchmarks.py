"""Benchmark inserting, enumerating and removing random keys in the trie."""

import argparse
import gc
import json
import random
import time
import tracemalloc
from pathlib import Path

import matplotlib.pyplot as plt
import psutil

from mytrie.config import BenchmarkConfig, load_config_file
from mytrie.loader import load_keys
from mytrie.logger import log, setup_logging
from mytrie.trie import Trie

CONFIG_PATH = Path(__file__).parent / "configs" / "config10000.txt"
RESULTS_DIR = (
    Path(__file__).parent.parent / "static" / "benchmarks" / "trie_results"
)


def generate_string(length: int, charset: str) -> str:
    """Draw `length` distinct symbols from the charset.

    Args:
        length (int): The wanted length, capped at the charset size.
        charset (str): The symbols to draw from.

    Returns:
        str: The generated string.

    """
    return "".join(random.sample(charset, min(length, len(charset))))


def generate_samples(config: BenchmarkConfig) -> list[str]:
    """Generate the keys to benchmark with.

    Args:
        config (BenchmarkConfig): The benchmark settings.

    Returns:
        list[str]: The keys read from the configured data file, or
        `config.count` random strings otherwise.

    """
    if config.data_path is not None:
        return load_keys(config.data_path)

    return [
        generate_string(
            random.randrange(config.min_length, config.max_length),
            config.charset,
        )
        for _ in range(config.count)
    ]


def run_benchmark(samples: list[str]) -> dict[str, float | int]:
    """Time every trie operation over the given samples.

    Args:
        samples (list[str]): The keys to insert, enumerate and remove.

    Raises:
        AssertionError: If the trie does not give back exactly the
        inserted keys, or is not empty after removing them.

    Returns:
        dict[str, float | int]: The timings in milliseconds and the
        memory figures in bytes.

    """
    expected = sorted(set(samples))
    process = psutil.Process()
    rss_before = process.memory_info().rss
    tracemalloc.start()

    begin = time.perf_counter()
    trie = Trie.from_keys(samples)
    insert_ms = (time.perf_counter() - begin) * 1000
    log("insert", len(samples), insert_ms)

    node_count = trie.node_count()
    _, peak_memory = tracemalloc.get_traced_memory()
    tracemalloc.stop()
    rss_after = process.memory_info().rss

    begin = time.perf_counter()
    retrieved = list(trie.iter_keys(""))
    iterate_ms = (time.perf_counter() - begin) * 1000
    log("iter_content", len(retrieved), iterate_ms)

    retrieved.sort()
    assert retrieved == expected, "Enumerated keys differ from inserted keys"

    begin = time.perf_counter()
    for item in expected:
        trie.remove(item)
    remove_ms = (time.perf_counter() - begin) * 1000
    log("remove", len(expected), remove_ms)

    assert trie.is_empty(), "Trie still holds keys after removing all"
    assert trie.node_count() == 1, "Dead nodes were left in the trie"

    return {
        "key_count": len(expected),
        "node_count": node_count,
        "insert_ms": insert_ms,
        "iterate_ms": iterate_ms,
        "remove_ms": remove_ms,
        "peak_traced_memory": peak_memory,
        "rss_growth": rss_after - rss_before,
    }


def plot_results(results: dict[str, float | int], graph_path: Path) -> None:
    """Save a bar chart of the operation timings.

    Args:
        results (dict[str, float | int]): The output of `run_benchmark`.
        graph_path (Path): Where to save the chart.

    """
    operations = ["insert", "iterate", "remove"]
    y_values = [float(results[f"{name}_ms"]) for name in operations]

    try:
        plt.figure(figsize=(8, 5))
        x = range(len(operations))
        plt.bar(x, y_values, color="steelblue")
        plt.xticks(x, operations)
        plt.xlabel("Operation")
        plt.ylabel("Execution Time (ms)")
        plt.title(f"Trie operations over {results['key_count']} keys")

        for i, v in enumerate(y_values):
            plt.text(i, v + 0.01, f"{v:.2f}", ha="center", va="bottom")

        plt.tight_layout()
        plt.savefig(graph_path)
    finally:
        # Cleanup matplotlib resources
        plt.close("all")


def main() -> None:
    """Main function."""
    parser = argparse.ArgumentParser(description="Benchmark the trie.")
    parser.add_argument(
        "--config_path",
        type=str,
        default=str(CONFIG_PATH),
        help="Optional path to the benchmark config file.",
        required=False,
    )
    args = parser.parse_args()

    setup_logging()

    config_path = Path(args.config_path)
    config = load_config_file(config_path)
    print(config)

    samples = generate_samples(config)
    print("\n--- Benchmark Running ---")
    try:
        results = run_benchmark(samples)
    finally:
        # Force garbage collection
        gc.collect()
    print("--- Benchmarking Finished ---\n")

    for name, value in results.items():
        print(f"{name}: {value}")

    results_dir = RESULTS_DIR / config_path.stem
    results_dir.mkdir(parents=True, exist_ok=True)

    if config.plot:
        plot_results(results, results_dir / "benchmark_trie.png")

    with open(results_dir / "results.json", "w", encoding="utf-8") as f:
        json.dump(results, f, indent=4)


if __name__ == "__main__":
    main()
