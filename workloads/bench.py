"""
Timed passes over a TokenTrie: add, exists, prefix enumeration, remove.

Each pass is run `repeats` times on a fresh trie built from the same keys.
Results come back as a tidy `pandas.DataFrame` (one row per op per repeat)
so the dashboard can chart them directly; `summarize` reduces that to
mean / p50 / p95 per op with numpy.
"""

import time
from dataclasses import dataclass
from typing import Optional

import numpy as np
import pandas as pd

from tokentrie import TokenTrie, TokenizerConfig
from tokentrie.log import get_logger

logger = get_logger("tokentrie.bench")

OPS = ("add", "exists", "prefix", "remove")


@dataclass
class BenchConfig:
    """
    Configuration for run_benchmark
        repeats: int, number of fresh-trie passes
        prefix_len: int, tokens kept from each key to form prefix queries
        seed: int, seed recorded with results (workloads are seeded by the caller)
    """
    repeats: int = 3
    prefix_len: int = 1
    seed: Optional[int] = None

    def __post_init__(self):
        if self.repeats < 1:
            raise ValueError("repeats must be at least 1")
        if self.prefix_len < 1:
            raise ValueError("prefix_len must be at least 1")


def _prefixes(trie, keys, prefix_len):
  tok = trie.tokenizer
  return [tok.detokenize(tok.tokenize(k)[:prefix_len]) for k in keys]


def _timed(fn, items):
  start = time.perf_counter()
  for item in items:
    fn(item)
  return time.perf_counter() - start


def run_benchmark(keys, tokenizer_config: TokenizerConfig, config: Optional[BenchConfig] = None):
  """Time every op over `keys`; returns a DataFrame with columns
  op, repeat, n, seconds, us_per_op, nodes, branch_factor, tokenizer, seed."""
  config = config or BenchConfig()
  keys = list(keys)
  if not keys:
    raise ValueError("keys must not be empty")

  rows = []
  for rep in range(config.repeats):
    trie = TokenTrie.from_config(tokenizer_config)
    prefixes = _prefixes(trie, keys, config.prefix_len)

    timings = {
        "add": _timed(trie.add, keys),
    }
    nodes = trie.count_nodes()
    branch = trie.count_nodes(get_avg_branch_factor=True)
    timings["exists"] = _timed(trie.exists, keys)
    timings["prefix"] = _timed(trie.get_keys_under_prefix, prefixes)
    timings["remove"] = _timed(trie.remove, keys)

    for op in OPS:
      rows.append({
          "op": op,
          "repeat": rep,
          "n": len(keys),
          "seconds": timings[op],
          "us_per_op": timings[op] / len(keys) * 1e6,
          "nodes": nodes,
          "branch_factor": branch,
      })
    logger.debug("repeat %d done: %d nodes, add %.4fs", rep, nodes, timings["add"])

  df = pd.DataFrame(rows)
  df["tokenizer"] = tokenizer_config.label()
  df["seed"] = config.seed
  return df


def summarize(df):
  """Mean / p50 / p95 of us_per_op per op."""
  out = []
  for op, grp in df.groupby("op", sort=False):
    vals = grp["us_per_op"].to_numpy()
    out.append({
        "op": op,
        "mean_us": float(np.mean(vals)),
        "p50_us": float(np.percentile(vals, 50)),
        "p95_us": float(np.percentile(vals, 95)),
    })
  return pd.DataFrame(out)
