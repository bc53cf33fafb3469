import unittest

from tokentrie import TokenizerConfig
from workloads import WorkLoad
from workloads.bench import BenchConfig, OPS, run_benchmark, summarize


class TestBenchmark(unittest.TestCase):
    def setUp(self):
        self.keys = WorkLoad(seed=4).namespaces(200)
        self.tok = TokenizerConfig(kind="delimiter", delimiter=".")

    def test_rows_per_op_and_repeat(self):
        df = run_benchmark(self.keys, self.tok, BenchConfig(repeats=2))
        self.assertEqual(len(df), 2 * len(OPS))
        self.assertEqual(set(df["op"]), set(OPS))
        self.assertTrue((df["seconds"] >= 0).all())
        self.assertTrue((df["n"] == len(self.keys)).all())
        self.assertTrue((df["tokenizer"] == "delimiter('.')").all())

    def test_structure_stats_recorded(self):
        df = run_benchmark(self.keys, self.tok, BenchConfig(repeats=1))
        self.assertGreater(df["nodes"].iloc[0], 1)
        self.assertGreater(df["branch_factor"].iloc[0], 0.0)

    def test_summary(self):
        df = run_benchmark(self.keys, self.tok, BenchConfig(repeats=3, prefix_len=2))
        summary = summarize(df)
        self.assertEqual(list(summary["op"]), list(OPS))
        self.assertTrue((summary["p95_us"] >= summary["p50_us"]).all())

    def test_seed_recorded_with_results(self):
        df = run_benchmark(["a.b", "a.c"], self.tok, BenchConfig(repeats=1, seed=42))
        self.assertIn("seed", df.columns)
        self.assertTrue((df["seed"] == 42).all())

    def test_invalid_inputs(self):
        with self.assertRaises(ValueError):
            run_benchmark([], self.tok)
        with self.assertRaises(ValueError):
            BenchConfig(repeats=0)
        with self.assertRaises(ValueError):
            BenchConfig(prefix_len=0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
