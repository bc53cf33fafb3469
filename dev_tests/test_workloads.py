import ipaddress
import unittest
from collections import Counter
from urllib.parse import urlparse

from tokentrie import TokenTrie
from workloads import WorkLoad, WORKLOAD_TOKENIZERS
from workloads.word_generator import WORDS, generate_random_words, gen_words_with_prefix_freq
from workloads.url_generator import generate_routes, generate_urls
from workloads.ip_generator import IPGenerator, IPConfig
from workloads.namespace_generator import NamespaceGenerator, NamespaceConfig


# ---------- Helpers for prefix clustering metrics ----------
def two_prefix(w: str) -> str:
    return w[:2] if len(w) >= 2 else w


def avg_run_length(words):
    """Average run-length of consecutive identical 2-char prefixes."""
    if not words:
        return 0.0
    prev = two_prefix(words[0])
    run = 1
    runs = []
    for w in words[1:]:
        p = two_prefix(w)
        if p == prev:
            run += 1
        else:
            runs.append(run)
            run = 1
            prev = p
    runs.append(run)
    return sum(runs) / len(runs)


def prefix_hhi(words):
    """Herfindahl-Hirschman index over 2-char prefixes; higher => more concentrated."""
    n = len(words)
    if n == 0:
        return 0.0
    counts = Counter(two_prefix(w) for w in words)
    return sum((c / n) ** 2 for c in counts.values())


class TestGenerateRandomWords(unittest.TestCase):
    def test_length_and_types_nonunique(self):
        words = generate_random_words(2_000, seed=123, unique=False)
        self.assertEqual(len(words), 2_000)
        self.assertTrue(all(isinstance(w, str) and w.isalpha() for w in words))

    def test_reproducibility(self):
        a = generate_random_words(500, seed=999)
        b = generate_random_words(500, seed=999)
        c = generate_random_words(500, seed=1000)
        self.assertEqual(a, b)
        self.assertNotEqual(a, c)

    def test_uniqueness(self):
        n = min(200, len(WORDS))
        words = generate_random_words(n, seed=42, unique=True)
        self.assertEqual(len(set(words)), n)

    def test_unique_overflow_raises(self):
        with self.assertRaises(ValueError):
            generate_random_words(len(WORDS) + 1, seed=1, unique=True)


class TestPrefixFrequencyGenerator(unittest.TestCase):
    def test_prefix_clustering_effectiveness(self):
        low = gen_words_with_prefix_freq(5_000, prefix_freq=0.0, seed=123)
        high = gen_words_with_prefix_freq(5_000, prefix_freq=0.8, seed=123)
        self.assertEqual(len(low), 5_000)
        self.assertEqual(len(high), 5_000)
        self.assertGreater(avg_run_length(high), max(avg_run_length(low) * 3.0, 3.0))
        self.assertGreater(prefix_hhi(high), 0.0)

    def test_unique_mode_no_duplicates(self):
        words = gen_words_with_prefix_freq(300, prefix_freq=0.8, seed=9, unique=True)
        self.assertEqual(len(words), 300)
        self.assertEqual(len(set(words)), 300)

    def test_unique_prefix_overflow_raises(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(len(WORDS), prefix_freq=0.5, seed=1, unique=True)

    def test_workload_passes_unique_through(self):
        words = WorkLoad(seed=1).words(200, p_freq=0.8, unique=True)
        self.assertEqual(len(words), 200)
        self.assertEqual(len(set(words)), 200)

    def test_invalid_args_raise(self):
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(0, prefix_freq=0.3, seed=1)
        with self.assertRaises(ValueError):
            gen_words_with_prefix_freq(10, prefix_freq=1.5, seed=1)


class TestRoutes(unittest.TestCase):
    def test_routes_shape(self):
        routes = generate_routes(500, seed=5)
        self.assertEqual(len(routes), 500)
        for r in routes:
            self.assertTrue(r.startswith("/"))
            self.assertNotIn("//", r)

    def test_routes_share_prefixes(self):
        routes = generate_routes(500, seed=5, vocab_size=5, slug_p=0.0)
        first = Counter(r.split("/")[1].split(".")[0] for r in routes)
        self.assertLessEqual(len(first), 5)

    def test_routes_reproducible(self):
        self.assertEqual(generate_routes(50, seed=3), generate_routes(50, seed=3))

    def test_invalid_args(self):
        with self.assertRaises(ValueError):
            generate_routes(0)
        with self.assertRaises(ValueError):
            generate_routes(10, vocab_size=0)

    def test_urls_parse(self):
        for u in generate_urls(100, seed=11):
            pu = urlparse(u)
            self.assertIn(pu.scheme, {"http", "https"})
            self.assertTrue(pu.hostname)
            self.assertTrue(pu.path.startswith("/"))


class TestIPs(unittest.TestCase):
    def test_valid_ipv4(self):
        for ip in IPGenerator(IPConfig(seed=1)).batch(300):
            ipaddress.IPv4Address(ip)

    def test_subnet_share_clusters(self):
        ips = IPGenerator(IPConfig(seed=2, subnet_share=1.0, num_subnets=2)).batch(200)
        subnets = {ip.rsplit(".", 1)[0] for ip in ips}
        self.assertLessEqual(len(subnets), 2)

    def test_private_only(self):
        ips = IPGenerator(IPConfig(seed=3, public_share=0.0)).batch(100)
        self.assertTrue(all(ipaddress.IPv4Address(ip).is_private for ip in ips))

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            IPConfig(private_weights={"a": 1.0})
        with self.assertRaises(ValueError):
            IPConfig(private_weights={"a": 0, "b": 0, "c": 0})
        with self.assertRaises(ValueError):
            IPConfig(subnet_share=2.0)
        with self.assertRaises(ValueError):
            IPGenerator(IPConfig(seed=1)).batch(0)


class TestNamespaces(unittest.TestCase):
    def test_depth_and_vocab(self):
        cfg = NamespaceConfig(min_depth=2, max_depth=4, fanout=3, seed=9)
        keys = NamespaceGenerator(cfg).batch(300)
        for k in keys:
            self.assertTrue(2 <= len(k.split(".")) <= 4)
        top = {k.split(".")[0] for k in keys}
        self.assertLessEqual(len(top), 3)

    def test_config_validation(self):
        with self.assertRaises(ValueError):
            NamespaceConfig(min_depth=0)
        with self.assertRaises(ValueError):
            NamespaceConfig(min_depth=3, max_depth=2)
        with self.assertRaises(ValueError):
            NamespaceConfig(separator="")


class TestWorkLoadIntoTrie(unittest.TestCase):
    def test_urls_workload_selectable(self):
        self.assertEqual(WORKLOAD_TOKENIZERS["urls"], ("delimiter", "/"))
        urls = WorkLoad(seed=8).urls(50)
        trie = TokenTrie.with_delimiter("/")
        trie.batch_add(urls)
        self.assertEqual(set(trie.keys()), set(urls))

    def test_every_workload_round_trips_through_trie(self):
        wl = WorkLoad(seed=21)
        for name, (kind, delimiter) in WORKLOAD_TOKENIZERS.items():
            keys = getattr(wl, name)(300)
            if kind == "fixed":
                trie = TokenTrie()
            else:
                trie = TokenTrie.with_delimiter(delimiter)
            trie.batch_add(keys)
            distinct = set(keys)
            self.assertTrue(all(trie.exists(k) for k in distinct), name)
            self.assertEqual(set(trie.keys()), distinct, name)
            for k in distinct:
                while trie.exists(k):
                    trie.remove(k)
            self.assertTrue(all(not trie.exists(k) for k in distinct), name)


if __name__ == "__main__":
    unittest.main(verbosity=2)
