from workloads.word_generator import generate_random_words, gen_words_with_prefix_freq
from workloads.url_generator import generate_routes, generate_urls
from workloads.ip_generator import IPGenerator, IPConfig
from workloads.namespace_generator import NamespaceGenerator, NamespaceConfig


class WorkLoad:
    """One seed, several key shapes. Each method pairs naturally with a tokenizer:
    words -> fixed(1), namespaces -> delimiter("."), routes and urls -> delimiter("/"),
    ips -> delimiter(".")."""

    def __init__(self, seed=None):
        self.seed = seed

    def words(self, num_words, p_freq=0, unique=False):
        if p_freq > 0:
            return gen_words_with_prefix_freq(num_words, p_freq, self.seed, unique)
        return generate_random_words(num_words, self.seed, unique)

    def namespaces(self, num_keys, **kwargs):
        return NamespaceGenerator(NamespaceConfig(seed=self.seed, **kwargs)).batch(num_keys)

    def routes(self, num_routes, **kwargs):
        return generate_routes(num_routes, self.seed, **kwargs)

    def urls(self, num_urls):
        return generate_urls(num_urls, self.seed)

    def ips(self, num_ips, **kwargs):
        return IPGenerator(IPConfig(seed=self.seed, **kwargs)).batch(num_ips)


# Workload name -> (tokenizer kind, delimiter) used by the bench and app
WORKLOAD_TOKENIZERS = {
    "words": ("fixed", None),
    "namespaces": ("delimiter", "."),
    "routes": ("delimiter", "/"),
    "urls": ("delimiter", "/"),
    "ips": ("delimiter", "."),
}
