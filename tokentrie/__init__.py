from tokentrie.tokenizer import Tokenizer, FixedWidth, Delimiter, Custom
from tokentrie.trie import TokenTrie
from tokentrie.config import TokenizerConfig

__all__ = [
    "Tokenizer",
    "FixedWidth",
    "Delimiter",
    "Custom",
    "TokenTrie",
    "TokenizerConfig",
]
