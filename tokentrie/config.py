from dataclasses import dataclass
from typing import Optional

from tokentrie.tokenizer import FixedWidth, Delimiter

## === Config Class === ##

TOKENIZER_KINDS = ("fixed", "delimiter")


@dataclass
class TokenizerConfig:
    """
    Configuration for building a tokenizer / empty TokenTrie
        kind: str, "fixed" (grapheme slices) or "delimiter" (split on a separator)
        width: int, max bytes per token when kind == "fixed"
        delimiter: str, separator when kind == "delimiter"
    """
    kind: str = "fixed"
    width: int = 1
    delimiter: Optional[str] = "."

    def __post_init__(self):
        self.kind = self.kind.lower()
        if self.kind not in TOKENIZER_KINDS:
            raise ValueError(f"kind must be one of {TOKENIZER_KINDS}, got {self.kind!r}")
        if self.kind == "fixed" and self.width < 1:
            raise ValueError("width must be at least 1")
        if self.kind == "delimiter" and not self.delimiter:
            raise ValueError("delimiter must be a non-empty string")

    def build(self):
        if self.kind == "fixed":
            return FixedWidth(self.width)
        return Delimiter(self.delimiter)

    def label(self):
        if self.kind == "fixed":
            return f"fixed({self.width})"
        return f"delimiter({self.delimiter!r})"
