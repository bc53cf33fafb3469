"""
Tokenizer strategies: turn a key into an ordered list of tokens and back.

A `TokenTrie` never looks at raw key strings directly. Every operation first
asks its tokenizer for the token sequence, and every token is one edge label
on the way down the tree. Enumeration goes the other way and rebuilds keys
with `detokenize`.

Classes
-------
Tokenizer
    Abstract base. Subclasses implement `tokenize` and `detokenize`.
FixedWidth
    Grapheme-aware slicing: packs whole grapheme clusters into tokens of at
    most `width` UTF-8 bytes.
Delimiter
    Literal split / join on a separator string.
Custom
    Wraps a caller-supplied `(tokenize_fn, detokenize_fn)` pair.


Conventions & Notes
-------------------
- **Round trip:** `detokenize(tokenize(s)) == s` holds for `FixedWidth` and
  `Delimiter`. For `Custom` it is the caller's job; nothing here checks it.
- **Sharing:** a tokenizer is immutable after construction, and one instance
  is shared by every node of a tree.
- **Empty key:** `FixedWidth` yields `[]` for `""`; `Delimiter` yields `[""]`
  (same as `str.split`).
"""

import regex

_GRAPHEME = regex.compile(r"\X")


class Tokenizer:
  __slots__ = ()

  def tokenize(self, key):
    raise NotImplementedError

  def detokenize(self, tokens):
    raise NotImplementedError

  def __eq__(self, other):
    return type(self) is type(other) and self._ident() == other._ident()

  def __hash__(self):
    return hash((type(self), self._ident()))

  def _ident(self):
    return id(self)


class FixedWidth(Tokenizer):
  """Split on grapheme boundaries into tokens of at most `width` bytes.

  A grapheme cluster that is wider than `width` on its own becomes a single
  token, so multi-byte text is never cut mid-character. No empty token is
  emitted ahead of it, even when it is the first cluster of the key.

  >>> FixedWidth(1).tokenize("cat")
  ['c', 'a', 't']
  >>> FixedWidth(2).tokenize("héllo")
  ['h', 'é', 'll', 'o']
  """
  __slots__ = ("width",)

  def __init__(self, width=1):
    if isinstance(width, bool) or not isinstance(width, int):
      raise TypeError(f"width must be an int, got {type(width).__name__}")
    if width < 1:
      raise ValueError("width must be at least 1")
    self.width = width

  def tokenize(self, key):
    tokens = []
    current = []
    size = 0
    for grapheme in _GRAPHEME.findall(key):
      g_size = len(grapheme.encode("utf-8"))
      if current and size + g_size > self.width:
        tokens.append("".join(current))
        current = []
        size = 0
      current.append(grapheme)
      size += g_size

    if current:
      tokens.append("".join(current))
    return tokens

  def detokenize(self, tokens):
    return "".join(tokens)

  def _ident(self):
    return self.width

  def __repr__(self):
    return f"FixedWidth({self.width})"


class Delimiter(Tokenizer):
  """Split on, and join with, a literal separator."""
  __slots__ = ("delimiter",)

  def __init__(self, delimiter):
    if not isinstance(delimiter, str):
      raise TypeError(f"delimiter must be a str, got {type(delimiter).__name__}")
    if not delimiter:
      raise ValueError("delimiter must be a non-empty string")
    self.delimiter = delimiter

  def tokenize(self, key):
    return key.split(self.delimiter)

  def detokenize(self, tokens):
    return self.delimiter.join(tokens)

  def _ident(self):
    return self.delimiter

  def __repr__(self):
    return f"Delimiter({self.delimiter!r})"


class Custom(Tokenizer):
  """Caller-defined tokenization.

  Parameters
  ----------
  tokenize_fn : Callable[[str], list[str]]
      Splits a key into tokens. Called once per key operation.
  detokenize_fn : Callable[[list[str]], str]
      Rebuilds a key from tokens. Called during enumeration.

  Notes
  -----
  The pair should round-trip. A pair that does not will not raise, it will
  just produce wrong keys from `get_keys_*`.
  """
  __slots__ = ("tokenize_fn", "detokenize_fn")

  def __init__(self, tokenize_fn, detokenize_fn):
    if not callable(tokenize_fn) or not callable(detokenize_fn):
      raise TypeError("tokenize_fn and detokenize_fn must both be callable")
    self.tokenize_fn = tokenize_fn
    self.detokenize_fn = detokenize_fn

  def tokenize(self, key):
    return list(self.tokenize_fn(key))

  def detokenize(self, tokens):
    return self.detokenize_fn(list(tokens))

  def _ident(self):
    return (self.tokenize_fn, self.detokenize_fn)

  def __repr__(self):
    return f"Custom({self.tokenize_fn!r}, {self.detokenize_fn!r})"
