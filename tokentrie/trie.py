"""
TokenTrie: a reference-counted trie keyed by tokenizer output.

Every node is itself a `TokenTrie`. A key is split by the node's tokenizer
and each token becomes one edge, so the same class covers per-character tries
(`FixedWidth(1)`), dotted namespaces (`Delimiter(".")`), URL routes
(`Delimiter("/")`) and anything a `Custom` tokenizer can express.

Key design choices:
- **Traversal counts, not key counts:** each node's `count` is the number of
  insert passes that went *through* it, net of removals. A child is pruned from
  its parent the moment its count hits zero. The entry node is never counted
  and never pruned.
- **Shared tokenizer:** every node of one tree holds the very same tokenizer
  object. New children are made by `_new_from_current`, which passes it along.
- **Iterative traversals:** lookup, removal and enumeration loop over an
  explicit path or stack; nothing recurses per node.


Classes
-------
TokenTrie
    Node + public API: add, remove, exists, get, get_mut, fuzzy_get,
    get_keys_by_partial_path, get_keys_under_prefix, plus batch and stats
    helpers.


Complexity (typical)
--------------------
Let T be the number of tokens in the key and B the fan-out at the last level.
- add / get / exists / remove: O(T) plus tokenization
- fuzzy_get / get_keys_by_partial_path: O(T + B)
- get_keys_under_prefix: O(T + B + size of the enumerated subtrees)


Conventions & Notes
-------------------
- **Re-inserting a key** bumps every count on its path again. One `remove`
  afterwards clears the key but leaves the path in place with count 1, and a
  second `remove` is a no-op because the key no longer exists.
- **Enumeration order:** follows dict order of `children`, which callers must
  not rely on.
- **Lookups never raise:** misses come back as `None` or `[]`.
"""

import logging

from tokentrie.tokenizer import Tokenizer, FixedWidth, Delimiter, Custom

logger = logging.getLogger(__name__)


class TokenTrie:
  __slots__ = ("count", "children", "data", "is_key_end", "tokenizer")

  def __init__(self, tokenizer=None):
    if tokenizer is None:
      tokenizer = FixedWidth(1)
    elif not isinstance(tokenizer, Tokenizer):
      raise TypeError(f"tokenizer must be a Tokenizer, got {type(tokenizer).__name__}")
    self.count = 0
    self.children = {}
    self.data = None
    self.is_key_end = False
    self.tokenizer = tokenizer

  # ------------------------------------------------------------------
  # Construction
  # ------------------------------------------------------------------

  @classmethod
  def with_fixed_width(cls, width):
    """Trie that splits keys into grapheme runs of at most `width` bytes."""
    return cls(FixedWidth(width))

  @classmethod
  def with_delimiter(cls, delimiter):
    """Trie that splits keys on `delimiter` (e.g. "." or "/")."""
    return cls(Delimiter(delimiter))

  @classmethod
  def with_custom_tokenization(cls, tokenize_fn, detokenize_fn):
    """Trie driven by a caller-supplied tokenize / detokenize pair."""
    return cls(Custom(tokenize_fn, detokenize_fn))

  @classmethod
  def from_config(cls, config):
    """Build an empty trie from a `tokentrie.config.TokenizerConfig`."""
    return cls(config.build())

  def _new_from_current(self):
    return TokenTrie(self.tokenizer)

  # ------------------------------------------------------------------
  # Mutation
  # ------------------------------------------------------------------

  def add(self, key, data=None):
    """Insert `key`, storing `data` on its final node.

    Notes
    -----
    - Children are created on demand and share this node's tokenizer.
    - Each node stepped into gets `count += 1`; `self` is not counted.
    - `data` replaces whatever an earlier insert of the same key stored.
    """
    node = self
    for token in self.tokenizer.tokenize(key):
      nxt = node.children.get(token)
      if nxt is None:
        nxt = node._new_from_current()
        node.children[token] = nxt
      node = nxt
      node.count += 1
    node.data = data
    node.is_key_end = True
    logger.debug("added key %r", key)

  def remove(self, key):
    """Remove `key` if present. Returns True if something was removed.

    The final node loses its key-end flag, then the path is walked
    bottom-up: every node on it loses one count and zero-count children are
    pruned at each level, finishing with this node's own children.

    A key with no tokens (`""` under `FixedWidth`) lives on this node, so
    removing it only clears this node's key-end flag.
    """
    if not self.exists(key):
      return False

    path = [self]
    for token in self.tokenizer.tokenize(key):
      path.append(path[-1].children[token])
    path[-1].is_key_end = False

    for depth in range(len(path) - 1, 0, -1):
      node = path[depth]
      if node.count > 0:
        node.count -= 1
      else:
        logger.warning("count underflow at depth %d while removing %r", depth, key)
      node._prune_unused_children()

    self._prune_unused_children()
    logger.debug("removed key %r", key)
    return True

  def _prune_unused_children(self):
    """Drop every direct child whose count has reached zero."""
    unused = [token for token, child in self.children.items() if child.count == 0]
    for token in unused:
      del self.children[token]

  def batch_add(self, items):
    """Add many keys. `items` may hold plain keys or `(key, data)` pairs.

    Returns
    -------
    int
        Number of add calls made.
    """
    added = 0
    for item in items:
      if isinstance(item, tuple):
        key, data = item
      else:
        key, data = item, None
      self.add(key, data)
      added += 1
    return added

  def batch_remove(self, keys):
    """Remove many keys.

    Returns
    -------
    tuple[int, int]
        (removed_count, missing_count)
    """
    removed = 0
    missing = 0
    for key in keys:
      if self.remove(key):
        removed += 1
      else:
        missing += 1
    return removed, missing

  # ------------------------------------------------------------------
  # Lookup
  # ------------------------------------------------------------------

  def get(self, key):
    """Return the node at the end of `key`'s token path, or None.

    The node need not be a key end; partial paths resolve too.
    """
    node = self
    for token in self.tokenizer.tokenize(key):
      node = node.children.get(token)
      if node is None:
        return None
    return node

  def get_mut(self, key):
    """Same node as `get`; nodes are mutable in place."""
    return self.get(key)

  def exists(self, key):
    node = self.get(key)
    return node is not None and node.is_key_end

  def __contains__(self, key):
    return self.exists(key)

  def fuzzy_get(self, key):
    """Nodes whose last token contains the last token of `key`.

    Every token but the last must match exactly. The last one is treated
    as a substring to look for among the children reached so far.

    >>> t = TokenTrie.with_delimiter(".")
    >>> t.add("user.alice"); t.add("user.albert"); t.add("user.bob")
    >>> len(t.fuzzy_get("user.al"))
    2
    """
    tokens = self.tokenizer.tokenize(key)
    if not tokens:
      return []
    fragment = tokens.pop()

    node = self._walk(tokens)
    if node is None:
      return []

    items = []
    for token in [t for t in node.children if fragment in t]:
      found = node.get(token)
      if found is not None:
        items.append(found)
    return items

  def get_keys_by_partial_path(self, key):
    """Complete the last token of `key` against existing children.

    Returns `[key]` when the last token already exists under its parent.
    Otherwise returns one rebuilt key per child whose token starts with the
    (stripped) last token. Returns `[]` if the leading tokens do not resolve.
    """
    tokens = self.tokenizer.tokenize(key)
    fragment = tokens.pop() if tokens else ""

    node = self._walk(tokens)
    if node is None:
      return []

    if node.get(fragment) is not None:
      return [key]

    stem = fragment.strip()
    detokenize = node.tokenizer.detokenize
    return [detokenize(tokens + [token]) for token in node.children if token.startswith(stem)]

  def get_keys_under_prefix(self, key):
    """Every stored key under the node(s) that `key` completes to.

    Candidates come from `get_keys_by_partial_path`; each candidate subtree
    is walked depth-first with an explicit stack.
    """
    keys = []
    for candidate in self.get_keys_by_partial_path(key):
      node = self.get(candidate)
      if node is not None:
        node._collect_keys(candidate, keys)
    return keys

  def keys(self):
    """Every key stored below this node."""
    detokenize = self.tokenizer.detokenize
    keys = []
    if self.is_key_end:
      keys.append(detokenize([]))
    for token, child in self.children.items():
      child._collect_keys(detokenize([token]), keys)
    return keys

  def _collect_keys(self, key, keys):
    detokenize = self.tokenizer.detokenize
    stack = [(self, key)]
    while stack:
      node, acc = stack.pop()
      if node.is_key_end:
        keys.append(acc)
      for token, child in node.children.items():
        stack.append((child, detokenize([acc, token])))

  def _walk(self, tokens):
    node = self
    for token in tokens:
      node = node.children.get(token)
      if node is None:
        return None
    return node

  # ------------------------------------------------------------------
  # Structure stats
  # ------------------------------------------------------------------

  def count_nodes(self, get_avg_branch_factor=False):
    """Return total node count, or average branching factor over internal nodes.

    Parameters
    ----------
    get_avg_branch_factor : bool, default=False
        If False, return the number of nodes including this one.
        If True, return `sum(len(children)) / (# internal nodes)`.

    Complexity
    ----------
    O(#nodes) time, O(depth * fan-out) extra space.
    """
    total_nodes = 0
    internal = 0
    total_deg = 0

    stack = [self]
    while stack:
      node = stack.pop()
      total_nodes += 1
      if node.children:
        total_deg += len(node.children)
        internal += 1
        stack.extend(node.children.values())
    if get_avg_branch_factor:
      return (total_deg / internal) if internal else 0.0
    return total_nodes

  def __repr__(self):
    return (f"TokenTrie(count={self.count}, children={len(self.children)}, "
            f"is_key_end={self.is_key_end}, tokenizer={self.tokenizer!r})")
