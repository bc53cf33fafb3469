import random
import math
from collections import defaultdict

from faker.providers.lorem.en_US import Provider as LoremProvider

# Word pool shared by all generators
WORDS = sorted({w.lower() for w in LoremProvider.word_list if w.isalpha()})


## Created dictionary for words with identical first two letters
## This is to generate words with common prefixes
prefix_bucket = defaultdict(list)
for word in WORDS:
  prefix_bucket[word[:2]].append(word)
prefixes = list(prefix_bucket.keys())
prefix_weights = [len(prefix_bucket[p]) for p in prefixes]


def generate_random_words(num_words, seed=None, unique=False):
  """
  Return n random words from WORDS.
  - unique=False: sample with replacement (fast, allows duplicates)
  - unique=True: sample without replacement (requires n <= len(WORDS))
  """
  if num_words < 1 or (unique is True and num_words > len(WORDS)):
    raise ValueError(f"num_words must be between 1 and {len(WORDS)}")
  rng = random.Random(seed)
  if unique:
    return rng.sample(WORDS, num_words)
  return rng.choices(WORDS, k=num_words)


def gen_words_with_prefix_freq(num_words, prefix_freq=0.0, seed=None, unique=False):
  """Generates a list of words with a given prefix frequency.
  A higher prefix_freq means consecutive words more often share their first
  two letters, which gives the trie longer shared paths.
  Prefix frequency is applied logarithmically
  prefix_freq: 0 -> 0.999...
  unique=True: no word repeats (requires num_words <= len(WORDS) // 1.1)
  """
  def _p_eff_log(x, max_mean=100) -> float:
    # Logarithmic mapping of prefix frequency to effective prefix frequency
    if x < 0 or x > 1:
      raise ValueError("Prefix frequency must be between 0 and 1")
    x = max(0.0, min(0.999999, x))
    k = math.log(max_mean)
    p = 1.0 - math.exp(-k * x)
    return min(p, 0.999999)

  max_unique = int(len(WORDS) // 1.1)
  if num_words < 1 or (unique is True and num_words > max_unique):
    raise ValueError(f"num_words must be between 1 and {max_unique}")
  p_eff = _p_eff_log(prefix_freq)
  rng = random.Random(seed)

  words = []
  if unique:
    seen = set()
    exhausted = set()

  while len(words) < num_words:
    prefix = rng.choices(prefixes, weights=prefix_weights)[0]
    options = prefix_bucket[prefix]
    sample_word = rng.choice(options)
    if unique:
      if prefix in exhausted:
        continue
      if sample_word in seen:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          continue
        sample_word = rng.choice(remaining)
    words.append(sample_word)
    if unique: seen.add(sample_word)

    trigger = rng.random()
    while trigger < p_eff and len(words) < num_words:
      new_word = rng.choice(options)
      if unique and new_word in seen:
        remaining = [w for w in options if w not in seen]
        if not remaining:
          exhausted.add(prefix)
          break
        new_word = rng.choice(remaining)
      words.append(new_word)
      if unique: seen.add(new_word)
      trigger = rng.random()
  return words
