import random
import string
from urllib.parse import quote

from faker import Faker

from workloads.word_generator import WORDS


### ================= Route Generation Probability Config ================= ###

# --- File extensions and their weights for leaf segments --- #
file_paths = [
  # Code / markup
  "js", "css", "html",
  # Images
  "jpg", "png", "svg",
  # Docs / data
  "pdf", "json", "xml", "csv",
]

file_path_weights = [
  0.30, 0.10, 0.05,
  0.12, 0.10, 0.03,
  0.06, 0.14, 0.04, 0.06,
]


# --- Path segment probability config --- #
slug_separators = ["-", "_"]
slug_separator_weights = [0.85, 0.15]

# Depth distribution of generated routes (number of "/" segments)
route_depths = [1, 2, 3, 4, 5, 6]
route_depth_weights = [0.15, 0.30, 0.25, 0.15, 0.10, 0.05]


### ================= Route Generation Functions ================= ###

def pick_scheme(rng):
  """Pick a scheme (http or https) with a realistic probability."""
  return rng.choices(["http", "https"], weights=[0.12, 0.88], k=1)[0]


def slug(rng, min_len=2, max_len=12, digit_p=0.15, sep_p=0.15):
  pool = string.ascii_lowercase + (string.digits if rng.random() < digit_p else "")
  s = "".join(rng.choices(pool, k=rng.randint(min_len, max_len)))
  if rng.random() < sep_p and len(s) > 3:
    indx = rng.randint(2, len(s) - 2)
    separator = rng.choices(slug_separators, slug_separator_weights, k=1)[0]
    s = s[:indx] + separator + s[indx:]
  return quote(s, safe='-_.~')


def segment(rng, slug_p, vocab):
  """Generate a single path segment: a slug or a word from `vocab`."""
  if rng.random() < slug_p:
    return slug(rng)
  return rng.choice(vocab)


def gen_route(rng, slug_p=0.2, vocab=WORDS, file_p=0.3):
  """Generate a route path such as "/api/users/list.json".

  slug_p: probability of a segment being a slug (vs. a vocabulary word).
  Deeper segments are increasingly likely to be slugs, like real ids."""
  if slug_p < 0 or slug_p > 1:
    raise ValueError("slug_p must be between 0 and 1")

  depth = rng.choices(route_depths, weights=route_depth_weights, k=1)[0]
  segs = []
  for _ in range(depth):
    segs.append(segment(rng, slug_p, vocab))
    slug_p += ((1 - slug_p) * 0.15)

  path = "/" + "/".join(segs)
  if rng.random() < file_p:
    path += '.' + rng.choices(file_paths, weights=file_path_weights, k=1)[0]
  return path


def generate_routes(num_routes, seed=None, vocab_size=40, slug_p=0.2):
  """Generate route paths drawn from a small shared vocabulary, so many routes
  share leading segments (a routing-table shaped workload)."""
  if num_routes < 1:
    raise ValueError("num_routes must be at least 1")
  if vocab_size < 1 or vocab_size > len(WORDS):
    raise ValueError(f"vocab_size must be between 1 and {len(WORDS)}")
  rng = random.Random(seed)
  vocab = rng.sample(WORDS, vocab_size)
  return [gen_route(rng, slug_p, vocab) for _ in range(num_routes)]


def generate_urls(num_urls, seed=None, num_hosts=20):
  """Generate full URLs; hosts come from Faker, paths from `gen_route`."""
  if num_urls < 1:
    raise ValueError("num_urls must be at least 1")
  rng = random.Random(seed)
  fake = Faker()
  if seed is not None:
    fake.seed_instance(seed)
  hosts = [fake.domain_name() for _ in range(num_hosts)]
  urls = []
  for _ in range(num_urls):
    scheme = pick_scheme(rng)
    host = rng.choice(hosts)
    urls.append(f"{scheme}://{host}{gen_route(rng)}")
  return urls
