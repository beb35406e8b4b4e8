"""
Basic usage example for collocationscorer.
"""

import re
import sys
sys.path.insert(0, "..")

from collocationscorer import CollocationScorer

# ---------------------------------------------------------------------------
# 1. Turn a few sentences into token ids (0 = boundary)
# ---------------------------------------------------------------------------

sentences = [
    "The United States signed the treaty with Great Britain.",
    "Great Britain and the United States agreed on new trade terms.",
    "The Supreme Court ruled on the United States case.",
    "Trade with Great Britain grew after the treaty.",
    "The Supreme Court and the United States Congress disagreed.",
    "New trade terms pleased the Supreme Court.",
]

stopwords = {"the", "with", "and", "on", "after"}
vocab = {}
texts = []
for sentence in sentences:
    ids = []
    for word in re.findall(r"[A-Za-z]+", sentence):
        if word.lower() in stopwords:
            ids.append(0)  # removed words leave a gap no sequence may span
        else:
            ids.append(vocab.setdefault(word, len(vocab) + 1))
    texts.append(ids)

words = {i: w for w, i in vocab.items()}

# ---------------------------------------------------------------------------
# 2. Score two- and three-word sequences
# ---------------------------------------------------------------------------

s = CollocationScorer(count_min=2, len_min=2, len_max=3, method="unigram")
s.score(texts)

print()
print(f"  {'collocation':<25} {'count':>5} {'lambda':>8} {'sigma':>7} {'z':>7}")
for rec in s.top(10):
    phrase = " ".join(words[t] for t in rec.sequence)
    print(
        f"  {phrase:<25} {rec.count:>5} {rec.lambda_:>8.3f} "
        f"{rec.sigma:>7.3f} {rec.z:>7.3f}"
    )

# ---------------------------------------------------------------------------
# 3. Inspect the run
# ---------------------------------------------------------------------------

print()
for key, value in s.summary().items():
    print(f"  {key}: {value}")
