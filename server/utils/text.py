import re
import unicodedata


def canon(text: str) -> str:
    """Normalize for matching: lower, drop accents and punctuation (apostrophes stay), squash whitespace."""
    s = unicodedata.normalize("NFKD", str(text or "").strip().lower())
    s = "".join(ch for ch in s if not unicodedata.combining(ch))
    s = re.sub(r"[^\w\s']", " ", s, flags=re.UNICODE)
    return re.sub(r"\s+", " ", s).strip()


def tokenize_phrase(text: str) -> list[str]:
    return canon(text).split()


def is_ordered_subsequence(words, tokens) -> bool:
    """True when every item of `words` appears in `tokens`, in the same order."""
    it = iter(tokens)
    return all(any(w == t for t in it) for w in words)
