import re
from typing import Any, List, Mapping, Optional, Sequence

PUNCTUATION_RE = re.compile(r"[.,]")
ARTICLE_RE = re.compile(r"(the|a|an)\s+")
VOWELS = ("a", "e", "i", "o", "u")


def prop(obj: Any, *names: str) -> Optional[Any]:
    """Purpose: Safely read a nested field from decoded JSON.
    Inputs/Outputs: Input is any object and a chain of keys; output is the value or None.
    Side Effects / State: None; pure function.
    Failure Modes: Never raises; a missing key or a non-mapping link yields None.
    Testing Notes: Walk through absent, null, and non-dict intermediate values.
    """
    # Stop at the first link that is absent or cannot be indexed by name.
    current = obj
    for name in names:
        if not isinstance(current, Mapping):
            return None
        current = current.get(name)
        if current is None:
            return None
    return current


def parse_query(query: str) -> List[str]:
    """Purpose: Turn a normalized utterance into the list of spoken items.
    Inputs/Outputs: Input is the trimmed, lowercased query; output is a list of tokens.
    Side Effects / State: None; pure function.
    Failure Modes: None. Empty tokens are kept, so "" yields [""].
    Testing Notes: Articles are removed anywhere they are followed by whitespace,
        including word endings such as "banana bread".
    """
    # Strip periods/commas, drop articles, then split on single spaces.
    without_punctuation = PUNCTUATION_RE.sub("", query)
    without_articles = ARTICLE_RE.sub("", without_punctuation)
    return without_articles.split(" ")


def contains_all(items: Sequence[Any], candidates: Sequence[Any]) -> bool:
    """Return True when every element of ``items`` also appears in ``candidates``.

    ``candidates`` must be at least as long as ``items``; membership is by
    equality, not position.
    """
    if not isinstance(items, list) or not isinstance(candidates, list):
        return False
    if len(candidates) < len(items):
        return False
    return all(item in candidates for item in items)


def indefinite_article(word: str) -> str:
    return "an" if word[:1] in VOWELS else "a"
