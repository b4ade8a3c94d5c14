"""Fixed word lists and small text helpers used by the scorers.

Each scorer owns its lists. Some overlap (the story and criteria value verbs
differ on purpose) and they are not merged, since scores depend on the exact
entries. Matching is plain lower-case substring or token membership.
"""

import re
from typing import Iterable, List, Pattern, Sequence, Tuple

# ---------------------------------------------------------------------------
# Story scorer
# ---------------------------------------------------------------------------

STORY_VALUE_PHRASES: Tuple[str, ...] = (
    "increase", "reduce", "enable", "improve", "access", "understand",
    "save", "automate", "simplify", "enhance", "provide", "allow",
    "track", "manage", "control", "optimize", "optimise", "streamline",
    "eliminate", "achieve", "ensure", "maintain", "deliver", "create",
    "view", "minimize", "minimise", "maximize", "maximise",
)

# Multi-word entries match as consecutive tokens, so "kind of" costs clarity too.
FILLER_WORDS: Tuple[str, ...] = (
    "basically", "kind of", "sort of", "stuff", "things", "very",
    "really", "just", "maybe", "perhaps", "probably",
)

VAGUE_PHRASES: Tuple[str, ...] = (
    "it's better", "it's easier", "it's good", "it works", "it's nice",
    "make it better", "be better", "be easier",
)

# ---------------------------------------------------------------------------
# Live "so that" rating
# ---------------------------------------------------------------------------

SO_THAT_VALUE_VERBS: Tuple[str, ...] = (
    "increase", "reduce", "improve", "enable", "save", "automate",
    "simplify", "enhance", "streamline", "eliminate", "accelerate",
    "ensure", "prevent", "generate", "boost", "achieve", "deliver",
    "optimize", "optimise", "minimize", "minimise", "maximize", "maximise",
)

BUSINESS_METRICS: Tuple[str, ...] = (
    "response time", "processing time", "resolution time", "lead time", "time",
    "conversion rate", "conversion", "revenue", "sales", "cost", "profit",
    "margin", "error rate", "errors", "defects", "accuracy", "throughput",
    "latency", "uptime", "downtime", "satisfaction", "churn", "retention",
    "abandonment", "productivity", "efficiency", "compliance", "risk",
    "utilization", "utilisation", "waste", "turnaround",
)

SO_THAT_VAGUE_PHRASES: Tuple[str, ...] = VAGUE_PHRASES + (
    "it is better", "it is easier", "make things better", "work better",
)

FLOWERY_TERMS: Tuple[str, ...] = (
    "happiness", "happily", "happy", "joy", "joyful", "love", "loved",
    "peace", "peaceful", "harmony", "dream", "dreams", "blissful",
    "delight", "delighted", "wonderful", "beautiful", "worry-free",
    "stress-free",
)

FLOWERY_PATTERNS: Tuple[Pattern[str], ...] = (
    re.compile(r"\blive (in|with)\b"),
    re.compile(r"\blive happily\b"),
    re.compile(r"\bprotected from\b"),
    re.compile(r"\bfeel(s|ing)? (good|great|better|happy|safe|secure)\b"),
    re.compile(r"\bpeace of mind\b"),
)

NUMBER_PATTERN = re.compile(r"\d")

# ---------------------------------------------------------------------------
# Criteria scorers
# ---------------------------------------------------------------------------

GHERKIN_KEYWORDS = {
    "given": ("given", "given that"),
    "when": ("when", "when the", "when a", "when an"),
    "then": ("then", "then the", "then a", "then an"),
    "and": ("and", "and the", "and a", "and an"),
}

BULLET_PREFIXES: Tuple[str, ...] = ("the system", "the user", "user can", "system must")

OBSERVABLE_PATTERNS: Tuple[str, ...] = (
    "system displays", "system shows", "displays", "shows", "appears",
    "is visible", "is displayed", "user sees", "i see", "redirects",
    "returns", "status code", "application", "page", "button", "field",
    "message", "notification", "alert", "confirmation", "error", "success",
)

VAGUE_TERMS: Tuple[str, ...] = (
    "should basically", "kind of works", "sort of", "mostly", "probably",
    "might", "maybe", "could possibly", "somewhat", "generally",
)

CRITERIA_VALUE_VERBS: Tuple[str, ...] = (
    "increase", "reduce", "enable", "improve", "access", "save",
    "automate", "simplify", "enhance", "provide", "allow", "ensure",
    "maintain", "prevent", "support", "facilitate",
    "optimize", "optimise", "minimize", "minimise", "maximize", "maximise",
)

# Single-criterion live rating. Outcome terms only; UI nouns such as
# "button" or "page" do not count here.
SINGLE_OBSERVABLES: Tuple[str, ...] = (
    "display", "show", "appear", "redirect", "return", "respond",
    "response", "status code", "message", "notification", "alert",
    "confirmation", "visible", "sees", "receive", "download", "update",
    "user can", "user is able to",
)

SINGLE_VAGUE_TERMS: Tuple[str, ...] = (
    "basically", "kind of", "sort of", "maybe", "probably", "might",
    "somewhat", "mostly", "generally", "could possibly", "it works",
)

OBLIGATION_PATTERN = re.compile(r"\b(must|shall|will)\b")
ACTION_MODAL_PATTERN = re.compile(r"\b(must|shall|can|will|able to)\b")
GHERKIN_START_PATTERN = re.compile(r"^(given|when|then|and)\b")
WHEN_PATTERN = re.compile(r"\bwhen\b")
THEN_PATTERN = re.compile(r"\bthen\b")
AND_PATTERN = re.compile(r"\band\b")


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def words(text: str) -> List[str]:
    return text.split()


def word_count(text: str) -> int:
    return len(text.split())


def find_present(text: str, terms: Iterable[str]) -> List[str]:
    """Terms that occur in ``text`` as lower-case substrings, in lexicon order."""
    lower = text.lower()
    return [term for term in terms if term in lower]


def contains_any(text: str, terms: Iterable[str]) -> bool:
    lower = text.lower()
    return any(term in lower for term in terms)


def _has_token_sequence(tokens: Sequence[str], phrase: Sequence[str]) -> bool:
    size = len(phrase)
    return any(list(tokens[i:i + size]) == list(phrase) for i in range(len(tokens) - size + 1))


def find_tokens(text: str, entries: Iterable[str]) -> List[str]:
    """Entries present as whole whitespace-delimited tokens (or token runs)."""
    tokens = text.lower().split()
    return [entry for entry in entries if _has_token_sequence(tokens, entry.split())]


def collapse_nested(found: Sequence[str]) -> List[str]:
    """Drop matches that are part of a longer match ("time" in "response time")."""
    return [term for term in found if not any(term != other and term in other for other in found)]


def lines(text: str) -> List[str]:
    return [line.strip().lower() for line in text.splitlines() if line.strip()]


def as_text(value) -> str:
    """Non-string input (None, numbers, lists) reads as blank text."""
    return value if isinstance(value, str) else ""


def text_items(values) -> List[str]:
    """Non-blank string entries of a criteria list. A lone string is one entry."""
    if isinstance(values, str):
        values = [values]
    elif not isinstance(values, (list, tuple)):
        return []
    return [value for value in values if isinstance(value, str) and value.strip()]
