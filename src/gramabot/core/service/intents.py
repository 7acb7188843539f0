"""Hardcoded intent overrides checked before any provider call."""

CREATOR_PHRASES: tuple[str, ...] = (
    "who created you",
    "who made you",
    "who built you",
    "who designed you",
    "who developed you",
    "your creator",
    "your developer",
    "your designer",
)

# "who invented X" style questions must reach the model.
CREATOR_EXCLUSION = "invent"


def is_creator_question(query: str | None) -> bool:
    """True when ``query`` asks who made the bot (and not who invented something)."""
    q = (query or "").lower()
    return any(p in q for p in CREATOR_PHRASES) and CREATOR_EXCLUSION not in q


def identity_answer(query: str | None, identity_sentence: str) -> str | None:
    """Return ``identity_sentence`` for creator questions, else ``None``."""
    if is_creator_question(query):
        return identity_sentence
    return None
