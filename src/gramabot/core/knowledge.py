"""Local scheme knowledge base used when the provider cannot answer."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SchemeRecord:
    """A government welfare scheme."""

    key: str
    title: str
    eligibility: str = ""
    benefits: str = ""
    how_to_apply: str = ""
    website: str = ""


PM_KISAN = SchemeRecord(
    key="pm-kisan",
    title="PM-KISAN",
    eligibility="Small & marginal farmers with cultivable land",
    benefits="₹6,000/year (paid as installments)",
    how_to_apply="Register at pmkisan.gov.in or visit CSC",
    website="pmkisan.gov.in",
)

AYUSHMAN = SchemeRecord(
    key="ayushman",
    title="Ayushman Bharat - PMJAY",
    eligibility="Families in SECC list",
    benefits="Health cover up to ₹5 lakh per family/year",
    how_to_apply="Get Golden Card at empaneled hospitals/CSC",
    website="pmjay.gov.in",
)

# Lookup order matters: first match wins.
LOCAL_KB: tuple[SchemeRecord, ...] = (PM_KISAN, AYUSHMAN)

# Broad keyword groups checked after direct matches, in order.
CATEGORY_FALLBACKS: tuple[tuple[tuple[str, ...], SchemeRecord], ...] = (
    (("farmer", "agriculture"), PM_KISAN),
    (("health", "insurance"), AYUSHMAN),
)


def _matches(query: str, record: SchemeRecord) -> bool:
    title = (record.title or "").lower()
    first_word = title.split(" ")[0]
    return any(
        needle and needle in query for needle in (record.key, title, first_word)
    )


def format_scheme(record: SchemeRecord) -> str:
    """Render ``record`` as a single numbered entry with labelled bullets."""
    return (
        f"1. **{record.title or ''}**\n"
        f"• 🌱 Eligibility: {record.eligibility or ''}\n"
        f"• 💰 Benefits: {record.benefits or ''}\n"
        f"• 📝 How to Apply: {record.how_to_apply or ''}\n"
        f"• 🔗 Official Website: {record.website or ''}"
    )


def find_scheme(
    query: str | None, records: tuple[SchemeRecord, ...] = LOCAL_KB
) -> SchemeRecord | None:
    """Return the first scheme matching ``query``, or ``None``."""
    if not query:
        return None
    q = str(query).lower()
    for record in records:
        if _matches(q, record):
            return record
    for keywords, record in CATEGORY_FALLBACKS:
        if any(word in q for word in keywords):
            return record
    return None


def lookup(query: str | None) -> str | None:
    """Return a formatted local answer for ``query``, or ``None``."""
    record = find_scheme(query)
    if record is None:
        return None
    return format_scheme(record)
