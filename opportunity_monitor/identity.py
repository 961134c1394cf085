"""Stable, content-derived identities for detected records."""

import re
import unicodedata
from typing import Optional

TITLE_FINGERPRINT_LENGTH = 60
MISSING_DEADLINE = "0000"
SEPARATOR = "-"

_NON_ALNUM_RE = re.compile(r"[^a-z0-9]")
_NON_DIGIT_RE = re.compile(r"[^0-9]")


def normalize_title(title: Optional[str]) -> str:
    """Lowercase, drop accents and keep only ASCII letters and digits."""
    if not title:
        return ""
    decomposed = unicodedata.normalize("NFD", title.lower())
    without_marks = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return _NON_ALNUM_RE.sub("", without_marks)


def normalize_deadline(deadline: Optional[str]) -> str:
    """Keep the digits of a free-form date, or the placeholder when empty."""
    if not deadline:
        return MISSING_DEADLINE
    return _NON_DIGIT_RE.sub("", deadline)


def build_identity(source_name: str, title: Optional[str], deadline: Optional[str]) -> str:
    """
    Build the dedup key for a record.

    The key is ``<source>-<first 60 normalized title chars>-<deadline digits>``,
    e.g. ``ICLEI-analistadeclima-15122025``. It does not change under case,
    accent, whitespace or punctuation edits to the title, nor under a
    different date layout with the same digits.
    """
    title_slug = normalize_title(title)[:TITLE_FINGERPRINT_LENGTH]
    deadline_slug = normalize_deadline(deadline)
    return SEPARATOR.join([source_name, title_slug, deadline_slug])
