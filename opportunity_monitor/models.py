"""Data models for monitored sources and detected records."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional


@dataclass(frozen=True)
class RecordShape:
    """
    Payload layout requested from the agent for one family of sources.

    Only ``title_key`` and ``deadline_key`` take part in identity. The
    reference and description keys are carried along for display.
    """
    name: str
    title_key: str = "title"
    deadline_key: str = "deadline"
    reference_key: Optional[str] = None   # e.g. a call or tender number
    description_key: Optional[str] = None

    @property
    def keys(self) -> List[str]:
        keys = [self.title_key, self.deadline_key]
        if self.reference_key:
            keys.append(self.reference_key)
        if self.description_key:
            keys.append(self.description_key)
        return keys


LISTING_SHAPE = RecordShape(name="listing")
REFERENCED_SHAPE = RecordShape(name="referenced", reference_key="reference")

DEFAULT_COLOR = "#2c3e50"


@dataclass(frozen=True)
class SourceDefinition:
    """One monitored listing page."""
    name: str          # unique, stable; part of every identity
    url: str
    instructions: str  # page-specific agent instructions
    color: str = DEFAULT_COLOR  # cosmetic label color in notifications
    shape: RecordShape = LISTING_SHAPE


@dataclass(frozen=True)
class CandidateRecord:
    """One entry extracted from agent text, before identification."""
    title: Optional[str]
    deadline: str = ""
    reference: Optional[str] = None
    description: Optional[str] = None


@dataclass
class IdentifiedRecord:
    """A candidate that was assigned its identity."""
    identity: str
    source_name: str
    title: str
    deadline: str
    reference: Optional[str] = None
    description: Optional[str] = None


@dataclass
class SeenEntry:
    """A persisted row of the seen-set."""
    identity: str
    title: str
    deadline: str
    source_name: str
    first_seen_at: str  # ISO8601 UTC


@dataclass
class RunReport:
    """Outcome of one pass over all configured sources."""
    new_records: List[IdentifiedRecord] = field(default_factory=list)
    candidates_by_source: Dict[str, int] = field(default_factory=dict)
    new_by_source: Dict[str, int] = field(default_factory=dict)
    failed_sources: Dict[str, str] = field(default_factory=dict)  # name -> reason

    @property
    def total_new(self) -> int:
        return len(self.new_records)
