"""
Category normalization and record filters
==========================================

Storm data event-type labels are free text. The same kind of event shows up
with different casing, stray whitespace, and a handful of synonymous names.
This module turns a raw label into a *canonical category* and provides the
two record filters the report applies (date window, excluded categories).

The synonym and exclusion tables are plain constants so the rule set can be
read (and tested) in one place.
"""

from __future__ import annotations
from dataclasses import replace
from datetime import date
from typing import AbstractSet, Dict, FrozenSet, List, Sequence
import re
from .models import EventRecord

# raw label (already lowercased/trimmed) -> canonical label
CATEGORY_SYNONYMS: Dict[str, str] = {
    "heavy surf/high surf": "high surf",
    "hurricane/typhoon": "hurricane",
    "thunderstorm wind": "tstm wind",
    "marine thunderstorm wind": "marine tstm wind",
    "wild/forest fire": "wildfire",
    "extreme cold/wind chill": "extreme cold",
    "rip currents": "rip current",
    "storm surge/tide": "storm surge",
}

EXCLUDED_CATEGORIES: FrozenSet[str] = frozenset({"astronomical high tide", "landslide"})

# Records on or before this day are dropped: older years use inconsistent labels.
DATE_CUTOFF = date(2003, 12, 31)

_WS_RE = re.compile(r"\s+")


def normalize_category(raw: str) -> str:
    """Lowercase, trim, collapse inner whitespace, then apply the synonym table.

    >>> normalize_category("  Heavy Surf/High Surf ")
    'high surf'
    """
    label = _WS_RE.sub(" ", str(raw).strip().lower())
    return CATEGORY_SYNONYMS.get(label, label)


def normalize_records(records: Sequence[EventRecord]) -> List[EventRecord]:
    """Return new records whose event_type is the canonical category."""
    return [replace(r, event_type=normalize_category(r.event_type)) for r in records]


def filter_by_date(records: Sequence[EventRecord], cutoff: date = DATE_CUTOFF) -> List[EventRecord]:
    """Keep records that began strictly after `cutoff`."""
    return [r for r in records if r.begin_date > cutoff]


def exclude_categories(records: Sequence[EventRecord],
                       blocked: AbstractSet[str] = EXCLUDED_CATEGORIES) -> List[EventRecord]:
    """Drop records whose canonical category is blocked.

    Matching is done on canonical text, so run `normalize_records` first.
    """
    canonical = {normalize_category(b) for b in blocked}
    return [r for r in records if r.event_type not in canonical]
