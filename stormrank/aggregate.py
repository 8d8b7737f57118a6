"""
Per-category aggregation
========================

Groups records by canonical category and computes the arithmetic mean of
each metric. Means (not totals) are used on purpose: a category with many
minor reports should not outrank one with few severe events.

Each metric skips its own missing values, so a blank injury count does not
remove the record from the fatality mean. Economic means use only records
that survive `decode_records`.
"""

from __future__ import annotations
from typing import Dict, Iterable, List, Optional, Sequence
from .decoder import decode_records
from .models import CategoryAggregate, EventRecord


def mean(values: Iterable[Optional[float]]) -> Optional[float]:
    """Arithmetic mean ignoring None; None when nothing is left."""
    vals = [float(v) for v in values if v is not None]
    if not vals:
        return None
    return sum(vals) / len(vals)


def aggregate_by_category(records: Sequence[EventRecord]) -> Dict[str, CategoryAggregate]:
    """Map canonical category -> CategoryAggregate.

    Keys appear in first-seen order. A category with no decodable damage
    records gets `None` for both damage means.
    """
    fatalities: Dict[str, List[Optional[int]]] = {}
    injuries: Dict[str, List[Optional[int]]] = {}
    for r in records:
        fatalities.setdefault(r.event_type, []).append(r.fatalities)
        injuries.setdefault(r.event_type, []).append(r.injuries)

    prop: Dict[str, List[Optional[float]]] = {}
    crop: Dict[str, List[Optional[float]]] = {}
    total: Dict[str, List[Optional[float]]] = {}
    for e in decode_records(records):
        prop.setdefault(e.event_type, []).append(e.prop_damage_usd)
        crop.setdefault(e.event_type, []).append(e.crop_damage_usd)
        total.setdefault(e.event_type, []).append(e.total_damage_usd)

    out: Dict[str, CategoryAggregate] = {}
    for cat in fatalities:
        out[cat] = CategoryAggregate(
            category=cat,
            fatalities=mean(fatalities[cat]),
            injuries=mean(injuries[cat]),
            prop_damage=mean(prop.get(cat, [])),
            crop_damage=mean(crop.get(cat, [])),
            total_damage=mean(total.get(cat, [])),
        )
    return out
