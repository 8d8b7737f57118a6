"""
Damage magnitude decoding
=========================

PROPDMG / CROPDMG hold a number; PROPDMGEXP / CROPDMGEXP hold a one-character
unit suffix. Only three suffixes are trusted:

    K -> thousand, M -> million, B -> billion

Any other code ("", "0".."8", "+", "?", "h", ...) makes the record ineligible
for economic aggregation. It is never read as a multiplier of 1 and never as
zero damage.
"""

from __future__ import annotations
from typing import Dict, List, Optional, Sequence
from .models import EconomicRecord, EventRecord

MULTIPLIERS: Dict[str, float] = {
    "K": 1e3,
    "M": 1e6,
    "B": 1e9,
}


def multiplier(suffix: str) -> Optional[float]:
    """Return the multiplier for a suffix code, or None when unrecognized."""
    if suffix is None:
        return None
    return MULTIPLIERS.get(str(suffix).strip().upper())


def decode_amount(raw_amount: Optional[float], suffix: str) -> Optional[float]:
    """Amount in US$, or None when the record must be excluded.

    >>> decode_amount(2.5, 'K')
    2500.0
    """
    m = multiplier(suffix)
    if m is None or raw_amount is None:
        return None
    return raw_amount * m


def has_recognized_suffix(record: EventRecord) -> bool:
    """True when both damage suffixes are K, M or B (any case)."""
    return multiplier(record.prop_dmg_exp) is not None and multiplier(record.crop_dmg_exp) is not None


def decode_records(records: Sequence[EventRecord]) -> List[EconomicRecord]:
    """Filter to records with both suffixes recognized, then decode both amounts.

    The filter runs before any multiplication. A blank amount stays in the
    result as None; it only drops out of that one column's mean.
    """
    eligible = [r for r in records if has_recognized_suffix(r)]

    return [
        EconomicRecord(
            row_id=r.row_id,
            event_type=r.event_type,
            prop_damage_usd=decode_amount(r.prop_dmg, r.prop_dmg_exp),
            crop_damage_usd=decode_amount(r.crop_dmg, r.crop_dmg_exp),
        )
        for r in eligible
    ]
