"""
Data model (EventRecord, EconomicRecord, CategoryAggregate)
===========================================================

Each row in the storm data CSV is converted into an `EventRecord` object.
Records are immutable (`frozen=True`): every pipeline stage returns a new
list instead of editing rows in place.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass(frozen=True)
class EventRecord:
    """One storm event row.

    Damage amounts are raw values; the matching `*_exp` field holds the
    unit-suffix code (K, M, B, or anything else the export contains).
    """
    row_id: int
    event_type: str
    begin_date: date
    fatalities: Optional[int]
    injuries: Optional[int]
    prop_dmg: Optional[float]
    prop_dmg_exp: str
    crop_dmg: Optional[float]
    crop_dmg_exp: str


@dataclass(frozen=True)
class EconomicRecord:
    """Damage of one record in US$, after unit-suffix decoding. None = blank amount."""
    row_id: int
    event_type: str
    prop_damage_usd: Optional[float]
    crop_damage_usd: Optional[float]

    @property
    def total_damage_usd(self) -> Optional[float]:
        if self.prop_damage_usd is None or self.crop_damage_usd is None:
            return None
        return self.prop_damage_usd + self.crop_damage_usd


@dataclass(frozen=True)
class CategoryAggregate:
    """Per-category means. `None` means no eligible value for that metric."""
    category: str
    fatalities: Optional[float]
    injuries: Optional[float]
    prop_damage: Optional[float]
    crop_damage: Optional[float]
    # mean(prop + crop) over records with both amounts present
    total_damage: Optional[float] = None

    @property
    def health_score(self) -> Optional[float]:
        """Mean fatalities + mean injuries."""
        if self.fatalities is None or self.injuries is None:
            return None
        return self.fatalities + self.injuries

    @property
    def economic_score(self) -> Optional[float]:
        """Mean of property + crop damage per event, in millions of US$."""
        if self.total_damage is None:
            return None
        return self.total_damage / 1e6
