"""
Dataset loader (CSV -> EventRecord list)
========================================

This module reads the NOAA storm data export and converts each row into an
`EventRecord` object.

Key ideas:
- Only the eight columns the report needs are read; header matching ignores
  case and surrounding whitespace.
- pandas handles compressed input (`.bz2`, `.gz`) from the file extension.
- Blank numeric cells become `None`. Anything that cannot be parsed is a
  `ParseError`: a malformed input file aborts the run.
"""

from __future__ import annotations
from datetime import date, datetime
from typing import List, Optional
import logging
import math
import pandas as pd
from .models import EventRecord

logger = logging.getLogger(__name__)

EVTYPE = "EVTYPE"
BGN_DATE = "BGN_DATE"
FATALITIES = "FATALITIES"
INJURIES = "INJURIES"
PROPDMG = "PROPDMG"
PROPDMGEXP = "PROPDMGEXP"
CROPDMG = "CROPDMG"
CROPDMGEXP = "CROPDMGEXP"

REQUIRED_COLUMNS = (EVTYPE, BGN_DATE, FATALITIES, INJURIES, PROPDMG, PROPDMGEXP, CROPDMG, CROPDMGEXP)

# BGN_DATE looks like "4/18/1950 0:00:00"
DATE_FORMATS = ("%m/%d/%Y %H:%M:%S", "%m/%d/%Y")


class ParseError(ValueError):
    """Input file is missing, unreadable, or malformed."""
    pass


def _norm(s) -> str:
    return str(s).strip().upper()

def _to_str(x) -> str:
    if pd.isna(x): return ""
    return str(x).strip()

def _where(col: str, line: int) -> str:
    return f"column {col}, line {line}"

def _to_count(x, col: str, line: int) -> Optional[int]:
    """Convert a cell to a non-negative int, returning None if blank."""
    s = _to_str(x)
    if not s: return None
    try:
        v = float(s)
    except ValueError:
        raise ParseError(f"Not a number ({_where(col, line)}): {s!r}") from None
    if not math.isfinite(v) or v < 0 or v != int(v):
        raise ParseError(f"Not a non-negative integer count ({_where(col, line)}): {s!r}")
    return int(v)

def _to_amount(x, col: str, line: int) -> Optional[float]:
    """Convert a cell to a finite float, returning None if blank."""
    s = _to_str(x)
    if not s: return None
    try:
        v = float(s)
    except ValueError:
        raise ParseError(f"Not a number ({_where(col, line)}): {s!r}") from None
    if not math.isfinite(v):
        raise ParseError(f"Not a finite amount ({_where(col, line)}): {s!r}")
    return v

def _to_date(x, col: str, line: int) -> date:
    s = _to_str(x)
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    raise ParseError(f"Malformed date ({_where(col, line)}): {s!r}")


def read_storm_frame(path: str) -> pd.DataFrame:
    """Read the required columns as strings. Column names come back upper-cased."""
    try:
        df = pd.read_csv(path, dtype=str, usecols=lambda c: _norm(c) in REQUIRED_COLUMNS)
    except FileNotFoundError as e:
        raise ParseError(f"Input file not found: {path}") from e
    except (OSError, EOFError, ValueError) as e:
        # pandas parser errors are ValueError subclasses; bad .bz2 data is OSError/EOFError
        raise ParseError(f"Could not read {path}: {e}") from e

    df.rename(columns={c: _norm(c) for c in df.columns}, inplace=True)
    dupes = sorted({c for c in df.columns if list(df.columns).count(c) > 1})
    if dupes:
        raise ParseError(f"Duplicate column(s) {dupes} in {path} (header names ignore case and whitespace)")
    missing = [c for c in REQUIRED_COLUMNS if c not in df.columns]
    if missing:
        raise ParseError(f"Missing required column(s) {missing} in {path}. Available={list(df.columns)}")
    return df


def load_storm_csv(path: str) -> List[EventRecord]:
    """
    Load the storm data export into a list of EventRecord objects.
    Row IDs follow file order (0-based).
    """
    df = read_storm_frame(path)
    logger.info("Read %d rows from %s", len(df), path)

    records: List[EventRecord] = []
    for i, row in enumerate(df[list(REQUIRED_COLUMNS)].itertuples(index=False, name=None)):
        evtype, bgn, fat, inj, prop, prop_exp, crop, crop_exp = row
        line = i + 2  # header is line 1
        records.append(EventRecord(
            row_id=i,
            event_type=_to_str(evtype),
            begin_date=_to_date(bgn, BGN_DATE, line),
            fatalities=_to_count(fat, FATALITIES, line),
            injuries=_to_count(inj, INJURIES, line),
            prop_dmg=_to_amount(prop, PROPDMG, line),
            prop_dmg_exp=_to_str(prop_exp),
            crop_dmg=_to_amount(crop, CROPDMG, line),
            crop_dmg_exp=_to_str(crop_exp),
        ))
    return records
