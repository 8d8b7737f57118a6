"""
Report pipeline
===============

Runs the stages in a fixed order, each one returning a new list:

1) Load CSV -> list of EventRecord (immutable)
2) Normalize event-type labels to canonical categories
3) Keep records after the date cutoff
4) Drop excluded categories
5) Aggregate means per category (damage decoded inside the aggregator)

`PipelineResult` keeps the record count after every stage so the report can
show how much data each filter removed.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import date
from typing import Dict, FrozenSet, Optional, Sequence
import logging
from .aggregate import aggregate_by_category
from .decoder import has_recognized_suffix
from .loader import load_storm_csv
from .models import CategoryAggregate, EventRecord
from .normalize import (DATE_CUTOFF, EXCLUDED_CATEGORIES, exclude_categories,
                        filter_by_date, normalize_records)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PipelineConfig:
    """Filter settings. Defaults are the ones the published report uses."""
    cutoff: date = DATE_CUTOFF
    blocked: FrozenSet[str] = EXCLUDED_CATEGORIES


@dataclass
class PipelineResult:
    """Aggregates plus record counts per stage."""
    aggregates: Dict[str, CategoryAggregate]
    n_loaded: int
    n_after_date: int
    n_after_exclusion: int
    n_economic: int
    dataset_path: Optional[str] = None
    config: PipelineConfig = field(default_factory=PipelineConfig)


def run_pipeline(records: Sequence[EventRecord], config: Optional[PipelineConfig] = None,
                 dataset_path: Optional[str] = None) -> PipelineResult:
    """Normalize, filter and aggregate already-loaded records."""
    config = config or PipelineConfig()

    normalized = normalize_records(records)
    dated = filter_by_date(normalized, config.cutoff)
    kept = exclude_categories(dated, config.blocked)
    n_economic = sum(1 for r in kept if has_recognized_suffix(r))

    logger.info("Records: loaded=%d after_date=%d after_exclusion=%d economic=%d",
                len(records), len(dated), len(kept), n_economic)

    aggregates = aggregate_by_category(kept)
    logger.info("Aggregated %d categories", len(aggregates))

    return PipelineResult(
        aggregates=aggregates,
        n_loaded=len(records),
        n_after_date=len(dated),
        n_after_exclusion=len(kept),
        n_economic=n_economic,
        dataset_path=dataset_path,
        config=config,
    )


def run_from_csv(path: str, config: Optional[PipelineConfig] = None) -> PipelineResult:
    """Load `path` and run the pipeline. ParseError propagates."""
    records = load_storm_csv(path)
    return run_pipeline(records, config=config, dataset_path=path)
