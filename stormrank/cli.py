"""
stormrank command line
======================

Runs the whole report in one go:

    python -m stormrank.cli --csv repdata_data_StormData.csv.bz2 --out storm_report.docx

1) Load the storm data file
2) Normalize labels, filter, aggregate
3) Print the four ranking tables
4) Write the charts and the DOCX report

Any input error aborts the run with exit code 1.
"""

from __future__ import annotations
import argparse
import os
import sys
from typing import List, Optional
from .engine import PipelineConfig, run_from_csv
from .loader import ParseError
from .logging_config import setup_logger
from .report import DatasetCitation, ReportConfig, build_tables, format_table, generate_docx_report, render_charts

DEFAULT_CSV = "repdata_data_StormData.csv.bz2"
DEFAULT_OUT = "storm_report.docx"


def _parse_args(argv: Optional[List[str]]) -> argparse.Namespace:
    ap = argparse.ArgumentParser(description="Rank storm event types by health and economic impact")
    ap.add_argument("--csv", default=DEFAULT_CSV, help=f"Storm data CSV, .bz2 allowed (default {DEFAULT_CSV})")
    ap.add_argument("--out", default=DEFAULT_OUT, help=f"DOCX report path (default {DEFAULT_OUT})")
    ap.add_argument("--figures", default=None, help="Directory for chart PNGs (default: <out>_figures)")
    ap.add_argument("--top-n", type=int, default=5, help="Rows per ranking table (default 5)")
    ap.add_argument("--log-dir", default=None, help="Write a rotating log file here")
    return ap.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the stormrank CLI. Returns the process exit code."""
    args = _parse_args(argv)
    logger = setup_logger(log_dir=args.log_dir)

    logger.info("Loading dataset %s", args.csv)
    try:
        result = run_from_csv(args.csv, PipelineConfig())
    except ParseError as e:
        logger.error("Aborting: %s", e)
        return 1
    if not result.aggregates:
        logger.error("Aborting: no records left after filtering")
        return 1

    for title, label, rows in build_tables(result.aggregates, args.top_n):
        print(format_table(title, label, rows))
        print()

    config = ReportConfig(top_n=args.top_n, citation=DatasetCitation(file_name=os.path.basename(args.csv)))
    figures = args.figures or os.path.splitext(args.out)[0] + "_figures"
    charts = render_charts(result.aggregates, figures, config=config)
    generate_docx_report(result, args.out, config=config, charts=charts)
    print(f"Report written to {args.out}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
