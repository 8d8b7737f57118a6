from __future__ import annotations

"""
Storm ranking report
--------------------
Rankings, printable tables, charts and the DOCX report.

- `top_n` ranks categories by one metric (deterministic tie-break on name).
- `build_tables` / `format_table` give the four top-5 tables for the terminal.
- `render_charts` writes two bar charts and one scatter plot (PNG).
- `generate_docx_report` puts everything into one Word document.

matplotlib and python-docx are imported lazily so the ranking functions work
without them.
"""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence, Tuple
import logging
import math
import os
import tempfile

from .models import CategoryAggregate
from .normalize import CATEGORY_SYNONYMS

logger = logging.getLogger(__name__)

# metric name -> (display label, getter)
METRICS: Dict[str, Tuple[str, Callable[[CategoryAggregate], Optional[float]]]] = {
    "fatalities": ("Mean fatalities", lambda a: a.fatalities),
    "injuries": ("Mean injuries", lambda a: a.injuries),
    "prop_damage": ("Mean property damage (US$)", lambda a: a.prop_damage),
    "crop_damage": ("Mean crop damage (US$)", lambda a: a.crop_damage),
    "health": ("Mean fatalities + injuries", lambda a: a.health_score),
    "economic": ("Mean property + crop damage (US$ millions)", lambda a: a.economic_score),
}

TABLE_METRICS = ("fatalities", "injuries", "prop_damage", "crop_damage")

# Scatter labels are drawn only above these scores
HEALTH_LABEL_THRESHOLD = 1.0
ECONOMIC_LABEL_THRESHOLD = 10.0

Ranking = List[Tuple[str, float]]


# -----------------------------
# Configuration / citation types
# -----------------------------

@dataclass
class DatasetCitation:
    """Dataset citation metadata for the DOCX report."""
    database_name: str = "Storm Events Database"
    institutional_author: str = "NOAA National Centers for Environmental Information"
    location: str = "Asheville, NC, USA"
    website: str = "https://www.ncdc.noaa.gov/stormevents/"
    file_name: Optional[str] = None
    file_note: Optional[str] = "Storm data export (CSV, optionally bzip2-compressed)."


@dataclass
class ReportConfig:
    """High-level knobs to control how the report is written."""
    title: str = "Storm Event Impact Report"
    subtitle: str = "Event types most harmful to health and to the economy"
    citation: DatasetCitation = field(default_factory=DatasetCitation)

    # Rows per ranking table
    top_n: int = 5

    # Bars per ranking chart
    chart_top_n: int = 15

    dpi: int = 200


# -----------------------------
# Rankings
# -----------------------------

def _value(agg: CategoryAggregate, metric: str) -> Optional[float]:
    if metric not in METRICS:
        raise ValueError(f"Unknown metric {metric!r}. Use one of: {', '.join(METRICS)}")
    v = METRICS[metric][1](agg)
    if v is None or not math.isfinite(v):
        return None
    return v


def top_n(aggregates: Dict[str, CategoryAggregate], metric: str, n: int) -> Ranking:
    """Top `n` (category, value) pairs, highest first.

    Categories with no value for the metric are left out. Equal values are
    ordered by category name, so the result does not depend on input order.
    """
    if n < 0:
        raise ValueError("n must be >= 0")
    pairs = []
    for cat, agg in aggregates.items():
        v = _value(agg, metric)
        if v is not None:
            pairs.append((cat, v))
    pairs.sort(key=lambda p: (-p[1], p[0]))
    return pairs[:n]


def build_tables(aggregates: Dict[str, CategoryAggregate], n: int = 5) -> List[Tuple[str, str, Ranking]]:
    """The four ranking tables as (title, value label, rows)."""
    tables = []
    for metric in TABLE_METRICS:
        label = METRICS[metric][0]
        tables.append((f"Top {n} event types by {label.lower()}", label, top_n(aggregates, metric, n)))
    return tables


def format_value(v: Optional[float]) -> str:
    """Blank for undefined, thousands separators otherwise."""
    if v is None:
        return ""
    if abs(v) >= 1000:
        return f"{v:,.0f}"
    return f"{v:,.3f}"


def format_table(title: str, value_label: str, rows: Sequence[Tuple[str, Optional[float]]]) -> str:
    """Plain-text table for the terminal."""
    cells = [(cat, format_value(v)) for cat, v in rows]
    w1 = max([len("Event type")] + [len(c) for c, _ in cells])
    w2 = max([len(value_label)] + [len(v) for _, v in cells])
    lines = [title, f"{'Event type':<{w1}}  {value_label:>{w2}}", f"{'-' * w1}  {'-' * w2}"]
    for cat, v in cells:
        lines.append(f"{cat:<{w1}}  {v:>{w2}}")
    if not cells:
        lines.append("(no data)")
    return "\n".join(lines)


# -----------------------------
# Charts
# -----------------------------

def _pyplot():
    try:
        import matplotlib
        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
        import numpy as np
    except ImportError as e:
        raise ImportError(
            "Missing dependency: matplotlib (and numpy).\n"
            "Install with: python -m pip install matplotlib numpy"
        ) from e
    return plt, np


def scatter_points(aggregates: Dict[str, CategoryAggregate]) -> List[Tuple[str, float, float, bool]]:
    """(category, health, economic, labelled) for categories with both scores."""
    points = []
    for cat, agg in aggregates.items():
        h = _value(agg, "health")
        e = _value(agg, "economic")
        if h is None or e is None:
            continue
        labelled = h > HEALTH_LABEL_THRESHOLD or e > ECONOMIC_LABEL_THRESHOLD
        points.append((cat, h, e, labelled))
    return points


def render_charts(
    aggregates: Dict[str, CategoryAggregate],
    out_dir: str,
    *,
    config: Optional[ReportConfig] = None,
) -> List[Tuple[str, str, str]]:
    """
    Write the ranking charts to `out_dir`.

    Returns a list of (title, file_path, description). A chart with nothing to
    plot is skipped.
    """
    config = config or ReportConfig()
    if not aggregates:
        raise ValueError("No categories to chart (aggregate set is empty).")
    plt, np = _pyplot()
    os.makedirs(out_dir, exist_ok=True)
    chart_paths: List[Tuple[str, str, str]] = []

    def _save(filename: str) -> str:
        path = os.path.join(out_dir, filename)
        plt.tight_layout()
        plt.savefig(path, dpi=config.dpi)
        plt.close()
        return path

    def _bar(title: str, ranking: Ranking, ylabel: str, why: str, filename: str) -> None:
        if not ranking:
            return
        x = np.arange(len(ranking))
        plt.figure(figsize=(10, 6))
        plt.bar(x, [v for _, v in ranking], edgecolor="black", linewidth=0.8)
        plt.xticks(x, [c for c, _ in ranking], rotation=45, ha="right")
        plt.title(title)
        plt.xlabel("Event type")
        plt.ylabel(ylabel)
        chart_paths.append((title, _save(filename), why))

    k = config.chart_top_n
    _bar(
        f"Top {k} event types by harm to population health",
        top_n(aggregates, "health", k),
        METRICS["health"][0],
        "Mean fatalities plus mean injuries per event, highest first.",
        "health_ranking.png",
    )
    _bar(
        f"Top {k} event types by economic damage",
        top_n(aggregates, "economic", k),
        METRICS["economic"][0],
        "Mean of property plus crop damage per event, in millions of US$, highest first.",
        "economic_ranking.png",
    )

    points = scatter_points(aggregates)
    if points:
        title = "Health impact vs economic damage by event type"
        plt.figure(figsize=(10, 7))
        plt.scatter([p[1] for p in points], [p[2] for p in points], alpha=0.7)
        for cat, h, e, labelled in points:
            if labelled:
                plt.annotate(cat, (h, e), textcoords="offset points", xytext=(4, 4), fontsize=8)
        plt.title(title)
        plt.xlabel(METRICS["health"][0])
        plt.ylabel(METRICS["economic"][0])
        chart_paths.append((
            title,
            _save("health_vs_economic.png"),
            f"Each point is one event type. Labels shown where health score > {HEALTH_LABEL_THRESHOLD:g} "
            f"or economic score > {ECONOMIC_LABEL_THRESHOLD:g}.",
        ))

    logger.info("Wrote %d charts to %s", len(chart_paths), out_dir)
    return chart_paths


# -----------------------------
# DOCX report
# -----------------------------

def generate_docx_report(
    result,
    out_path: str,
    *,
    config: Optional[ReportConfig] = None,
    charts: Optional[List[Tuple[str, str, str]]] = None,
) -> str:
    """
    Generate a DOCX report from a PipelineResult.

    Charts are rendered into a temporary directory (removed afterwards)
    unless `charts` is given.
    """
    config = config or ReportConfig()

    try:
        from docx import Document
        from docx.shared import Pt, Inches
        from docx.enum.text import WD_ALIGN_PARAGRAPH
    except ImportError as e:
        raise ImportError(
            "Missing dependency: python-docx.\n"
            "Install it with: python -m pip install python-docx"
        ) from e

    aggregates = result.aggregates
    if not aggregates:
        raise ValueError("No categories to report on (aggregate set is empty).")

    if charts is None:
        # chart files must outlive doc.save, which runs inside the recursive call
        with tempfile.TemporaryDirectory(prefix="stormrank_report_") as tmpdir:
            charts = render_charts(aggregates, tmpdir, config=config)
            return generate_docx_report(result, out_path, config=config, charts=charts)

    doc = Document()
    style = doc.styles["Normal"]
    style.font.name = "Calibri"
    style.font.size = Pt(11)

    def _center_title(text: str, size: int, bold: bool = False, italic: bool = False) -> None:
        p = doc.add_paragraph()
        r = p.add_run(text)
        r.bold = bold
        r.italic = italic
        r.font.size = Pt(size)
        p.alignment = WD_ALIGN_PARAGRAPH.CENTER

    def _kv(key: str, value: str) -> None:
        p = doc.add_paragraph()
        r = p.add_run(f"{key}: ")
        r.bold = True
        p.add_run(value)

    def _table(header: Sequence[str], rows: Sequence[Sequence[str]]) -> None:
        t = doc.add_table(rows=1, cols=len(header))
        for i, h in enumerate(header):
            t.rows[0].cells[i].text = h
        for row in rows:
            cells = t.add_row().cells
            for i, v in enumerate(row):
                cells[i].text = v

    _center_title(config.title, 22, bold=True)
    _center_title(config.subtitle, 12, italic=True)

    doc.add_paragraph("")
    _kv("Categories ranked", str(len(aggregates)))
    _kv("Events kept", f"{result.n_after_exclusion:,} of {result.n_loaded:,}")
    _kv("Date window", f"after {result.config.cutoff.isoformat()}")

    doc.add_heading("Dataset citation", level=1)
    cit = config.citation
    if cit.file_name:
        doc.add_paragraph(f"Data file used: {cit.file_name}")
    if cit.file_note:
        doc.add_paragraph(f"File note: {cit.file_note}")
    doc.add_paragraph(f"{cit.institutional_author}. {cit.database_name}. {cit.location}. {cit.website}.")

    doc.add_heading("Data processing", level=1)
    _table(["Stage", "Records"], [
        ("Loaded", f"{result.n_loaded:,}"),
        (f"Began after {result.config.cutoff.isoformat()}", f"{result.n_after_date:,}"),
        ("Excluded categories removed", f"{result.n_after_exclusion:,}"),
        ("Damage unit suffix K/M/B on both columns", f"{result.n_economic:,}"),
    ])
    doc.add_paragraph("")
    doc.add_paragraph("Event-type labels are lowercased and trimmed, then these synonyms are merged:")
    _table(["Raw label", "Canonical label"], sorted(CATEGORY_SYNONYMS.items()))
    doc.add_paragraph("Excluded categories: " + ", ".join(sorted(result.config.blocked)))

    doc.add_heading("Rankings", level=1)
    for title, label, rows in build_tables(aggregates, config.top_n):
        doc.add_paragraph(title)
        _table(["Event type", label], [(cat, format_value(v)) for cat, v in rows])
        doc.add_paragraph("")

    doc.add_heading("Visualizations", level=1)
    for title, path, why in charts:
        doc.add_paragraph(title)
        doc.add_picture(path, width=Inches(6.5))
        doc.add_paragraph(why)
        doc.add_paragraph("")

    doc.add_heading("Notes", level=1)
    for note in [
        "Rankings use per-event means, not totals, so frequent low-impact event types do not dominate.",
        "Damage amounts are decoded with K = thousand, M = million, B = billion. "
        "Records with any other unit code are left out of the damage means.",
        "A blank cell means the event type had no eligible records for that metric.",
    ]:
        doc.add_paragraph(note, style="List Bullet")

    # -----------------------------
    # Reproducibility footer
    # -----------------------------
    doc.add_heading("Reproducibility footer", level=1)
    from . import __version__
    from datetime import datetime as _dt
    doc.add_paragraph(f"stormrank version: {__version__}")
    doc.add_paragraph(f"Report generated at: {_dt.now().isoformat(timespec='seconds')}")
    if result.dataset_path:
        doc.add_paragraph(f"Dataset file: {result.dataset_path}")

    os.makedirs(os.path.dirname(out_path) or ".", exist_ok=True)
    doc.save(out_path)
    logger.info("Report written to %s", out_path)
    return out_path
