"""
stormrank package
=================

Ranks NOAA storm event types by harm to population health and by economic
damage.

- The CLI entry point is in `stormrank/cli.py`.
- Dataset loading is in `stormrank/loader.py`.
- Label cleaning and filters are in `stormrank/normalize.py`.
- The pipeline (filters -> aggregates) is in `stormrank/engine.py`.
- Tables, charts and the DOCX report are in `stormrank/report.py`.
"""

__version__ = '0.1.0'
