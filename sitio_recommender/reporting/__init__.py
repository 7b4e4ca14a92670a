"""
sitio_recommender.reporting — Evaluation reports, formatting, and export.

Modules:
  summary    — build_evaluation_report(): JSON-serialisable report dict.
  formatters — ASCII terminal table formatters for Typer CLI commands.
  export     — JSON file export helper.
"""
