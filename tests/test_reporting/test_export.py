"""Tests for sitio_recommender.reporting.export."""

from __future__ import annotations

import json
from datetime import datetime, timezone
from pathlib import Path

from sitio_recommender.reporting.export import export_to_json


def test_export_to_json_basic(tmp_path: Path) -> None:
    """Writes pretty-printed JSON and returns the path."""
    out = tmp_path / "recs.json"
    result = export_to_json([{"project_id": "sanitary-toilet", "need_score": 9.5}], out)

    assert result == out
    text = out.read_text(encoding="utf-8")
    assert "\n  " in text
    assert json.loads(text)[0]["need_score"] == 9.5


def test_export_to_json_creates_parent_dirs(tmp_path: Path) -> None:
    """Parent directories are created if missing."""
    out = tmp_path / "nested" / "deep" / "out.json"
    export_to_json({"a": 1}, out)
    assert out.exists()


def test_export_to_json_keeps_unicode(tmp_path: Path) -> None:
    """Peso signs and other non-ASCII text are written as-is."""
    out = tmp_path / "report.json"
    export_to_json({"reason": "Average daily income ₱120"}, out)
    text = out.read_text(encoding="utf-8")
    assert "₱120" in text
    assert json.loads(text)["reason"] == "Average daily income ₱120"


def test_export_to_json_stringifies_unknown_types(tmp_path: Path) -> None:
    """Values json cannot encode natively fall back to str()."""
    out = tmp_path / "ts.json"
    export_to_json({"at": datetime(2026, 1, 2, tzinfo=timezone.utc)}, out)
    assert json.loads(out.read_text(encoding="utf-8"))["at"].startswith("2026-01-02")


def test_export_recommendations(tmp_path: Path, engine, sanitation_profile) -> None:
    """Recommendation dicts round-trip through the exported file."""
    recs = engine.top_recommendations(sanitation_profile, limit=3)
    out = export_to_json([r.to_dict() for r in recs], tmp_path / "top.json")
    data = json.loads(out.read_text(encoding="utf-8"))
    assert [d["ppa"]["id"] for d in data] == [r.ppa.id for r in recs]
    assert data[0]["priority"] == "Critical"
