"""
JSON export helper for recommendation lists and evaluation reports.

``export_to_json()`` writes to disk and returns the written ``Path``.
Payloads come from ``PPARecommendation.to_dict()`` or
``build_evaluation_report()`` and are already JSON-serialisable; anything
else (e.g. a ``datetime`` a caller adds) falls back to ``str()``.
"""

from __future__ import annotations

import json
from pathlib import Path


def export_to_json(
    data: dict | list,
    path: Path,
) -> Path:
    """Write ``data`` to a pretty-printed UTF-8 JSON file.

    Non-ASCII text (e.g. the ₱ sign in income reasons) is written as-is.

    Args:
        data: Dict or list to serialise.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(data, indent=2, default=str, ensure_ascii=False),
        encoding="utf-8",
    )
    return path
