"""
Community profile loader: JSON file → CommunityProfile.

Accepted file shapes
--------------------
  - a single profile object                    ``{...}``
  - a list of profile objects                  ``[{...}, {...}]``
  - a wrapper with a ``profiles`` list          ``{"profiles": [{...}]}``

Keys may use the survey's camelCase spelling or snake_case; unknown keys
(stored recommendations, custom fields, pet statistics, ...) are ignored.

Validation rules
----------------
- The file must exist and contain valid UTF-8 JSON.
- ``load_profile`` requires exactly one profile in the file.
- Field-level problems (negative counts, condition outside 1-5, unknown
  enum values) surface as ``pydantic.ValidationError``.

Usage
-----
    from sitio_recommender.ingestion.profile_loader import load_profile

    profile = load_profile(Path("data/profiles/sitio_malinao_2024.json"))
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from sitio_recommender.models.profile import CommunityProfile

log = logging.getLogger(__name__)


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise FileNotFoundError(f"Profile file not found: {path}")
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Profile file {path} is not valid JSON: {exc}") from exc


def _profile_records(payload: Any, path: Path) -> list[dict[str, Any]]:
    """Normalise the three accepted file shapes to a list of dicts."""
    if isinstance(payload, dict) and isinstance(payload.get("profiles"), list):
        records = payload["profiles"]
    elif isinstance(payload, dict):
        records = [payload]
    elif isinstance(payload, list):
        records = payload
    else:
        raise ValueError(
            f"Profile file {path} must contain an object or a list of objects, "
            f"got {type(payload).__name__}."
        )

    for i, rec in enumerate(records):
        if not isinstance(rec, dict):
            raise ValueError(
                f"Profile at index {i} in {path} is a {type(rec).__name__}, expected an object."
            )
    return records


def parse_profile(record: dict[str, Any]) -> CommunityProfile:
    """Validate one raw survey dict.

    Raises:
        pydantic.ValidationError: If any field fails validation.
    """
    return CommunityProfile.model_validate(record)


def load_profiles(path: Path) -> list[CommunityProfile]:
    """Load every profile in ``path`` (see module docstring for shapes).

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not JSON or has an unsupported shape.
        pydantic.ValidationError: If a profile fails validation.
    """
    path = Path(path)
    records = _profile_records(_read_json(path), path)
    profiles = [parse_profile(rec) for rec in records]
    log.info("Loaded %d profile(s) from %s", len(profiles), path)
    return profiles


def load_profile(path: Path) -> CommunityProfile:
    """Load a file that holds exactly one profile.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ValueError: If the file is not JSON, or holds zero or several profiles.
        pydantic.ValidationError: If the profile fails validation.
    """
    profiles = load_profiles(path)
    if len(profiles) != 1:
        raise ValueError(
            f"Expected exactly one profile in {path}, found {len(profiles)}."
        )
    return profiles[0]
