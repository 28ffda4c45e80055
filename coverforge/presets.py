"""
Cover field record and its JSON preset format.

A preset is a flat JSON object with the keys ``tint``, ``title1``,
``title2``, ``subtitle`` and ``author``. Unknown keys are ignored on load
and missing keys leave the current value alone.
"""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path

from .errors import InvalidPresetError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fields:
    tint: str = "#204a87"
    title1: str = ""
    title2: str = ""
    subtitle: str = ""
    author: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)

    def merged(self, values: dict[str, str]) -> "Fields":
        """Return a copy with the known keys of *values* applied."""
        known = {k: v for k, v in values.items() if k in FIELD_NAMES}
        return replace(self, **known)


FIELD_NAMES = tuple(f.name for f in fields(Fields))


def dump_preset(record: Fields) -> str:
    return json.dumps(record.to_dict(), indent=2, ensure_ascii=False)


def save_preset(record: Fields, path: str | Path) -> str:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        f.write(dump_preset(record))
    log.info(f"Saved preset: {path}")
    return str(path)


def parse_preset(text: str) -> dict[str, str]:
    """Parse preset JSON into the subset of known field values it carries.

    Raises InvalidPresetError for malformed JSON, a non-object root or a
    non-string field value.
    """
    try:
        data = json.loads(text)
    except json.JSONDecodeError as exc:
        raise InvalidPresetError(f"Invalid preset: {exc}") from exc
    if not isinstance(data, dict):
        raise InvalidPresetError("Invalid preset: expected a JSON object")

    values = {}
    for key, value in data.items():
        if key not in FIELD_NAMES:
            log.debug(f"Ignoring unknown preset key {key!r}")
            continue
        if not isinstance(value, str):
            raise InvalidPresetError(f"Invalid preset: {key!r} must be a string")
        values[key] = value
    return values


def load_preset(path: str | Path) -> dict[str, str]:
    try:
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
    except (OSError, UnicodeDecodeError) as exc:
        raise InvalidPresetError(f"Invalid preset: cannot read {path}: {exc}") from exc
    return parse_preset(text)
