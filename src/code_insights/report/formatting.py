"""Plain-text layout helpers shared by every tool report."""

from __future__ import annotations

import math
from typing import Any, Mapping


def js_round(value: float) -> int:
    """Round half up (2.5 -> 3, -2.5 -> -2)."""
    return math.floor(value + 0.5)


def format_score(value: float) -> str:
    if math.isfinite(value):
        return str(js_round(value))
    return "-Infinity" if value < 0 else "Infinity"


def padleft(value: Any, width: int, char: str = " ") -> str:
    return str(value).rjust(width, char)


def padright(value: Any, width: int, char: str = " ") -> str:
    return str(value).ljust(width, char)


def padcenter(value: Any, width: int) -> str:
    """Center ``value``, adding the first pad character on the left."""
    text = str(value)
    left = True
    while len(text) < width:
        text = f" {text}" if left else f"{text} "
        left = not left
    return text


def percent(current: float, total: float) -> str:
    share = (100 * current) / total if total > 0 else 0
    return f"  ({padleft(f'{share:.2f}', 6)}%)"


def histogram_table(buckets: Mapping[str, int], ranged: bool = False) -> list[str]:
    """Bucket counts as aligned ``label | count`` rows.

    Numeric labels sort numerically; ``ranged`` turns each label into
    ``<label>-<next label>``.
    """
    keys = sorted(buckets, key=_label_key)
    if not keys:
        return []

    labels = []
    for index, key in enumerate(keys):
        if ranged and index + 1 < len(keys):
            labels.append(f"{key}-{keys[index + 1]}")
        else:
            labels.append(str(key))

    label_width = max(10, max(len(label) for label in labels))
    value_width = max(len(str(buckets[key])) for key in keys)
    return [
        f"{padleft(label, label_width)} | {padleft(buckets[key], value_width)}"
        for label, key in zip(labels, keys)
    ]


def _label_key(label: Any) -> tuple[int, float, str]:
    try:
        return (0, float(label), "")
    except (TypeError, ValueError):
        return (1, 0.0, str(label))


def format_mapping(data: Any, indent: int = 0, step: int = 2) -> list[str]:
    """Indented ``key: value`` rendering of nested dicts and lists."""
    pad = " " * indent
    lines: list[str] = []

    if isinstance(data, Mapping):
        for key, value in data.items():
            if isinstance(value, (Mapping, list)) and value:
                lines.append(f"{pad}{key}:")
                lines.extend(format_mapping(value, indent + step, step))
            else:
                lines.append(f"{pad}{key}: {_scalar(value)}")
    elif isinstance(data, list):
        for item in data:
            if isinstance(item, (Mapping, list)) and item:
                lines.append(f"{pad}-")
                lines.extend(format_mapping(item, indent + step, step))
            else:
                lines.append(f"{pad}- {_scalar(item)}")
    else:
        lines.append(f"{pad}{_scalar(data)}")
    return lines


def _scalar(value: Any) -> str:
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        if not math.isfinite(value):
            return format_score(value)
        return str(int(value)) if value.is_integer() else f"{value:.4f}".rstrip("0")
    if isinstance(value, (Mapping, list)):
        return "(empty)"
    return str(value)
