"""NDJSON encoder for result rows."""

import json
from collections.abc import Iterable

from logtally.core.models import ResultRow


def encode_rows(rows: Iterable[ResultRow]) -> str:
    """Encode result rows to newline-delimited JSON.

    Args:
        rows: An iterable of ResultRow objects.

    Returns:
        NDJSON string with one ``{"address", "count"}`` object per line.
        Empty string if no rows.
    """
    lines = []
    for row in rows:
        obj = {
            "address": row.address,
            "count": row.count,
        }
        lines.append(json.dumps(obj, ensure_ascii=False))

    if not lines:
        return ""

    return "\n".join(lines) + "\n"
