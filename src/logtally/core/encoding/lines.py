"""Plain ``<address>:<count>`` encoder for result rows."""

from collections.abc import Iterable

from logtally.core.models import ResultRow


def encode_rows(rows: Iterable[ResultRow]) -> str:
    """Encode result rows as ``<address>:<count>`` lines.

    Returns:
        One line per row, each ending with a newline.
        Empty string if no rows.
    """
    return "".join(f"{row.address}:{row.count}\n" for row in rows)
