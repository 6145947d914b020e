"""Output encoders for result rows."""

from collections.abc import Callable, Iterable
from typing import Literal

from logtally.core.encoding import lines, ndjson
from logtally.core.models import ResultRow

OutputFormat = Literal["text", "ndjson"]

ENCODERS: dict[str, Callable[[Iterable[ResultRow]], str]] = {
    "text": lines.encode_rows,
    "ndjson": ndjson.encode_rows,
}


def encode(rows: Iterable[ResultRow], fmt: OutputFormat = "text") -> str:
    """Encode rows with the encoder registered for ``fmt``.

    Raises:
        ValueError: If ``fmt`` has no encoder.
    """
    try:
        encoder = ENCODERS[fmt]
    except KeyError:
        raise ValueError(f"unknown output format: {fmt!r}") from None
    return encoder(rows)


__all__ = ["ENCODERS", "OutputFormat", "encode"]
