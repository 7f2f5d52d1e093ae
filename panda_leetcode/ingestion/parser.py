"""Parse upstream CSV text into ProblemRecords."""

from __future__ import annotations

import csv
import io
import logging
import re

from panda_leetcode.errors import MalformedUpstreamData
from panda_leetcode.ingestion.models import ProblemRecord

logger = logging.getLogger("panda_leetcode.ingestion")

_TOPIC_SEPARATORS = re.compile(r"[;,]")


def split_topics(raw: str | None) -> list[str]:
    """Split a raw Topics cell on ';' or ',' into trimmed, non-empty names."""
    if not raw:
        return []
    return [part.strip() for part in _TOPIC_SEPARATORS.split(raw) if part.strip()]


def parse_problem_csv(text: str) -> list[ProblemRecord]:
    """Parse CSV with a header row into records, in upstream row order.

    Raises MalformedUpstreamData when the text is not well-formed CSV or a
    row's field count differs from the header's.
    """
    text = text.lstrip("\ufeff")
    reader = csv.reader(io.StringIO(text, newline=""), strict=True)

    header: list[str] | None = None
    records: list[ProblemRecord] = []
    try:
        for row in reader:
            if not row:
                continue
            if header is None:
                header = [name.strip() for name in row]
                continue
            if len(row) != len(header):
                raise MalformedUpstreamData(
                    f"Row {reader.line_num} has {len(row)} fields, expected {len(header)}"
                )
            values = dict(zip(header, (value.strip() for value in row)))
            values["Topics"] = split_topics(values.get("Topics"))
            records.append(ProblemRecord.model_validate(values))
    except csv.Error as exc:
        logger.error("CSV parse error at line %d: %s", reader.line_num, exc)
        raise MalformedUpstreamData(str(exc)) from exc

    return records
