"""Parser for headerless nvidia-smi CSV output"""
import csv
from typing import Iterator, Union

from collectors.errors import ParseError
from metrics.models import GpuRecord


def parse_records(raw: bytes) -> Iterator[Union[GpuRecord, ParseError]]:
    """Yield one GpuRecord per non-blank line of ``raw``.

    Each line is parsed on its own, so a malformed row yields a ParseError
    in its place and parsing carries on with the next line. Fields are
    returned untrimmed.
    """
    text = raw.decode("utf-8", errors="replace")

    for line_number, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue

        try:
            fields = next(csv.reader([line], strict=True))
        except csv.Error as e:
            yield ParseError(line_number, line, str(e))
            continue

        yield GpuRecord(fields=tuple(fields), line_number=line_number)
