"""Delimited-text row parsing for imports.

The header line is read once; every later row is coerced to the header's width
(extra cells dropped, missing cells padded with ""), so a ragged row degrades
its own data instead of aborting the file.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Sequence, Union

from ..core.exceptions import ValidationError

_BOM = "\ufeff"


@dataclass(frozen=True)
class ParsedRow:
    """One data row: either a field map or a diagnostic."""

    line_number: int
    fields: Optional[dict[str, str]] = None
    error: Optional[str] = None


class RowParser:
    def __init__(self, header: Sequence[str]):
        columns = [str(h).strip() for h in header]
        if columns:
            columns[0] = columns[0].lstrip(_BOM).strip()
        self._header = columns

    @property
    def header(self) -> list[str]:
        return list(self._header)

    def parse(self, values: Sequence[str]) -> dict[str, str]:
        width = len(self._header)
        cells = [(v or "").strip() for v in values[:width]]
        if len(cells) < width:
            cells.extend([""] * (width - len(cells)))
        return dict(zip(self._header, cells))


class CsvRowSource:
    """Streams ParsedRow items from an open text or binary stream.

    Row numbers are physical line numbers with the header on line 1, so the
    first data row is row 2 and a row is numbered by the line it starts on.
    Blank lines advance the numbering but are not yielded. Binary input is
    decoded line by line, so an invalid byte sequence only spoils its own row.
    """

    def __init__(self, stream: Iterable[Union[str, bytes]], *, delimiter: str = ","):
        self._undecodable: set[int] = set()
        self._reader = csv.reader(self._decoded_lines(stream), delimiter=delimiter)
        try:
            header = next(self._reader)
        except StopIteration:
            raise ValidationError("The uploaded file is empty")
        except csv.Error as e:
            raise ValidationError(f"Unreadable header row: {e}")
        if self._undecodable:
            raise ValidationError("The header row is not valid UTF-8 text")

        self.parser = RowParser(header)
        if not any(self.parser.header):
            raise ValidationError("The header row is empty")

    def _decoded_lines(self, stream: Iterable[Union[str, bytes]]) -> Iterator[str]:
        for number, line in enumerate(stream, start=1):
            if isinstance(line, str):
                yield line
                continue
            try:
                yield line.decode("utf-8-sig" if number == 1 else "utf-8")
            except UnicodeDecodeError:
                self._undecodable.add(number)
                yield line.decode("utf-8", errors="replace")

    def __iter__(self) -> Iterator[ParsedRow]:
        while True:
            line_number = self._reader.line_num + 1
            try:
                values = next(self._reader)
            except StopIteration:
                return
            except csv.Error as e:
                yield ParsedRow(line_number=line_number, error=f"Malformed row: {e}")
                continue

            if any(n in self._undecodable for n in range(line_number, self._reader.line_num + 1)):
                yield ParsedRow(line_number=line_number, error="Row is not valid UTF-8 text")
                continue
            if not values or all(not (v or "").strip() for v in values):
                continue
            yield ParsedRow(line_number=line_number, fields=self.parser.parse(values))
