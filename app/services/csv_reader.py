"""
app/services/csv_reader.py

Streaming reader for the municipal CSV exports.

Export format
-------------
- Encoding: Shift_JIS (read as cp932), CRLF line endings.
- Row 1: title, e.g. 【令和７年９月１日時点】
- Row 2: column headers
      施設所在区, 標準地域コード, 施設・事業名, 施設番号,
      ０歳児, １歳児, ２歳児, ３歳児, ４歳児, ５歳児, 合計, 更新日
- Data rows follow. Age-class cells hold "-" when no figure is published.

The acceptance, children and waiting exports all share this layout.
"""

from __future__ import annotations

import csv
import itertools
import re
from collections.abc import Iterator
from os import PathLike

DEFAULT_ENCODING = "cp932"
DEFAULT_SKIP_ROWS = 2

# cp932 decodes bytes that Shift_JIS leaves undefined (0x80, 0xA0, 0xFD-0xFF)
# to C1 controls and private-use code points instead of failing.
_UNDEFINED_BYTE_CHARS = re.compile("[\u0080-\u009f\uf8f0-\uf8f3]")


class CSVDecodeError(ValueError):
    """
    Raised when the export cannot be opened, read or decoded.
    """

    def __init__(self, path: str, message: str, *, line_number: int | None = None) -> None:
        location = f"{path}:{line_number}" if line_number is not None else path
        super().__init__(f"{location}: {message}")
        self.path = path
        self.line_number = line_number


def read_csv_rows(
    path: str | PathLike[str],
    *,
    encoding: str = DEFAULT_ENCODING,
    skip_rows: int = DEFAULT_SKIP_ROWS,
) -> Iterator[list[str]]:
    """
    Yield the data rows of one export as lists of field strings.

    The first `skip_rows` rows are discarded by count, whatever they hold.
    The file is opened when iteration starts and closed when the generator
    is exhausted, fails or is closed early.
    """

    if skip_rows < 0:
        raise ValueError("skip_rows must be >= 0.")

    display_path = str(path)
    try:
        handle = open(path, "r", encoding=encoding, newline="")
    except OSError as exc:
        raise CSVDecodeError(display_path, f"cannot open file ({exc.strerror or exc})") from exc

    with handle:
        reader = csv.reader(handle)
        try:
            for row in itertools.islice(reader, skip_rows, None):
                _check_defined_characters(row, display_path, encoding, reader.line_num)
                yield row
        except UnicodeDecodeError as exc:
            raise CSVDecodeError(
                display_path,
                f"invalid {encoding} byte sequence",
                line_number=reader.line_num + 1,
            ) from exc
        except csv.Error as exc:
            raise CSVDecodeError(
                display_path,
                f"invalid CSV format: {exc}",
                line_number=reader.line_num,
            ) from exc
        except OSError as exc:
            raise CSVDecodeError(display_path, f"read failed ({exc})") from exc


def _check_defined_characters(row: list[str], path: str, encoding: str, line_number: int) -> None:
    for field in row:
        match = _UNDEFINED_BYTE_CHARS.search(field)
        if match is not None:
            raise CSVDecodeError(
                path,
                f"invalid {encoding} byte sequence (decoded to U+{ord(match.group()):04X})",
                line_number=line_number,
            )
