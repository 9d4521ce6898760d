import csv
import math
import os
import re
import shutil
import time
import uuid
from typing import Iterator, NamedTuple, Union

import structlog
from fastapi import UploadFile

logger = structlog.get_logger(__name__)

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")

Number = Union[int, float]


class ParsedRow(NamedTuple):
    size: Number
    quantity: Number


def parse_int(value) -> Number:
    """Parse the leading integer of a field, math.nan when there is none."""
    if value is None:
        return math.nan
    m = _LEADING_INT.match(str(value))
    if not m:
        return math.nan
    return int(m.group(1))


def is_valid(row: ParsedRow) -> bool:
    return not any(isinstance(v, float) and math.isnan(v) for v in row)


def parse_rows(path: str) -> Iterator[ParsedRow]:
    """
    Lazily yield one ParsedRow per CSV data row.

    The file needs a header row with ``size`` and ``quantity`` columns; other
    columns are ignored. Unconvertible fields come through as math.nan and are
    left for the caller to skip. Lines the csv module rejects (e.g. a field over
    the size limit) are dropped. The file is deleted once the generator is
    exhausted or closed.
    """
    try:
        with open(path, "r", encoding="utf-8-sig", errors="replace", newline="") as f:
            reader = csv.DictReader(f)
            while True:
                try:
                    record = next(reader)
                except StopIteration:
                    break
                except csv.Error:
                    logger.warning("Skipping malformed CSV line", path=path, line=reader.line_num, exc_info=True)
                    continue
                yield ParsedRow(
                    size=parse_int(record.get("size")),
                    quantity=parse_int(record.get("quantity")),
                )
    finally:
        discard_upload(path)


def save_upload(upload: UploadFile, upload_dir: str) -> str:
    """Write an incoming multipart file to the upload dir and return its path."""
    ext = os.path.splitext(upload.filename or "")[1]
    # file-<epoch ms>-<short id><ext>
    path = os.path.join(upload_dir, f"file-{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}{ext}")
    with open(path, "wb") as out:
        shutil.copyfileobj(upload.file, out)
    return path


def discard_upload(path: str) -> None:
    """Remove a transient upload if it is still on disk."""
    if not os.path.exists(path):
        return
    try:
        os.unlink(path)
    except OSError:
        logger.warning("Failed to delete uploaded file", path=path, exc_info=True)
