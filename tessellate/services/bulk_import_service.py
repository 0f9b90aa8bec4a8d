"""
Bulk requirement import from CSV.

File layout (no header row):

    text[,category[,ignored...]]

Rules:
  - Records with zero fields (blank lines) are skipped.
  - Column 0 is the requirement text, column 1 the category when present
    and non-empty; further columns are ignored.
  - Every imported requirement gets status NOT_MET.
  - A `"` may only open a quoted field; one anywhere else in a field is an
    error. Every record must have as many fields as the first one.
  - Rows are committed one at a time. A CSV syntax error or a store failure
    stops the import, and rows written before it stay written.
"""

import csv
import io
import logging

from tessellate.core.exceptions import ValidationError
from tessellate.models.project import Project
from tessellate.models.requirement import REQUIREMENT_STATUS_NOT_MET, Requirement
from tessellate.services import entity_store, relationship_service

logger = logging.getLogger(__name__)

SUCCESS_MESSAGE = "Requirements uploaded successfully"


def decode_upload(file_content: str | bytes) -> str:
    if isinstance(file_content, bytes):
        try:
            return file_content.decode("utf-8-sig")  # Handle BOM
        except UnicodeDecodeError as e:
            raise ValidationError("Error reading CSV", str(e))
    return file_content


class _LineTap:
    """Line iterator for csv.reader that keeps the raw text of the current record."""

    def __init__(self, text: str):
        self._lines = io.StringIO(text)
        self.pending: list[str] = []

    def __iter__(self):
        return self

    def __next__(self) -> str:
        line = next(self._lines)
        self.pending.append(line)
        return line

    def take(self) -> str:
        raw = "".join(self.pending)
        self.pending.clear()
        return raw


def find_bare_quote(raw: str) -> int | None:
    """Offset of a ``"`` inside a non-quoted field of ``raw``, or None.

    A field is quoted only when its first character is ``"``; within it
    ``""`` stands for a literal quote. csv.reader accepts ``a"b`` as plain
    text, so this check runs on the raw record.
    """
    at_field_start = True
    in_quotes = False
    i = 0
    while i < len(raw):
        ch = raw[i]
        if in_quotes:
            if ch == '"':
                if raw[i + 1:i + 2] == '"':
                    i += 1
                else:
                    in_quotes = False
        elif ch == '"':
            if not at_field_start:
                return i
            in_quotes = True
        at_field_start = not in_quotes and ch in ",\r\n"
        i += 1
    return None


def row_values(record: list[str]) -> dict | None:
    """Map one CSV record to Requirement values, or None for a blank line."""
    if not record:
        return None
    values = {"text": record[0], "status": REQUIREMENT_STATUS_NOT_MET}
    if len(record) > 1 and record[1]:
        values["category"] = record[1]
    return values


def read_records(text: str):
    """Yield the non-blank records of ``text``.

    Raises csv.Error on malformed quoting, a bare quote in a non-quoted
    field, or a record whose field count differs from the first record's.
    """
    tap = _LineTap(text)
    reader = csv.reader(tap, strict=True)
    first_line = 1
    fields_per_record = None
    for record in reader:
        raw = tap.take()
        line = first_line
        first_line = reader.line_num + 1
        if not record:
            continue
        offset = find_bare_quote(raw)
        if offset is not None:
            row = line + raw.count("\n", 0, offset)
            column = offset - (raw.rfind("\n", 0, offset) + 1) + 1
            raise csv.Error(f'parse error on line {row}, column {column}: bare " in non-quoted field')
        if fields_per_record is None:
            fields_per_record = len(record)
        elif len(record) != fields_per_record:
            raise csv.Error(f"record on line {line}: wrong number of fields")
        yield record


def import_requirements_csv(project_id: int, file_content: str | bytes | None) -> dict:
    """Create one Requirement per non-blank CSV record under ``project_id``.

    Returns ``{"message", "count", "requirements"}`` with the created rows
    projected. The project is checked first, so a missing project is a
    NotFoundError even when no file came with the request.
    """
    relationship_service.require_parent(Project, project_id)
    if file_content is None:
        raise ValidationError("No file uploaded")

    created = []
    try:
        for record in read_records(decode_upload(file_content)):
            values = row_values(record)
            created.append(entity_store.create(Requirement, {**values, "project_id": project_id}))
    except csv.Error as e:
        logger.warning(
            "CSV import into project=%s stopped after %d rows: %s",
            project_id, len(created), e,
        )
        raise ValidationError("Error reading CSV", str(e))

    logger.info("Imported %d requirements into project=%s", len(created), project_id)
    return {
        "message": SUCCESS_MESSAGE,
        "count": len(created),
        "requirements": [r.to_dict() for r in created],
    }
