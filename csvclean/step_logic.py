import csv
from collections.abc import Callable, Iterable
import logging
import math
from pathlib import Path

from csvclean.schemas import ColumnSpec, LoadResult, Record, RowFailure


logger = logging.getLogger(__name__)

IRIS_SCHEMA: tuple[ColumnSpec, ...] = (
    ColumnSpec("sepal_length", "float"),
    ColumnSpec("sepal_width", "float"),
    ColumnSpec("petal_length", "float"),
    ColumnSpec("petal_width", "float"),
    ColumnSpec("species", "label"),
)

INF_SPELLINGS = frozenset({"inf", "+inf", "-inf", "infinity", "+infinity", "-infinity"})


def _parse_float(value: str) -> float:
    # float() tolerates padding and digit separators; plain numeric text only.
    if value != value.strip() or "_" in value:
        raise ValueError(f"not a plain number: {value!r}")
    parsed = float(value)
    if math.isinf(parsed) and value.lower() not in INF_SPELLINGS:
        raise ValueError(f"out of float64 range: {value!r}")
    return parsed


def _parse_label(value: str) -> str:
    if not value:
        raise ValueError("label is empty")
    return value


FIELD_PARSERS: dict[str, tuple[Callable[[str], object], str]] = {
    "float": (_parse_float, "non-numeric value"),
    "label": (_parse_label, "empty label"),
}


def parse_row(row: list[str], line: int, schema: tuple[ColumnSpec, ...] = IRIS_SCHEMA) -> Record | RowFailure:
    if len(row) != len(schema):
        return RowFailure(line, min(len(row), len(schema)), "wrong field count", row)

    values: dict[str, object] = {}
    for column, (spec, value) in enumerate(zip(schema, row)):
        parser, reason = FIELD_PARSERS[spec.kind]
        try:
            values[spec.name] = parser(value)
        except ValueError:
            return RowFailure(line, column, reason, row)
    return Record(**values)


def load_records(input_path: Path, schema: tuple[ColumnSpec, ...] = IRIS_SCHEMA) -> LoadResult:
    if not input_path.exists():
        raise FileNotFoundError(f"input file not found: {input_path}")

    records: list[Record] = []
    failures: list[RowFailure] = []
    line = 0
    # Undecodable bytes are carried as surrogates and restored by write_records.
    with input_path.open("r", encoding="utf-8-sig", errors="surrogateescape", newline="") as infile:
        for row in csv.reader(infile):
            # Blank lines carry no fields and are not counted as rows.
            if not row:
                continue
            line += 1
            parsed = parse_row(row, line, schema)
            if isinstance(parsed, RowFailure):
                logger.warning("line %d: unexpected value in column %d", parsed.line, parsed.column)
                failures.append(parsed)
                continue
            records.append(parsed)
    return LoadResult(records=records, failures=failures)


def _format_float(value: float, decimal_places: int) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "+Inf" if value > 0 else "-Inf"
    return f"{value:.{decimal_places}f}"


def format_record(
    record: Record,
    decimal_places: int = 2,
    schema: tuple[ColumnSpec, ...] = IRIS_SCHEMA,
) -> list[str]:
    fields: list[str] = []
    for spec in schema:
        value = getattr(record, spec.name)
        if spec.kind == "float":
            fields.append(_format_float(value, decimal_places))
        else:
            fields.append(str(value))
    return fields


def quote_field(field: str) -> str:
    # Quoted when it holds a separator, quote or line break, starts with whitespace, or is "\.".
    needs_quotes = field == "\\." or any(ch in field for ch in ',"\r\n') or (field != "" and field[0].isspace())
    if not needs_quotes:
        return field
    return '"' + field.replace('"', '""') + '"'


def write_records(output_path: Path, records: Iterable[Record], decimal_places: int = 2) -> int:
    output_path.parent.mkdir(parents=True, exist_ok=True)
    written = 0
    with output_path.open("w", encoding="utf-8", errors="surrogateescape", newline="") as outfile:
        for record in records:
            outfile.write(",".join(quote_field(field) for field in format_record(record, decimal_places)))
            outfile.write("\n")
            written += 1
    return written
