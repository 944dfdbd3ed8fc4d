"""Labeled records and the comma-separated record source.

A data file starts with a header naming the attributes, the last column being
the label. Header names are lower-cased before they are matched against the
schema. Each following line is one record; lines with the wrong number of
columns or a non-numeric value in a continuous column are discarded and
logged, the rest of the file still loads.
"""

from __future__ import annotations

from pathlib import Path
from typing import Final, NamedTuple

import polars as pl
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field

from id3tree.exceptions import AttributesNotFoundError, DuplicateAttributesError, SchemaMismatchError
from id3tree.schema import AttributeSchema, ContinuousAttribute

# Internal column names; prefixed so they cannot clash with header names.
_LINE_COLUMN: Final[str] = "__line"
_LINE_NUMBER_COLUMN: Final[str] = "__line_number"
_FIELDS_COLUMN: Final[str] = "__fields"
_DELIMITER: Final[str] = ","

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class Record(BaseModel):
    """One labeled observation: raw attribute values plus a class label.

    Attributes:
        values (dict[str, str | float]): Raw value per attribute name. Categorical
            attributes hold their category string, continuous ones a float.
        label (str): The class label.

    Examples:
        >>> record = Record(values={"type": "student", "salary": 0.4}, label="C1")
        >>> record.value("salary")
        0.4
    """

    model_config = ConfigDict(frozen=True)

    values: dict[str, str | float] = Field(description="Raw value per attribute name.")
    label: str = Field(description="The class label.")

    def value(self, attribute: str) -> str | float:
        """Return the raw value of `attribute`.

        Args:
            attribute (str): The attribute name.

        Returns:
            str | float: The raw value.

        Raises:
            AttributesNotFoundError: If the record has no value for `attribute`.
        """
        try:
            return self.values[attribute]
        except KeyError:
            raise AttributesNotFoundError(
                missing_attributes=[attribute],
                available_attributes=list(self.values),
            ) from None


class DiscardedRow(NamedTuple):
    """A data line that was skipped while loading, with the reason.

    Attributes:
        line_number (int): 1-based line number in the file (the header is line 1).
        line (str): The raw line text.
        reason (str): Human-readable explanation.
    """

    line_number: int
    line: str
    reason: str


class LoadedRecords(BaseModel):
    """The outcome of loading one data file.

    Attributes:
        attributes (list[str]): Attribute names in header order, label column excluded.
            Empty when the file could not be read.
        records (list[Record]): Successfully parsed records in file order.
        discarded_rows (list[DiscardedRow]): Rows that were skipped, in file order.
    """

    attributes: list[str] = Field(default_factory=list)
    records: list[Record] = Field(default_factory=list)
    discarded_rows: list[DiscardedRow] = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def load_records(path: str | Path, schema: AttributeSchema) -> LoadedRecords:
    """Load labeled records from a comma-separated file.

    An unreadable or empty file is logged and yields an empty result rather
    than raising, so that callers can continue with no records.

    Args:
        path (str | Path): Location of the data file.
        schema (AttributeSchema): Schema the header and rows must fit.

    Returns:
        LoadedRecords: Parsed records, header attribute order and discarded rows.

    Raises:
        SchemaMismatchError: If the header has the wrong number of columns.
        AttributesNotFoundError: If a header attribute is not in the schema.
        DuplicateAttributesError: If a header attribute is repeated.
    """
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Failed to read data file", path=str(path), error=str(exc))
        return LoadedRecords()

    lines = text.splitlines()
    if not lines:
        logger.warning("Data file is empty", path=str(path))
        return LoadedRecords()

    header = parse_header(lines[0], schema)
    records, discarded_rows = _parse_rows(lines[1:], header, schema)

    for discarded in discarded_rows:
        logger.warning(
            "Discarded malformed row",
            path=str(path),
            line_number=discarded.line_number,
            reason=discarded.reason,
        )
    _warn_unknown_labels(records, schema, path)
    logger.info(
        "Loaded records",
        path=str(path),
        schema=schema.name,
        record_count=len(records),
        discarded_count=len(discarded_rows),
    )
    return LoadedRecords(attributes=header[:-1], records=records, discarded_rows=discarded_rows)


def parse_header(line: str, schema: AttributeSchema) -> list[str]:
    """Lower-case and validate a header line.

    Args:
        line (str): The first line of a data file.
        schema (AttributeSchema): Schema the header must describe.

    Returns:
        list[str]: Column names in file order, label column last.

    Raises:
        SchemaMismatchError: If the column count differs from the schema's.
        AttributesNotFoundError: If an attribute column is not in the schema.
        DuplicateAttributesError: If an attribute column is repeated.
    """
    header = [name.strip() for name in line.lower().split(_DELIMITER)]
    if len(header) != schema.column_count:
        raise SchemaMismatchError(
            f"Header has {len(header)} columns, schema {schema.name!r} expects {schema.column_count}",
            schema_name=schema.name,
            header=header,
        )
    attribute_columns = header[:-1]
    if len(set(attribute_columns)) != len(attribute_columns):
        raise DuplicateAttributesError(attributes=attribute_columns)
    schema.validate_attribute_names(attribute_columns)
    return header


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _parse_rows(
    lines: list[str],
    header: list[str],
    schema: AttributeSchema,
) -> tuple[list[Record], list[DiscardedRow]]:
    """Split and type data lines, separating good rows from discarded ones.

    Args:
        lines (list[str]): Data lines, header excluded.
        header (list[str]): Validated header, label column last.
        schema (AttributeSchema): Schema that types the columns.

    Returns:
        tuple[list[Record], list[DiscardedRow]]: Records and discarded rows,
            each in file order.
    """
    continuous_columns = [name for name in header[:-1] if isinstance(schema.attribute(name), ContinuousAttribute)]
    label_column = header[-1]

    frame = (
        pl.DataFrame({_LINE_COLUMN: lines}, schema={_LINE_COLUMN: pl.String})
        .with_row_index(_LINE_NUMBER_COLUMN, offset=2)
        .filter(pl.col(_LINE_COLUMN).str.strip_chars() != "")
        .with_columns(pl.col(_LINE_COLUMN).str.split(_DELIMITER).alias(_FIELDS_COLUMN))
    )
    field_count = pl.col(_FIELDS_COLUMN).list.len()

    wrong_width = frame.filter(field_count != schema.column_count)
    typed = frame.filter(field_count == schema.column_count).with_columns(
        pl.col(_FIELDS_COLUMN).list.get(index).alias(name) for index, name in enumerate(header)
    )
    # Raw strings are kept alongside so discarded rows can name the failing column.
    # "nan" parses as a float; it has no bin, so it counts as non-numeric.
    typed = typed.with_columns(
        *(pl.col(name).alias(_raw_column(name)) for name in continuous_columns),
        *(
            pl.col(name).str.strip_chars().cast(pl.Float64, strict=False).fill_nan(None)
            for name in continuous_columns
        ),
    )

    has_bad_number = (
        pl.any_horizontal(pl.col(name).is_null() for name in continuous_columns) if continuous_columns else pl.lit(False)
    )
    malformed = typed.filter(has_bad_number)
    parsed = typed.filter(~has_bad_number)

    discarded = [
        DiscardedRow(line_number=int(row[_LINE_NUMBER_COLUMN]), line=row[_LINE_COLUMN], reason=_width_reason(row, schema))
        for row in wrong_width.iter_rows(named=True)
    ]
    discarded.extend(
        DiscardedRow(
            line_number=int(row[_LINE_NUMBER_COLUMN]),
            line=row[_LINE_COLUMN],
            reason=_numeric_reason(row, continuous_columns),
        )
        for row in malformed.iter_rows(named=True)
    )
    discarded.sort(key=lambda row: row.line_number)

    records = []
    for row in parsed.select(header).iter_rows(named=True):
        label = row.pop(label_column)
        records.append(Record(values=row, label=label))
    return records, discarded


def _width_reason(row: dict, schema: AttributeSchema) -> str:
    """Describe a row with the wrong number of columns.

    Args:
        row (dict): The row, including the split fields.
        schema (AttributeSchema): Schema giving the expected width.

    Returns:
        str: The discard reason.
    """
    return f"expected {schema.column_count} columns, found {len(row[_FIELDS_COLUMN])}"


def _numeric_reason(row: dict, continuous_columns: list[str]) -> str:
    """Describe a row whose continuous columns could not be parsed.

    Args:
        row (dict): The typed row, including the `__raw_` copies of numeric columns.
        continuous_columns (list[str]): Names of the continuous columns.

    Returns:
        str: The discard reason naming each failing column and value.
    """
    failures = [f"{name}={row[_raw_column(name)]!r}" for name in continuous_columns if row[name] is None]
    return f"non-numeric value in numeric column: {', '.join(failures)}"


def _raw_column(name: str) -> str:
    return f"__raw_{name}"


def _warn_unknown_labels(records: list[Record], schema: AttributeSchema, path: str | Path) -> None:
    """Log labels outside the schema alphabet; entropy ignores them.

    Args:
        records (list[Record]): Loaded records.
        schema (AttributeSchema): Schema holding the label alphabet.
        path (str | Path): Source file, for the log context.
    """
    known = set(schema.labels)
    unknown: dict[str, int] = {}
    for record in records:
        if record.label not in known:
            unknown[record.label] = unknown.get(record.label, 0) + 1
    for label, count in unknown.items():
        logger.warning("Invalid class label", path=str(path), label=label, count=count)
