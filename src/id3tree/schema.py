"""Attribute schema and discretizer.

A schema describes every attribute of a record domain together with the
label alphabet. Each attribute maps a raw value onto a small, fixed set of
bins; bins are the only values used as edge keys in a tree.

- Categorical attributes have one bin per category; the bin is the
  category's ordinal cast to float.
- Continuous attributes are assumed to be normalized into [0, 1] and use the
  upper edges of four quartile buckets: 0.25, 0.5, 0.75 and 1.0.
"""

from __future__ import annotations

import math
from bisect import bisect_left
from typing import Annotated, Final, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from id3tree.exceptions import (
    AttributesNotFoundError,
    DiscretizationError,
    DuplicateAttributesError,
    OutOfRangeValueError,
    UnknownCategoryError,
)

# ---------------------------------------------------------------------------
# Public type aliases and constants
# ---------------------------------------------------------------------------

type RawValue = str | float

type Bin = float

type OutOfRangePolicy = Literal["clamp", "reject"]

QUARTILE_EDGES: Final[tuple[float, ...]] = (0.25, 0.5, 0.75, 1.0)

# ---------------------------------------------------------------------------
# Public models -- Attributes
# ---------------------------------------------------------------------------


class CategoricalAttribute(BaseModel):
    """An attribute whose raw values come from a fixed, ordered set of categories.

    Attributes:
        kind (Literal["categorical"]): Discriminator field; always `"categorical"`.
        name (str): Attribute name, matching the lower-cased data file header.
        categories (list[str]): Raw category strings in ordinal order; the
            ordinal of a category is its index in this list.

    Examples:
        >>> size = CategoricalAttribute(name="size", categories=["Small", "Medium", "Large"])
        >>> size.possible_bins()
        [0.0, 1.0, 2.0]
        >>> size.bin_of("Large")
        2.0
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["categorical"] = Field(
        default="categorical",
        description='Discriminator field. Always "categorical".',
    )
    name: str = Field(min_length=1, description="Attribute name as it appears in the lower-cased header.")
    categories: list[str] = Field(
        min_length=1,
        description="Raw category strings in ordinal order.",
    )

    @field_validator("categories", mode="after")
    @classmethod
    def _validate_unique_categories(cls, value: list[str]) -> list[str]:
        """Reject repeated categories, which would make the ordinal mapping ambiguous.

        Args:
            value (list[str]): The category list to validate.

        Returns:
            list[str]: The validated list, unchanged.

        Raises:
            ValueError: If a category appears more than once.
        """
        if len(set(value)) != len(value):
            raise ValueError(f"categories must be unique, got {value}")
        return value

    def possible_bins(self) -> list[Bin]:
        """Return one bin per category, in ordinal order.

        Returns:
            list[Bin]: `[0.0, 1.0, ..., k - 1.0]` for `k` categories.
        """
        return [float(ordinal) for ordinal in range(len(self.categories))]

    def bin_index(self, raw_value: RawValue) -> int:
        """Return the ordinal of `raw_value`.

        Args:
            raw_value (RawValue): A raw category string.

        Returns:
            int: Position of the value's bin in `possible_bins()`.

        Raises:
            UnknownCategoryError: If `raw_value` is not one of the categories.
        """
        try:
            return self.categories.index(raw_value)  # type: ignore[arg-type]
        except ValueError:
            raise UnknownCategoryError(
                attribute=self.name,
                value=raw_value,
                known_categories=list(self.categories),
            ) from None

    def bin_of(self, raw_value: RawValue) -> Bin:
        """Return the canonical bin label (the ordinal as a float).

        Args:
            raw_value (RawValue): A raw category string.

        Returns:
            Bin: The ordinal of `raw_value` cast to float.
        """
        return float(self.bin_index(raw_value))


class ContinuousAttribute(BaseModel):
    """A pre-normalized numeric attribute discretized into quartile buckets.

    Values in `[0, 0.25]` map to `0.25`, `(0.25, 0.5]` to `0.5`,
    `(0.5, 0.75]` to `0.75` and `(0.75, 1]` to `1.0`.

    Values outside `[0, 1]` are handled by `out_of_range`: `"clamp"` moves
    them to the nearest end of the range (negatives land in `0.25`, values
    above one in `1.0`), `"reject"` raises `OutOfRangeValueError`. NaN is
    rejected under both policies.

    Attributes:
        kind (Literal["continuous"]): Discriminator field; always `"continuous"`.
        name (str): Attribute name, matching the lower-cased data file header.
        out_of_range (OutOfRangePolicy): Policy for values outside `[0, 1]`.

    Examples:
        >>> salary = ContinuousAttribute(name="salary")
        >>> salary.bin_of(0.3)
        0.5
        >>> salary.bin_of(-2.0)
        0.25
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["continuous"] = Field(
        default="continuous",
        description='Discriminator field. Always "continuous".',
    )
    name: str = Field(min_length=1, description="Attribute name as it appears in the lower-cased header.")
    out_of_range: OutOfRangePolicy = Field(
        default="clamp",
        description='Policy for values outside [0, 1]: "clamp" or "reject".',
    )

    def possible_bins(self) -> list[Bin]:
        """Return the four quartile edges in ascending order.

        Returns:
            list[Bin]: `[0.25, 0.5, 0.75, 1.0]`.
        """
        return list(QUARTILE_EDGES)

    def bin_index(self, raw_value: RawValue) -> int:
        """Return the index of the quartile bucket holding `raw_value`.

        Args:
            raw_value (RawValue): A number, or a string holding one.

        Returns:
            int: Position of the value's bin in `possible_bins()`.
        """
        return bisect_left(QUARTILE_EDGES, self._normalize(raw_value))

    def bin_of(self, raw_value: RawValue) -> Bin:
        """Return the upper edge of the quartile bucket holding `raw_value`.

        Args:
            raw_value (RawValue): A number, or a string holding one.

        Returns:
            Bin: One of `0.25`, `0.5`, `0.75`, `1.0`.
        """
        return QUARTILE_EDGES[self.bin_index(raw_value)]

    def _normalize(self, raw_value: RawValue) -> float:
        """Convert `raw_value` to a float inside `[0, 1]` according to the policy.

        Args:
            raw_value (RawValue): A number, or a string holding one.

        Returns:
            float: The value, clamped into `[0, 1]` when the policy allows it.

        Raises:
            DiscretizationError: If `raw_value` is not numeric.
            OutOfRangeValueError: If the value is NaN, or outside `[0, 1]`
                under the `"reject"` policy.
        """
        try:
            value = float(raw_value)
        except (TypeError, ValueError):
            raise DiscretizationError(
                f"Value {raw_value!r} for attribute {self.name!r} is not numeric",
                attribute=self.name,
                value=raw_value,
            ) from None
        if math.isnan(value):
            raise OutOfRangeValueError(attribute=self.name, value=raw_value)
        if 0.0 <= value <= 1.0:
            return value
        if self.out_of_range == "reject":
            raise OutOfRangeValueError(attribute=self.name, value=raw_value)
        return min(max(value, 0.0), 1.0)


Attribute = Annotated[
    CategoricalAttribute | ContinuousAttribute,
    Field(discriminator="kind"),
]

# ---------------------------------------------------------------------------
# Public models -- Schema
# ---------------------------------------------------------------------------


class AttributeSchema(BaseModel):
    """The attribute domain and label alphabet of one record type.

    Attributes:
        name (str): Short schema name, e.g. `"customer"`.
        attributes (list[Attribute]): Attribute descriptors in declaration
            order. Declaration order is the default split tie-break order.
        labels (list[str]): The fixed label alphabet. Entropy only counts
            labels from this list; its order breaks majority-label ties.
        default_folds (int): Number of evaluation folds used when the caller
            does not choose one.

    Examples:
        >>> schema = AttributeSchema(
        ...     name="toy",
        ...     attributes=[
        ...         CategoricalAttribute(name="colour", categories=["red", "blue"]),
        ...         ContinuousAttribute(name="weight"),
        ...     ],
        ...     labels=["yes", "no"],
        ... )
        >>> schema.attribute_names
        ['colour', 'weight']
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Short schema name.")
    attributes: list[Attribute] = Field(
        min_length=1,
        description="Attribute descriptors in declaration order.",
    )
    labels: list[str] = Field(
        min_length=1,
        description="The fixed label alphabet, in tie-break order.",
    )
    default_folds: int = Field(
        default=10,
        ge=1,
        description="Number of evaluation folds used by default.",
    )

    @field_validator("attributes", mode="after")
    @classmethod
    def _validate_unique_attribute_names(cls, value: list[Attribute]) -> list[Attribute]:
        """Validate that no two attributes share a name.

        Args:
            value (list[Attribute]): The attribute descriptors to validate.

        Returns:
            list[Attribute]: The validated list, unchanged.

        Raises:
            DuplicateAttributesError: If an attribute name is repeated.
        """
        names = [attribute.name for attribute in value]
        if len(set(names)) != len(names):
            raise DuplicateAttributesError(attributes=names)
        return value

    @field_validator("labels", mode="after")
    @classmethod
    def _validate_unique_labels(cls, value: list[str]) -> list[str]:
        """Validate that the label alphabet has no repeated symbols.

        Args:
            value (list[str]): The label alphabet to validate.

        Returns:
            list[str]: The validated list, unchanged.

        Raises:
            ValueError: If a label is repeated.
        """
        if len(set(value)) != len(value):
            raise ValueError(f"labels must be unique, got {value}")
        return value

    @property
    def attribute_names(self) -> list[str]:
        """Attribute names in declaration order."""
        return [attribute.name for attribute in self.attributes]

    @property
    def column_count(self) -> int:
        """Number of columns in a data file row: every attribute plus the label."""
        return len(self.attributes) + 1

    def attribute(self, name: str) -> CategoricalAttribute | ContinuousAttribute:
        """Look up an attribute descriptor by name.

        Args:
            name (str): The attribute name.

        Returns:
            CategoricalAttribute | ContinuousAttribute: The descriptor.

        Raises:
            AttributesNotFoundError: If the schema has no attribute called `name`.
        """
        for attribute in self.attributes:
            if attribute.name == name:
                return attribute
        raise AttributesNotFoundError(missing_attributes=[name], available_attributes=self.attribute_names)

    def validate_attribute_names(self, names: list[str]) -> None:
        """Raise if any of `names` is not an attribute of this schema.

        Args:
            names (list[str]): Attribute names to check.

        Raises:
            AttributesNotFoundError: If any name is unknown.
        """
        known = set(self.attribute_names)
        missing = [name for name in names if name not in known]
        if missing:
            raise AttributesNotFoundError(missing_attributes=missing, available_attributes=self.attribute_names)
