"""Custom exceptions for id3tree.

Schema and lookup errors (subclass ValueError):
- AttributesNotFoundError: Raised when attribute names are not part of a schema.
- DuplicateAttributesError: Raised when an attribute name is given more than once.
- SchemaMismatchError: Raised when a data file header does not fit its schema.

Discretization errors (subclass ValueError):
- DiscretizationError: Base class for values that cannot be mapped to a bin.
- UnknownCategoryError: Raised for a categorical value missing from the attribute's categories.
- OutOfRangeValueError: Raised for a continuous value outside [0, 1] under the "reject" policy.

Tree induction errors (subclass Exception):
- TreeBuildError: Base class for failures while growing a tree.
- AttributesExhaustedError: Raised when no attribute is left to split on and no label is available.
"""

from __future__ import annotations


class AttributesNotFoundError(ValueError):
    """Raised when requested attribute names do not exist in a schema.

    Attributes:
        missing_attributes (list[str]): Attribute names that were not found.
        available_attributes (list[str]): Attribute names defined by the schema.

    Examples:
        >>> err = AttributesNotFoundError(
        ...     missing_attributes=["age"],
        ...     available_attributes=["type", "salary"],
        ... )
        >>> err.missing_attributes
        ['age']
    """

    missing_attributes: list[str]
    available_attributes: list[str]

    def __init__(
        self,
        missing_attributes: list[str],
        available_attributes: list[str],
    ) -> None:
        """Initialize AttributesNotFoundError.

        Args:
            missing_attributes (list[str]): Attribute names not found in the schema.
            available_attributes (list[str]): Attribute names present in the schema.
        """
        super().__init__(f"Attributes not found in schema: {sorted(missing_attributes)}")
        self.missing_attributes = missing_attributes
        self.available_attributes = available_attributes


class DuplicateAttributesError(ValueError):
    """Raised when duplicate attribute names are provided.

    Attributes:
        attributes (list[str]): The attribute list that contains duplicates.
        duplicate_attributes (list[str]): Each duplicated name, listed once.

    Examples:
        >>> err = DuplicateAttributesError(attributes=["type", "type", "salary"])
        >>> err.duplicate_attributes
        ['type']
    """

    attributes: list[str]
    duplicate_attributes: list[str]

    def __init__(self, attributes: list[str]) -> None:
        """Initialize DuplicateAttributesError.

        Args:
            attributes (list[str]): The attribute list containing duplicates.
        """
        seen: set[str] = set()
        duplicates: list[str] = []
        for name in attributes:
            if name in seen and name not in duplicates:
                duplicates.append(name)
            seen.add(name)
        super().__init__(f"Duplicate attribute names are not allowed: {duplicates}")
        self.attributes = attributes
        self.duplicate_attributes = duplicates


class SchemaMismatchError(ValueError):
    """Raised when a data file header does not describe the schema's attributes.

    Attributes:
        schema_name (str): Name of the schema the file was loaded against.
        header (list[str]): The lower-cased header columns, label column included.
    """

    schema_name: str
    header: list[str]

    def __init__(self, message: str, *, schema_name: str, header: list[str]) -> None:
        """Initialize SchemaMismatchError.

        Args:
            message (str): Description of the mismatch.
            schema_name (str): Name of the schema the file was loaded against.
            header (list[str]): The lower-cased header columns.
        """
        super().__init__(message)
        self.schema_name = schema_name
        self.header = header

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including message, schema name and header.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, schema_name={self.schema_name!r}, header={self.header!r})"


class DiscretizationError(ValueError):
    """Base exception for raw values that cannot be mapped to a bin.

    Attributes:
        attribute (str): Name of the attribute being discretized.
        value (object): The raw value that could not be mapped.
    """

    attribute: str
    value: object

    def __init__(self, message: str, *, attribute: str, value: object) -> None:
        """Initialize DiscretizationError.

        Args:
            message (str): Description of the failure.
            attribute (str): Name of the attribute being discretized.
            value (object): The raw value that could not be mapped.
        """
        super().__init__(message)
        self.attribute = attribute
        self.value = value

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including message, attribute and value.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, attribute={self.attribute!r}, value={self.value!r})"


class UnknownCategoryError(DiscretizationError):
    """Raised when a categorical value is not one of the attribute's categories.

    Attributes:
        known_categories (list[str]): The categories the attribute accepts, in ordinal order.

    Examples:
        >>> err = UnknownCategoryError(attribute="size", value="Huge", known_categories=["Small", "Large"])
        >>> str(err)
        "Unknown category 'Huge' for attribute 'size'"
    """

    known_categories: list[str]

    def __init__(self, *, attribute: str, value: object, known_categories: list[str]) -> None:
        """Initialize UnknownCategoryError.

        Args:
            attribute (str): Name of the categorical attribute.
            value (object): The unmapped raw value.
            known_categories (list[str]): The categories the attribute accepts.
        """
        super().__init__(f"Unknown category {value!r} for attribute {attribute!r}", attribute=attribute, value=value)
        self.known_categories = known_categories


class OutOfRangeValueError(DiscretizationError):
    """Raised when a continuous value cannot be placed in a quartile bin.

    Covers NaN under every policy and values outside [0, 1] under the
    "reject" policy.
    """

    def __init__(self, *, attribute: str, value: object) -> None:
        """Initialize OutOfRangeValueError.

        Args:
            attribute (str): Name of the continuous attribute.
            value (object): The offending raw value.
        """
        super().__init__(
            f"Value {value!r} for attribute {attribute!r} is outside the normalized range [0, 1]",
            attribute=attribute,
            value=value,
        )


class TreeBuildError(Exception):
    """Base exception for failures while growing a decision tree.

    Attributes:
        record_count (int): Number of records at the node that failed.
    """

    record_count: int

    def __init__(self, message: str, *, record_count: int) -> None:
        """Initialize TreeBuildError.

        Args:
            message (str): Description of the failure.
            record_count (int): Number of records at the node that failed.
        """
        super().__init__(message)
        self.record_count = record_count

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Representation including message and record count.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, record_count={self.record_count!r})"


class AttributesExhaustedError(TreeBuildError):
    """Raised when no attribute is left to split on and no majority label exists."""

    def __init__(self, *, record_count: int) -> None:
        """Initialize AttributesExhaustedError.

        Args:
            record_count (int): Number of records at the node that failed.
        """
        super().__init__("No attributes left and no label available", record_count=record_count)
