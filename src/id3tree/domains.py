"""Built-in schemas for the customer and product classification domains."""

from __future__ import annotations

from typing import Final

from id3tree.schema import AttributeSchema, CategoricalAttribute, ContinuousAttribute

# Customers: five classes, 7 columns per row.
CUSTOMER_SCHEMA: Final[AttributeSchema] = AttributeSchema(
    name="customer",
    attributes=[
        CategoricalAttribute(name="type", categories=["student", "engineer", "librarian", "professor", "doctor"]),
        CategoricalAttribute(
            name="lifestyle",
            categories=["spend>saving", "spend<saving", "spend>>saving", "spend<<saving"],
        ),
        ContinuousAttribute(name="vacation"),
        ContinuousAttribute(name="ecredit"),
        ContinuousAttribute(name="salary"),
        ContinuousAttribute(name="property"),
    ],
    labels=["C1", "C2", "C3", "C4", "C5"],
    default_folds=10,
)

# Products: binary outcome, 9 columns per row.
PRODUCT_SCHEMA: Final[AttributeSchema] = AttributeSchema(
    name="product",
    attributes=[
        CategoricalAttribute(name="type", categories=["Fund", "Loan", "Mortgage", "CD", "Bank_Account"]),
        CategoricalAttribute(name="customer", categories=["Student", "Business", "Professional", "Doctor", "Other"]),
        ContinuousAttribute(name="monthly_fee"),
        ContinuousAttribute(name="advertisement_budget"),
        CategoricalAttribute(name="size", categories=["Small", "Medium", "Large"]),
        CategoricalAttribute(name="promotion", categories=["Full", "Web", "Web&Email", "None"]),
        ContinuousAttribute(name="interest_rate"),
        ContinuousAttribute(name="period"),
    ],
    labels=["1", "0"],
    default_folds=5,
)

BUILTIN_SCHEMAS: Final[dict[str, AttributeSchema]] = {
    CUSTOMER_SCHEMA.name: CUSTOMER_SCHEMA,
    PRODUCT_SCHEMA.name: PRODUCT_SCHEMA,
}


def get_schema(name: str) -> AttributeSchema:
    """Return a built-in schema by name.

    Args:
        name (str): `"customer"` or `"product"`.

    Returns:
        AttributeSchema: The matching schema.

    Raises:
        ValueError: If no built-in schema has that name.
    """
    try:
        return BUILTIN_SCHEMAS[name]
    except KeyError:
        raise ValueError(f"Unknown schema {name!r}; expected one of {sorted(BUILTIN_SCHEMAS)}") from None
