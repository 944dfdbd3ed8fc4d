"""Demonstrates how to enable and configure logging in id3tree.

id3tree logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, id3tree logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. ``DEBUG`` shows every split the
  builder makes; ``INFO`` only the tree summary and evaluation result.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Backoff: a record routed into a bin no training record reached is answered
  with the majority label of the closest ancestor.
- Automatic cleanup: logging is re-disabled when the context manager exits.
"""

from id3tree import PRODUCT_SCHEMA, Record, build_tree, cross_validate, enable_logging, predict
from id3tree.tree import extract_rules

rows = [
    ("Loan", "Business", 0.2, 0.9, "Large", "Full", 0.4, 0.8, "1"),
    ("Loan", "Student", 0.1, 0.3, "Small", "Web", 0.2, 0.4, "0"),
    ("Fund", "Professional", 0.6, 0.7, "Medium", "Web&Email", 0.5, 0.6, "1"),
    ("CD", "Other", 0.9, 0.1, "Small", "None", 0.9, 0.2, "0"),
    ("Mortgage", "Doctor", 0.4, 0.8, "Large", "Full", 0.3, 0.9, "1"),
    ("Bank_Account", "Student", 0.05, 0.2, "Small", "None", 0.1, 0.1, "0"),
    ("Fund", "Business", 0.7, 0.6, "Medium", "Web", 0.6, 0.5, "1"),
    ("CD", "Student", 0.8, 0.4, "Medium", "Web", 0.8, 0.3, "0"),
]
records = [
    Record(values=dict(zip(PRODUCT_SCHEMA.attribute_names, row[:-1], strict=True)), label=row[-1]) for row in rows
]

# Enable logging at DEBUG level with full log format to see each split
with enable_logging(level="DEBUG", log_format="full"):
    tree = build_tree(records, PRODUCT_SCHEMA)
    result = cross_validate(tree, records, schema=PRODUCT_SCHEMA, folds=2, random_state=0)

    for rule in extract_rules(tree):
        print(rule)
    print(f"\nMean accuracy: {result.mean_accuracy:.2f}\n")

    # A mortgage for a professional was never seen in training; prediction backs off
    unseen = Record(
        values=dict(
            zip(
                PRODUCT_SCHEMA.attribute_names,
                ("Mortgage", "Professional", 0.5, 0.5, "Medium", "Web", 0.5, 0.5),
                strict=True,
            )
        ),
        label="?",
    )
    print(f"Prediction for unseen record: {predict(unseen, tree, PRODUCT_SCHEMA)}")

# Logging automatically disabled here
