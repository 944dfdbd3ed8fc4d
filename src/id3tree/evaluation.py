"""Repeated random sub-sampling accuracy of a trained tree.

Each fold reshuffles one working copy of the records and scores the tree on
its first `len(records) // folds` entries. Folds are independent samples, so
records may be scored in several folds or in none.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final

import numpy as np
from loguru import logger
from pydantic import BaseModel, Field
from sklearn.metrics import accuracy_score

from id3tree.records import Record
from id3tree.schema import AttributeSchema
from id3tree.tree.models import TreeNode
from id3tree.tree.prediction import predict

# Stand-in for "no prediction" when scoring; the NUL prefix keeps it apart from file labels.
_NO_PREDICTION: Final[str] = "\x00no-prediction"


class CrossValidationResult(BaseModel):
    """Per-fold and mean accuracy, as percentages.

    Attributes:
        fold_accuracies (list[float]): Accuracy of each fold in `[0, 100]`.
        mean_accuracy (float): Mean of `fold_accuracies`.
        validation_size (int): Number of records scored per fold.
    """

    fold_accuracies: list[float] = Field(description="Accuracy of each fold, in percent.")
    mean_accuracy: float = Field(ge=0.0, le=100.0, description="Mean fold accuracy, in percent.")
    validation_size: int = Field(ge=0, description="Number of records scored per fold.")


def cross_validate(
    tree: TreeNode | None,
    records: Sequence[Record],
    *,
    schema: AttributeSchema,
    folds: int,
    random_state: int | np.random.Generator | None = None,
) -> CrossValidationResult:
    """Score `tree` on `folds` random validation slices of `records`.

    A "no prediction" never matches the true label. A fold whose validation
    slice is empty (fewer records than folds) scores `0.0`.

    Args:
        tree (TreeNode | None): The trained tree.
        records (Sequence[Record]): Labeled records to sample from.
        schema (AttributeSchema): Schema used to discretize attribute values.
        folds (int): Number of folds; at least 1.
        random_state (int | np.random.Generator | None): Seed or generator for
            shuffling. `None` draws fresh entropy from the OS.

    Returns:
        CrossValidationResult: Per-fold accuracies and their mean.

    Raises:
        ValueError: If `folds` is less than 1.
    """
    if folds < 1:
        raise ValueError(f"folds must be at least 1, got {folds}")

    rng = np.random.default_rng(random_state)
    validation_size = len(records) // folds
    if validation_size == 0:
        logger.warning(
            "Too few records for a validation slice; every fold scores 0",
            record_count=len(records),
            folds=folds,
        )

    order = np.arange(len(records))
    fold_accuracies: list[float] = []
    for fold in range(1, folds + 1):
        rng.shuffle(order)
        validation = [records[index] for index in order[:validation_size]]
        accuracy = _score(tree, validation, schema)
        logger.debug("Fold scored", fold=fold, accuracy=round(accuracy, 2), validation_size=validation_size)
        fold_accuracies.append(accuracy)

    return CrossValidationResult(
        fold_accuracies=fold_accuracies,
        mean_accuracy=sum(fold_accuracies) / folds,
        validation_size=validation_size,
    )


def _score(tree: TreeNode | None, validation: list[Record], schema: AttributeSchema) -> float:
    """Return the percentage of `validation` records the tree labels correctly.

    Args:
        tree (TreeNode | None): The trained tree.
        validation (list[Record]): The records to score.
        schema (AttributeSchema): Schema used to discretize attribute values.

    Returns:
        float: Accuracy in percent; `0.0` for an empty slice.
    """
    if not validation:
        return 0.0
    expected = [record.label for record in validation]
    predictions = [predict(record, tree, schema) for record in validation]
    predicted = [_NO_PREDICTION if label is None else label for label in predictions]
    return float(accuracy_score(expected, predicted)) * 100
