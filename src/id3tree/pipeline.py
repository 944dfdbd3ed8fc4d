"""End-to-end orchestration: load, train, evaluate and predict."""

from __future__ import annotations

from pathlib import Path

import numpy as np
from loguru import logger
from pydantic import BaseModel, Field

from id3tree.evaluation import CrossValidationResult, cross_validate
from id3tree.records import LoadedRecords, load_records
from id3tree.schema import AttributeSchema
from id3tree.tree.models import InternalNode, LeafNode
from id3tree.tree.prediction import predict_all
from id3tree.tree.training import DEFAULT_PURITY_THRESHOLD, build_tree


class PipelineResult(BaseModel):
    """Everything produced by one train-and-predict run.

    Attributes:
        schema_name (str): Name of the schema the files were read with.
        training (LoadedRecords): The loaded training file.
        test (LoadedRecords): The loaded test file.
        tree (LeafNode | InternalNode | None): The trained tree; `None` when
            there were no training records.
        cross_validation (CrossValidationResult): Accuracy on random slices of
            the training records.
        predictions (list[str | None]): One prediction per test record, in
            file order; `None` means "no prediction".
    """

    schema_name: str
    training: LoadedRecords
    test: LoadedRecords
    tree: LeafNode | InternalNode | None
    cross_validation: CrossValidationResult
    predictions: list[str | None] = Field(default_factory=list)


def run_pipeline(
    train_path: str | Path,
    test_path: str | Path,
    *,
    schema: AttributeSchema,
    folds: int | None = None,
    random_state: int | np.random.Generator | None = None,
    purity_threshold: float = DEFAULT_PURITY_THRESHOLD,
) -> PipelineResult:
    """Train on one file, score on random slices of it, then label another file.

    The tree splits on attributes in the training header's column order,
    falling back to the schema's order when the file could not be read.

    Args:
        train_path (str | Path): Labeled training data.
        test_path (str | Path): Records to label.
        schema (AttributeSchema): Schema both files follow.
        folds (int | None): Number of evaluation folds; defaults to
            `schema.default_folds`.
        random_state (int | np.random.Generator | None): Seed or generator
            for the evaluation shuffles.
        purity_threshold (float): Leaf purity threshold for training.

    Returns:
        PipelineResult: The loaded data, tree, accuracy and predictions.
    """
    training = load_records(train_path, schema)
    tree = build_tree(
        training.records,
        schema,
        attributes=training.attributes or None,
        purity_threshold=purity_threshold,
    )
    cross_validation = cross_validate(
        tree,
        training.records,
        schema=schema,
        folds=folds if folds is not None else schema.default_folds,
        random_state=random_state,
    )
    logger.info(
        "Cross-validation finished",
        mean_accuracy=round(cross_validation.mean_accuracy, 2),
        folds=len(cross_validation.fold_accuracies),
    )

    test = load_records(test_path, schema)
    predictions = predict_all(test.records, tree, schema)
    return PipelineResult(
        schema_name=schema.name,
        training=training,
        test=test,
        tree=tree,
        cross_validation=cross_validation,
        predictions=predictions,
    )
