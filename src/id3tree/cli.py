"""Command line entry point: train on one file, report accuracy, label another.

Usage::

    id3tree [--schema {customer,product}] [--folds N] [--seed S] [--show-rules] [--verbose] TRAIN TEST
"""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from typing import Final

from id3tree.domains import BUILTIN_SCHEMAS, get_schema
from id3tree.exceptions import (
    AttributesNotFoundError,
    DiscretizationError,
    DuplicateAttributesError,
    SchemaMismatchError,
    TreeBuildError,
)
from id3tree.logging import enable_logging
from id3tree.pipeline import PipelineResult, run_pipeline
from id3tree.tree.inspection import extract_rules

NO_PREDICTION_TEXT: Final[str] = "-"

_FATAL_ERRORS: Final = (
    AttributesNotFoundError,
    DiscretizationError,
    DuplicateAttributesError,
    SchemaMismatchError,
    TreeBuildError,
)


def build_parser() -> argparse.ArgumentParser:
    """Create the argument parser.

    Returns:
        argparse.ArgumentParser: Parser for the two data paths and options.
    """
    parser = argparse.ArgumentParser(
        prog="id3tree",
        description="Train an ID3 decision tree on TRAIN, report its accuracy and label the records in TEST.",
    )
    parser.add_argument("train", help="path to the labeled training data (CSV with a header row)")
    parser.add_argument("test", help="path to the data to label (same layout as TRAIN)")
    parser.add_argument(
        "--schema",
        choices=sorted(BUILTIN_SCHEMAS),
        default="customer",
        help="record domain of both files (default: customer)",
    )
    parser.add_argument("--folds", type=int, default=None, help="number of evaluation folds (default: per schema)")
    parser.add_argument("--seed", type=int, default=None, help="seed for the evaluation shuffles")
    parser.add_argument("--show-rules", action="store_true", help="print one rule per leaf after training")
    parser.add_argument("--verbose", action="store_true", help="log training details to stderr")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line interface.

    Args:
        argv (Sequence[str] | None): Arguments without the program name;
            defaults to `sys.argv[1:]`.

    Returns:
        int: Process exit status.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.folds is not None and args.folds < 1:
        parser.error(f"--folds must be at least 1, got {args.folds}")

    with enable_logging(level="DEBUG" if args.verbose else "WARNING"):
        try:
            result = run_pipeline(
                args.train,
                args.test,
                schema=get_schema(args.schema),
                folds=args.folds,
                random_state=args.seed,
            )
        except _FATAL_ERRORS as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1

    _print_report(result, show_rules=args.show_rules)
    return 0


def _print_report(result: PipelineResult, *, show_rules: bool) -> None:
    print("Training successfully completed")
    if show_rules:
        for rule in extract_rules(result.tree):
            print(rule)

    for fold, accuracy in enumerate(result.cross_validation.fold_accuracies, start=1):
        print(f"Accuracy for fold {fold} : {accuracy:.2f}")
    print(f"Cross-validation accuracy: {result.cross_validation.mean_accuracy:.2f}\n")

    print("Successfully loaded test data")
    print("Output class labels for the test set:")
    for prediction in result.predictions:
        print(NO_PREDICTION_TEXT if prediction is None else prediction)
