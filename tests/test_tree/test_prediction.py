"""Tests for tree traversal with majority-label backoff."""

from __future__ import annotations

import pytest
from pytest_check import check

from id3tree.domains import CUSTOMER_SCHEMA
from id3tree.exceptions import OutOfRangeValueError, UnknownCategoryError
from id3tree.records import Record
from id3tree.schema import AttributeSchema, CategoricalAttribute, ContinuousAttribute
from id3tree.tree.models import InternalNode, LeafNode
from id3tree.tree.prediction import predict, predict_all
from id3tree.tree.training import build_tree


class TestPredict:
    """Tests for `predict`."""

    def test_follows_bins_to_a_leaf(self) -> None:
        """A record should reach the leaf under its bin at every level."""
        # Arrange
        schema = _make_schema()
        tree = _make_two_level_tree()
        record = _make_record(colour="blue", weight=0.9)

        # Act
        label = predict(record, tree, schema)

        # Assert
        assert label == "heavy"

    def test_missing_child_backs_off_to_the_node_fallback(self) -> None:
        """A bin with no child should answer with that node's fallback label."""
        # Arrange
        schema = _make_schema()
        tree = _make_two_level_tree()
        record = _make_record(colour="blue", weight=0.3)

        # Act
        label = predict(record, tree, schema)

        # Assert
        assert label == "inner-fallback"

    def test_missing_root_child_returns_root_fallback(self) -> None:
        """A record routed to an empty root bin should get the root's majority label."""
        # Arrange
        schema = _make_schema()
        tree = _make_two_level_tree()
        record = _make_record(colour="green", weight=0.9)

        # Act
        label = predict(record, tree, schema)

        # Assert
        assert label == "root-fallback"

    def test_empty_tree_gives_no_prediction(self) -> None:
        """Predicting with no tree should return None."""
        # Act
        label = predict(_make_record(colour="red", weight=0.1), None, _make_schema())

        # Assert
        assert label is None

    def test_leaf_root_answers_every_record(self) -> None:
        """A single-leaf tree should predict its label regardless of the values."""
        # Arrange
        tree = LeafNode(output_label="C3")
        record = Record(values={"type": "student"}, label="C1")

        # Act
        label = predict(record, tree, CUSTOMER_SCHEMA)

        # Assert
        assert label == "C3"

    def test_true_label_is_ignored(self) -> None:
        """The record's own label should not influence the prediction."""
        # Arrange
        schema = _make_schema()
        tree = _make_two_level_tree()

        # Act
        labels = {
            predict(Record(values={"colour": "red", "weight": 0.1}, label=label), tree, schema)
            for label in ["light", "heavy", "whatever"]
        }

        # Assert
        assert labels == {"light"}

    def test_unknown_category_raises(self) -> None:
        """A categorical value outside the attribute's categories should raise."""
        # Arrange
        schema = _make_schema()

        # Act & Assert
        with pytest.raises(UnknownCategoryError) as exc_info:
            predict(_make_record(colour="purple", weight=0.5), _make_two_level_tree(), schema)

        with check:
            assert exc_info.value.attribute == "colour"
        with check:
            assert exc_info.value.value == "purple"

    def test_nan_value_raises(self) -> None:
        """A NaN continuous value on the path should raise OutOfRangeValueError."""
        # Act & Assert
        with pytest.raises(OutOfRangeValueError):
            predict(_make_record(colour="blue", weight=float("nan")), _make_two_level_tree(), _make_schema())

    def test_value_between_trained_quartiles_backs_off(self) -> None:
        """A continuous value in a quartile no training record reached should use the root fallback."""
        # Arrange
        schema = AttributeSchema(name="toy", attributes=[ContinuousAttribute(name="weight")], labels=["y", "n"])
        training = [
            Record(values={"weight": 0.1}, label="y"),
            Record(values={"weight": 0.15}, label="y"),
            Record(values={"weight": 0.9}, label="n"),
        ]
        tree = build_tree(training, schema, purity_threshold=0.9)

        # Act
        label = predict(Record(values={"weight": 0.6}, label="?"), tree, schema)

        # Assert
        assert label == "y"


class TestPredictAll:
    """Tests for `predict_all`."""

    def test_keeps_input_order(self) -> None:
        """Predictions should line up with the input records."""
        # Arrange
        schema = _make_schema()
        records = [
            _make_record(colour="red", weight=0.2),
            _make_record(colour="blue", weight=0.95),
            _make_record(colour="green", weight=0.5),
        ]

        # Act
        labels = predict_all(records, _make_two_level_tree(), schema)

        # Assert
        assert labels == ["light", "heavy", "root-fallback"]

    def test_empty_tree_gives_none_for_each_record(self) -> None:
        """Every record should get "no prediction" from an empty tree."""
        # Act
        labels = predict_all([_make_record(colour="red", weight=0.2)] * 2, None, _make_schema())

        # Assert
        assert labels == [None, None]


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _make_schema() -> AttributeSchema:
    return AttributeSchema(
        name="parcels",
        attributes=[
            CategoricalAttribute(name="colour", categories=["red", "blue", "green"]),
            ContinuousAttribute(name="weight"),
        ],
        labels=["light", "heavy", "root-fallback", "inner-fallback"],
    )


def _make_record(**values: str | float) -> Record:
    return Record(values=values, label="?")


def _make_two_level_tree() -> InternalNode:
    """Root on colour: red is a leaf, blue splits on weight, green was never seen."""
    return InternalNode(
        splitting_attribute="colour",
        fallback_label="root-fallback",
        children={
            0.0: LeafNode(output_label="light"),
            1.0: InternalNode(
                splitting_attribute="weight",
                fallback_label="inner-fallback",
                children={
                    0.25: LeafNode(output_label="light"),
                    0.5: None,
                    0.75: None,
                    1.0: LeafNode(output_label="heavy"),
                },
            ),
            2.0: None,
        },
    )
