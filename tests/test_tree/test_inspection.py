"""Tests for tree node models and structural summaries."""

from __future__ import annotations

import pytest
from pydantic import ValidationError
from pytest_check import check

from id3tree.tree.inspection import count_leaves, extract_rules, tree_depth
from id3tree.tree.models import BinCondition, InternalNode, LeafNode, TreeRule


class TestNodeModels:
    """Tests for `LeafNode` and `InternalNode`."""

    def test_nodes_are_immutable(self) -> None:
        """Assigning to a built node should fail."""
        # Arrange
        leaf = LeafNode(output_label="C1")

        # Act & Assert
        with pytest.raises(ValidationError):
            leaf.output_label = "C2"  # type: ignore[misc]

    def test_child_of_unknown_bin_is_none(self) -> None:
        """Looking up a bin the node does not have should return None."""
        # Arrange
        node = _make_tree()

        # Act & Assert
        with check:
            assert node.child(7.0) is None
        with check:
            assert node.child(2.0) is None
        with check:
            assert node.child(0.0) == LeafNode(output_label="C1")

    def test_round_trips_through_json(self) -> None:
        """A nested tree should survive JSON serialization with the discriminator."""
        # Arrange
        tree = _make_tree()

        # Act
        restored = InternalNode.model_validate_json(tree.model_dump_json())

        # Assert
        with check:
            assert restored == tree
        with check:
            assert isinstance(restored.child(1.0), InternalNode)


class TestTreeRule:
    """Tests for rule rendering."""

    def test_renders_conditions_in_order(self) -> None:
        """Conditions should join with AND from the root down."""
        # Arrange
        rule = TreeRule(
            conditions=[BinCondition(attribute="type", bin=1.0), BinCondition(attribute="salary", bin=0.75)],
            prediction="C2",
        )

        # Act
        text = str(rule)

        # Assert
        assert text == "IF type = 1.0 AND salary = 0.75 THEN C2"

    def test_rule_without_conditions(self) -> None:
        """A single-leaf tree's rule has no conditions."""
        # Act
        text = str(TreeRule(prediction="C5"))

        # Assert
        assert text == "ALWAYS C5"


class TestInspection:
    """Tests for `tree_depth`, `count_leaves` and `extract_rules`."""

    def test_depth_and_leaf_count(self) -> None:
        """Depth counts splits on the longest path; empty children are not leaves."""
        # Arrange
        tree = _make_tree()

        # Act & Assert
        with check:
            assert tree_depth(tree) == 2
        with check:
            assert count_leaves(tree) == 3

    def test_empty_tree_and_single_leaf(self) -> None:
        """An empty tree has no leaves; a lone leaf has depth 0."""
        # Act & Assert
        with check:
            assert tree_depth(None) == 0
        with check:
            assert count_leaves(None) == 0
        with check:
            assert tree_depth(LeafNode(output_label="1")) == 0
        with check:
            assert count_leaves(LeafNode(output_label="1")) == 1

    def test_extract_rules_walks_bins_in_ascending_order(self) -> None:
        """One rule per leaf, ordered by bin at each level."""
        # Arrange
        tree = _make_tree()

        # Act
        rules = [str(rule) for rule in extract_rules(tree)]

        # Assert
        assert rules == [
            "IF type = 0.0 THEN C1",
            "IF type = 1.0 AND salary = 0.25 THEN C2",
            "IF type = 1.0 AND salary = 1.0 THEN C3",
        ]

    def test_extract_rules_of_empty_tree(self) -> None:
        """An empty tree yields no rules."""
        # Act & Assert
        assert extract_rules(None) == []


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _make_tree() -> InternalNode:
    # Children deliberately inserted out of bin order.
    return InternalNode(
        splitting_attribute="type",
        fallback_label="C1",
        children={
            2.0: None,
            1.0: InternalNode(
                splitting_attribute="salary",
                fallback_label="C2",
                children={1.0: LeafNode(output_label="C3"), 0.25: LeafNode(output_label="C2"), 0.5: None},
            ),
            0.0: LeafNode(output_label="C1"),
        },
    )
