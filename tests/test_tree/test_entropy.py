"""Tests for entropy, partitioning, information gain and best-attribute selection."""

from __future__ import annotations

import math

import pytest
from pytest_check import check

from id3tree.records import Record
from id3tree.schema import AttributeSchema, CategoricalAttribute, ContinuousAttribute
from id3tree.tree.entropy import (
    EMPTY_ENTROPY_SENTINEL,
    best_attribute,
    entropy,
    information_gain,
    partition,
)


class TestEntropy:
    """Tests for `entropy` over a fixed label alphabet."""

    def test_single_label_has_zero_entropy(self) -> None:
        """A record set holding only one label should have entropy 0."""
        # Arrange
        records = [_make_record("yes", colour="red") for _ in range(6)]

        # Act
        result = entropy(records, ["yes", "no"])

        # Assert
        assert result == 0.0

    def test_even_two_label_split_is_ln_two(self) -> None:
        """Half "yes" and half "no" should give ln 2 nats."""
        # Arrange
        records = [_make_record("yes", colour="red"), _make_record("no", colour="blue")] * 3

        # Act
        result = entropy(records, ["yes", "no"])

        # Assert
        assert result == pytest.approx(math.log(2))

    def test_empty_record_set_returns_sentinel(self) -> None:
        """An empty record set should report the large sentinel value."""
        # Act
        result = entropy([], ["yes", "no"])

        # Assert
        assert result == EMPTY_ENTROPY_SENTINEL

    def test_absent_alphabet_labels_contribute_nothing(self) -> None:
        """Labels of the alphabet with zero count should not produce NaN or change the result."""
        # Arrange
        records = [_make_record("C1", colour="red"), _make_record("C4", colour="red")]

        # Act
        result = entropy(records, ["C1", "C2", "C3", "C4", "C5"])

        # Assert
        with check:
            assert math.isfinite(result)
        with check:
            assert result == pytest.approx(math.log(2))

    def test_labels_outside_alphabet_carry_no_mass(self) -> None:
        """A label missing from the alphabet counts towards the total but adds no term."""
        # Arrange
        records = [_make_record("yes", colour="red"), _make_record("maybe", colour="red")]

        # Act
        result = entropy(records, ["yes", "no"])

        # Assert
        assert result == pytest.approx(0.5 * math.log(2))

    def test_entropy_is_bounded_by_log_of_alphabet_size(self) -> None:
        """Entropy should lie within [0, ln |labels|] for an uneven mix."""
        # Arrange
        labels = ["C1", "C2", "C3"]
        records = [_make_record(label, colour="red") for label in ["C1", "C1", "C1", "C2", "C3", "C3"]]

        # Act
        result = entropy(records, labels)

        # Assert
        with check:
            assert result > 0.0
        with check:
            assert result <= math.log(len(labels))


class TestPartition:
    """Tests for `partition`: one bucket per possible bin."""

    def test_categorical_partition_follows_category_order(self) -> None:
        """Buckets should follow the category ordinals and keep input order."""
        # Arrange
        attribute = CategoricalAttribute(name="colour", categories=["red", "blue", "green"])
        first_blue = _make_record("yes", colour="blue")
        red = _make_record("no", colour="red")
        second_blue = _make_record("no", colour="blue")

        # Act
        buckets = partition([first_blue, red, second_blue], attribute)

        # Assert
        with check:
            assert buckets[0] == [red]
        with check:
            assert buckets[1] == [first_blue, second_blue]
        with check:
            assert buckets[2] == []

    def test_continuous_partition_uses_quartile_buckets(self) -> None:
        """Continuous values should land in the quartile bucket holding them."""
        # Arrange
        attribute = ContinuousAttribute(name="weight")
        records = [_make_record("yes", weight=value) for value in [0.0, 0.25, 0.3, 0.74, 0.9, 1.0]]

        # Act
        buckets = partition(records, attribute)

        # Assert
        assert [len(bucket) for bucket in buckets] == [2, 1, 1, 2]

    def test_every_record_lands_in_exactly_one_bucket(self) -> None:
        """The bucket sizes should add up to the number of input records."""
        # Arrange
        schema = _make_toy_schema()
        records = _make_toy_records()

        # Act & Assert
        for attribute in schema.attributes:
            buckets = partition(records, attribute)
            with check:
                assert len(buckets) == len(attribute.possible_bins()), attribute.name
            with check:
                assert sum(len(bucket) for bucket in buckets) == len(records), attribute.name


class TestInformationGain:
    """Tests for `information_gain`."""

    def test_perfectly_separating_attribute_gains_full_entropy(self) -> None:
        """An attribute whose bins each hold one label should gain the whole parent entropy."""
        # Arrange
        schema = _make_toy_schema()
        records = _make_toy_records()

        # Act
        gain = information_gain(records, "colour", schema)

        # Assert
        assert gain == pytest.approx(entropy(records, schema.labels))

    def test_uninformative_attribute_gains_nothing(self) -> None:
        """An attribute with the same label mix in every bin should gain 0."""
        # Arrange
        schema = _make_toy_schema()
        records = _make_toy_records()

        # Act
        gain = information_gain(records, "shape", schema)

        # Assert
        assert gain == pytest.approx(0.0)

    def test_empty_bins_do_not_leak_the_sentinel(self) -> None:
        """Bins no record falls into carry zero weight, so the gain stays within [0, parent entropy]."""
        # Arrange
        schema = _make_toy_schema()
        records = [
            _make_record("yes", colour="red", shape="round", weight=0.1),
            _make_record("no", colour="blue", shape="round", weight=0.2),
        ]

        # Act
        gain = information_gain(records, "weight", schema)

        # Assert
        assert gain == pytest.approx(0.0)

    def test_gain_is_never_negative(self) -> None:
        """No attribute of the toy domain should report a negative gain."""
        # Arrange
        schema = _make_toy_schema()
        records = _make_toy_records()

        # Act & Assert
        for name in schema.attribute_names:
            with check:
                assert information_gain(records, name, schema) >= 0.0, name

    def test_empty_record_set_gains_nothing(self) -> None:
        """An empty node has nothing to gain."""
        # Act
        gain = information_gain([], "colour", _make_toy_schema())

        # Assert
        assert gain == 0.0


class TestBestAttribute:
    """Tests for `best_attribute`."""

    def test_picks_highest_gain(self) -> None:
        """The attribute with the strictly highest gain should win regardless of position."""
        # Arrange
        schema = _make_toy_schema()
        records = _make_toy_records()

        # Act
        choice = best_attribute(records, ["shape", "weight", "colour"], schema)

        # Assert
        assert choice is not None
        with check:
            assert choice[0] == "colour"
        with check:
            assert choice[1] == pytest.approx(math.log(2))

    def test_ties_go_to_the_earliest_candidate(self) -> None:
        """Attributes with equal gain should resolve to the first one listed."""
        # Arrange
        schema = _make_toy_schema()
        records = [_make_record("yes", colour="red", shape="round", weight=0.5) for _ in range(3)]

        # Act
        forward = best_attribute(records, ["shape", "colour"], schema)
        backward = best_attribute(records, ["colour", "shape"], schema)

        # Assert
        with check:
            assert forward is not None and forward[0] == "shape"
        with check:
            assert backward is not None and backward[0] == "colour"

    def test_zero_gains_tie_regardless_of_bucket_shape(self) -> None:
        """Uninformative attributes with different partitions should all report 0 and tie on order."""
        # Arrange
        schema = _make_toy_schema()
        # shape splits 2/2 with a balanced mix in each bin; weight puts everything in one bin.
        records = [
            _make_record("yes", colour="red", shape="round", weight=0.1),
            _make_record("no", colour="blue", shape="round", weight=0.1),
            _make_record("yes", colour="blue", shape="square", weight=0.2),
            _make_record("no", colour="red", shape="square", weight=0.2),
        ]

        # Act
        forward = best_attribute(records, ["weight", "shape"], schema)
        backward = best_attribute(records, ["shape", "weight"], schema)

        # Assert
        with check:
            assert forward == ("weight", 0.0)
        with check:
            assert backward == ("shape", 0.0)

    def test_no_candidates_returns_none(self) -> None:
        """With no attribute left there is nothing to choose."""
        # Act
        choice = best_attribute(_make_toy_records(), [], _make_toy_schema())

        # Assert
        assert choice is None


# ---------------------------------------------------------------------------
# Builders
# ---------------------------------------------------------------------------


def _make_toy_schema() -> AttributeSchema:
    return AttributeSchema(
        name="toy",
        attributes=[
            CategoricalAttribute(name="colour", categories=["red", "blue"]),
            CategoricalAttribute(name="shape", categories=["round", "square"]),
            ContinuousAttribute(name="weight"),
        ],
        labels=["yes", "no"],
    )


def _make_record(label: str, **values: str | float) -> Record:
    return Record(values=values, label=label)


def _make_toy_records() -> list[Record]:
    """Eight records where colour decides the label and shape is pure noise."""
    rows = [
        ("red", "round", 0.1, "yes"),
        ("red", "square", 0.6, "yes"),
        ("red", "round", 0.9, "yes"),
        ("red", "square", 0.3, "yes"),
        ("blue", "round", 0.2, "no"),
        ("blue", "square", 0.8, "no"),
        ("blue", "round", 0.4, "no"),
        ("blue", "square", 0.7, "no"),
    ]
    return [
        _make_record(label, colour=colour, shape=shape, weight=weight) for colour, shape, weight, label in rows
    ]
