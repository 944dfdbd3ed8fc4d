"""Entropy, information gain and best-attribute selection.

Entropy is measured in nats over the schema's fixed label alphabet. Labels
outside the alphabet still count towards the record total but contribute no
probability mass of their own.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Final

import numpy as np

from id3tree.records import Record
from id3tree.schema import AttributeSchema, CategoricalAttribute, ContinuousAttribute

# Entropy reported for an empty record set. Only ever multiplied by the empty
# partition's zero weight inside `information_gain`.
EMPTY_ENTROPY_SENTINEL: Final[float] = 9999.0


def entropy(records: Sequence[Record], labels: Sequence[str]) -> float:
    """Compute the label entropy of `records`.

    Args:
        records (Sequence[Record]): The records to measure.
        labels (Sequence[str]): The label alphabet.

    Returns:
        float: `sum(p * ln(1 / p))` over the alphabet, with zero-probability
            labels contributing 0, or `EMPTY_ENTROPY_SENTINEL` when
            `records` is empty.
    """
    record_count = len(records)
    if record_count == 0:
        return EMPTY_ENTROPY_SENTINEL

    label_counts = Counter(record.label for record in records)
    counts = np.array([label_counts.get(label, 0) for label in labels], dtype=np.float64)
    probabilities = counts / record_count
    probabilities = probabilities[probabilities > 0]
    return float(-np.sum(probabilities * np.log(probabilities)))


def partition(
    records: Iterable[Record],
    attribute: CategoricalAttribute | ContinuousAttribute,
) -> list[list[Record]]:
    """Split `records` into one bucket per possible bin of `attribute`.

    Args:
        records (Iterable[Record]): The records to split.
        attribute (CategoricalAttribute | ContinuousAttribute): The attribute
            whose bins define the buckets.

    Returns:
        list[list[Record]]: Buckets in `attribute.possible_bins()` order. Every
            record lands in exactly one bucket; input order is kept per bucket.
    """
    buckets: list[list[Record]] = [[] for _ in attribute.possible_bins()]
    for record in records:
        buckets[attribute.bin_index(record.value(attribute.name))].append(record)
    return buckets


def information_gain(records: Sequence[Record], attribute_name: str, schema: AttributeSchema) -> float:
    """Compute the entropy reduction from splitting `records` on an attribute.

    Empty buckets are not skipped: they add `0 * EMPTY_ENTROPY_SENTINEL`.

    Args:
        records (Sequence[Record]): The records at the node.
        attribute_name (str): The candidate splitting attribute.
        schema (AttributeSchema): Schema holding the attribute and the label alphabet.

    Returns:
        float: `entropy(records) - sum(|bucket| / |records| * entropy(bucket))`.
            `0.0` for an empty record set.
    """
    record_count = len(records)
    if record_count == 0:
        return 0.0

    parent_entropy = entropy(records, schema.labels)
    weighted_child_entropy = 0.0
    for bucket in partition(records, schema.attribute(attribute_name)):
        weighted_child_entropy += len(bucket) / record_count * entropy(bucket, schema.labels)
    # Gain is never negative; clip floating-point rounding noise so ties stay exact.
    return max(parent_entropy - weighted_child_entropy, 0.0)


def best_attribute(
    records: Sequence[Record],
    candidates: Iterable[str],
    schema: AttributeSchema,
) -> tuple[str, float] | None:
    """Pick the candidate with the strictly highest information gain.

    Ties go to the candidate that comes first in `candidates`. Gains are
    clipped at zero by `information_gain`, so a gain that rounds to slightly
    below zero compares equal to an exact zero gain, and the earlier
    candidate wins.

    Args:
        records (Sequence[Record]): The records at the node.
        candidates (Iterable[str]): Attribute names still eligible for splitting.
        schema (AttributeSchema): Schema holding the attributes and the label alphabet.

    Returns:
        tuple[str, float] | None: `(attribute_name, gain)` of the winner, or
            `None` when there are no candidates.
    """
    best: tuple[str, float] | None = None
    for name in candidates:
        gain = information_gain(records, name, schema)
        if best is None or gain > best[1]:
            best = (name, gain)
    return best
