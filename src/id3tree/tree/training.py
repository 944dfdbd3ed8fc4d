"""ID3 tree induction.

The builder grows a tree top-down. At each node it either stops with a leaf
(one label holds more than the purity threshold, or no attribute is left)
or splits on the remaining attribute with the highest information gain and
recurses into one child per bin of that attribute.

Attribute exhaustion is global to one build: a single `RemainingAttributes`
instance is passed by reference through every recursive call, so an
attribute chosen as a split anywhere in the tree is unavailable to every
other branch afterwards, not only to the subtree below the split. Children
are grown in ascending bin order, which fixes which branch sees which
attributes. Do not hand out per-branch copies.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from typing import Final

from loguru import logger

from id3tree.exceptions import AttributesExhaustedError, DuplicateAttributesError
from id3tree.records import Record
from id3tree.schema import AttributeSchema
from id3tree.tree.entropy import best_attribute, partition
from id3tree.tree.inspection import count_leaves, tree_depth
from id3tree.tree.models import InternalNode, LeafNode, TreeNode

DEFAULT_PURITY_THRESHOLD: Final[float] = 0.7  # A label above this share of a node's records makes it a leaf.

# ---------------------------------------------------------------------------
# Public interface -- Shared attribute working set
# ---------------------------------------------------------------------------


class RemainingAttributes:
    """Ordered, mutable set of attribute names still eligible for splitting.

    Iteration order is the order the names were given in; it is the
    tie-break order when two attributes have the same gain.

    Examples:
        >>> remaining = RemainingAttributes(["type", "salary"])
        >>> remaining.remove("type")
        >>> list(remaining)
        ['salary']
    """

    def __init__(self, names: Iterable[str]) -> None:
        """Initialize the working set.

        Args:
            names (Iterable[str]): Attribute names in tie-break order.

        Raises:
            DuplicateAttributesError: If a name is given more than once.
        """
        ordered = list(names)
        if len(set(ordered)) != len(ordered):
            raise DuplicateAttributesError(attributes=ordered)
        self._names = ordered

    def remove(self, name: str) -> None:
        """Remove `name` from the set.

        Args:
            name (str): An attribute name currently in the set.

        Raises:
            KeyError: If `name` is not in the set.
        """
        try:
            self._names.remove(name)
        except ValueError:
            raise KeyError(name) from None

    def as_list(self) -> list[str]:
        """Return a snapshot of the remaining names in order.

        Returns:
            list[str]: The remaining attribute names.
        """
        return list(self._names)

    def __iter__(self) -> Iterator[str]:
        return iter(tuple(self._names))

    def __len__(self) -> int:
        return len(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self._names!r})"


# ---------------------------------------------------------------------------
# Public interface -- Label statistics
# ---------------------------------------------------------------------------


def rank_labels(records: Iterable[Record], labels: Sequence[str]) -> list[tuple[str, int]]:
    """Count labels and order them from most to least frequent.

    Equal counts are ordered by position in `labels`; labels outside the
    alphabet come after every alphabet label, in order of first appearance.

    Args:
        records (Iterable[Record]): The records to count.
        labels (Sequence[str]): The label alphabet.

    Returns:
        list[tuple[str, int]]: `(label, count)` pairs for every label present.
    """
    counts: dict[str, int] = {}
    for record in records:
        counts[record.label] = counts.get(record.label, 0) + 1

    alphabet_rank = {label: rank for rank, label in enumerate(labels)}
    first_seen = {label: len(labels) + position for position, label in enumerate(counts)}
    return sorted(
        counts.items(),
        key=lambda item: (-item[1], alphabet_rank.get(item[0], first_seen[item[0]])),
    )


def majority_label(records: Sequence[Record], labels: Sequence[str]) -> str | None:
    """Return the most frequent label, or `None` when `records` is empty.

    Args:
        records (Sequence[Record]): The records to inspect.
        labels (Sequence[str]): The label alphabet, used to break ties.

    Returns:
        str | None: The majority label.
    """
    ranking = rank_labels(records, labels)
    return ranking[0][0] if ranking else None


def pure_label(
    records: Sequence[Record],
    labels: Sequence[str],
    threshold: float = DEFAULT_PURITY_THRESHOLD,
) -> str | None:
    """Return the label held by more than `threshold` of `records`, if any.

    Args:
        records (Sequence[Record]): The records to inspect.
        labels (Sequence[str]): The label alphabet, used to order candidates.
        threshold (float): Share of records a label must strictly exceed.

    Returns:
        str | None: The dominating label, or `None` when no label exceeds the share.
    """
    limit = threshold * len(records)
    for label, count in rank_labels(records, labels):
        if count > limit:
            return label
    return None


# ---------------------------------------------------------------------------
# Public interface -- Tree construction
# ---------------------------------------------------------------------------


def build_tree(
    records: Sequence[Record],
    schema: AttributeSchema,
    *,
    attributes: Iterable[str] | None = None,
    purity_threshold: float = DEFAULT_PURITY_THRESHOLD,
) -> TreeNode | None:
    """Build an ID3 decision tree.

    Creates the single `RemainingAttributes` shared by the whole build. The
    caller's `attributes` iterable is copied and never mutated.

    Args:
        records (Sequence[Record]): Training records.
        schema (AttributeSchema): Schema describing the attributes and labels.
        attributes (Iterable[str] | None): Attributes available for splitting,
            in tie-break order. Defaults to the schema's declaration order.
        purity_threshold (float): Share of a node's records one label must
            exceed for the node to become a leaf. Must be within `[0, 1]`.

    Returns:
        TreeNode | None: The root, or `None` when `records` is empty.

    Raises:
        ValueError: If `purity_threshold` is outside `[0, 1]`.
        AttributesNotFoundError: If an attribute is not part of the schema.
        DuplicateAttributesError: If an attribute is listed twice.
    """
    if not 0.0 <= purity_threshold <= 1.0:
        raise ValueError(f"purity_threshold must be between 0 and 1, got {purity_threshold}")
    names = schema.attribute_names if attributes is None else list(attributes)
    schema.validate_attribute_names(names)
    remaining = RemainingAttributes(names)

    root = grow_tree(records, remaining, schema, purity_threshold=purity_threshold)

    if root is None:
        logger.warning("No training records; the tree is empty", schema=schema.name)
    else:
        logger.info(
            "Tree built",
            schema=schema.name,
            record_count=len(records),
            depth=tree_depth(root),
            leaf_count=count_leaves(root),
            unused_attributes=remaining.as_list(),
        )
    return root


def grow_tree(
    records: Sequence[Record],
    remaining: RemainingAttributes,
    schema: AttributeSchema,
    *,
    purity_threshold: float = DEFAULT_PURITY_THRESHOLD,
) -> TreeNode | None:
    """Grow the subtree for `records`, consuming attributes from `remaining`.

    `remaining` is mutated in place: the chosen splitting attribute is removed
    before the children are grown, and stays removed for the rest of the build.

    Args:
        records (Sequence[Record]): Records reaching this node.
        remaining (RemainingAttributes): The build-wide attribute working set.
        schema (AttributeSchema): Schema describing the attributes and labels.
        purity_threshold (float): Share one label must exceed to stop with a leaf.

    Returns:
        TreeNode | None: The subtree root, or `None` when `records` is empty.

    Raises:
        AttributesExhaustedError: If no attribute is left and no majority
            label can be derived for the node. Non-empty records always
            have a majority label, so this only guards against a broken
            label ranking; it is never raised for valid input.
    """
    if not records:
        return None

    dominant = pure_label(records, schema.labels, purity_threshold)
    if dominant is not None:
        return LeafNode(output_label=dominant)

    fallback = majority_label(records, schema.labels)
    choice = best_attribute(records, remaining, schema)
    if choice is None:
        if fallback is None:
            raise AttributesExhaustedError(record_count=len(records))
        return LeafNode(output_label=fallback)

    splitting_attribute, gain = choice
    remaining.remove(splitting_attribute)
    logger.debug(
        "Splitting node",
        attribute=splitting_attribute,
        gain=round(gain, 6),
        record_count=len(records),
        remaining=len(remaining),
    )

    attribute = schema.attribute(splitting_attribute)
    children = {
        bin_label: grow_tree(bucket, remaining, schema, purity_threshold=purity_threshold)
        for bin_label, bucket in zip(attribute.possible_bins(), partition(records, attribute), strict=True)
    }
    return InternalNode(splitting_attribute=splitting_attribute, fallback_label=fallback, children=children)
