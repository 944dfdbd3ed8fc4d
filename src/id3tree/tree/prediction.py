"""Label prediction by tree traversal with majority-label backoff."""

from __future__ import annotations

from id3tree.records import Record
from id3tree.schema import AttributeSchema
from id3tree.tree.models import InternalNode, LeafNode, TreeNode


def predict(record: Record, node: TreeNode | None, schema: AttributeSchema) -> str | None:
    """Predict the label of `record` by walking the tree from `node`.

    At an internal node the record's value for the splitting attribute is
    discretized and the matching child is followed. When that child is
    missing, or cannot answer, the node's `fallback_label` is returned, so an
    unanswered branch backs off to the closest ancestor's majority label.

    Args:
        record (Record): The record to classify. Its label is ignored.
        node (TreeNode | None): The (sub)tree root.
        schema (AttributeSchema): Schema used to discretize attribute values.

    Returns:
        str | None: The predicted label, or `None` ("no prediction") when
            `node` is `None`.

    Raises:
        DiscretizationError: If a value on the path cannot be mapped to a bin.

    Examples:
        >>> from id3tree.domains import PRODUCT_SCHEMA
        >>> tree = InternalNode(
        ...     splitting_attribute="size",
        ...     fallback_label="0",
        ...     children={0.0: LeafNode(output_label="1"), 1.0: None, 2.0: None},
        ... )
        >>> predict(Record(values={"size": "Large"}, label="?"), tree, PRODUCT_SCHEMA)
        '0'
    """
    match node:
        case None:
            return None
        case LeafNode():
            return node.output_label
        case InternalNode():
            attribute = schema.attribute(node.splitting_attribute)
            bin_label = attribute.bin_of(record.value(node.splitting_attribute))
            prediction = predict(record, node.child(bin_label), schema)
            return node.fallback_label if prediction is None else prediction


def predict_all(records: list[Record], node: TreeNode | None, schema: AttributeSchema) -> list[str | None]:
    """Predict every record in order.

    Args:
        records (list[Record]): The records to classify.
        node (TreeNode | None): The tree root.
        schema (AttributeSchema): Schema used to discretize attribute values.

    Returns:
        list[str | None]: One prediction per record.
    """
    return [predict(record, node, schema) for record in records]
