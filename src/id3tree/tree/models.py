"""Pydantic models for tree nodes and extracted rules.

A tree node is a tagged variant: either a `LeafNode` carrying an output
label, or an `InternalNode` carrying the splitting attribute, the fallback
label and one child slot per bin. A child slot holds `None` when no training
record reached that bin. Nodes are immutable once built.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Public models -- Tree nodes
# ---------------------------------------------------------------------------


class LeafNode(BaseModel):
    """A terminal node that answers every record reaching it with one label.

    Attributes:
        node_type (Literal["leaf"]): Discriminator field; always `"leaf"`.
        output_label (str): The predicted label.

    Examples:
        >>> LeafNode(output_label="C3").output_label
        'C3'
    """

    model_config = ConfigDict(frozen=True)

    node_type: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    output_label: str = Field(description="Label predicted for records reaching this leaf.")


class InternalNode(BaseModel):
    """A node that routes records to a child by the bin of one attribute.

    Attributes:
        node_type (Literal["internal"]): Discriminator field; always `"internal"`.
        splitting_attribute (str): Name of the attribute whose bin selects the child.
        fallback_label (str): Majority label of the training records that
            reached this node. Returned when the selected child cannot answer.
        children (dict[float, TreeNode | None]): Child per bin of the
            splitting attribute; `None` marks a bin no training record fell into.

    Examples:
        >>> node = InternalNode(
        ...     splitting_attribute="size",
        ...     fallback_label="1",
        ...     children={0.0: LeafNode(output_label="1"), 1.0: None},
        ... )
        >>> node.child(1.0) is None
        True
    """

    model_config = ConfigDict(frozen=True)

    node_type: Literal["internal"] = Field(default="internal", description='Discriminator field. Always "internal".')
    splitting_attribute: str = Field(description="Attribute whose bin selects the child.")
    fallback_label: str = Field(description="Majority label of the training records at this node.")
    children: dict[
        float,
        Annotated[LeafNode | InternalNode, Field(discriminator="node_type")] | None,
    ] = Field(description="Child per bin; None where no training record fell into the bin.")

    def child(self, bin_label: float) -> TreeNode | None:
        """Return the child stored under `bin_label`, or `None` if there is none.

        Args:
            bin_label (float): A bin of the splitting attribute.

        Returns:
            TreeNode | None: The child, or `None` for an empty or unknown bin.
        """
        return self.children.get(bin_label)


type TreeNode = LeafNode | InternalNode

InternalNode.model_rebuild()

# ---------------------------------------------------------------------------
# Public models -- Rules
# ---------------------------------------------------------------------------


class BinCondition(BaseModel):
    """One step on a root-to-leaf path: an attribute falling into a bin.

    Attributes:
        attribute (str): The splitting attribute.
        bin (float): The bin taken at that split.
    """

    model_config = ConfigDict(frozen=True)

    attribute: str
    bin: float

    def __str__(self) -> str:
        """Return `"<attribute> = <bin>"`."""
        return f"{self.attribute} = {self.bin}"


class TreeRule(BaseModel):
    """The conditions along one root-to-leaf path and the leaf's label.

    Attributes:
        conditions (list[BinCondition]): Conditions from the root down. Empty
            when the tree is a single leaf.
        prediction (str): The leaf's output label.

    Examples:
        >>> rule = TreeRule(conditions=[BinCondition(attribute="type", bin=0.0)], prediction="C1")
        >>> str(rule)
        'IF type = 0.0 THEN C1'
    """

    model_config = ConfigDict(frozen=True)

    conditions: list[BinCondition] = Field(default_factory=list)
    prediction: str

    def __str__(self) -> str:
        """Return the rule as `"IF <conditions> THEN <label>"`."""
        if not self.conditions:
            return f"ALWAYS {self.prediction}"
        joined = " AND ".join(str(condition) for condition in self.conditions)
        return f"IF {joined} THEN {self.prediction}"
