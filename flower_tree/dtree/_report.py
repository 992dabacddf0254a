"""Plain text report of an experiment."""

from __future__ import annotations

from typing import List

from ._experiment import ExperimentResult
from ._tree import FlowerTree, InternalNode, TreeNode


def _node_id(node: TreeNode) -> str:
    if isinstance(node, InternalNode):
        return node.feature.value
    return str(int(node.prediction))


def format_node(node: TreeNode) -> str:
    """One node block: id, threshold, position and its records."""
    lines = [
        "",
        f"Node ID:\t{_node_id(node)}",
        f"Threshold:\t{node.threshold:.2f}",
        f"Position:\t{node.position or 'Root'}",
    ]
    for r in node.records:
        values = ",".join(f"{v:.1f}" for v in r.values())
        lines.append(f"{values},{float(r.label):.1f}")
    return "\n".join(lines)


def format_tree(tree: FlowerTree) -> str:
    """Every node of the tree, depth-first."""
    return "\n".join(format_node(node) for node in tree.iter_nodes())


def format_report(result: ExperimentResult) -> str:
    """Validation range, depth bound, the tree and both accuracies."""
    correct, total = result.train_accuracy
    v_correct, v_total = result.validation_accuracy
    lines: List[str] = [
        f"Validation Set:\tFlowers {result.validation_start} "
        f"to {result.validation_end - 1}",
        f"Maximum Depth:\t{result.tree.config.max_depth}",
        format_tree(result.tree),
        "",
        f"Train Accuracy:\t{correct}/{total}",
        f"Test Accuracy:\t{v_correct}/{v_total}",
    ]
    return "\n".join(lines)
