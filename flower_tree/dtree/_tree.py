"""FlowerTree.

Information gain decision tree classifier for the Iris flowers dataset.
"""

from __future__ import annotations

import datetime
import logging
from dataclasses import dataclass, field
from os import PathLike
from pathlib import Path
from typing import Any, Dict, Iterator, List, Literal, Sequence, Set, Tuple, TypeAlias

import orjson
import pandas as pd
from pydantic import BaseModel, ConfigDict, Field

from flower_tree.core import settings, JSONValue
from flower_tree.core import CorruptionError, DegenerateDatasetError, NotFittedError
from ._impurity import class_tally
from ._random import NumpyRandomSource, RandomSource
from ._records import records_to_frame
from ._split import SplitCandidate, best_split
from ._types import FEATURES, ClassTally, Feature, FlowerClass, Record


logger = logging.getLogger(__name__)

MANIFEST_NAME = "flower_tree.json"


class TreeConfig(BaseModel):
    """Immutable settings for building a tree."""

    model_config = ConfigDict(frozen=True)

    max_depth: int = Field(
        default_factory=lambda: settings.DEFAULT_MAX_DEPTH,
        ge=0,
        description="Maximum number of splits on any path from the root.",
    )
    root_label: str = Field(
        default="",
        pattern=r"^[LR]*$",
        description="Position label of the root. Children append 'L' or 'R'.",
    )


@dataclass(frozen=True, slots=True)
class LeafNode:
    """A terminal node predicting a single class."""

    position: str = field(metadata={"description": "Path from the root."})
    records: Tuple[Record, ...] = field(
        metadata={"description": "Training records that reached this node."}
    )
    prediction: FlowerClass = field(metadata={"description": "The predicted class."})

    @property
    def is_leaf(self) -> bool:
        return True

    @property
    def threshold(self) -> float:
        return 0.0


@dataclass(frozen=True, slots=True)
class InternalNode:
    """A decision node. Records below ``threshold`` on ``feature`` go left."""

    position: str = field(metadata={"description": "Path from the root."})
    records: Tuple[Record, ...] = field(
        metadata={"description": "Training records that reached this node."}
    )
    feature: Feature = field(metadata={"description": "The feature split on."})
    threshold: float = field(metadata={"description": "The split threshold."})
    left: TreeNode = field(metadata={"description": "Subtree for smaller values."})
    right: TreeNode = field(metadata={"description": "Subtree for larger values."})

    @property
    def is_leaf(self) -> bool:
        return False


TreeNode: TypeAlias = LeafNode | InternalNode


def _record_keys(records: Sequence[Record]) -> List[Tuple[float, ...]]:
    return sorted((*r.values(), int(r.label)) for r in records)


def choose_leaf_class(tally: ClassTally, random_source: RandomSource) -> FlowerClass:
    """Majority class of ``tally``, breaking ties uniformly at random."""
    top = max(tally)
    tied = [FlowerClass(i) for i, count in enumerate(tally) if count == top]
    if len(tied) == 1:
        return tied[0]
    return tied[random_source.choice(len(tied))]


class FlowerTree:
    """Binary decision tree classifier over the four flower features.

    Each internal node splits on the feature and threshold with the greatest
    information gain. Gain ties between features go to the earlier feature
    in :data:`FEATURES`. Leaves predict the majority class, with ties broken
    by ``random_source``.

    Args:
        config: Depth bound and root position label. Defaults to
            ``TreeConfig()``.
        random_source: Source for leaf tie-breaks. Defaults to a
            :class:`NumpyRandomSource` seeded from ``settings.RANDOM_SEED``.
    """

    def __init__(
        self,
        config: TreeConfig | None = None,
        random_source: RandomSource | None = None,
    ):
        self.config = config or TreeConfig()
        self.random_source = random_source or NumpyRandomSource(settings.RANDOM_SEED)
        self._root: TreeNode | None = None

    @property
    def root(self) -> TreeNode:
        """The root node of the fitted tree."""
        if self._root is None:
            raise NotFittedError("Tree is empty. Fit or load a tree first.")
        return self._root

    @property
    def is_fitted(self) -> bool:
        return self._root is not None

    def fit(self, records: Sequence[Record]) -> FlowerTree:
        """Build the tree over ``records``, replacing any previous tree.

        Raises:
            DegenerateDatasetError: If ``records`` is empty.
        """
        if len(records) == 0:
            raise DegenerateDatasetError("Cannot build a tree from zero records")

        self._root = self._build(tuple(records), self.config.root_label)
        logger.info(
            f"Built tree over {len(records)} records: depth {self.depth}, "
            f"{self.n_leaves} leaves"
        )
        return self

    def _make_leaf(self, records: Tuple[Record, ...], position: str) -> LeafNode:
        prediction = choose_leaf_class(class_tally(records), self.random_source)
        return LeafNode(position=position, records=records, prediction=prediction)

    def _build(self, records: Tuple[Record, ...], position: str) -> TreeNode:
        depth = len(position) - len(self.config.root_label)

        if len(records) == 1:
            logger.debug(f"Leaf at '{position}': single record")
            return self._make_leaf(records, position)
        if depth >= self.config.max_depth:
            logger.debug(f"Leaf at '{position}': maximum depth reached")
            return self._make_leaf(records, position)
        if len({r.label for r in records}) == 1:
            logger.debug(f"Leaf at '{position}': all records share one class")
            return self._make_leaf(records, position)

        best: SplitCandidate | None = None
        for feature in FEATURES:
            candidate = best_split(records, feature)
            if best is None or candidate.gain > best.gain:
                best = candidate

        if best is None or best.gain == 0:
            logger.debug(f"Leaf at '{position}': no feature separates the records")
            return self._make_leaf(records, position)

        logger.debug(
            f"Split at '{position}' on {best.feature.value} < {best.threshold:.3f} "
            f"(gain {best.gain:.4f}, {len(best.left)}/{len(best.right)})"
        )
        return InternalNode(
            position=position,
            records=records,
            feature=best.feature,
            threshold=best.threshold,
            left=self._build(best.left, position + "L"),
            right=self._build(best.right, position + "R"),
        )

    def decision_path(self, record: Record) -> List[TreeNode]:
        """Nodes visited when classifying ``record``, root first."""
        node = self.root
        path: List[TreeNode] = [node]
        while isinstance(node, InternalNode):
            if record.feature(node.feature) < node.threshold:
                node = node.left
            else:
                node = node.right
            path.append(node)
        return path

    def classify(self, record: Record) -> FlowerClass:
        """Predict the class of a single record."""
        leaf = self.decision_path(record)[-1]
        assert isinstance(leaf, LeafNode)
        return leaf.prediction

    def predict(self, records: Sequence[Record]) -> List[FlowerClass]:
        """Predict the class of each record."""
        return [self.classify(r) for r in records]

    def iter_nodes(self) -> Iterator[TreeNode]:
        """Yield every node depth-first: node, left subtree, right subtree."""
        stack: List[TreeNode] = [self.root]
        while stack:
            node = stack.pop()
            yield node
            if isinstance(node, InternalNode):
                stack.append(node.right)
                stack.append(node.left)

    @property
    def depth(self) -> int:
        """Length of the longest root to leaf path."""
        root_len = len(self.config.root_label)
        return max(len(n.position) - root_len for n in self.iter_nodes())

    @property
    def n_leaves(self) -> int:
        return sum(1 for n in self.iter_nodes() if n.is_leaf)

    def get_training_data(self) -> pd.DataFrame | None:
        """Get the training data as a DataFrame."""
        if self._root is None:
            return None
        return records_to_frame(self._root.records)

    def view_tree(self, format: Literal["png", "svg"] = "png") -> bytes:
        """Render the fitted tree as PNG/SVG bytes.

        Raises:
            NotFittedError: If the tree has not been fitted.
            ImportError: If graphviz package is not installed.
        """
        return self.to_graphviz(format=format).pipe(format=format)  # type: ignore

    def to_graphviz(self, format: Literal["png", "svg"] = "png") -> Any:
        """Build a ``graphviz.Digraph`` of the fitted tree.

        Raises:
            NotFittedError: If the tree has not been fitted.
            ImportError: If graphviz package is not installed.
        """
        root = self.root

        try:
            from graphviz import Digraph  # type: ignore
        except ImportError as e:
            raise ImportError(
                "The 'graphviz' Python package is required. "
                "Install it with `pip install graphviz`."
            ) from e

        dot = Digraph(
            name="FlowerTree",
            format=format,
            graph_attr={"rankdir": "TB"},
        )  # type: ignore

        for node in self.iter_nodes():
            node_id = node.position or "root"
            a, b, c = class_tally(node.records)
            label_lines = [
                f"position={node.position or 'Root'}",
                f"samples={len(node.records)}",
                f"distribution: {a}, {b}, {c}",
            ]
            if isinstance(node, InternalNode):
                label_lines.insert(0, f"{node.feature.value} < {node.threshold:.2f}")
            else:
                label_lines.insert(0, f"class={node.prediction.name.lower()}")
            dot.node(  # type: ignore
                node_id,
                "\n".join(label_lines),
                shape="box",
                style="rounded,filled",
                fillcolor="lightgrey" if node.is_leaf else "white",
                fontsize="10",
            )
            if node is not root:
                parent_id = node.position[:-1] or "root"
                edge_label = "yes" if node.position.endswith("L") else "no"
                dot.edge(parent_id, node_id, label=edge_label)  # type: ignore

        return dot

    @classmethod
    def _load(cls, base: Path) -> FlowerTree:
        tree_json_path = base / MANIFEST_NAME
        if not tree_json_path.exists():
            raise FileNotFoundError(f"'{MANIFEST_NAME}' not found in directory: {base}")

        manifest = orjson.loads(tree_json_path.read_bytes())
        inst = cls(config=TreeConfig(**manifest["config"]))

        by_position: Dict[str, Dict[str, Any]] = {
            nd["position"]: nd for nd in manifest["nodes"]
        }
        if len(by_position) != len(manifest["nodes"]):
            raise CorruptionError("Manifest holds more than one node per position")
        visited: Set[str] = set()

        def _rebuild(position: str) -> TreeNode:
            nd = by_position.get(position)
            if nd is None:
                raise CorruptionError(f"Node at position '{position}' is missing")
            visited.add(position)
            records = tuple(
                Record(
                    sepal_length=r[0],
                    sepal_width=r[1],
                    petal_length=r[2],
                    petal_width=r[3],
                    label=FlowerClass(r[4]),
                )
                for r in nd["records"]
            )
            if nd["kind"] not in ("leaf", "internal"):
                raise CorruptionError(
                    f"Node at position '{position}' has unknown kind {nd['kind']!r}"
                )
            if nd["kind"] == "leaf":
                return LeafNode(
                    position=position,
                    records=records,
                    prediction=FlowerClass(nd["prediction"]),
                )
            left = _rebuild(position + "L")
            right = _rebuild(position + "R")
            if _record_keys(left.records + right.records) != _record_keys(records):
                raise CorruptionError(
                    f"Children of node '{position}' do not partition its records"
                )
            return InternalNode(
                position=position,
                records=records,
                feature=Feature(nd["feature"]),
                threshold=float(nd["threshold"]),
                left=left,
                right=right,
            )

        inst._root = _rebuild(inst.config.root_label)
        unreachable = set(by_position) - visited
        if unreachable:
            raise CorruptionError(
                f"Manifest holds unreachable nodes: {sorted(unreachable)}"
            )
        return inst

    @classmethod
    def load(cls, path: str | PathLike[str]) -> FlowerTree:
        """Load a FlowerTree from a directory written by :meth:`save`.

        Raises:
            ValueError: If ``path`` is not a directory.
            FileNotFoundError: If the directory holds no manifest.
            CorruptionError: If the manifest is inconsistent.
        """
        base = Path(path)
        if not base.is_dir():
            raise ValueError("Please provide a directory, not a file.")

        try:
            return cls._load(base)
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise CorruptionError(
                f"Failed to load FlowerTree. Tree json is probably corrupted: {e}"
            ) from e

    def save(self, dir_path: str | PathLike[str]) -> Path:
        """Save the fitted tree to ``<dir_path>/flower_tree.json``.

        Returns:
            Path of the written manifest.
        """
        if not self.is_fitted:
            raise NotFittedError("Tree is empty. Fit a tree before saving.")

        base = Path(dir_path)
        if base.is_file():
            raise ValueError("Please provide a directory, not a file.")
        base.mkdir(parents=True, exist_ok=True)

        def _serialize_node(node: TreeNode) -> Dict[str, JSONValue]:
            dict_: Dict[str, JSONValue] = {
                "position": node.position,
                "kind": "leaf" if node.is_leaf else "internal",
                "records": [[*r.values(), int(r.label)] for r in node.records],
            }
            if isinstance(node, InternalNode):
                dict_["feature"] = node.feature.value
                dict_["threshold"] = node.threshold
            else:
                dict_["prediction"] = int(node.prediction)
            return dict_

        payload: Dict[str, JSONValue] = {
            "created_at": datetime.datetime.now().isoformat(),
            "config": self.config.model_dump(),
            "nodes": [_serialize_node(node) for node in self.iter_nodes()],
        }
        tree_json_path = base / MANIFEST_NAME
        tree_json_path.write_bytes(orjson.dumps(payload, option=orjson.OPT_INDENT_2))
        logger.debug(f"Saved tree to {tree_json_path}")
        return tree_json_path

    def __repr__(self) -> str:
        return f"FlowerTree(max_depth={self.config.max_depth}, fitted={self.is_fitted})"
