"""An information gain decision tree for the Iris flowers dataset.

Each internal node splits the records reaching it on one of the four flower
measurements; leaves predict the majority species.
"""

from ._types import Record, Feature, FlowerClass, FEATURES, ClassTally
from ._records import parse_record, read_records, load_records, records_to_frame
from ._impurity import class_tally, impurity, information_gain
from ._split import SplitCandidate, best_split
from ._random import RandomSource, NumpyRandomSource
from ._tree import FlowerTree, TreeConfig, TreeNode, LeafNode, InternalNode
from ._tree import choose_leaf_class
from ._experiment import ExperimentResult, split_validation, run_experiment, evaluate
from ._report import format_report, format_tree, format_node

__all__ = [
    "Record",
    "Feature",
    "FlowerClass",
    "FEATURES",
    "ClassTally",
    "parse_record",
    "read_records",
    "load_records",
    "records_to_frame",
    "class_tally",
    "impurity",
    "information_gain",
    "SplitCandidate",
    "best_split",
    "RandomSource",
    "NumpyRandomSource",
    "FlowerTree",
    "TreeConfig",
    "TreeNode",
    "LeafNode",
    "InternalNode",
    "choose_leaf_class",
    "ExperimentResult",
    "split_validation",
    "run_experiment",
    "evaluate",
    "format_report",
    "format_tree",
    "format_node",
]
