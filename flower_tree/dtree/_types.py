from __future__ import annotations

from enum import Enum, IntEnum
from typing import Dict, Tuple, TypeAlias

from pydantic import BaseModel, ConfigDict, Field


class FlowerClass(IntEnum):
    """The three Iris species, coded 0, 1 and 2 in the input data."""

    SETOSA = 0
    VERSICOLOR = 1
    VIRGINICA = 2


class Feature(str, Enum):
    """The four flower measurements.

    Declaration order is the split priority order: when two features reach the
    same maximum gain, the one declared first wins.
    """

    SL = "SL"
    SW = "SW"
    PL = "PL"
    PW = "PW"

    @property
    def attribute(self) -> str:
        """Name of the matching attribute on :class:`Record`."""
        return _FEATURE_ATTRIBUTES[self]


_FEATURE_ATTRIBUTES: Dict[Feature, str] = {
    Feature.SL: "sepal_length",
    Feature.SW: "sepal_width",
    Feature.PL: "petal_length",
    Feature.PW: "petal_width",
}

FEATURES: Tuple[Feature, ...] = tuple(Feature)
"""Features in split priority order."""

ClassTally: TypeAlias = Tuple[int, int, int]
"""Number of setosa, versicolor and virginica records, in that order."""


class Record(BaseModel):
    """One labeled flower: four measurements and a class."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    sepal_length: float = Field(description="Sepal length in cm.")
    sepal_width: float = Field(description="Sepal width in cm.")
    petal_length: float = Field(description="Petal length in cm.")
    petal_width: float = Field(description="Petal width in cm.")
    label: FlowerClass = Field(description="The species of the flower.")

    def feature(self, which: Feature) -> float:
        """The value of feature ``which`` for this record."""
        return getattr(self, which.attribute)

    def values(self) -> Tuple[float, float, float, float]:
        """All four feature values in feature order."""
        return (
            self.sepal_length,
            self.sepal_width,
            self.petal_length,
            self.petal_width,
        )
