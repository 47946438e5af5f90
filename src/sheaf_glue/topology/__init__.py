"""Open sets and the space contracts every model implements."""

from .open_set import OpenSet
from .space import TopologicalSpace, MetricSpace
