"""
Weight assignment: how many layers of dependencies each service waits on.
"""
import logging
from typing import Dict, List, Set
from .graph_builder import DependencyGraph
from .errors import CircularDependencyError, DanglingDependencyError

logger = logging.getLogger(__name__)

WeightTable = Dict[str, int]


def assign_weights(graph: DependencyGraph) -> WeightTable:
    """
    Computes the readiness layer of every service in the graph.

    A service without dependencies weighs 0, any other service weighs one
    more than its heaviest dependency. Weights are propagated in passes over
    the services left; a pass that weighs nothing new means the rest can
    never be weighed.

    :param graph: Service name to the names it depends on.
    :return: Service name to weight, in graph order.
    :raises DanglingDependencyError: If a stuck service references an undefined service.
    :raises CircularDependencyError: If the stuck services depend on each other.
    """
    weights: WeightTable = {}
    left = [name for name in graph]
    passes = 0
    progressed = True

    while left and progressed:
        progressed = False
        passes += 1
        still_left = []
        for name in left:
            dependencies = graph[name]
            if not dependencies:
                weights[name] = 0
                progressed = True
            elif all(dep in weights for dep in dependencies):
                weights[name] = max(weights[dep] for dep in dependencies) + 1
                progressed = True
            else:
                still_left.append(name)
        left = still_left

    logger.debug("Weighted %d of %d services in %d passes", len(weights), len(graph), passes)

    if left:
        _raise_unresolvable(graph, left)

    return {name: weights[name] for name in graph}


def _raise_unresolvable(graph: DependencyGraph, left: List[str]):
    """
    Raises the error describing why the services left could not be weighed.
    """
    missing = {}
    for name in left:
        undefined = {dep for dep in graph[name] if dep not in graph}
        if undefined:
            missing[name] = undefined
    if missing:
        raise DanglingDependencyError(left, missing)
    raise CircularDependencyError(left, _find_cycle(graph, left))


def _find_cycle(graph: DependencyGraph, left: List[str]) -> List[str]:
    """
    Follows dependencies inside the stuck set until a service repeats.

    Every stuck service without undefined references waits on another stuck
    service, so the walk always closes a cycle.
    """
    stuck: Set[str] = set(left)
    path: List[str] = []
    seen: Dict[str, int] = {}
    current = left[0]
    while current not in seen:
        seen[current] = len(path)
        path.append(current)
        current = min(dep for dep in graph[current] if dep in stuck)
    return path[seen[current]:] + [current]
