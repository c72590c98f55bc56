"""
Turns service weights into a start order.
"""
from typing import Dict, Iterable, List, Sequence, Tuple
from ..MODELS.resolver_settings import TieBreak
from .weight_engine import WeightTable


def emit_order(names: Sequence[str], weights: WeightTable,
               tie_break: TieBreak = TieBreak.INSERTION,
               prefer: Iterable[str] = ()) -> List[str]:
    """
    Sorts services by weight, lightest first.

    Services of equal weight are all kept and ordered by a secondary key:
    position in ``prefer`` first, then declaration order or name depending on
    ``tie_break``.

    :param names: Service names in declaration order.
    :param weights: Weight of every service in ``names``.
    :param tie_break: Ordering within one weight.
    :param prefer: Services placed first among their equal-weight peers.
    :return: Every name exactly once, dependencies before dependents.
    """
    keys = _sort_keys(names, weights, TieBreak(tie_break), prefer)
    return sorted(names, key=keys.__getitem__)


def emit_layers(names: Sequence[str], weights: WeightTable,
                tie_break: TieBreak = TieBreak.INSERTION,
                prefer: Iterable[str] = ()) -> List[List[str]]:
    """
    Groups the start order by weight.

    Services within one layer only depend on services of earlier layers and
    may be started together.
    """
    layers: List[List[str]] = []
    last_weight = None
    for name in emit_order(names, weights, tie_break, prefer):
        if weights[name] != last_weight:
            layers.append([])
            last_weight = weights[name]
        layers[-1].append(name)
    return layers


def _sort_keys(names: Sequence[str], weights: WeightTable,
               tie_break: TieBreak, prefer: Iterable[str]) -> Dict[str, Tuple]:
    """
    Builds a unique sort key per service; the weight alone is not unique.
    """
    preferred = {}
    for name in prefer:
        preferred.setdefault(name, len(preferred))
    unpreferred = len(preferred)

    keys = {}
    for position, name in enumerate(names):
        secondary = name if tie_break is TieBreak.NAME else ""
        keys[name] = (weights[name], preferred.get(name, unpreferred), secondary, position)
    return keys
