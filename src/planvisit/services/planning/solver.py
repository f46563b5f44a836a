"""Exact brute-force tour search over a depot-rooted distance matrix.

Every permutation of the waypoint indices is evaluated, so the result is the
global optimum. Runtime grows as n!, which makes this solver practical only for
a handful of waypoints; no ceiling is enforced and a large waypoint count simply
stalls the caller until enumeration completes.
"""

from __future__ import annotations

import logging
import math
from typing import MutableSequence, Sequence

from ...config import settings
from .models import SolverResult

logger = logging.getLogger(__name__)


def next_permutation(values: MutableSequence[int]) -> bool:
    """Rearrange ``values`` in place into the next lexicographic permutation.

    Returns False (leaving ``values`` sorted ascending) once the last
    permutation has been passed.
    """
    pivot = len(values) - 2
    while pivot >= 0 and values[pivot] >= values[pivot + 1]:
        pivot -= 1

    if pivot < 0:
        values.reverse()
        return False

    successor = len(values) - 1
    while values[successor] <= values[pivot]:
        successor -= 1
    values[pivot], values[successor] = values[successor], values[pivot]
    values[pivot + 1 :] = reversed(values[pivot + 1 :])
    return True


def route_cost(matrix: Sequence[Sequence[float]], route: Sequence[int]) -> float:
    """Closed-tour cost: depot -> route[0] -> ... -> route[-1] -> depot."""
    cost = 0.0
    previous = 0
    for node in route:
        cost += matrix[previous][node]
        previous = node
    cost += matrix[previous][0]
    return cost


def solve_route(matrix: Sequence[Sequence[float]]) -> SolverResult:
    """Find the minimum-cost visiting order of matrix indices 1..n.

    Permutations are enumerated in lexicographic order starting from the sorted
    sequence. Only strictly cheaper tours replace the incumbent, so ties resolve
    to the lexicographically earliest route.
    """
    waypoint_count = len(matrix) - 1
    if waypoint_count <= 0:
        return SolverResult(route=(), cost=0.0, evaluated=0)

    if waypoint_count > settings.solver_warn_waypoints:
        logger.warning(
            f"Exact route search over {waypoint_count} waypoints evaluates "
            f"{math.factorial(waypoint_count)} permutations and will block until complete."
        )

    indices = list(range(1, waypoint_count + 1))
    best_route: list[int] = list(indices)
    best_cost = math.inf
    evaluated = 0

    while True:
        current_cost = route_cost(matrix, indices)
        evaluated += 1
        if current_cost < best_cost:
            best_cost = current_cost
            best_route = list(indices)
        if not next_permutation(indices):
            break

    logger.debug(
        f"Route search finished: waypoints={waypoint_count}, evaluated={evaluated}, "
        f"best_cost={best_cost:.1f}m, route={best_route}"
    )
    return SolverResult(route=tuple(best_route), cost=best_cost, evaluated=evaluated)
