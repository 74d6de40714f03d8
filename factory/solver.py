# factory/solver.py
"""
Requirement solver.

Every resource gets one conservation row:

    rate_i * x_i - sum_j weight(i -> j) * x_j = target_i

i.e. what x_i units of resource i produce, minus what the x_j units of every
consumer j draw from it, must equal the demanded net output of i. Solving
A x = b gives the (fractional) number of production units per resource.
"""
import logging
import math
from typing import Callable, Dict, Mapping, Optional, Tuple

import numpy as np
from ortools.linear_solver import pywraplp

from factory.errors import FactoryError, SingularSystemError
from factory.graph import ProductionGraph, Resource, check_amount

log = logging.getLogger(__name__)

TOL = 1e-9


class Solution:
    """Units needed per resource, as solved (not rounded)."""

    def __init__(self, units: Dict[Resource, float], tolerance: float = TOL):
        self.units = units
        self.tolerance = tolerance

    def __getitem__(self, resource):
        return self.units[resource]

    def __contains__(self, resource):
        return resource in self.units

    def __iter__(self):
        return iter(self.units)

    def __len__(self):
        return len(self.units)

    def items(self):
        return self.units.items()

    def factories(self) -> Dict[Resource, int]:
        """Deployable unit counts: each value rounded up, zeros left out."""
        counts = {}
        for resource, value in self.units.items():
            nearest = round(value)
            # 1.0000000002 is one factory, not two
            if math.isclose(value, nearest, rel_tol=self.tolerance, abs_tol=self.tolerance):
                value = nearest
            count = math.ceil(value)
            if count > 0:
                counts[resource] = count
        return counts

    def total_factories(self) -> int:
        return sum(self.factories().values())

    def __repr__(self):
        return f"Solution({self.units!r})"


def build_system(graph: ProductionGraph,
                 targets: Optional[Mapping[Resource, float]] = None) -> Tuple[np.ndarray, np.ndarray]:
    n = len(graph)
    a_matrix = np.zeros((n, n), dtype=float)
    b_vector = np.zeros(n, dtype=float)

    for resource, rate in graph.nodes():
        i = graph.index_of(resource)
        a_matrix[i, i] = rate

    for source, target, weight in graph.edges():
        s = graph.index_of(source)
        t = graph.index_of(target)
        # -= so a self-loop comes out of the diagonal
        a_matrix[s, t] -= weight

    for resource, rate in (targets or {}).items():
        b_vector[graph.index_of(resource)] = check_amount(rate, f"target rate of {resource!r}")

    return a_matrix, b_vector


def _dead_resources(graph, a_matrix):
    """Resources whose conservation row is all zeros."""
    resources = graph.resources()
    rows = np.flatnonzero(~a_matrix.any(axis=1))
    return [resources[i] for i in rows]


def _check_invertible(graph, a_matrix, max_condition=None):
    # slogdet runs the same LU factorization; sign 0 means a zero pivot
    sign, _ = np.linalg.slogdet(a_matrix)
    if sign == 0:
        reason = "coefficient matrix is singular"
        dead = _dead_resources(graph, a_matrix)
        if dead:
            reason += "; no production or consumption for: " + ", ".join(map(repr, dead))
        raise SingularSystemError(reason)
    if max_condition is None:
        return
    # row scaling keeps very fast or very slow resources from looking singular
    scaled = a_matrix / np.abs(a_matrix).max(axis=1, keepdims=True)
    cond = np.linalg.cond(scaled)
    if not np.isfinite(cond) or cond > max_condition:
        raise SingularSystemError(f"coefficient matrix is numerically singular "
                                  f"(row-scaled condition number {cond:.3g})")


def _solve_lu(a_matrix, b_vector):
    try:
        return np.linalg.solve(a_matrix, b_vector)
    except np.linalg.LinAlgError as e:
        raise SingularSystemError(f"LU decomposition failed: {e}") from e


def _solve_glop(a_matrix, b_vector):
    solver = pywraplp.Solver.CreateSolver("GLOP")
    if solver is None:
        raise FactoryError("OR-Tools GLOP solver is not available")

    n = len(b_vector)
    x = [solver.NumVar(-solver.infinity(), solver.infinity(), f"x[{i}]") for i in range(n)]
    for i in range(n):
        rhs = float(b_vector[i])
        cons = solver.Constraint(rhs, rhs)
        for j in np.flatnonzero(a_matrix[i]):
            cons.SetCoefficient(x[j], float(a_matrix[i, j]))
    # pure feasibility: the square system has exactly one point
    solver.Objective().SetMinimization()

    status = solver.Solve()
    if status != pywraplp.Solver.OPTIMAL:
        raise SingularSystemError(f"GLOP found no solution (status {status})")
    return np.array([var.solution_value() for var in x], dtype=float)


BACKENDS: Dict[str, Callable[[np.ndarray, np.ndarray], np.ndarray]] = {
    "lu": _solve_lu,
    "glop": _solve_glop,
}


def solve(graph: ProductionGraph,
          targets: Optional[Mapping[Resource, float]] = None,
          backend: str = "lu",
          tolerance: float = TOL,
          max_condition: Optional[float] = None) -> Solution:
    """Solve for the number of production units each resource needs.

    Raises SingularSystemError when the system has no unique solution, and
    GraphError when a target names an unknown resource or a bad rate.
    Values are reported as solved; rounding is left to Solution.factories().
    With `max_condition` set, systems whose row-scaled condition number
    exceeds it are rejected as numerically singular too.
    """
    try:
        solve_system = BACKENDS[backend]
    except KeyError:
        raise ValueError(f"unknown backend {backend!r}, expected one of {sorted(BACKENDS)}") from None

    a_matrix, b_vector = build_system(graph, targets)
    if len(graph) == 0:
        return Solution({}, tolerance)

    _check_invertible(graph, a_matrix, max_condition)
    x_vector = solve_system(a_matrix, b_vector)
    if not np.all(np.isfinite(x_vector)):
        raise SingularSystemError("solution contains non-finite values")

    # rounding noise below this is not worth a warning
    noise = tolerance * float(np.abs(x_vector).max())
    units = {}
    for resource in graph.resources():
        value = float(x_vector[graph.index_of(resource)])
        if value < -noise:
            log.warning("%r needs a negative number of units (%g); its consumers "
                        "use more than the cycle produces", resource, value)
        units[resource] = value

    log.debug("solved %d resources with %s backend", len(units), backend)
    return Solution(units, tolerance)
