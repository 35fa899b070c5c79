"""
Greedy Constraint Filter

Hard feasibility checks on candidate routes, independent of fuzzy ranking.

A constraint field that is None leaves that dimension unconstrained. Finding
no feasible route is a normal outcome and is reported by returning None,
never by raising.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Union

from app.schemas.constraints import GreedyConstraints, PriorityMetric
from app.schemas.route import Route

logger = logging.getLogger(__name__)

_METRIC_KEYS: Dict[PriorityMetric, Callable[[Route], float]] = {
    PriorityMetric.FARE: lambda route: route.total_fare,
    PriorityMetric.TIME: lambda route: route.total_time,
    PriorityMetric.DISTANCE: lambda route: route.total_distance,
    PriorityMetric.TRANSFERS: lambda route: route.total_transfers,
}


@dataclass
class _Totals:
    fare: float = 0.0
    time: float = 0.0
    distance: float = 0.0
    transfers: int = 0


def _within(value: float, ceiling: Optional[float]) -> bool:
    return ceiling is None or value <= ceiling


def _totals_within(totals: _Totals, constraints: GreedyConstraints) -> bool:
    return (
        _within(totals.fare, constraints.max_budget)
        and _within(totals.distance, constraints.max_distance)
        and _within(totals.time, constraints.max_time)
        and _within(totals.transfers, constraints.max_transfers)
    )


def satisfies_constraints(route: Route, constraints: Optional[GreedyConstraints]) -> bool:
    """Check whether a route respects every ceiling that is set."""
    if constraints is None:
        return True
    return _totals_within(
        _Totals(
            fare=route.total_fare,
            time=route.total_time,
            distance=route.total_distance,
            transfers=route.total_transfers,
        ),
        constraints,
    )


def apply_greedy_filter(
    routes: List[Route], constraints: Optional[GreedyConstraints]
) -> List[Route]:
    """
    Drop routes that exceed any ceiling.

    Args:
        routes: Candidate routes
        constraints: Ceilings to enforce

    Returns:
        The feasible routes in their original order
    """
    feasible = [route for route in routes if satisfies_constraints(route, constraints)]
    logger.debug("Greedy filter kept %d of %d routes", len(feasible), len(routes))
    return feasible


def select_greedy_route(
    routes: List[Route],
    constraints: Optional[GreedyConstraints],
    priority_metric: Union[PriorityMetric, str] = PriorityMetric.FARE,
) -> Optional[Route]:
    """
    Pick the feasible route with the lowest value of the priority metric.

    Args:
        routes: Candidate routes
        constraints: Ceilings to enforce before choosing
        priority_metric: Metric to minimize; unrecognized values use fare

    Returns:
        The best feasible route, or None when nothing is feasible. When
        several routes tie, the earliest one in ``routes`` wins.
    """
    feasible = apply_greedy_filter(routes, constraints)
    if not feasible:
        return None

    fallback = _METRIC_KEYS[PriorityMetric.FARE]
    key = _METRIC_KEYS.get(priority_metric, fallback)  # type: ignore[arg-type]
    return sorted(feasible, key=key)[0]


def find_optimal_multi_destination_route(
    route_segments: List[List[Route]], constraints: Optional[GreedyConstraints]
) -> Optional[List[Route]]:
    """
    Choose one route per leg of a multi-destination trip.

    Legs are handled in order. A candidate is feasible only if the journey so
    far plus that candidate stays within every ceiling; the cheapest feasible
    candidate is locked in and never revisited. This is greedy, so a cheaper
    overall combination can be missed, and a trip can be reported infeasible
    even though some other combination would fit.

    Args:
        route_segments: Candidate routes for each leg, in travel order
        constraints: Ceilings on the cumulative trip

    Returns:
        One route per leg, or None when there are no legs or some leg has no
        feasible candidate. Partial plans are never returned.
    """
    if not route_segments:
        return None

    constraints = constraints or GreedyConstraints()
    selected: List[Route] = []
    totals = _Totals()

    for leg_index, candidates in enumerate(route_segments):
        feasible = [
            route
            for route in candidates
            if _totals_within(
                _Totals(
                    fare=totals.fare + route.total_fare,
                    time=totals.time + route.total_time,
                    distance=totals.distance + route.total_distance,
                    transfers=totals.transfers + route.total_transfers,
                ),
                constraints,
            )
        ]

        if not feasible:
            logger.debug(
                "No feasible candidate for leg %d of %d", leg_index + 1, len(route_segments)
            )
            return None

        best = min(feasible, key=lambda route: route.total_fare)
        selected.append(best)
        totals.fare += best.total_fare
        totals.time += best.total_time
        totals.distance += best.total_distance
        totals.transfers += best.total_transfers

    return selected
