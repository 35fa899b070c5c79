"""
Fuzzy Scoring Service

Turns fare, travel time and transfer count into a single desirability score
so that routes can be ordered even when none of them is best on every axis.

Each metric is normalized against a maximum (``1 - min(metric / max, 1)``),
passed through an S-shaped membership curve and combined with weights.

Inputs are NOT validated. Negative metrics simply saturate the membership
curve and a NaN anywhere yields a NaN score instead of an exception; callers
are expected to pass well-formed route totals from the routing backend.
"""

import logging
import math
from typing import Dict, List, Optional, Tuple, Union

from app.schemas.constraints import Preference
from app.schemas.route import FuzzyScore, Route

logger = logging.getLogger(__name__)

# (fare, time, transfers)
Weights = Tuple[float, float, float]

DEFAULT_WEIGHTS: Weights = (0.4, 0.4, 0.2)

# Not renormalized, sums to 0.99
EQUAL_WEIGHTS: Weights = (0.33, 0.33, 0.33)

PREFERENCE_WEIGHTS: Dict[Preference, Weights] = {
    Preference.LOWEST_FARE: (0.6, 0.2, 0.2),
    Preference.SHORTEST_TIME: (0.2, 0.6, 0.2),
    Preference.FEWEST_TRANSFERS: (0.2, 0.2, 0.6),
}


def _normalize(value: float, maximum: float) -> float:
    """Map a metric to [0, 1] where 1 is best. A zero maximum counts as best."""
    if maximum == 0:
        return 1.0
    return 1 - min(value / maximum, 1)


def apply_fuzzy_membership(value: float) -> float:
    """
    S-shaped membership function.

    The bounds map to themselves because the logistic curve only approaches
    them asymptotically.
    """
    if value <= 0:
        return 0.0
    if value >= 1:
        return 1.0
    return 1 / (1 + math.exp(-5 * (value - 0.5)))


def get_preference_weights(preference: Union[Preference, str, None]) -> Weights:
    """Weights for a preference; anything unrecognized gets equal weights."""
    return PREFERENCE_WEIGHTS.get(preference, EQUAL_WEIGHTS)  # type: ignore[arg-type]


def _criterion_scores(
    route: Route, max_fare: float, max_time: float, max_transfers: float
) -> Tuple[float, float, float]:
    return (
        apply_fuzzy_membership(_normalize(route.total_fare, max_fare)),
        apply_fuzzy_membership(_normalize(route.total_time, max_time)),
        apply_fuzzy_membership(_normalize(route.total_transfers, max_transfers)),
    )


def _combine(scores: Tuple[float, float, float], weights: Weights) -> float:
    fare_score, time_score, transfer_score = scores
    fare_weight, time_weight, transfer_weight = weights
    return fare_score * fare_weight + time_score * time_weight + transfer_score * transfer_weight


def calculate_fuzzy_score(
    route: Route,
    max_fare: float,
    max_time: float,
    max_transfers: float,
    preference: Union[Preference, str, None] = None,
) -> FuzzyScore:
    """
    Calculate the fuzzy score of a route.

    Args:
        route: Route to score
        max_fare: Fare that maps to the worst fare score
        max_time: Travel time that maps to the worst time score
        max_transfers: Transfer count that maps to the worst transfer score
        preference: Optional preference; any preference other than balanced
            replaces the default 0.4 / 0.4 / 0.2 split with its own weights

    Returns:
        FuzzyScore with the three criterion scores and their weighted total
    """
    scores = _criterion_scores(route, max_fare, max_time, max_transfers)
    if preference in (None, Preference.BALANCED):
        weights = DEFAULT_WEIGHTS
    else:
        weights = get_preference_weights(preference)
    fare_score, time_score, transfer_score = scores

    return FuzzyScore(
        fare_score=fare_score,
        time_score=time_score,
        transfer_score=transfer_score,
        total_score=_combine(scores, weights),
    )


def apply_preference_weights(
    route: Route,
    preference: Union[Preference, str],
    max_fare: float,
    max_time: float,
    max_transfers: float,
) -> float:
    """
    Score a route with the weights of a specific preference.

    ``balanced`` and unrecognized preferences use equal weights.
    """
    scores = _criterion_scores(route, max_fare, max_time, max_transfers)
    return _combine(scores, get_preference_weights(preference))


def _sort_key(route: Route) -> float:
    score = route.fuzzy_score
    if score is None or math.isnan(score):
        return 0.0
    return score


def rank_routes(routes: List[Route], preference: Optional[Preference] = None) -> List[Route]:
    """
    Rank routes by fuzzy score, best first.

    Maxima are taken from the routes themselves, so the ranking is always
    relative to the candidate set. Each returned route is a copy stamped with
    its score. Equal scores keep their input order.

    Args:
        routes: Candidate routes
        preference: Optional preference used to weight the score

    Returns:
        New list of scored routes sorted by descending score
    """
    if not routes:
        return []

    max_fare = max(route.total_fare for route in routes)
    max_time = max(route.total_time for route in routes)
    max_transfers = max(route.total_transfers for route in routes)

    scored = [
        route.with_fuzzy_score(
            calculate_fuzzy_score(route, max_fare, max_time, max_transfers, preference).total_score
        )
        for route in routes
    ]

    logger.debug(
        "Ranked %d routes (max_fare=%s, max_time=%s, max_transfers=%s, preference=%s)",
        len(scored),
        max_fare,
        max_time,
        max_transfers,
        preference,
    )

    # sorted() is stable with reverse=True
    return sorted(scored, key=_sort_key, reverse=True)
