"""
Scoring & lock decision - pure functions over a session's violation history
"""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional, Tuple

from .violation_classifier import ViolationType

logger = logging.getLogger(__name__)


# (violation type, count at which the session locks), in evaluation order
COUNT_THRESHOLDS: Tuple[Tuple[str, int], ...] = (
    (ViolationType.NO_FACE_DETECTED.value, 5),
    (ViolationType.MULTIPLE_FACES.value, 3),
    (ViolationType.DIFFERENT_PERSON.value, 3),
    (ViolationType.GAZE_AWAY.value, 10),
    (ViolationType.EXIT_FULLSCREEN.value, 2),
    (ViolationType.TAB_SWITCH.value, 2),
    (ViolationType.WINDOW_SWITCH.value, 2),
    (ViolationType.CAMERA_ACCESS_DENIED.value, 3),
)

THRESHOLDS: Dict[str, int] = dict(COUNT_THRESHOLDS)

SCORE_LOCK_THRESHOLD = 100

# Lower bounds, checked from the top
RISK_LEVELS: Tuple[Tuple[int, str], ...] = (
    (100, "critical"),
    (50, "high"),
    (25, "medium"),
)


@dataclass(frozen=True)
class LockDecision:
    should_lock: bool
    rule: Optional[str] = None
    reason: Optional[str] = None


def count_violations_by_type(violation_types: Iterable[str]) -> Dict[str, int]:
    """
    Count violations per type over the full history.

    Every known type is present in the result, zero when absent.
    """
    counts = {v.value: 0 for v in ViolationType}
    for violation_type in violation_types:
        if violation_type in counts:
            counts[violation_type] += 1
    return counts


def evaluate_lock(counts: Dict[str, int], suspicion_score: int) -> LockDecision:
    """
    Check every lock rule in order and return the first one that fires.

    Args:
        counts: per-type counts from ``count_violations_by_type``
        suspicion_score: current accumulated score

    Returns:
        LockDecision naming the rule that fired, or ``should_lock=False``
    """
    fired: List[str] = []

    for violation_type, threshold in COUNT_THRESHOLDS:
        if counts.get(violation_type, 0) >= threshold:
            fired.append(violation_type)

    score_fired = suspicion_score >= SCORE_LOCK_THRESHOLD

    if fired:
        if len(fired) > 1 or score_fired:
            logger.debug(f"Several lock rules fired: {fired}, score={suspicion_score}")
        rule = fired[0]
        return LockDecision(True, rule, f"Exceeded threshold for {rule}")

    if score_fired:
        return LockDecision(
            True,
            "suspicionScore",
            f"Suspicion score {suspicion_score} reached the limit of {SCORE_LOCK_THRESHOLD}",
        )

    return LockDecision(False)


def get_risk_level(score: int) -> str:
    for lower_bound, level in RISK_LEVELS:
        if score >= lower_bound:
            return level
    return "low"
