"""Risk profile resolution and catalog filtering."""

from typing import Dict, Mapping

from src.core.constants import CONSERVATIVE_MAX_TOLERANCE, MODERATE_MAX_TOLERANCE
from src.core.models import Protocol
from src.sandbox.models import AGGRESSIVE, CONSERVATIVE, MODERATE, RiskProfile


def resolve_risk_profile(tolerance: int) -> RiskProfile:
    """
    Map a 1-10 risk tolerance onto a fixed profile.

    1-3 -> conservative, 4-7 -> moderate, 8-10 -> aggressive.
    Range checking belongs to the caller.
    """
    if tolerance <= CONSERVATIVE_MAX_TOLERANCE:
        return CONSERVATIVE
    if tolerance <= MODERATE_MAX_TOLERANCE:
        return MODERATE
    return AGGRESSIVE


def filter_protocols_by_risk(
    protocols: Mapping[str, Protocol],
    max_risk: int,
) -> Dict[str, Protocol]:
    """Return a new mapping of protocols with risk_score <= max_risk, in source order."""
    return {
        name: protocol
        for name, protocol in protocols.items()
        if protocol.risk_score <= max_risk
    }
