"""
Calculators Package

Provides all calculation components for settlement processing.
"""

from .agency import AgencyMarginCalculator
from .badge import PerformanceBadgeClassifier
from .franchise import FranchiseEnforcer
from .hospitality import HospitalitySegmentCalculator
from .payout import PayoutCalculator
from .tier import TierCommissionResolver

__all__ = [
    "TierCommissionResolver",
    "HospitalitySegmentCalculator",
    "FranchiseEnforcer",
    "PerformanceBadgeClassifier",
    "PayoutCalculator",
    "AgencyMarginCalculator",
]
