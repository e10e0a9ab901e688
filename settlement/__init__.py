"""
TRAVEL AGENCY SETTLEMENT ENGINE
Version 4.8
"""

from .ledger import AuthorizedDiscountLedger
from .models import SettlementInput, SettlementResult
from .policy import SettlementPolicy, get_policy
from .processor import SettlementAggregator

__all__ = [
    'SettlementAggregator',
    'SettlementInput',
    'SettlementResult',
    'AuthorizedDiscountLedger',
    'SettlementPolicy',
    'get_policy',
]
