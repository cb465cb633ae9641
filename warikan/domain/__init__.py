"""Domain models and pure logic for warikan.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from infrastructure
"""

from warikan.domain.models import (
    AdvancePayment,
    CycleSettlement,
    ImbalanceResult,
    Money,
    MonthlySettlement,
    Payer,
    YearMonth,
)

__all__ = [
    "AdvancePayment",
    "CycleSettlement",
    "ImbalanceResult",
    "Money",
    "MonthlySettlement",
    "Payer",
    "YearMonth",
]
