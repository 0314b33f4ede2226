"""Round restrictions and allocation checks.

Rule of thumb:
- OK: table lookups, validation, pure transformations.
- Not OK: touching DB sessions, FastAPI, randomness.

Validation problems are returned as a list of messages, never raised. The
caller decides whether to block the round.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping, Sequence

from portfolio_rescue.domain.investments import InvestmentType

SLOT_COUNT = 4
TOTAL_ALLOCATION = 100


@dataclass(frozen=True)
class RestrictionSet:
    # A missing investment name means that investment is uncapped.
    max_allocation: Mapping[str, int]
    min_diversification: int
    description: str

    def __post_init__(self):
        object.__setattr__(self, "max_allocation", MappingProxyType(dict(self.max_allocation)))


@dataclass(frozen=True)
class ValidationResult:
    is_valid: bool
    errors: list[str] = field(default_factory=list)

    @classmethod
    def from_errors(cls, errors: list[str]) -> "ValidationResult":
        return cls(is_valid=not errors, errors=errors)


# ==============================================================================
# ==== Restriction table =======================================================
# ==============================================================================
# Hand-authored per round. There is no formula behind these numbers and the
# Savings cap only shows up in rounds 6 and 10; keep them as they are.

_ROUND_RESTRICTIONS: dict[int, RestrictionSet] = {
    1: RestrictionSet(
        max_allocation={},
        min_diversification=0,
        description="Tutorial Round - No restrictions, experiment freely!",
    ),
    2: RestrictionSet(
        max_allocation={},
        min_diversification=2,
        description=(
            "Learning Phase - Must use at least 2 different investments for basic "
            "diversification"
        ),
    ),
    3: RestrictionSet(
        max_allocation={"Crypto": 60},
        min_diversification=2,
        description="First Limit - Crypto capped at 60% to prevent extreme concentration",
    ),
    4: RestrictionSet(
        max_allocation={"Crypto": 40, "Payment Plans": 50},
        min_diversification=3,
        description=(
            "Risk Controls - Crypto ≤40%, Payment Plans ≤50%. Must diversify across "
            "3 investments"
        ),
    ),
    5: RestrictionSet(
        max_allocation={"Crypto": 35, "Stocks": 45, "Lines of Credit": 40},
        min_diversification=3,
        description=(
            "Market Volatility - High-risk assets capped: Crypto ≤35%, Stocks ≤45%, "
            "Lines of Credit ≤40%"
        ),
    ),
    6: RestrictionSet(
        max_allocation={
            "Crypto": 30,
            "Payment Plans": 30,
            "Lines of Credit": 35,
            "Savings": 60,
        },
        min_diversification=4,
        description=(
            "Stability Focus - Most risky assets ≤30-35%. Savings can go up to 60% "
            "for safety. Need 4 investments"
        ),
    ),
    7: RestrictionSet(
        max_allocation={
            "Crypto": 25,
            "Stocks": 40,
            "Payment Plans": 25,
            "Lines of Credit": 30,
        },
        min_diversification=4,
        description=(
            "Tightening Controls - Crypto and Payment Plans ≤25%. Stocks ≤40%. "
            "Lines of Credit ≤30%"
        ),
    ),
    8: RestrictionSet(
        max_allocation={
            "Crypto": 20,
            "Stocks": 35,
            "Payment Plans": 20,
            "Lines of Credit": 25,
            "Student Loans": 40,
        },
        min_diversification=4,
        description=(
            "Conservative Approach - Very high risk ≤20%. High risk ≤35%. Student "
            "Loans favored at ≤40%"
        ),
    ),
    9: RestrictionSet(
        max_allocation={
            "Crypto": 15,
            "Stocks": 30,
            "Payment Plans": 15,
            "Lines of Credit": 20,
            "Bonds": 50,
            "Mortgages": 45,
        },
        min_diversification=4,
        description=(
            "Near Endgame - Extreme restrictions on volatility. Bonds and Mortgages "
            "preferred for stability"
        ),
    ),
    10: RestrictionSet(
        max_allocation={
            "Crypto": 10,
            "Stocks": 25,
            "Payment Plans": 10,
            "Lines of Credit": 15,
            "Bonds": 60,
            "Savings": 70,
            "Mortgages": 50,
            "Student Loans": 35,
        },
        min_diversification=4,
        description=(
            "Final Round - Maximum caution required. Crypto and Payment Plans ≤10%. "
            "Favor safe investments"
        ),
    ),
}

FINAL_ROUND = max(_ROUND_RESTRICTIONS)


def restrictions_for(round_number: int) -> RestrictionSet:
    """Return the restriction set for a round.

    Rounds outside 1..10 get the final (strictest) round's policy.
    """
    return _ROUND_RESTRICTIONS.get(round_number, _ROUND_RESTRICTIONS[FINAL_ROUND])


# ==============================================================================
# ==== Allocation checks =======================================================
# ==============================================================================


def check_allocation_gate(
    investments: Sequence[InvestmentType | None],
    allocations: Sequence[int],
) -> ValidationResult:
    """Check that an allocation is complete before restrictions are looked at.

    All four slots must hold an investment, every allocation must be positive
    and the allocations must add up to exactly 100.
    """
    errors = []
    if len(investments) != SLOT_COUNT or any(inv is None for inv in investments):
        errors.append(f"All {SLOT_COUNT} investment slots must be filled")
    if len(allocations) != SLOT_COUNT or any(alloc <= 0 for alloc in allocations):
        errors.append(f"All {SLOT_COUNT} allocations must be greater than 0%")
    total = sum(allocations)
    if total != TOTAL_ALLOCATION:
        errors.append(f"Allocations must total {TOTAL_ALLOCATION}% (currently {total}%)")
    return ValidationResult.from_errors(errors)


def validate_allocations(
    investments: Sequence[InvestmentType],
    allocations: Sequence[int],
    round_number: int,
) -> ValidationResult:
    """Check an allocation against the round's caps and diversification rule.

    Args:
        investments: Investments in slot order.
        allocations: Percentages in the same order.
        round_number: Current round, 1..10.

    Returns:
        ValidationResult: one error per violated cap, plus one if too few
        investments are in use.
    """
    restrictions = restrictions_for(round_number)
    errors = []

    for investment, allocation in zip(investments, allocations):
        max_allowed = restrictions.max_allocation.get(investment.name)
        if max_allowed is not None and allocation > max_allowed:
            errors.append(
                f"{investment.name}: {allocation}% exceeds limit of {max_allowed}%"
            )

    in_use = sum(1 for allocation in allocations if allocation > 0)
    if in_use < restrictions.min_diversification:
        errors.append(
            f"Must use at least {restrictions.min_diversification} different "
            f"investments (currently using {in_use})"
        )

    return ValidationResult.from_errors(errors)
