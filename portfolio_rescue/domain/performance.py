"""Round performance summary and feedback shown after each round."""

from dataclasses import dataclass

from portfolio_rescue.domain.progression import TARGET_PORTFOLIO_VALUE
from portfolio_rescue.domain.returns import InvestmentResult, ReturnsCalculation

# (lower bound exclusive, label) checked top down; anything lower gets the last label.
_ROUND_RATINGS = ((20, "Exceptional!"), (15, "Excellent"), (5, "Good"), (-5, "Fair"))
_LOWEST_ROUND_RATING = "Poor"


@dataclass(frozen=True)
class Feedback:
    title: str
    message: str


@dataclass(frozen=True)
class RoundPerformance:
    round_number: int
    start_value: float
    end_value: float
    gain: float
    gain_percentage: float
    rating: str
    is_early_victory: bool


_INVESTMENT_FEEDBACK = (
    (
        15,
        Feedback(
            "Excellent Choice!",
            "Outstanding returns! This investment performed exceptionally well.",
        ),
    ),
    (
        5,
        Feedback(
            "Good Pick",
            "Solid performance. This investment delivered positive returns.",
        ),
    ),
    (
        -5,
        Feedback(
            "Neutral Result",
            "Average performance. Market conditions affected this investment.",
        ),
    ),
)
_WORST_INVESTMENT_FEEDBACK = Feedback(
    "Tough Break",
    "This investment faced challenges this round. Consider diversification.",
)

_OVERALL_FEEDBACK = (
    (
        10,
        Feedback(
            "Portfolio Mastery!",
            "Your investment strategy this round was exceptional. You've demonstrated "
            "excellent market timing and diversification.",
        ),
    ),
    (
        3,
        Feedback(
            "Solid Strategy",
            "Good work! Your portfolio showed positive growth. Keep refining your "
            "approach for even better results.",
        ),
    ),
    (
        -3,
        Feedback(
            "Learning Experience",
            "Markets can be unpredictable. Your choices weren't bad, but market "
            "conditions affected performance.",
        ),
    ),
)
_WORST_OVERALL_FEEDBACK = Feedback(
    "Tough Market",
    "This was a challenging round. Consider adjusting your risk tolerance and "
    "diversification strategy.",
)


def rate_gain(gain_percentage: float) -> str:
    for lower_bound, label in _ROUND_RATINGS:
        if gain_percentage > lower_bound:
            return label
    return _LOWEST_ROUND_RATING


def summarize_round(
    round_number: int, start_value: float, total_return: float
) -> RoundPerformance:
    """Summarize how the portfolio moved over one round.

    Args:
        round_number (int): Round that was just played
        start_value (float): Portfolio value before the round
        total_return (float): Summed return amount of the round

    Returns:
        RoundPerformance: Gain, gain percentage and rating of the round
    """
    end_value = start_value + total_return
    gain_percentage = total_return / start_value * 100 if start_value else 0.0
    return RoundPerformance(
        round_number=round_number,
        start_value=start_value,
        end_value=end_value,
        gain=total_return,
        gain_percentage=gain_percentage,
        rating=rate_gain(gain_percentage),
        is_early_victory=end_value >= TARGET_PORTFOLIO_VALUE,
    )


def investment_feedback(result: InvestmentResult) -> Feedback:
    for lower_bound, feedback in _INVESTMENT_FEEDBACK:
        if result.return_rate > lower_bound:
            return feedback
    return _WORST_INVESTMENT_FEEDBACK


def overall_feedback(calculation: ReturnsCalculation) -> Feedback:
    """Feedback on the round as a whole, based on return over amount invested."""
    total_invested = calculation.total_invested
    overall_return = (
        calculation.total_return / total_invested * 100 if total_invested else 0.0
    )
    for lower_bound, feedback in _OVERALL_FEEDBACK:
        if overall_return > lower_bound:
            return feedback
    return _WORST_OVERALL_FEEDBACK
