import pytest

from portfolio_rescue.domain.investments import get_investment
from portfolio_rescue.domain.performance import (
    investment_feedback,
    overall_feedback,
    rate_gain,
    summarize_round,
)
from portfolio_rescue.domain.returns import InvestmentResult, ReturnsCalculation


def _result(return_rate, amount=25_000_000.0):
    return_amount = amount * return_rate / 100
    return InvestmentResult(
        investment=get_investment("Bonds"),
        allocation=25,
        investment_amount=amount,
        return_rate=return_rate,
        return_amount=return_amount,
        final_amount=amount + return_amount,
    )


@pytest.mark.parametrize(
    "gain_percentage, rating",
    [(25, "Exceptional!"), (20, "Excellent"), (10, "Good"), (0, "Fair"), (-5, "Poor")],
)
def test_rate_gain(gain_percentage, rating):
    assert rate_gain(gain_percentage) == rating


def test_summarize_round():
    performance = summarize_round(3, 100_000_000, 12_000_000)
    assert performance.end_value == 112_000_000
    assert performance.gain_percentage == pytest.approx(12.0)
    assert performance.rating == "Good"
    assert not performance.is_early_victory


def test_summarize_round_early_victory():
    performance = summarize_round(4, 190_000_000, 15_000_000)
    assert performance.is_early_victory


@pytest.mark.parametrize(
    "return_rate, title",
    [(20, "Excellent Choice!"), (10, "Good Pick"), (0, "Neutral Result"), (-10, "Tough Break")],
)
def test_investment_feedback(return_rate, title):
    assert investment_feedback(_result(return_rate)).title == title


def test_overall_feedback_uses_return_over_invested():
    results = [_result(12), _result(12), _result(12), _result(12)]
    calculation = ReturnsCalculation(
        results=results, total_return=sum(r.return_amount for r in results)
    )
    assert overall_feedback(calculation).title == "Portfolio Mastery!"

    results = [_result(-4), _result(-4), _result(-4), _result(-4)]
    calculation = ReturnsCalculation(
        results=results, total_return=sum(r.return_amount for r in results)
    )
    assert overall_feedback(calculation).title == "Tough Market"
