import numpy as np
import pytest

from portfolio_rescue.domain.investments import get_investment
from portfolio_rescue.domain.market_events import get_market_event
from portfolio_rescue.domain.returns import (
    calculate_returns,
    concentration_penalty,
    event_adjustment,
)

PORTFOLIO_VALUE = 100_000_000.0


def _investments(*names):
    return [get_investment(name) for name in names]


class TestConcentrationPenalty:
    def test_very_high_risk_at_threshold_has_no_penalty(self):
        assert concentration_penalty(get_investment("Crypto"), 30, 1) == 0.0

    def test_very_high_risk_at_forty_percent_round_one(self):
        assert concentration_penalty(get_investment("Crypto"), 40, 1) == pytest.approx(5.0)

    def test_very_high_risk_penalty_grows_by_round(self):
        # 5 * (1 + 4 * 0.3)
        assert concentration_penalty(get_investment("Crypto"), 40, 5) == pytest.approx(11.0)

    def test_high_risk_over_fifty_percent(self):
        stocks = get_investment("Stocks")
        assert concentration_penalty(stocks, 50, 1) == 0.0
        assert concentration_penalty(stocks, 65, 1) == pytest.approx(3.0)
        assert concentration_penalty(stocks, 65, 3) == pytest.approx(4.2)

    def test_lower_tiers_never_penalized(self):
        assert concentration_penalty(get_investment("Bonds"), 100, 10) == 0.0
        assert concentration_penalty(get_investment("Savings"), 100, 10) == 0.0


class TestEventAdjustment:
    def test_round_one_applies_impact_as_is(self):
        tech_rally = get_market_event("Tech Rally")
        assert event_adjustment(tech_rally, "Stocks", 1) == pytest.approx(25.0)

    def test_round_five_amplifies_by_eighty_percent(self):
        tech_rally = get_market_event("Tech Rally")
        assert event_adjustment(tech_rally, "Stocks", 5) == pytest.approx(45.0)

    def test_unaffected_investment_and_no_event(self):
        tech_rally = get_market_event("Tech Rally")
        assert event_adjustment(tech_rally, "Bonds", 5) == 0.0
        assert event_adjustment(None, "Stocks", 5) == 0.0


class TestCalculateReturns:
    def test_amounts_add_up_with_seeded_generator(self):
        investments = _investments("Stocks", "Bonds", "Crypto", "Savings")
        calculation = calculate_returns(
            investments, [25, 25, 25, 25], PORTFOLIO_VALUE, 3, rng=np.random.default_rng(42)
        )

        assert len(calculation.results) == 4
        for result in calculation.results:
            assert result.investment_amount == pytest.approx(25_000_000.0)
            assert result.final_amount == result.investment_amount + result.return_amount
        assert calculation.total_return == pytest.approx(
            sum(result.return_amount for result in calculation.results)
        )

    def test_same_seed_replays_same_round(self):
        investments = _investments("Stocks", "Bonds", "Crypto", "Savings")
        first = calculate_returns(
            investments, [10, 20, 30, 40], PORTFOLIO_VALUE, 2, rng=np.random.default_rng(7)
        )
        second = calculate_returns(
            investments, [10, 20, 30, 40], PORTFOLIO_VALUE, 2, rng=np.random.default_rng(7)
        )
        assert first == second

    def test_base_rates_stay_in_catalog_range_for_low_and_medium_risk(self):
        rng = np.random.default_rng(0)
        investments = _investments("Bonds", "Savings", "Mortgages", "Student Loans")
        for _ in range(50):
            calculation = calculate_returns(investments, [25, 25, 25, 25], PORTFOLIO_VALUE, 10, rng=rng)
            for result in calculation.results:
                assert result.investment.min_return <= result.return_rate <= result.investment.max_return

    def test_event_contributes_amplified_impact(self, make_fixed_rng):
        investments = _investments("Stocks", "Bonds", "Savings", "Mortgages")
        tech_rally = get_market_event("Tech Rally")

        round_one = calculate_returns(
            investments, [25, 25, 25, 25], PORTFOLIO_VALUE, 1, tech_rally, make_fixed_rng()
        )
        round_five = calculate_returns(
            investments, [25, 25, 25, 25], PORTFOLIO_VALUE, 5, tech_rally, make_fixed_rng()
        )

        # min return -20, jitter is zero at random() == 0.5
        assert round_one.results[0].return_rate == pytest.approx(-20 + 25)
        assert round_five.results[0].return_rate == pytest.approx(-20 + 45)
        assert round_one.results[1].return_rate == pytest.approx(-2)

    def test_penalty_applied_to_concentrated_crypto(self, make_fixed_rng):
        investments = _investments("Crypto", "Bonds", "Savings", "Mortgages")
        calculation = calculate_returns(
            investments, [40, 20, 20, 20], PORTFOLIO_VALUE, 1, rng=make_fixed_rng()
        )
        crypto = calculation.results[0]
        assert crypto.return_rate == pytest.approx(-50 - 5)
        assert crypto.return_amount == pytest.approx(40_000_000 * -0.55)

    def test_volatility_jitter_widens_by_round_for_high_risk_only(self, make_fixed_rng):
        investments = _investments("Stocks", "Savings", "Bonds", "Mortgages")
        calculation = calculate_returns(
            investments, [25, 25, 25, 25], PORTFOLIO_VALUE, 3, rng=make_fixed_rng(random=0.0)
        )
        # (0.0 - 0.5) * 10 * (1 + 2 * 0.15)
        assert calculation.results[0].return_rate == pytest.approx(-20 - 6.5)
        assert calculation.results[1].return_rate == pytest.approx(1.0)

    def test_total_return_of_fixed_draws(self, make_fixed_rng):
        investments = _investments("Savings", "Savings", "Savings", "Savings")
        calculation = calculate_returns(
            investments, [25, 25, 25, 25], PORTFOLIO_VALUE, 1, rng=make_fixed_rng(uniform="high")
        )
        assert calculation.total_return == pytest.approx(2_000_000.0)
        assert calculation.total_invested == pytest.approx(PORTFOLIO_VALUE)
