"""Investment catalog.

Eight fixed investment types. Entries are defined once at import time and
never mutated; the engine only cares about the name, risk tier and return
range, the remaining texts are shown to the player.
"""

from dataclasses import dataclass
from enum import Enum


class RiskTier(str, Enum):
    low = "Low"
    medium = "Medium"
    high = "High"
    very_high = "Very High"


# Tiers that pay a concentration penalty and get volatility jitter.
HIGH_RISK_TIERS = (RiskTier.high, RiskTier.very_high)


class UnknownInvestmentError(KeyError):
    pass


@dataclass(frozen=True)
class InvestmentType:
    name: str
    risk: RiskTier
    min_return: float
    max_return: float
    description: str
    explanation: str = ""
    strategy: str = ""
    real_world_example: str = ""
    warning: str | None = None

    @property
    def is_high_risk(self) -> bool:
        return self.risk in HIGH_RISK_TIERS


_CATALOG = (
    InvestmentType(
        name="Stocks",
        risk=RiskTier.high,
        min_return=-20,
        max_return=60,
        description="Equity investments with high volatility",
        explanation=(
            "When you buy stocks, you're purchasing ownership shares in companies. "
            "Your returns depend on how well those companies perform and how other "
            "investors value them."
        ),
        strategy=(
            "Diversify across different sectors and company sizes. Consider both "
            "growth stocks and dividend-paying stocks."
        ),
        real_world_example=(
            "Apple stock has returned over 20% annually for the past decade, but it "
            "also dropped 50% during the 2008 financial crisis."
        ),
        warning=(
            "Stock prices can be very volatile. You could lose significant money in "
            "short periods."
        ),
    ),
    InvestmentType(
        name="Bonds",
        risk=RiskTier.medium,
        min_return=-2,
        max_return=8,
        description="Fixed income securities",
        explanation=(
            "Bonds are loans you make to governments or corporations. They pay you "
            "regular interest and return your principal at maturity."
        ),
        strategy=(
            "Use bonds to stabilize your portfolio. Government bonds are safest, "
            "corporate bonds pay more but have higher risk."
        ),
        real_world_example=(
            "U.S. Treasury bonds are considered virtually risk-free. Corporate bonds "
            "might pay 6-8% but carry default risk."
        ),
        warning="Bond values decrease when interest rates rise.",
    ),
    InvestmentType(
        name="Crypto",
        risk=RiskTier.very_high,
        min_return=-50,
        max_return=120,
        description="Digital currency investments",
        explanation=(
            "Cryptocurrencies are digital assets that use blockchain technology. Their "
            "value is driven by adoption, speculation, and technological developments."
        ),
        strategy="Only invest what you can afford to lose completely.",
        real_world_example=(
            "Bitcoin reached $69,000 in 2021 but fell to $15,000 in 2022."
        ),
        warning=(
            "Crypto is extremely volatile and largely unregulated. Prices can swing "
            "20-50% in days."
        ),
    ),
    InvestmentType(
        name="Savings",
        risk=RiskTier.low,
        min_return=1,
        max_return=2,
        description="Safe low-yield deposits",
        explanation=(
            "Savings accounts, CDs, and money market funds keep your money safe and "
            "liquid while earning modest interest."
        ),
        strategy="Keep 3-6 months of expenses in savings for emergencies.",
        real_world_example=(
            "High-yield savings accounts offer around 4-5% APY, while traditional "
            "savings might only pay 0.1%."
        ),
        warning="Low returns may not keep pace with inflation over time.",
    ),
    InvestmentType(
        name="Mortgages",
        risk=RiskTier.medium,
        min_return=-5,
        max_return=20,
        description="Real estate backed securities",
        explanation=(
            "Mortgage investments include REITs, mortgage-backed securities, and "
            "direct real estate."
        ),
        strategy="Diversify across property types and geographic regions.",
        real_world_example="REITs have historically returned 8-12% annually.",
        warning="Real estate markets can be cyclical and illiquid.",
    ),
    InvestmentType(
        name="Payment Plans",
        risk=RiskTier.high,
        min_return=-15,
        max_return=35,
        description="Consumer debt investments",
        explanation=(
            "Lending money to consumers through credit cards, personal loans, or "
            "buy-now-pay-later services."
        ),
        strategy="Diversify across many borrowers to reduce default risk.",
        real_world_example=(
            "Peer-to-peer lending platforms have offered 5-15% returns, with "
            "significant default risk during downturns."
        ),
        warning="Consumer defaults increase during recessions.",
    ),
    InvestmentType(
        name="Student Loans",
        risk=RiskTier.medium,
        min_return=-8,
        max_return=12,
        description="Educational debt securities",
        explanation=(
            "Funding education through government-backed or private loans. Returns "
            "come from interest payments over long repayment periods."
        ),
        strategy="Government-backed loans offer more stability.",
        real_world_example=(
            "Federal student loans typically yield 4-6%, private ones 6-10%."
        ),
        warning="Loan forgiveness programs and policy changes can impact returns.",
    ),
    InvestmentType(
        name="Lines of Credit",
        risk=RiskTier.high,
        min_return=-12,
        max_return=28,
        description="Revolving credit investments",
        explanation=(
            "Lines of credit provide flexible borrowing for businesses and consumers. "
            "Returns come from interest on outstanding balances and fees."
        ),
        strategy="Focus on borrowers with strong credit profiles and stable income.",
        real_world_example=(
            "Business lines of credit typically charge 7-25% interest."
        ),
        warning="Variable rate exposure and credit risk make this volatile.",
    ),
)

INVESTMENT_TYPES: dict[str, InvestmentType] = {inv.name: inv for inv in _CATALOG}


def list_investments() -> list[InvestmentType]:
    """Return the catalog in its fixed order."""
    return list(_CATALOG)


def get_investment(name: str) -> InvestmentType:
    """Look up a catalog entry by name.

    Raises:
        UnknownInvestmentError: the name is not in the catalog.
    """
    try:
        return INVESTMENT_TYPES[name]
    except KeyError:
        raise UnknownInvestmentError(name) from None
