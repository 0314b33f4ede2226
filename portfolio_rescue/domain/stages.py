"""Stage titles shown for each round of the journey.

Purely presentational; nothing in the engine depends on them.
"""

from dataclasses import dataclass

from portfolio_rescue.domain.restrictions import FINAL_ROUND


@dataclass(frozen=True)
class RoundStage:
    title: str
    subtitle: str


_ROUND_STAGES: dict[int, RoundStage] = {
    1: RoundStage(
        "Greyscale Startup World",
        "Begin your journey in the monochrome world of early-stage ventures",
    ),
    2: RoundStage(
        "Urban Debtown",
        "Navigate the gritty city streets where fortunes are made and lost",
    ),
    3: RoundStage(
        "Green Suburbia",
        "Explore stable residential markets and traditional investments",
    ),
    4: RoundStage(
        "Financial District",
        "Enter the towering blue skyscrapers of high finance",
    ),
    5: RoundStage(
        "Golden Desert",
        "Traverse the harsh landscape where only the strong survive",
    ),
    6: RoundStage(
        "Cosmic Markets",
        "Venture into the mysterious purple void of space trading",
    ),
    7: RoundStage(
        "Tropical Jungle",
        "Navigate the dense green wilderness of emerging markets",
    ),
    8: RoundStage(
        "Arctic Tundra",
        "Brave the frozen wasteland of conservative investments",
    ),
    9: RoundStage(
        "Storm Clouds",
        "Weather the dark tempest of market volatility",
    ),
    10: RoundStage(
        "Volcanic Investibeast's Lair",
        "Final confrontation in the fiery depths of ultimate risk",
    ),
}


def stage_for(round_number: int) -> RoundStage:
    """Same fallback as restrictions_for: unknown rounds get the final stage."""
    return _ROUND_STAGES.get(round_number, _ROUND_STAGES[FINAL_ROUND])
