"""Pure poker math used by the AI, the quizzes and the CLI."""

from holdem_trainer.calculators.csi import (
    CSIInfo, calculate_csi, get_csi_info, should_push, should_call_push,
    hand_notation, hand_in_range, get_recommended_action, get_csi_strategy_tips,
)
from holdem_trainer.calculators.odds import (
    PotOdds, ImpliedOdds, OddsCalculation,
    calculate_pot_odds, calculate_implied_odds, calculate_required_equity,
    is_profitable_call, calculate_equity, calculate_outs, calculate_hand_odds,
    get_preflop_equity,
)

__all__ = [
    "CSIInfo", "calculate_csi", "get_csi_info", "should_push", "should_call_push",
    "hand_notation", "hand_in_range", "get_recommended_action", "get_csi_strategy_tips",
    "PotOdds", "ImpliedOdds", "OddsCalculation",
    "calculate_pot_odds", "calculate_implied_odds", "calculate_required_equity",
    "is_profitable_call", "calculate_equity", "calculate_outs", "calculate_hand_odds",
    "get_preflop_equity",
]
