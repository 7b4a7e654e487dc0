"""AI opponents."""

from holdem_trainer.agents.personality import (
    AIPersonality, PersonalityType, ARCHETYPES, jitter,
)
from holdem_trainer.agents.decision import DecisionEngine, Decision, HandStrength
from holdem_trainer.agents.base import AIPlayer
from holdem_trainer.agents.factory import AgentFactory, ai_display_name

__all__ = ["AIPersonality", "PersonalityType", "ARCHETYPES", "jitter",
           "DecisionEngine", "Decision", "HandStrength",
           "AIPlayer", "AgentFactory", "ai_display_name"]
