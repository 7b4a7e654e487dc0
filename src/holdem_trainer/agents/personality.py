"""AI personality traits and the named archetypes."""

import random
from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Dict, Optional

TRAITS = ("aggression", "tightness", "bluff_frequency", "adaptability",
          "patience", "risk_tolerance")


class PersonalityType(str, Enum):
    """Named playing styles an AI seat can be given."""
    TIGHT_PASSIVE = "tight_passive"
    TIGHT_AGGRESSIVE = "tight_aggressive"
    LOOSE_AGGRESSIVE = "loose_aggressive"
    LOOSE_PASSIVE = "loose_passive"
    MANIAC = "maniac"
    ROCK = "rock"

    @property
    def display_name(self) -> str:
        return self.value.replace("_", " ").title()


@dataclass(frozen=True)
class AIPersonality:
    """Six independent traits in [0, 1].

    Attributes:
        aggression: Higher bets and raises more.
        tightness: Higher plays fewer marginal hands.
        bluff_frequency: Base chance of representing a hand it doesn't have.
        adaptability: How much the player adjusts to opponents.
        patience: Willingness to fold marginal hands and wait.
        risk_tolerance: Appetite for high-variance all-ins.
    """
    name: str
    aggression: float
    tightness: float
    bluff_frequency: float
    adaptability: float
    patience: float
    risk_tolerance: float

    def __post_init__(self):
        for name in TRAITS:
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be in [0, 1], got {value}")

    def traits(self) -> Dict[str, float]:
        return {f.name: getattr(self, f.name) for f in fields(self) if f.name in TRAITS}


ARCHETYPES: Dict[PersonalityType, AIPersonality] = {
    PersonalityType.TIGHT_PASSIVE: AIPersonality(
        name="Tight Passive", aggression=0.2, tightness=0.8, bluff_frequency=0.05,
        adaptability=0.3, patience=0.9, risk_tolerance=0.2),
    PersonalityType.TIGHT_AGGRESSIVE: AIPersonality(
        name="Tight Aggressive", aggression=0.7, tightness=0.7, bluff_frequency=0.15,
        adaptability=0.6, patience=0.8, risk_tolerance=0.4),
    PersonalityType.LOOSE_AGGRESSIVE: AIPersonality(
        name="Loose Aggressive", aggression=0.8, tightness=0.3, bluff_frequency=0.25,
        adaptability=0.7, patience=0.3, risk_tolerance=0.8),
    PersonalityType.LOOSE_PASSIVE: AIPersonality(
        name="Loose Passive", aggression=0.3, tightness=0.3, bluff_frequency=0.1,
        adaptability=0.4, patience=0.4, risk_tolerance=0.6),
    PersonalityType.MANIAC: AIPersonality(
        name="Maniac", aggression=0.9, tightness=0.1, bluff_frequency=0.3,
        adaptability=0.5, patience=0.1, risk_tolerance=0.9),
    PersonalityType.ROCK: AIPersonality(
        name="Rock", aggression=0.4, tightness=0.9, bluff_frequency=0.02,
        adaptability=0.2, patience=0.95, risk_tolerance=0.1),
}


def get_archetype(personality_type: PersonalityType) -> AIPersonality:
    return ARCHETYPES[PersonalityType(personality_type)]


def jitter(personality: AIPersonality, variance: float = 0.1,
           rng: Optional[random.Random] = None) -> AIPersonality:
    """Return a copy with each trait shifted by up to +/- variance/2, clamped to [0, 1].

    Args:
        personality: The base personality.
        variance: Width of the uniform adjustment window.
        rng: Random source.

    Returns:
        A new AIPersonality; the input is not modified.
    """
    rng = rng or random.Random()
    adjusted = {
        name: min(1.0, max(0.0, value + (rng.random() - 0.5) * variance))
        for name, value in personality.traits().items()
    }
    return replace(personality, **adjusted)
