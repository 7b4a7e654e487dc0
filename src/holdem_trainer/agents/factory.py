"""Factory for creating the AI seats of a game."""

import random
from typing import Dict, List, Optional

from holdem_trainer.agents.base import AIPlayer
from holdem_trainer.agents.personality import PersonalityType, get_archetype, jitter

# Trait jitter applied to every archetype (+/- 5%)
PERSONALITY_VARIANCE = 0.1


class AgentFactory:
    """Creates AI players with jittered archetype personalities."""

    def __init__(self, rng: Optional[random.Random] = None):
        self.rng = rng or random.Random()

    def create_agent(self, player_id: str,
                     personality_type: Optional[PersonalityType] = None) -> AIPlayer:
        """Create an AI player.

        Args:
            player_id: The seat's player id.
            personality_type: The archetype to use. Random if omitted.

        Returns:
            A new AIPlayer sharing this factory's random source.
        """
        if personality_type is None:
            personality_type = self.rng.choice(list(PersonalityType))
        personality_type = PersonalityType(personality_type)
        personality = jitter(get_archetype(personality_type), PERSONALITY_VARIANCE, self.rng)
        return AIPlayer(player_id, personality_type, personality, self.rng)

    def create_agents(self, player_ids: List[str],
                      personality_types: Optional[Dict[str, PersonalityType]] = None
                      ) -> Dict[str, AIPlayer]:
        """Create one AI player per id, using fixed archetypes where given."""
        personality_types = personality_types or {}
        return {
            pid: self.create_agent(pid, personality_types.get(pid))
            for pid in player_ids
        }


def ai_display_name(seat: int, personality_type: PersonalityType) -> str:
    """Seat label shown at the table, e.g. 'Player 3 (Rock)'."""
    return f"Player {seat + 1} ({PersonalityType(personality_type).display_name})"
