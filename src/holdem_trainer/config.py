"""Configuration loading from environment variables and defaults."""

import os
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if it exists
env_path = Path(__file__).parent.parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)

# Table defaults
DEFAULT_NUM_PLAYERS = int(os.getenv("HOLDEM_NUM_PLAYERS", "6"))
DEFAULT_STARTING_CHIPS = int(os.getenv("HOLDEM_STARTING_CHIPS", "1500"))
DEFAULT_SMALL_BLIND = int(os.getenv("HOLDEM_SMALL_BLIND", "25"))
DEFAULT_BIG_BLIND = int(os.getenv("HOLDEM_BIG_BLIND", "50"))

# Learning options: never | sometimes | always, low | medium | high
SHOW_OPPONENT_CARDS = os.getenv("HOLDEM_SHOW_OPPONENT_CARDS", "sometimes")
QUIZ_FREQUENCY = os.getenv("HOLDEM_QUIZ_FREQUENCY", "medium")
DIFFICULTY = os.getenv("HOLDEM_DIFFICULTY", "intermediate")
ENABLE_HINTS = os.getenv("HOLDEM_ENABLE_HINTS", "true").lower() in ("1", "true", "yes")

# AI "thinking time" in seconds
AI_MIN_DELAY = float(os.getenv("HOLDEM_AI_MIN_DELAY", "0.5"))
AI_MAX_DELAY = float(os.getenv("HOLDEM_AI_MAX_DELAY", "3.0"))

# Monte Carlo trials for equity estimates
EQUITY_SIMULATIONS = int(os.getenv("HOLDEM_EQUITY_SIMULATIONS", "10000"))

LOG_LEVEL = os.getenv("HOLDEM_LOG_LEVEL", "WARNING").upper()
