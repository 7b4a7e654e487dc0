"""Output formatting for the terminal."""

from holdem_trainer.formatters.table import TableFormatter, card_text

__all__ = ["TableFormatter", "card_text"]
