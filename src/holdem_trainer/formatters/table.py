"""Rich table formatting for terminal output."""

from typing import List, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from holdem_trainer.calculators.csi import CSIInfo
from holdem_trainer.calculators.odds import ImpliedOdds, PotOdds
from holdem_trainer.engine.evaluator import HandEvaluation
from holdem_trainer.models.action import ActionType
from holdem_trainer.models.card import Card, format_cards
from holdem_trainer.models.game import GameState, HandResult, PlayerState
from holdem_trainer.training.quiz import QuizQuestion

_SUIT_STYLES = {"h": "red", "d": "red", "c": "white", "s": "white"}


def card_text(cards: Sequence[Card]) -> Text:
    """Cards as colored text, red for hearts and diamonds."""
    text = Text()
    for i, card in enumerate(cards):
        if i:
            text.append(" ")
        text.append(str(card), style=f"bold {_SUIT_STYLES[card.suit.value]}")
    return text


class TableFormatter:
    """Format game data as Rich tables for terminal display."""

    def __init__(self, console: Console | None = None):
        self.console = console or Console()

    def print_table_state(self, state: GameState, reveal_all: bool = False) -> None:
        """Print the seats, stacks and board as seen by the human player."""
        table = Table(title=f"Hand #{state.hand_number} - {state.stage.value.title()}")
        table.add_column("Seat", justify="right", style="dim")
        table.add_column("Player", style="cyan")
        table.add_column("Chips", justify="right", style="green")
        table.add_column("Bet", justify="right")
        table.add_column("Status")
        table.add_column("Cards")

        for index, player in enumerate(state.players):
            marker = "D " if index == state.dealer_index else ""
            name = f"{marker}{player.name}"
            if index == state.current_player_index and player.can_act:
                name = f"[bold]> {name}[/bold]"
            table.add_row(
                str(player.seat + 1),
                name,
                str(player.chips),
                str(player.current_bet) if player.current_bet else "",
                self._status(player),
                self._cards_for(player, reveal_all),
            )

        self.console.print(table)
        board = card_text(state.community_cards) if state.community_cards else Text("-", style="dim")
        self.console.print(Text.assemble("Board: ", board, f"   Pot: {state.pot}"))

    @staticmethod
    def _status(player: PlayerState) -> str:
        if not player.is_active:
            return "[dim]out[/dim]"
        if player.is_folded:
            return "[dim]folded[/dim]"
        if player.is_all_in:
            return "[bold red]all-in[/bold red]"
        return ""

    @staticmethod
    def _cards_for(player: PlayerState, reveal_all: bool) -> Text:
        if not player.hole_cards:
            return Text("")
        if player.is_human or player.show_cards or reveal_all:
            return card_text(player.hole_cards)
        return Text("## ##", style="dim")

    def print_valid_actions(self, actions: List[ActionType], to_call: int, min_raise: int) -> None:
        labels = []
        for action in actions:
            if action == ActionType.CALL:
                labels.append(f"call {to_call}")
            elif action.takes_amount:
                labels.append(f"{action.value} (min {min_raise})")
            else:
                labels.append(action.value)
        self.console.print("Actions: " + ", ".join(labels))

    def print_hand_results(self, results: List[HandResult], state: GameState) -> None:
        """Print the winners of a finished hand."""
        names = {p.id: p.name for p in state.players}
        table = Table(title="Hand Results")
        table.add_column("Winner", style="cyan")
        table.add_column("Hand")
        table.add_column("Cards")
        table.add_column("Won", justify="right", style="green")
        for result in results:
            table.add_row(names.get(result.player_id, result.player_id), result.hand_name,
                          card_text(result.cards), str(result.winnings))
        self.console.print(table)

    def print_csi_info(self, info: CSIInfo, tips: List[str]) -> None:
        content = Text()
        content.append(f"CSI: {info.csi:.2f}\n", style="bold")
        content.append(f"{info.description}\n")
        content.append(f"Recommended: {info.recommended_action}\n\n", style="green")
        for tip in tips:
            content.append(f"- {tip}\n")
        self.console.print(Panel(content, title=info.strategy, border_style="cyan"))

    def print_pot_odds(self, odds: PotOdds, implied: ImpliedOdds | None = None) -> None:
        table = Table(title="Pot Odds")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", justify="right", style="green")
        table.add_row("Pot", f"{odds.pot_size:g}")
        table.add_row("Bet", f"{odds.bet_size:g}")
        table.add_row("To call", f"{odds.call_amount:g}")
        table.add_row("Odds", f"{odds.odds:.2f} : 1")
        table.add_row("Required equity", f"{odds.required_equity_percent:.1f}%")
        if implied is not None:
            table.add_row("Implied winnings", f"{implied.implied_winnings:g}")
            table.add_row("Effective odds", f"{implied.effective_odds:.2f} : 1")
        self.console.print(table)

    def print_equity(self, hole_cards: Sequence[Card], board: Sequence[Card],
                     equity: float) -> None:
        self.console.print(Text.assemble(
            "Hand: ", card_text(hole_cards),
            "   Board: ", card_text(board) if board else Text("-", style="dim"),
            f"   Equity: {equity:.1f}%",
        ))

    def print_evaluation(self, evaluation: HandEvaluation) -> None:
        content = Text()
        content.append("Best hand: ")
        content.append_text(card_text(evaluation.cards))
        if evaluation.kickers:
            content.append(f"\nKickers: {format_cards(evaluation.kickers)}")
        self.console.print(Panel(content, title=evaluation.name, border_style="green"))

    def print_quiz(self, question: QuizQuestion) -> None:
        content = Text(question.question)
        for i, option in enumerate(question.options):
            content.append(f"\n  {i}. {option}")
        self.console.print(Panel(content, title=f"Quiz ({question.category})", border_style="magenta"))
