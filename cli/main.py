"""Hold'em Trainer CLI: Typer-based command line interface."""

import logging
import random
from typing import List, Optional

import typer
from rich.console import Console

app = typer.Typer(
    name="holdem-trainer",
    help="Texas Hold'em trainer: play against AI opponents and drill the math",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show engine and AI logs"),
):
    """Configure logging for all commands."""
    from holdem_trainer import config

    level = logging.DEBUG if verbose else getattr(logging, config.LOG_LEVEL, logging.WARNING)
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def _parse_cards(text: str, label: str):
    from holdem_trainer.models.card import parse_cards

    try:
        return parse_cards(text)
    except ValueError as e:
        console.print(f"[red]Invalid {label}:[/red] {e}")
        raise typer.Exit(1)


def _parse_blinds(blinds: str):
    try:
        small, big = (int(part) for part in blinds.split("/"))
    except ValueError:
        console.print(f"[red]Blinds must look like 25/50, got {blinds}[/red]")
        raise typer.Exit(1)
    return small, big


def _print_hint(state, player):
    from holdem_trainer.calculators.csi import calculate_csi, get_recommended_action
    from holdem_trainer.models.position import position_group

    csi = calculate_csi(player.chips + player.current_bet, state.small_blind, state.big_blind)
    group = position_group(player.seat, len(state.players), state.dealer_index)
    facing = "none"
    if state.amount_to_call(player) > 0:
        shoved = any(p.is_all_in for p in state.players_in_hand if p.seat != player.seat)
        facing = "all-in" if shoved else "call"
    advice = get_recommended_action(player.hole_cards, csi, group, facing)
    console.print(f"[dim]Hint (CSI {csi:.1f}, {group.value}): {advice}[/dim]")


@app.command()
def play(
    hands: int = typer.Option(10, "--hands", "-n", help="Number of hands to play"),
    players: int = typer.Option(6, "--players", "-p", help="Players at the table (2-10)"),
    chips: int = typer.Option(1500, "--chips", help="Starting chips"),
    blinds: str = typer.Option("25/50", "--blinds", help="Small/big blind, e.g. 25/50"),
    show_cards: str = typer.Option("sometimes", "--show-cards",
                                   help="Reveal AI cards after the flop (never|sometimes|always)"),
    quiz_frequency: str = typer.Option("medium", "--quiz", help="Quiz frequency (low|medium|high)"),
    hints: Optional[bool] = typer.Option(None, "--hints/--no-hints", help="Show strategy hints on your turn"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
):
    """Play hands against AI opponents."""
    from holdem_trainer.engine.game import PokerGame
    from holdem_trainer.engine.scheduling import ManualScheduler
    from holdem_trainer.errors import ConfigurationError
    from holdem_trainer.formatters.table import TableFormatter
    from holdem_trainer.models.action import ActionType
    from holdem_trainer.models.game import GameSettings
    from holdem_trainer.training.quiz import should_show_quiz
    from holdem_trainer.training.session import QuizSession

    small, big = _parse_blinds(blinds)
    try:
        settings = GameSettings.from_env(
            num_players=players, starting_chips=chips, small_blind=small, big_blind=big,
            show_opponent_cards=show_cards, quiz_frequency=quiz_frequency,
        )
        if hints is not None:
            settings.enable_hints = hints
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Invalid settings:[/red] {e}")
        raise typer.Exit(1)

    rng = random.Random(seed)
    scheduler = ManualScheduler()
    game = PokerGame(settings, rng=rng, scheduler=scheduler)
    fmt = TableFormatter(console)
    quizzes = QuizSession(settings.difficulty, rng=rng)

    for _ in range(hands):
        if game.is_game_over():
            break
        human = game.get_human_player()
        if human is not None and human.chips == 0:
            console.print("[yellow]You are out of chips.[/yellow]")
            break

        game.start_new_hand()
        while not game.is_hand_complete():
            scheduler.run_pending()
            if game.is_hand_complete():
                break

            state = game.get_game_state()
            current = state.current_player
            if current is None or not current.is_human:
                if not scheduler.has_pending():
                    game.start_ai_actions()
                    if not scheduler.has_pending():
                        break
                continue

            fmt.print_table_state(state)
            actions = game.get_valid_actions()
            fmt.print_valid_actions(actions, state.amount_to_call(current), state.min_raise)
            if settings.enable_hints:
                _print_hint(state, current)
            choice = typer.prompt("Your action").strip().lower()
            if choice in ("q", "quit"):
                console.print("[dim]Game ended.[/dim]")
                game.dispose()
                return

            try:
                action = ActionType(choice)
            except ValueError:
                console.print(f"[red]Unknown action: {choice}[/red]")
                continue

            amount = None
            if action.takes_amount:
                amount = typer.prompt("Amount over the current bet", type=int,
                                      default=state.min_raise)
            if not game.player_action(action, amount, player_id=current.id):
                console.print("[red]That action is not allowed right now.[/red]")
                continue

            if should_show_quiz(settings.quiz_frequency, rng):
                _ask_quiz(quizzes, fmt, game.get_game_state())

        state = game.get_game_state()
        fmt.print_table_state(state, reveal_all=True)
        fmt.print_hand_results(game.get_hand_results(), state)

    game.dispose()
    if quizzes.history:
        console.print(f"Quiz score: {quizzes.total_correct}/{len(quizzes.history)}")


def _ask_quiz(quizzes, fmt, state) -> None:
    question = quizzes.next_question(state)
    fmt.print_quiz(question)
    answer = typer.prompt("Answer")
    if quizzes.answer(question, answer):
        console.print("[green]Correct![/green]")
    else:
        console.print(f"[red]Not quite.[/red] Answer: {question.answer}")
    console.print(f"[dim]{question.explanation}[/dim]")


@app.command()
def csi(
    chips: float = typer.Argument(..., help="Stack size"),
    small_blind: float = typer.Argument(..., help="Small blind"),
    big_blind: float = typer.Argument(..., help="Big blind"),
    antes: float = typer.Option(0, "--antes", help="Total antes per orbit"),
):
    """Compute the Chip Stack Index and its strategy zone."""
    from holdem_trainer.calculators.csi import (
        calculate_csi, get_csi_info, get_csi_strategy_tips,
    )
    from holdem_trainer.formatters.table import TableFormatter

    try:
        value = calculate_csi(chips, small_blind, big_blind, antes)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    TableFormatter(console).print_csi_info(get_csi_info(value), get_csi_strategy_tips(value))


@app.command()
def pot_odds(
    pot: float = typer.Argument(..., help="Pot before the bet"),
    bet: float = typer.Argument(..., help="Bet being faced"),
    call: Optional[float] = typer.Option(None, "--call", help="Amount to call (default: bet)"),
    implied: Optional[float] = typer.Option(None, "--implied", help="Expected future winnings"),
    equity: Optional[float] = typer.Option(None, "--equity",
                                           help="Your equity (%) to check the call"),
):
    """Compute pot odds and the equity needed to call."""
    from holdem_trainer.calculators.odds import (
        calculate_implied_odds, calculate_pot_odds, is_profitable_call,
    )
    from holdem_trainer.formatters.table import TableFormatter

    try:
        odds = calculate_pot_odds(pot, bet, call)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    implied_odds = calculate_implied_odds(odds, implied) if implied is not None else None
    TableFormatter(console).print_pot_odds(odds, implied_odds)

    if equity is not None:
        if is_profitable_call(equity, odds, implied_odds):
            console.print("[green]Profitable call.[/green]")
        else:
            console.print("[red]Unprofitable call.[/red]")


@app.command()
def equity(
    hole: str = typer.Argument(..., help="Your hole cards, e.g. 'Ah Kh'"),
    board: str = typer.Option("", "--board", "-b", help="Community cards"),
    opponent: Optional[List[str]] = typer.Option(None, "--opponent", "-o",
                                                 help="Known opponent hand (repeatable)"),
    simulations: Optional[int] = typer.Option(None, "--simulations", "-s",
                                              help="Monte Carlo trials"),
    opponents: int = typer.Option(3, "--opponents", help="Opponents to simulate"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
):
    """Estimate equity by simulation, or exactly on a complete board."""
    from holdem_trainer.calculators.odds import calculate_equity
    from holdem_trainer.formatters.table import TableFormatter

    hole_cards = _parse_cards(hole, "hole cards")
    board_cards = _parse_cards(board, "board")
    known = [_parse_cards(hand, "opponent hand") for hand in opponent or []]

    try:
        value = calculate_equity(hole_cards, board_cards, known, simulations=simulations,
                                 num_opponents=opponents, rng=random.Random(seed))
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    TableFormatter(console).print_equity(hole_cards, board_cards, value)


@app.command()
def evaluate(
    cards: str = typer.Argument(..., help="5 to 7 cards, e.g. 'Ah Kh Qh Jh Th 2c 3d'"),
):
    """Show the best five-card hand."""
    from holdem_trainer.engine.evaluator import evaluate_hand
    from holdem_trainer.formatters.table import TableFormatter

    parsed = _parse_cards(cards, "cards")
    try:
        evaluation = evaluate_hand(parsed)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    TableFormatter(console).print_evaluation(evaluation)


@app.command()
def push_fold(
    hand: str = typer.Argument(..., help="Two hole cards, e.g. 'As 9d'"),
    csi_value: float = typer.Argument(..., metavar="CSI", help="Your Chip Stack Index"),
    position: str = typer.Option("button", "--position", "-p",
                                 help="early|middle|late|button|small_blind|big_blind"),
    opponents: int = typer.Option(1, "--opponents", help="Opponents left to act"),
    antes: bool = typer.Option(False, "--antes", help="Antes are in play"),
):
    """Push/fold chart verdict for a hand."""
    from holdem_trainer.calculators.csi import (
        get_recommended_action, hand_notation, should_call_push, should_push,
    )
    from holdem_trainer.models.position import PositionGroup

    cards = _parse_cards(hand, "hand")
    try:
        group = PositionGroup(position.lower())
        notation = hand_notation(cards)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)

    push = should_push(cards, csi_value, group, opponents, antes)
    verdict = "[green]PUSH[/green]" if push else "[red]FOLD[/red]"
    console.print(f"{notation} at CSI {csi_value:g} from {group.value}: {verdict}")

    if group in (PositionGroup.SMALL_BLIND, PositionGroup.BIG_BLIND):
        call = should_call_push(cards, csi_value, group, csi_value)
        console.print(f"Facing an all-in: {'[green]CALL[/green]' if call else '[red]FOLD[/red]'}")

    console.print(f"[dim]{get_recommended_action(cards, csi_value, group)}[/dim]")


@app.command()
def quiz(
    count: int = typer.Option(5, "--count", "-n", help="Number of questions"),
    difficulty: str = typer.Option("beginner", "--difficulty", "-d",
                                   help="Starting difficulty (beginner|intermediate|advanced)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
):
    """Answer quiz questions about a freshly dealt table."""
    from holdem_trainer.engine.game import PokerGame
    from holdem_trainer.engine.scheduling import ManualScheduler
    from holdem_trainer.formatters.table import TableFormatter
    from holdem_trainer.models.game import Difficulty, GameSettings
    from holdem_trainer.training.session import QuizSession

    try:
        level = Difficulty(difficulty.lower())
    except ValueError:
        console.print(f"[red]Unknown difficulty: {difficulty}[/red]")
        raise typer.Exit(1)

    rng = random.Random(seed)
    session = QuizSession(level, rng=rng)
    fmt = TableFormatter(console)

    for i in range(1, count + 1):
        # Fresh table each time so the quiz sees a different seat and stack setup
        settings = GameSettings.from_env()
        settings.human_seat = rng.randrange(settings.num_players)
        game = PokerGame(settings, rng=rng, scheduler=ManualScheduler())
        game.start_new_hand()
        state = game.get_game_state()
        game.dispose()

        console.print(f"\n[bold cyan]Question {i}/{count}[/bold cyan] "
                      f"[dim]({session.current_difficulty.value})[/dim]")
        _ask_quiz(session, fmt, state)

    console.print(f"\nScore: {session.total_correct}/{len(session.history)}")


if __name__ == "__main__":
    app()
