import sys
import time
import argparse
from typing import List, Optional

# --- Settings/Logging ---
from codehunt.logging.setup import setup_logging
from codehunt.config.settings import settings

setup_logging()

from loguru import logger

from codehunt.auth.admin import AdminGate, AuthenticationError
from codehunt.minigames.base import MiniGame
from codehunt.minigames.catalog import create_mini_game
from codehunt.minigames.reaction_test import ReactionTest
from codehunt.models.enums import HuntStage
from codehunt.progression.controller import ProgressionController
from codehunt.progression.errors import ProgressionError
from codehunt.storage.base import StorageError
from codehunt.storage.factory import build_store

from rich import print
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Prompt
from rich.table import Table

console = Console()


def show_teams(controller: ProgressionController) -> None:
    table = Table(title="Teams", caption="Manage your teams and their codes")
    table.add_column("ID", style="dim")
    table.add_column("Team Name")
    table.add_column("Selected", justify="center")
    selected = controller.selected_team
    for team in controller.teams:
        table.add_row(team.id, team.name, "*" if selected and selected.id == team.id else "")
    if not controller.teams:
        table.add_row("-", "No teams found. Add a team to get started.", "")
    console.print(table)


def show_status(controller: ProgressionController) -> None:
    summary = controller.summary()
    if summary.stage == HuntStage.NO_TEAM_SELECTED:
        print("[yellow]No team selected.[/yellow] Use 'select TEAM_ID' to join a team.")
        return

    table = Table(title=f"{summary.team_name} | {summary.completed_count} of {summary.total_games} Games Completed")
    table.add_column("#", justify="right")
    table.add_column("Game")
    table.add_column("Difficulty")
    table.add_column("Digit", justify="center")
    for game in controller.games:
        digit = f"[cyan]{game.digit}[/cyan]" if game.completed else "[dim]?[/dim]"
        table.add_row(str(game.id), game.title, game.difficulty.value, digit)
    console.print(table)
    print(
        f"Code: [bold cyan]{summary.masked_code}[/bold cyan]  "
        f"({summary.percent_complete:.0f}% complete, {summary.remaining_games} remaining)"
    )
    if summary.won:
        show_victory(controller)


def show_victory(controller: ProgressionController) -> None:
    team = controller.require_selected_team()
    digits = "".join(d or "" for d in controller.collected_digits())
    print(
        Panel.fit(
            f"[bold]{team.name} TRIUMPHS![/bold]\n\n"
            f"Collected code: [cyan]{digits}[/cyan]\n"
            f"Team code:      [magenta]{team.code}[/magenta]",
            title="VICTORY!",
            border_style="green",
        )
    )


def _read_entry(game: MiniGame) -> str:
    if isinstance(game, ReactionTest):
        print("[dim]Wait for it...[/dim]")
        time.sleep(max(game.signal_at - game.clock(), 0))
        print("[bold green]GO![/bold green]")
        return input()
    return Prompt.ask(game.prompt)


def play(controller: ProgressionController, game_id: int) -> int:
    controller.require_selected_team()
    game_info = next((g for g in controller.games if g.id == game_id), None)
    if game_info is None:
        print(f"[red]Game {game_id} not found.[/red]")
        return 1
    if game_info.completed:
        print(f"[yellow]{game_info.title} is already completed (digit {game_info.digit}).[/yellow]")
        return 0

    def on_win() -> None:
        digit = controller.digit_for(game_id)
        controller.complete_game(game_id, digit)
        print(Panel.fit(f"[bold cyan]{digit}[/bold cyan]", title="Game Complete! Digit discovered"))

    def on_restart() -> None:
        logger.info(f"Attempt at game {game_id} discarded")

    kwargs = {"target_ms": settings.reaction_target_ms} if game_id == ReactionTest.game_id else {}
    game = create_mini_game(game_id, on_win, on_restart, **kwargs)

    print(Panel.fit(game.start(), title=game.title))
    print("[dim]Type 'restart' to start over or 'quit' to leave.[/dim]")
    while not game.won:
        if game.lost:
            again = Prompt.ask("Try again?", choices=["y", "n"], default="y")
            if again != "y":
                return 0
            print(game.restart())
            continue
        entry = _read_entry(game)
        command = entry.strip().lower()
        if command == "quit":
            return 0
        if command == "restart":
            print(game.restart())
            continue
        print(game.handle(entry))

    if controller.has_won():
        show_victory(controller)
    return 0


def _login(gate: AdminGate, args: argparse.Namespace) -> None:
    username = args.username or Prompt.ask("Admin username")
    password = args.password or Prompt.ask("Admin password", password=True)
    if not gate.login(username, password):
        raise AuthenticationError("Invalid credentials. Please try again.")


def run_admin(controller: ProgressionController, args: argparse.Namespace) -> int:
    gate = AdminGate.from_settings(settings)
    _login(gate, args)
    gate.require_admin()
    try:
        if args.admin_command == "add-team":
            team = controller.add_team(args.name, args.code)
            print(f"[green]{team.name} has been added (id {team.id}).[/green]")
        elif args.admin_command == "update-team":
            team = controller.update_team(args.team_id, name=args.name, code=args.code)
            print(f"[green]{team.name} has been updated.[/green]")
        elif args.admin_command == "delete-team":
            team = controller.delete_team(args.team_id)
            print(f"[green]{team.name} has been removed.[/green]")
        elif args.admin_command == "reset-games":
            controller.reset_games()
            print("[green]All games have been reset.[/green]")
        elif args.admin_command == "codes":
            for team in controller.teams:
                print(f"{team.id}\t{team.name}\t[cyan]{team.code}[/cyan]")
    finally:
        gate.logout()
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Code Hunt: play games, collect your team's code.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("teams", help="List teams")
    select = sub.add_parser("select", help="Join a team")
    select.add_argument("team_id")
    sub.add_parser("status", help="Show progress and collected digits")
    play_cmd = sub.add_parser("play", help="Play a game")
    play_cmd.add_argument("game_id", type=int)
    sub.add_parser("reset-progress", help="Start over: clear progress and team selection")

    admin = sub.add_parser("admin", help="Administrative commands")
    admin.add_argument("--username")
    admin.add_argument("--password")
    admin_sub = admin.add_subparsers(dest="admin_command", required=True)
    add = admin_sub.add_parser("add-team")
    add.add_argument("name")
    add.add_argument("code")
    update = admin_sub.add_parser("update-team")
    update.add_argument("team_id")
    update.add_argument("--name")
    update.add_argument("--code")
    delete = admin_sub.add_parser("delete-team")
    delete.add_argument("team_id")
    admin_sub.add_parser("reset-games")
    admin_sub.add_parser("codes", help="Show every team's code")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the application."""
    args = build_parser().parse_args(argv)
    try:
        controller = ProgressionController.load(build_store(settings))
        if args.command == "teams":
            show_teams(controller)
        elif args.command == "select":
            team = controller.select_team(args.team_id)
            print(f"[green]You've joined {team.name}.[/green]")
        elif args.command == "status":
            show_status(controller)
        elif args.command == "play":
            return play(controller, args.game_id)
        elif args.command == "reset-progress":
            controller.reset_progress()
            print("[green]Your game progress has been reset.[/green]")
        elif args.command == "admin":
            return run_admin(controller, args)
    except (ProgressionError, AuthenticationError) as e:
        logger.warning(f"{args.command} rejected: {e}")
        print(f"[red]{e}[/red]")
        return 1
    except StorageError as e:
        logger.error(f"Could not persist hunt state: {e}")
        print(f"[red]Could not save progress: {e}[/red]")
        return 1
    return 0


def run() -> None:
    try:
        sys.exit(main())
    except KeyboardInterrupt:
        logger.info("Execution interrupted by user (KeyboardInterrupt).")
        sys.exit(0)


if __name__ == "__main__":
    run()
