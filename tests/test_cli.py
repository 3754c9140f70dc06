"""
Tests for the command-line surface, run against an in-memory store.
"""

import pytest

import main
from codehunt.config.settings import AppSettings
from codehunt.progression.controller import ProgressionController
from codehunt.storage.base import MemoryStore


@pytest.fixture
def cli_store(monkeypatch) -> MemoryStore:
    store = MemoryStore("cli")
    monkeypatch.setattr(main, "build_store", lambda settings: store)
    monkeypatch.setattr(main, "settings", AppSettings(admin_username="admin", admin_password="pw"))
    return store


def admin(*args):
    return ["admin", "--username", "admin", "--password", "pw", *args]


def test_select_and_status(cli_store, capsys):
    assert main.main(["select", "2"]) == 0
    assert "Team B" in capsys.readouterr().out
    assert ProgressionController.load(cli_store).selected_team.id == "2"

    assert main.main(["status"]) == 0
    assert "0 of 6 Games Completed" in capsys.readouterr().out


def test_select_unknown_team_fails(cli_store, capsys):
    assert main.main(["select", "99"]) == 1
    assert "not found" in capsys.readouterr().out


def test_play_requires_a_team(cli_store):
    assert main.main(["play", "1"]) == 1


def test_admin_add_update_delete(cli_store):
    assert main.main(admin("add-team", "Team E", "555555")) == 0
    teams = ProgressionController.load(cli_store).teams
    new_id = teams[-1].id
    assert teams[-1].name == "Team E"

    assert main.main(admin("update-team", new_id, "--code", "666666")) == 0
    assert ProgressionController.load(cli_store).registry.get_team(new_id).code == "666666"

    assert main.main(admin("delete-team", new_id)) == 0
    assert len(ProgressionController.load(cli_store).teams) == 4


def test_admin_rejects_invalid_code(cli_store, capsys):
    assert main.main(admin("add-team", "Team E", "12345")) == 1
    assert "6 digits" in capsys.readouterr().out


def test_admin_requires_credentials(cli_store):
    args = ["admin", "--username", "admin", "--password", "nope", "reset-games"]
    assert main.main(args) == 1


def test_reset_games_and_progress(cli_store):
    controller = ProgressionController(cli_store)
    controller.select_team("1")
    controller.record_win(1)

    assert main.main(admin("reset-games")) == 0
    reloaded = ProgressionController.load(cli_store)
    assert reloaded.completed_count == 0
    assert reloaded.selected_team.id == "1"

    assert main.main(["reset-progress"]) == 0
    assert ProgressionController.load(cli_store).selected_team is None


def test_play_completed_game_is_skipped(cli_store, capsys):
    controller = ProgressionController(cli_store)
    controller.select_team("1")
    controller.record_win(3)
    assert main.main(["play", "3"]) == 0
    assert "already completed" in capsys.readouterr().out
