"""Tests for the user, book and loan command groups."""

from __future__ import annotations

import json
from typing import Any

import pytest
from click.testing import CliRunner

from localstore.cli import cli


def _run(cli_runner: CliRunner, *args: str) -> tuple[int, dict[str, Any]]:
    result = cli_runner.invoke(cli, ["--json", *args])
    stream = result.stdout if result.exit_code == 0 else result.output
    return result.exit_code, json.loads(stream)


def _seed(cli_runner: CliRunner) -> tuple[str, str]:
    _, user = _run(cli_runner, "user", "add", "Ana Souza", "ana@example.com")
    _, book = _run(
        cli_runner,
        "book",
        "add",
        "Dom Casmurro",
        "--author",
        "Machado de Assis",
        "--year",
        "1899",
        "--genre",
        "Romance",
    )
    return user["data"]["id"], book["data"]["id"]


@pytest.mark.usefixtures("_isolated_store")
class TestUserCommands:
    def test_add_and_get(self, cli_runner: CliRunner) -> None:
        code, data = _run(cli_runner, "user", "add", "Ana", "ana@example.com")
        assert code == 0
        assert data["data"]["id"] == "USR-0001"

        code, data = _run(cli_runner, "user", "get", "USR-0001")
        assert code == 0
        assert data["data"]["email"] == "ana@example.com"

    def test_add_invalid(self, cli_runner: CliRunner) -> None:
        code, data = _run(cli_runner, "user", "add", "Ana", "not-an-email")
        assert code == 1
        assert data["error"]["code"] == "VALIDATION_FAILED"
        assert data["error"]["detail"]["errors"] == ["Invalid email format"]

    def test_update(self, cli_runner: CliRunner) -> None:
        _run(cli_runner, "user", "add", "Ana", "ana@example.com")
        code, data = _run(cli_runner, "user", "update", "USR-0001", "--name", "Ana S.")
        assert code == 0
        assert data["data"]["name"] == "Ana S."

    def test_update_missing_warns(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["user", "update", "USR-0404", "--name", "X"])
        assert result.exit_code == 0
        assert "WARNING: No user with ID USR-0404" in result.output

    def test_list_filter(self, cli_runner: CliRunner) -> None:
        _run(cli_runner, "user", "add", "Ana", "ana@gmail.com")
        _run(cli_runner, "user", "add", "Bia", "bia@outlook.com")
        result = cli_runner.invoke(cli, ["user", "list", "--email-contains", "outlook"])
        assert result.exit_code == 0
        assert "Bia" in result.output
        assert "Ana" not in result.output

    def test_delete_prompts(self, cli_runner: CliRunner) -> None:
        _run(cli_runner, "user", "add", "Ana", "ana@example.com")
        result = cli_runner.invoke(cli, ["user", "delete", "USR-0001"], input="y\n")
        assert result.exit_code == 0
        code, _ = _run(cli_runner, "user", "get", "USR-0001")
        assert code == 1


@pytest.mark.usefixtures("_isolated_store")
class TestBookCommands:
    def test_add_and_list(self, cli_runner: CliRunner) -> None:
        _seed(cli_runner)
        result = cli_runner.invoke(cli, ["book", "list"])
        assert result.exit_code == 0
        assert "Dom Casmurro" in result.output
        assert "Available" in result.output

    def test_add_requires_options(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["book", "add", "Untitled"])
        assert result.exit_code == 2

    def test_add_bad_year(self, cli_runner: CliRunner) -> None:
        code, data = _run(
            cli_runner, "book", "add", "T", "--author", "A", "--year", "soon", "--genre", "G"
        )
        assert code == 1
        assert data["error"]["detail"]["errors"] == ["Valid year is required"]

    def test_update(self, cli_runner: CliRunner) -> None:
        _, book_id = _seed(cli_runner)
        code, data = _run(cli_runner, "book", "update", book_id, "--genre", "Classic")
        assert code == 0
        assert data["data"]["genre"] == "Classic"
        assert data["data"]["fields_changed"] == ["genre"]

    def test_delete_blocked_while_loaned(self, cli_runner: CliRunner) -> None:
        user_id, book_id = _seed(cli_runner)
        _run(cli_runner, "loan", "register", user_id, book_id)
        code, data = _run(cli_runner, "book", "delete", book_id, "--yes")
        assert code == 1
        assert data["error"]["code"] == "CURRENTLY_LOANED"


@pytest.mark.usefixtures("_isolated_store")
class TestLoanCommands:
    def test_loan_lifecycle(self, cli_runner: CliRunner) -> None:
        user_id, book_id = _seed(cli_runner)

        code, loan = _run(cli_runner, "loan", "register", user_id, book_id)
        assert code == 0
        loan_id = loan["data"]["id"]
        assert loan_id == "LOAN-0001"

        code, again = _run(cli_runner, "loan", "register", user_id, book_id)
        assert code == 1
        assert again["error"]["code"] == "BOOK_UNAVAILABLE"

        code, blocked = _run(cli_runner, "user", "delete", user_id, "--yes")
        assert code == 1
        assert blocked["error"]["code"] == "HAS_ACTIVE_LOANS"

        code, returned = _run(cli_runner, "loan", "return", loan_id)
        assert code == 0
        assert returned["data"]["status"] == "returned"

        code, _ = _run(cli_runner, "user", "delete", user_id, "--yes")
        assert code == 0

    def test_invalid_reference(self, cli_runner: CliRunner) -> None:
        code, data = _run(cli_runner, "loan", "register", "USR-0404", "BOOK-0404")
        assert code == 1
        assert data["error"]["code"] == "INVALID_REFERENCE"
        assert data["error"]["detail"]["missing"] == ["user_id", "book_id"]

    def test_list_shows_names(self, cli_runner: CliRunner) -> None:
        user_id, book_id = _seed(cli_runner)
        _run(cli_runner, "loan", "register", user_id, book_id)
        result = cli_runner.invoke(cli, ["loan", "list", "--status", "active"])
        assert result.exit_code == 0
        assert "Ana Souza" in result.output
        assert "Dom Casmurro" in result.output

    def test_list_rejects_unknown_status(self, cli_runner: CliRunner) -> None:
        result = cli_runner.invoke(cli, ["loan", "list", "--status", "lost"])
        assert result.exit_code == 2

    def test_return_unknown_is_noop(self, cli_runner: CliRunner) -> None:
        code, data = _run(cli_runner, "loan", "return", "LOAN-0404")
        assert code == 0
        assert data["data"]["changed"] is False
        assert data["warnings"]
