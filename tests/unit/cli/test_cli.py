"""Tests for the click CLI."""

from unittest.mock import AsyncMock, MagicMock, patch

from click.testing import CliRunner

from linkportal.cli import cli
from linkportal.core.errors import LinkRemovalError, LinkNotFoundError


def mock_settings(**overrides):
    settings = MagicMock()
    settings.database_url = "sqlite+aiosqlite:///./lp_data/linkportal.db"
    settings.host = "0.0.0.0"
    settings.port = 8000
    settings.workers = 1
    settings.is_development = True
    settings.log_level = "INFO"
    settings.environment = "development"
    for key, value in overrides.items():
        setattr(settings, key, value)
    return settings


def mock_operations(account):
    operations = MagicMock()
    operations.get_account.return_value = account
    operations.github.aclose = AsyncMock()
    operations.hook_registry = MagicMock()
    return operations


def test_serve_rejects_multiple_sqlite_workers() -> None:
    runner = CliRunner()

    with patch("linkportal.cli.get_settings", return_value=mock_settings()):
        result = runner.invoke(cli, ["serve", "--workers", "2"])

    assert result.exit_code == 1
    assert "SQLite does not support multiple worker processes" in result.output


def test_serve_starts_uvicorn() -> None:
    runner = CliRunner()

    with patch("linkportal.cli.get_settings", return_value=mock_settings()), patch(
        "linkportal.cli.configure_logging"
    ), patch("uvicorn.run") as mock_run:
        result = runner.invoke(cli, ["serve", "--port", "9000"])

    assert result.exit_code == 0
    mock_run.assert_called_once()
    assert mock_run.call_args.kwargs["port"] == 9000


def run_account_cli(args, account):
    runner = CliRunner()
    operations = mock_operations(account)
    with patch(
        "linkportal.infrastructure.api.app.build_operations", return_value=operations
    ), patch(
        "linkportal.infrastructure.persistence.database.init_database", new=AsyncMock()
    ), patch(
        "linkportal.infrastructure.persistence.database.close_database", new=AsyncMock()
    ), patch(
        "linkportal.infrastructure.hooks.register_builtin_hooks"
    ), patch("linkportal.cli.configure_logging"):
        result = runner.invoke(cli, args)
    return result, operations


def test_unlink_prints_history() -> None:
    account = MagicMock()
    account.remove_link = AsyncMock(
        return_value=["The link for ID 1001 has been removed from the link service"]
    )

    result, operations = run_account_cli(["unlink", "1001"], account)

    assert result.exit_code == 0
    assert "has been removed from the link service" in result.output
    operations.get_account.assert_called_once_with("1001")
    operations.github.aclose.assert_awaited_once()


def test_unlink_failure_exits_non_zero() -> None:
    account = MagicMock()
    account.remove_link = AsyncMock(
        side_effect=LinkRemovalError(
            "The link for ID 1001 no longer exists: gone",
            error=LinkNotFoundError("gone"),
            history=["The link for ID 1001 no longer exists: gone"],
        )
    )

    result, _ = run_account_cli(["unlink", "1001"], account)

    assert result.exit_code == 1
    assert "no longer exists" in result.output


def test_terminate_passes_options() -> None:
    account = MagicMock()
    account.terminate = AsyncMock(return_value=["Removed jdoe from contoso"])

    result, _ = run_account_cli(
        ["terminate", "1001", "--reason", "offboarding", "--continue-on-error"], account
    )

    assert result.exit_code == 0
    assert "Removed jdoe from contoso" in result.output
    account.terminate.assert_awaited_once_with(reason="offboarding", continue_on_error=True)
