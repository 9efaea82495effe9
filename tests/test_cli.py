from unittest.mock import patch

from sqlalchemy import create_engine
from typer.testing import CliRunner

from pricelist_loader.alembic_helpers import get_revision
from pricelist_loader.cli import cli
from pricelist_loader.exceptions import FetchError
from pricelist_loader.logger import PlRichHandler, logger

runner = CliRunner()


def test_schemas_create():
    result = runner.invoke(cli, ["schemas", "create", "--dialect", "sqlite"])
    assert result.exit_code == 0
    for table in ["provider", "service", "region", "sku", "term"]:
        assert f"CREATE TABLE {table}" in result.output


def test_schemas_create_without_dialect():
    result = runner.invoke(cli, ["schemas", "create"])
    assert result.exit_code == 1


def test_schemas_upgrade_and_downgrade(connection_string):
    result = runner.invoke(
        cli, ["schemas", "upgrade", "--connection-string", connection_string]
    )
    assert result.exit_code == 0
    engine = create_engine(connection_string)
    with engine.connect() as connection:
        assert get_revision(connection) == "3b1f6c2d9a47"

    result = runner.invoke(
        cli, ["schemas", "downgrade", "--connection-string", connection_string]
    )
    assert result.exit_code == 0
    with engine.connect() as connection:
        assert get_revision(connection) is None


@patch("pricelist_loader.cli.Pipeline")
def test_pull_stops_on_fatal_error(mock_pipeline, connection_string, tmp_path):
    mock_pipeline.return_value.run.side_effect = FetchError("region index unavailable")
    result = runner.invoke(
        cli,
        [
            "pull",
            "--connection-string",
            connection_string,
            "--staging-dir",
            str(tmp_path / "staging"),
            "--no-migrate",
            "--include-region",
            "us-east-1",
        ],
    )
    assert result.exit_code == 1
    settings = mock_pipeline.call_args.args[0]
    assert settings.include_regions == ["us-east-1"]
    assert settings.connection_string == connection_string


@patch("pricelist_loader.cli.Pipeline")
def test_pull_removes_log_handler(mock_pipeline, connection_string, tmp_path):
    args = [
        "pull",
        "--connection-string",
        connection_string,
        "--staging-dir",
        str(tmp_path / "staging"),
        "--no-migrate",
    ]
    for _ in range(2):
        result = runner.invoke(cli, args)
        assert result.exit_code == 0
    assert not [h for h in logger.handlers if isinstance(h, PlRichHandler)]
