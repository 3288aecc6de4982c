# tests/test_cli.py
import json
from unittest.mock import AsyncMock

import pytest

from chainview.cli.cli import CLI
from chainview.config.settings import Settings

from conftest import ADDRESS, BLOCK_HEIGHT, BLOCK_TXIDS


class TestCLI:
    @pytest.fixture
    def cli(self, temp_dir, db_path, seeded_store):
        settings = Settings(f"{temp_dir}/chainview.yaml")
        settings.config["database"]["path"] = db_path
        return CLI(settings)

    def test_block(self, cli, capsys):
        assert cli.main(["block", str(BLOCK_HEIGHT)]) == 0
        output = json.loads(capsys.readouterr().out)
        assert output["transactions"] == BLOCK_TXIDS

    def test_unknown_transaction_prints_sentinel(self, cli, capsys):
        assert cli.main(["tx", "nope"]) == 0
        assert json.loads(capsys.readouterr().out)["txid"] == "not found"

    def test_address_and_balance(self, cli, capsys):
        cli.main(["address", ADDRESS])
        assert json.loads(capsys.readouterr().out)["address"] == ADDRESS
        cli.main(["balance", ADDRESS])
        assert json.loads(capsys.readouterr().out)["balance"][0]["asset"] == "NEO"

    def test_height_unavailable(self, cli, capsys, mocker):
        mocker.patch("chainview.cli.cli.NodeMonitor.refresh", new=AsyncMock())
        assert cli.main(["height"]) == 2
        assert "not available" in capsys.readouterr().err

    def test_no_command_prints_help(self, cli, capsys):
        assert cli.main([]) == 1
        assert "commands" in capsys.readouterr().out
