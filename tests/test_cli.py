import json

import pytest
from requests import ConnectionError as RequestsConnectionError
from typer.testing import CliRunner

from ohlc_downloader.cli import app

from fakes import FailingClient, FakeKlineClient, make_rows

START_MS = 1_704_067_200_000

runner = CliRunner()


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "settings.toml"
    path.write_text("[download]\nrequest_delay_ms = 0\n")
    return path


def test_download_command_saves_file(tmp_path, config_file, monkeypatch) -> None:
    monkeypatch.setattr(
        "ohlc_downloader.service.BinanceRESTClient",
        lambda **kwargs: FakeKlineClient(make_rows(START_MS, 30), market=kwargs["market"]),
    )

    result = runner.invoke(
        app,
        [
            "download",
            "btcusdt",
            "--interval",
            "1m",
            "--market",
            "futures",
            "--start",
            "2024-01-01",
            "--end",
            "2024-01-02",
            "--format",
            "json",
            "--output-dir",
            str(tmp_path / "out"),
            "--config",
            str(config_file),
        ],
    )

    assert result.exit_code == 0, result.output
    assert "Saved 30 records to BTCUSDT-futures-1m.json" in result.output
    payload = json.loads((tmp_path / "out" / "BTCUSDT-futures-1m.json").read_text())
    assert len(payload) == 30


def test_download_command_reports_network_errors(tmp_path, config_file, monkeypatch) -> None:
    monkeypatch.setattr(
        "ohlc_downloader.service.BinanceRESTClient",
        lambda **_: FailingClient(RequestsConnectionError("unreachable")),
    )

    result = runner.invoke(
        app,
        ["download", "BTCUSDT", "--output-dir", str(tmp_path), "--config", str(config_file)],
    )

    assert result.exit_code == 1
    assert list(tmp_path.glob("BTCUSDT-*")) == []


def test_download_command_rejects_bad_market(tmp_path, config_file) -> None:
    result = runner.invoke(
        app,
        ["download", "BTCUSDT", "--market", "options", "--config", str(config_file)],
    )

    assert result.exit_code == 1


@pytest.mark.parametrize(
    "content",
    ['[download]\ndefault_market = "options"\n', "[download\nrequest_delay_ms = 0\n"],
)
def test_download_command_reports_invalid_settings(tmp_path, content) -> None:
    path = tmp_path / "settings.toml"
    path.write_text(content)

    result = runner.invoke(app, ["download", "BTCUSDT", "--config", str(path)])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)


def test_download_command_reports_missing_settings_file(tmp_path) -> None:
    result = runner.invoke(app, ["download", "BTCUSDT", "--config", str(tmp_path / "nope.toml")])

    assert result.exit_code == 1
    assert isinstance(result.exception, SystemExit)
