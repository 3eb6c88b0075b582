from __future__ import annotations

from pathlib import Path

import pytest
import yaml

from src.main import build_parser, main


def test_parser_request() -> None:
    parser = build_parser()
    args = parser.parse_args(["request", "--subscription-id", "1", "*123#"])
    assert args.command == "request"
    assert args.subscription_id == 1
    assert args.code == "*123#"


def test_parser_request_default_subscription() -> None:
    parser = build_parser()
    args = parser.parse_args(["request", "*123#"])
    assert args.subscription_id == 0


def test_parser_config_flag() -> None:
    parser = build_parser()
    args = parser.parse_args(["--config", "custom.yaml", "request", "*1#"])
    assert args.config == "custom.yaml"


def test_parser_no_command() -> None:
    parser = build_parser()
    args = parser.parse_args([])
    assert args.command is None


def _config_file(tmp_path: Path, data: dict) -> str:
    path = tmp_path / "config.yaml"
    path.write_text(yaml.dump(data))
    return str(path)


def test_main_prints_response(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _config_file(tmp_path, {"simulator": {"responses": {"*123#": "BAL: 10.00"}}})
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", config, "request", "*123#"])
    assert exc_info.value.code == 0
    assert capsys.readouterr().out.strip() == "BAL: 10.00"


def test_main_reports_failure(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _config_file(tmp_path, {"simulator": {"failures": {"*999#": -2}}})
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", config, "request", "*999#"])
    assert exc_info.value.code == 1
    assert "ussd_plugin_ussd_execution_failure: USSD_ERROR_SERVICE_UNAVAIL" in capsys.readouterr().err


def test_main_reports_invalid_parameters(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    config = _config_file(tmp_path, {})
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", config, "request", "--subscription-id", "-3", "*123#"])
    assert exc_info.value.code == 1
    assert "Parameter `subscriptionId` must be >= 0" in capsys.readouterr().err


def test_main_without_command(tmp_path: Path) -> None:
    with pytest.raises(SystemExit) as exc_info:
        main(["--config", str(tmp_path / "missing.yaml")])
    assert exc_info.value.code == 1
