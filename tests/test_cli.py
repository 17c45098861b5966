import pytest

from starlinkctl import cli
from starlinkctl.config import CtlConfig
from starlinkctl.errors import InvokeError


@pytest.fixture
def logging_calls(monkeypatch):
    calls = []

    def fake_configure_logging(level, *, log_network=False):
        calls.append((level, log_network))

    monkeypatch.setattr(cli, "configure_logging", fake_configure_logging)
    return calls


def test_main_success_returns_zero(monkeypatch, logging_calls) -> None:
    seen = []

    def fake_execute(config, out):
        seen.append(config)
        out.write("ID: abc123\n")

    monkeypatch.setattr(cli, "execute", fake_execute)

    assert cli.main(["--addr", "dish:9200", "--log-level", "info"]) == 0
    assert seen == [CtlConfig(address="dish:9200", log_level="INFO")]
    assert logging_calls == [("INFO", False)]


def test_main_failure_returns_one(monkeypatch, logging_calls, caplog) -> None:
    def fake_execute(config, out):
        raise InvokeError("DEADLINE_EXCEEDED: Deadline Exceeded", code="DEADLINE_EXCEEDED")

    monkeypatch.setattr(cli, "execute", fake_execute)

    with caplog.at_level("ERROR"):
        assert cli.main([]) == 1

    assert "handle(get_status): DEADLINE_EXCEEDED" in caplog.text


def test_main_bad_arguments_return_two(monkeypatch, logging_calls) -> None:
    def fail_execute(config, out):
        raise AssertionError("execute must not run")

    monkeypatch.setattr(cli, "execute", fail_execute)

    assert cli.main(["--timeout", "forever"]) == 2
    assert logging_calls == [("WARNING", False)]


def test_main_help_returns_zero(logging_calls, capsys) -> None:
    assert cli.main(["-h"]) == 0
    assert "usage:" in capsys.readouterr().out
    assert logging_calls == []


def test_main_debug_enables_network_logging(monkeypatch, logging_calls) -> None:
    monkeypatch.setattr(cli, "execute", lambda config, out: None)

    assert cli.main(["--log-level", "DEBUG"]) == 0
    assert logging_calls == [("DEBUG", True)]
