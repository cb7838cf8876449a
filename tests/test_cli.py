"""
Tests for the command-line tools.
"""

import textwrap

import pytest

from shift.cli import load_definitions, main
from shift.errors import ShiftError

SAMPLE = textwrap.dedent(
    """
    class Mail:
        router = {"user.created": ["notify", {"audit": "log"}]}

        def __init__(self, registry):
            self.bus = registry.get("event-bus")


    class Broken:
        def __init__(self, registry):
            raise RuntimeError("nope")


    class LoudErrors:
        router = {"shift.ready": "go", "error.dispatch": "go"}

        def __init__(self, registry):
            self.view = {"go": self.go}

        def go(self, payload):
            raise RuntimeError("always")


    class Audit:
        def __init__(self, registry):
            self.router = {"user.*": "record"}
            self.bus = registry.get("event-bus")


    MODULES = {"mail": Mail, "broken": Broken}
    WITH_BUS = {"audit": Audit, "mail": Mail}
    LOUD = {"loud": LoudErrors}
    NOT_A_MAPPING = [Mail]
    """
)


@pytest.fixture
def sample_app(tmp_path, monkeypatch):
    (tmp_path / "sample_shift_app.py").write_text(SAMPLE)
    monkeypatch.syspath_prepend(str(tmp_path))
    monkeypatch.chdir(tmp_path)
    return "sample_shift_app"


def test_match(capsys):
    assert main(["match", "foo.*", "foo.bar"]) == 0
    assert capsys.readouterr().out.strip() == "true"

    assert main(["match", "foo.bar", "foo.*"]) == 1
    assert capsys.readouterr().out.strip() == "false"


def test_routes(sample_app, capsys):
    assert main(["routes", f"{sample_app}:MODULES", "user.created"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["mail notify", "mail log"]
    assert "bootstrap failed: broken" in captured.err


def test_routes_keeps_modules_that_fetch_the_bus(sample_app, capsys):
    assert main(["routes", f"{sample_app}:WITH_BUS", "user.created"]) == 0

    captured = capsys.readouterr()
    assert captured.out.splitlines() == ["audit record", "mail notify", "mail log"]
    assert "bootstrap failed" not in captured.err


def test_run(sample_app):
    assert main(["run", f"{sample_app}:MODULES"]) == 0


def test_run_eternal_loop_exit_code(sample_app, capsys):
    assert main(["run", f"{sample_app}:LOUD"]) == 2
    assert "Fatal" in capsys.readouterr().err


def test_bad_target(sample_app, capsys):
    assert main(["routes", "no-colon", "x"]) == 1
    assert main(["routes", f"{sample_app}:MISSING", "x"]) == 1
    assert "Error:" in capsys.readouterr().err


def test_load_definitions_requires_mapping(sample_app):
    with pytest.raises(ShiftError):
        load_definitions(f"{sample_app}:NOT_A_MAPPING")
