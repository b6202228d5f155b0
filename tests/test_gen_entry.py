import os
import runpy
import subprocess
import sys
from pathlib import Path

import pytest


GEN_ENTRY = Path(__file__).resolve().parent.parent / "gen_entry.py"


class FakeRun:
    def __init__(self, returncode):
        self.returncode = returncode
        self.calls = []

    def __call__(self, args, **kwargs):
        self.calls.append((args, kwargs))
        return subprocess.CompletedProcess(args, self.returncode)


@pytest.fixture
def fake_run(request, monkeypatch):
    run = FakeRun(getattr(request, "param", 0))
    monkeypatch.setattr(subprocess, "run", run)
    monkeypatch.setattr(sys, "argv", [str(GEN_ENTRY), "piso_gen_input.yml"])
    return run


def run_entry():
    with pytest.raises(SystemExit) as exc:
        runpy.run_path(str(GEN_ENTRY), run_name="__main__")
    return exc.value.code


def test_existing_pythonpath(fake_run, monkeypatch):
    monkeypatch.setenv("PYTHONPATH", "/opt/x")

    assert run_entry() == 0

    (args, kwargs), = fake_run.calls
    assert args[1:] == ["-m", "piso", "gen", "piso_gen_input.yml"]
    assert kwargs["env"]["PYTHONPATH"].split(os.pathsep) == \
        ["/opt/x", str(GEN_ENTRY.parent)]


def test_no_pythonpath(fake_run, monkeypatch):
    monkeypatch.delenv("PYTHONPATH", raising=False)

    assert run_entry() == 0

    (_, kwargs), = fake_run.calls
    assert kwargs["env"]["PYTHONPATH"] == str(GEN_ENTRY.parent)


@pytest.mark.parametrize("fake_run", [3], indirect=True)
def test_failure_propagates(fake_run):
    assert run_entry() == 3
