"""
Launcher script tests.
"""
import importlib.util
import sys
from pathlib import Path

RUNNER = Path(__file__).resolve().parent.parent / "run_stable.py"


def test_runner_import_leaves_sys_path_alone(monkeypatch):
    before = list(sys.path)
    spec = importlib.util.spec_from_file_location("run_stable", RUNNER)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)

    assert sys.path == before

    calls = []
    monkeypatch.setattr(module.uvicorn, "run", lambda app, **kwargs: calls.append((app, kwargs)))
    module.main()
    assert calls[0][0] == "pwd_registry.main:app"
    assert calls[0][1]["reload"] is False
