import sys
from pathlib import Path

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / "src"))

import pytest

from taskninja.config import Config, PathConfig
from taskninja.planning import TaskList


@pytest.fixture
def config(tmp_path, monkeypatch):
    monkeypatch.delenv("TASKNINJA_CONFIG", raising=False)
    paths = PathConfig(base=tmp_path)
    return Config(data_file=paths.data_file, paths=paths)


@pytest.fixture
def task_list():
    tasks = TaskList()
    tasks.new_task("Write report")
    tasks.new_task("Buy milk", description="Two litres", flagged=True)
    tasks.new_task("Call mom", complete=True)
    return tasks
