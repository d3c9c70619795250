from __future__ import annotations

from pathlib import Path

import pytest

from rally.contracts import StorageBackend
from rally.core import load_runtime_config


def test_defaults_without_environment(tmp_path: Path):
    config = load_runtime_config({}, root=tmp_path)
    assert config.root == tmp_path
    assert config.storage == StorageBackend.SQLITE
    assert config.seed is None
    assert config.log_level == "INFO"


def test_environment_is_read():
    config = load_runtime_config(
        {"RALLY_ROOT": "/srv/rally", "RALLY_STORAGE": "memory", "RALLY_SEED": "12", "RALLY_LOG_LEVEL": "debug"}
    )
    assert config.root == Path("/srv/rally")
    assert config.storage == StorageBackend.MEMORY
    assert config.seed == 12
    assert config.log_level == "DEBUG"


def test_explicit_arguments_override_environment(tmp_path: Path):
    config = load_runtime_config({"RALLY_STORAGE": "memory", "RALLY_SEED": "12"}, root=tmp_path, storage="sqlite", seed=3)
    assert config.storage == StorageBackend.SQLITE
    assert config.seed == 3


@pytest.mark.parametrize(
    "env",
    [{"RALLY_STORAGE": "postgres"}, {"RALLY_SEED": "abc"}, {"RALLY_LOG_LEVEL": "chatty"}],
)
def test_invalid_settings_raise(env, tmp_path: Path):
    with pytest.raises(ValueError):
        load_runtime_config(env, root=tmp_path)
