"""Shared fixtures: a testing configuration and an empty session repository."""

import pytest

from starlesson.config import ApplicationConfig, Environment, set_config
from starlesson.persistence import get_memory_persistence


@pytest.fixture(autouse=True)
def testing_config():
    config = ApplicationConfig.for_environment(Environment.TESTING)
    set_config(config)
    yield config


@pytest.fixture(autouse=True)
def repo():
    repo = get_memory_persistence()
    repo.stop_cleanup()
    repo.clear()
    yield repo
    repo.stop_cleanup()
    repo.clear()
