"""Shared fixtures."""

from types import MappingProxyType
from typing import Dict, List, Tuple

import pytest

from hello_term.config import Config
from hello_term.errors import CommandError
from hello_term.runner import CommandOutput


class FakeRunner:
    """Returns canned output keyed by argv."""

    def __init__(self, outputs: Dict[Tuple[str, ...], CommandOutput] = None):
        self.outputs = dict(outputs or {})
        self.calls: List[List[str]] = []

    def add(self, args, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self.outputs[tuple(args)] = CommandOutput(stdout, stderr, returncode)

    def run(self, args, check: bool = True) -> CommandOutput:
        self.calls.append(list(args))
        try:
            output = self.outputs[tuple(args)]
        except KeyError:
            raise CommandError(f"Failed to run command {' '.join(args)}: not found")
        if check and output.returncode != 0:
            raise CommandError(f"Command {' '.join(args)} failed: {output.stderr}")
        return output


BASE_CONFIG = {
    "name": "Ada",
    "hostname": "archbox",
    "location": "London",
    "units": "metric",
    "lang": "en",
    "api_key": "secret",
    "time_format": "24h",
}


def build_config(**overrides) -> Config:
    values = {"song": True, "package_managers": None, **BASE_CONFIG}
    values.update(overrides)
    return Config(MappingProxyType(values))


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def config() -> Config:
    return build_config()


@pytest.fixture
def make_config():
    """Factory for configs with selected keys overridden."""
    return build_config
