"""
Shared pytest fixtures for the confz tests.
"""

import pytest

from confz import Config, BoolOption, IntegerOption, StringOption

VERBOSE = BoolOption("verbose", "talk more", short="v", default=False)
QUIET = BoolOption("quiet", "talk less", short="q", default=False)
LEVEL = IntegerOption("level", "optimisation level", short="O", default=1, minimum=0, maximum=3)
TARGET = StringOption("target", "target processor", required=True)
NAME = StringOption("name", "application name")


@pytest.fixture
def config():
    return Config()


@pytest.fixture
def tool_config(config):
    config.add_options([VERBOSE, QUIET, LEVEL, TARGET, NAME])
    return config
