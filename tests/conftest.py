"""Pytest configuration and fixtures for protgen tests."""

from pathlib import Path

import pytest

from protgen.core.generator import GeneratorConfig


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def win32_preset(fixtures_dir: Path) -> Path:
    """Path to a preset with the default Win32 options and two sources."""
    return fixtures_dir / "win32.preset"


@pytest.fixture
def prototypes_file(fixtures_dir: Path) -> Path:
    """Path to a file with three prototypes."""
    return fixtures_dir / "prototypes.h"


@pytest.fixture
def short_config() -> GeneratorConfig:
    """Compact config used for exact-output assertions."""
    return GeneratorConfig.from_mapping(
        {
            "Prefix": "FPL__FUNC_",
            "LoadMacro": "LOAD",
            "LoadLibHandle": "h",
            "LoadLibName": "lib",
            "LoadLibFieldPrefix": "p.",
        }
    )
