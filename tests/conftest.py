"""
Pytest configuration and fixtures for Librarium tests.
"""

import os
import shutil
import tempfile
from pathlib import Path
from typing import Generator

import pytest

from librarium.Config import Settings


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Create a temporary directory for tests."""
    temp_path = Path(tempfile.mkdtemp())
    yield temp_path
    # Cleanup
    shutil.rmtree(temp_path, ignore_errors=True)


@pytest.fixture
def sample_tree(temp_dir: Path) -> Path:
    """
    Create a browsable tree:

        base/
          readme.txt        (11 bytes)
          data.json         (16 bytes)
          subfolder/
            nested.txt      (14 bytes)
            deeper/
              leaf.md       (4 bytes)
          empty/
    """
    base = temp_dir / "base"
    base.mkdir()

    (base / "readme.txt").write_text("Hello World")
    (base / "data.json").write_text('{"key": "value"}')

    subfolder = base / "subfolder"
    (subfolder / "deeper").mkdir(parents=True)
    (subfolder / "nested.txt").write_text("Nested content")
    (subfolder / "deeper" / "leaf.md").write_text("leaf")

    (base / "empty").mkdir()

    return base


@pytest.fixture
def dangling_link(sample_tree: Path) -> Path:
    """Add subfolder/broken to the sample tree, a symlink to a missing target."""
    link = sample_tree / "subfolder" / "broken"
    try:
        os.symlink(sample_tree / "missing-target", link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported on this platform")
    return link


@pytest.fixture
def prompt_library(temp_dir: Path) -> Path:
    """
    Create a prompt library:

        prompts/
          support/
            actions_order.json   ["escalate", "triage"]
            overview.yml
            notes.txt
            triage/greeting.yml
            escalate/handoff.yml
          sales/
    """
    root = temp_dir / "prompts"
    (root / "support" / "triage").mkdir(parents=True)
    (root / "support" / "escalate").mkdir()
    (root / "sales").mkdir()

    (root / "support" / "actions_order.json").write_text('["escalate", "triage"]')
    (root / "support" / "overview.yml").write_text("title: Support")
    (root / "support" / "notes.txt").write_text("not a prompt")
    (root / "support" / "triage" / "greeting.yml").write_text("text: hello")
    (root / "support" / "escalate" / "handoff.yml").write_text("text: handing off")

    return root


@pytest.fixture
def settings(sample_tree: Path, prompt_library: Path) -> Settings:
    """Settings pointing at the sample tree and prompt library."""
    return Settings(
        base_directory=sample_tree,
        prompts_directory=prompt_library,
    )


@pytest.fixture(autouse=True)
def reset_module_state():
    """Reset module-level state between tests."""
    yield
    try:
        import librarium.Config as config_module
        config_module._settings = None
    except (ImportError, AttributeError):
        pass
