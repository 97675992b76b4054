"""Shared test fixtures."""

from pathlib import Path

import pytest
from mdview.config import Config, DocsConfig, ServerConfig, ThemeConfig


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    """Create an empty docs directory."""
    docs = tmp_path / "docs"
    docs.mkdir()
    return docs


@pytest.fixture
def test_config(docs_dir: Path) -> Config:
    """Create a test configuration serving docs_dir."""
    return Config(
        server=ServerConfig(),
        docs=DocsConfig(source_dir=docs_dir),
        theme=ThemeConfig(),
    )


def write_files(root: Path, files: dict[str, str]) -> None:
    """Write files relative to root, creating parent directories."""
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
