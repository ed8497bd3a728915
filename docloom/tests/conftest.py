"""Shared fixtures: throwaway Java source trees and isolated configuration."""

from pathlib import Path
from typing import Dict

import pytest

from docloom.core.config import reload_configs


@pytest.fixture
def java_tree(tmp_path):
    """Factory writing {relative_path: source} into a fresh directory."""

    def _write(files: Dict[str, str], root: Path = None) -> Path:
        root = root or tmp_path / "src"
        root.mkdir(parents=True, exist_ok=True)
        for rel_path, source in files.items():
            path = root / rel_path
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(source, encoding="utf-8")
        return root

    return _write


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at an empty directory and clear overrides."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("DOCLOOM_CONFIG_DIR", str(config_dir))
    for name in (
        "DOCLOOM_ALLOWED_BASE_DIR",
        "JAVADOC_OUTPUT_DIR",
        "JAVADOC_COMMAND",
        "MAVEN_COMMAND",
        "PLANTUML_JAR_PATH",
        "PLANTUML_SERVER_URL",
    ):
        monkeypatch.delenv(name, raising=False)
    reload_configs()
    yield config_dir
    reload_configs()
