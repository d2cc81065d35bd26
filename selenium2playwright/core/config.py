"""
Migration configuration loaded from JSON.

The file is plain JSON with a few conveniences: full-line ``//`` comments,
``"//...": "..."`` comment entries and trailing commas are all accepted.
"""

import json
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = "migration-config.json"

SOURCE_DEFAULTS = {
    "pages": "src/pages",
    "steps": "src/steps",
    "features": "features",
}

TARGET_DEFAULTS = {
    "pages": "src/pages",
    "steps": "src/steps",
    "features": "features",
    "fixtures": "src/steps/fixtures.ts",
}

LINE_COMMENT = re.compile(r"^\s*//.*$", re.MULTILINE)
COMMENT_ENTRY = re.compile(r'"//[^"]*"\s*:\s*"(?:[^"\\]|\\.)*"\s*,?')
TRAILING_COMMA = re.compile(r",(\s*[}\]])")

SAMPLE_CONFIG: Dict[str, Any] = {
    "projectName": "playwright-automation",
    "description": "Migrated from Selenium BDD",
    "source": {
        "//": "Full path to the Selenium repository; the paths below are relative to it",
        "rootDir": "/full/path/to/your-selenium-repo",
        "pages": {"path": "src/test/java/com/company/pages"},
        "steps": {"path": "src/test/java/com/company/steps"},
        "features": {"path": "src/test/resources/features"},
    },
    "target": {
        "//": "Where the Playwright project is created",
        "rootDir": "/full/path/to/playwright-automation",
        "pages": "src/pages",
        "steps": "src/steps",
        "features": "features",
        "fixtures": "src/steps/fixtures.ts",
    },
    "options": {
        "features": {
            "convertAndBut": True,
            "preserveTags": True,
            "folderMapping": {},
        },
        "steps": {
            "//": "Step class name fragment -> page fixture, e.g. Accounts -> accountsPage",
            "fixtureMapping": {},
        },
        "project": {
            "browsers": ["chromium", "firefox"],
            "environments": ["dev", "qa", "staging"],
            "defaultEnv": "dev",
            "baseUrl": "https://example.com",
        },
    },
}


class ConfigError(Exception):
    """Configuration is missing, unreadable or points at nothing."""


def strip_comments(text: str) -> str:
    """Remove the JSON extensions accepted in config files."""
    text = LINE_COMMENT.sub("", text)
    text = COMMENT_ENTRY.sub("", text)
    return TRAILING_COMMA.sub(r"\1", text)


def _section(data: Dict[str, Any], *keys: str) -> Dict[str, Any]:
    for key in keys:
        value = data.get(key) if isinstance(data, dict) else None
        data = value if isinstance(value, dict) else {}
    return data


@dataclass
class MigrationConfig:
    """Resolved migration settings."""

    source_root: Path
    target_root: Path
    project_name: str = "playwright-automation"
    description: str = "Playwright BDD Test Automation"
    source_dirs: Dict[str, str] = field(default_factory=lambda: dict(SOURCE_DEFAULTS))
    target_dirs: Dict[str, str] = field(default_factory=lambda: dict(TARGET_DEFAULTS))
    convert_and_but: bool = True
    preserve_tags: bool = True
    folder_mapping: Dict[str, str] = field(default_factory=dict)
    fixture_mapping: Dict[str, str] = field(default_factory=dict)
    browsers: List[str] = field(default_factory=lambda: ["chromium", "firefox"])
    environments: List[str] = field(default_factory=lambda: ["dev"])
    default_env: str = "dev"
    base_url: str = "https://example.com"
    path: Optional[Path] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base_dir: Path = None) -> "MigrationConfig":
        """
        Build a config from parsed JSON.

        Relative root directories are resolved against base_dir (the config
        file's directory).

        Raises:
            ConfigError: If source.rootDir or target.rootDir is missing
        """
        base_dir = base_dir or Path.cwd()
        source = _section(data, "source")
        target = _section(data, "target")

        if not source.get("rootDir"):
            raise ConfigError("source.rootDir is not set")
        if not target.get("rootDir"):
            raise ConfigError("target.rootDir is not set")

        source_dirs = dict(SOURCE_DEFAULTS)
        for kind in SOURCE_DEFAULTS:
            path = _section(source, kind).get("path")
            if path:
                source_dirs[kind] = path

        target_dirs = dict(TARGET_DEFAULTS)
        for kind in TARGET_DEFAULTS:
            if isinstance(target.get(kind), str):
                target_dirs[kind] = target[kind]

        features = _section(data, "options", "features")
        steps = _section(data, "options", "steps")
        project = _section(data, "options", "project")

        return cls(
            source_root=base_dir / Path(source["rootDir"]).expanduser(),
            target_root=base_dir / Path(target["rootDir"]).expanduser(),
            project_name=data.get("projectName") or "playwright-automation",
            description=data.get("description") or "Playwright BDD Test Automation",
            source_dirs=source_dirs,
            target_dirs=target_dirs,
            convert_and_but=features.get("convertAndBut", True),
            preserve_tags=features.get("preserveTags", True),
            folder_mapping=dict(features.get("folderMapping") or {}),
            fixture_mapping=dict(steps.get("fixtureMapping") or {}),
            browsers=list(project.get("browsers") or ["chromium", "firefox"]),
            environments=list(project.get("environments") or ["dev"]),
            default_env=project.get("defaultEnv") or "dev",
            base_url=project.get("baseUrl") or "https://example.com",
        )

    def source_path(self, kind: str) -> Path:
        """Source directory for pages, steps or features."""
        return self.source_root / self.source_dirs[kind]

    def target_path(self, kind: str) -> Path:
        """Target directory (or file, for fixtures) for an artifact kind."""
        return self.target_root / self.target_dirs[kind]

    @property
    def reports_dir(self) -> Path:
        return self.target_root / "reports"

    def validate(self):
        """
        Check the source tree before any output is written.

        A missing per-kind source directory only produces a warning; the
        stage for it will find nothing to do.

        Raises:
            ConfigError: If the source root does not exist
        """
        if not self.source_root.is_dir():
            raise ConfigError(f"Source directory not found: {self.source_root} (check source.rootDir)")

        for kind in SOURCE_DEFAULTS:
            if not self.source_path(kind).is_dir():
                logger.warning(f"Source {kind} directory not found: {self.source_path(kind)}")


def load_config(path: Path) -> MigrationConfig:
    """
    Load and resolve a config file.

    Raises:
        ConfigError: If the file is missing, is not valid JSON or lacks a root
    """
    path = Path(path)
    if not path.is_file():
        raise ConfigError(f"Config file not found: {path}")

    try:
        data = json.loads(strip_comments(path.read_text(encoding="utf-8")))
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e
    except json.JSONDecodeError as e:
        raise ConfigError(f"Failed to parse config {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must contain a JSON object")

    config = MigrationConfig.from_dict(data, base_dir=path.resolve().parent)
    config.path = path
    logger.info(f"Loaded config {path}: {config.source_root} -> {config.target_root}")
    return config


def write_sample_config(path: Path, force: bool = False) -> Path:
    """
    Write the sample config.

    Raises:
        ConfigError: If the file exists and force is not set
    """
    path = Path(path)
    if path.exists() and not force:
        raise ConfigError(f"{path} already exists (use --force to overwrite)")

    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(SAMPLE_CONFIG, indent=2) + "\n", encoding="utf-8")
    return path
