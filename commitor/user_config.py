"""Repository configuration management for commitor.

Handles reading and writing the .commitor/config.yaml file in each repository.
Currently it holds the list of file patterns whose diffs are left out of the prompt.
"""

from pathlib import Path

import yaml


# Default configuration values
DEFAULT_CONFIG = {
    "ignore": [
        # Lock files (auto-generated dependency files)
        "poetry.lock",
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "Cargo.lock",
        "Gemfile.lock",
        "composer.lock",
        "go.sum",
        # Build artifacts
        "*.min.js",
        "*.min.css",
        "*.map",
        # Binary and generated files
        "*.pyc",
        "*.pyo",
        "*.so",
        "*.dll",
        "*.exe",
    ],
}


def get_config_file(repo_root: Path) -> Path:
    """Return path to the config.yaml file.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Path to .commitor/config.yaml.
    """
    return repo_root / ".commitor" / "config.yaml"


def load_config(repo_root: Path) -> dict:
    """Load the repository configuration from config.yaml.

    A missing or unreadable file yields the defaults; nothing is written.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        Configuration dictionary.
    """
    config_file = get_config_file(repo_root)

    if not config_file.exists():
        return {key: list(value) for key, value in DEFAULT_CONFIG.items()}

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError):
        return {key: list(value) for key, value in DEFAULT_CONFIG.items()}

    if not isinstance(config, dict):
        return {key: list(value) for key, value in DEFAULT_CONFIG.items()}

    # Merge with defaults for any missing keys
    for key, value in DEFAULT_CONFIG.items():
        if key not in config:
            config[key] = list(value)
    return config


def save_config(repo_root: Path, config: dict) -> None:
    """Save the configuration to config.yaml.

    Args:
        repo_root: The root directory of the git repository.
        config: Configuration dictionary to save.
    """
    config_file = get_config_file(repo_root)
    config_file.parent.mkdir(parents=True, exist_ok=True)

    with open(config_file, "w", encoding="utf-8") as f:
        yaml.dump(
            config,
            f,
            default_flow_style=False,
            sort_keys=False,
            allow_unicode=True,
        )


def get_ignore_patterns(repo_root: Path) -> list[str]:
    """Get the list of ignore patterns from config.

    Args:
        repo_root: The root directory of the git repository.

    Returns:
        List of file patterns whose diffs are left out of the prompt.
    """
    config = load_config(repo_root)
    return list(config.get("ignore") or [])


def add_ignore_pattern(repo_root: Path, pattern: str) -> bool:
    """Add a pattern to the ignore list.

    Args:
        repo_root: The root directory of the git repository.
        pattern: File pattern to add (e.g., "*.log", "build/*").

    Returns:
        True if the pattern was added, False if it was already present.
    """
    config = load_config(repo_root)
    patterns = config.setdefault("ignore", [])
    if pattern in patterns:
        return False
    patterns.append(pattern)
    save_config(repo_root, config)
    return True


def remove_ignore_pattern(repo_root: Path, pattern: str) -> bool:
    """Remove a pattern from the ignore list.

    Args:
        repo_root: The root directory of the git repository.
        pattern: File pattern to remove.

    Returns:
        True if pattern was found and removed, False otherwise.
    """
    config = load_config(repo_root)
    if pattern in config.get("ignore", []):
        config["ignore"].remove(pattern)
        save_config(repo_root, config)
        return True
    return False
