"""
Checks run over the stored configuration before a command uses it.
"""

from pathlib import Path

from .paths import PathSettings
from .types import ValidationResult


def validate_paths(paths: PathSettings) -> ValidationResult:
    """Validate configured paths and prune stale recent files.

    Missing game configs are warnings: type resolution then falls back to
    placeholder references instead of failing.
    """
    result = ValidationResult()

    for label, config_path in (
        ("Game config", paths.game_config_path),
        ("Server config", paths.server_config_path),
        ("Client config", paths.client_config_path),
    ):
        if not Path(config_path).is_file():
            result.warnings.append(f"{label} not found: {config_path}")

    output_dir = paths.maps_output_dir
    if output_dir.exists() and not output_dir.is_dir():
        result.errors.append(f"Maps output path is not a directory: {output_dir}")

    for missing in paths.prune_recent_files():
        result.warnings.append(f"Recent file no longer exists: {missing}")

    return result
