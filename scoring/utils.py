"""
Scoring utility functions.
Provides settings loading and small numeric helpers used by scoring.metrics.
"""
from typing import Dict, Any, Optional
import logging
import os
import yaml

logger = logging.getLogger(__name__)

# filename used for the landscape YAML configuration
SETTINGS_FILENAME = 'landscape.yaml'

# environment variable prefix for per-key overrides, e.g. LANDSCAPE_CONTRIBUTOR_THRESHOLD_COMMITS=2
ENV_PREFIX = 'LANDSCAPE_'

DEFAULT_SETTINGS = {
    'windows': [30, 90, 180],
    # contributors with fewer commits are left out of contributor and project tables
    'contributor_threshold_commits': 1,
    # projects with fewer qualifying contributors are left out of the projects table
    'project_threshold_contributors': 1,
    'top_connections_limit': 50,
}


def default_settings_path() -> str:
    return os.path.join(os.path.dirname(os.path.dirname(__file__)), 'config', SETTINGS_FILENAME)


def parse_windows(value: Any) -> list:
    """Accept a list of ints or a comma separated string like '30,90,180'."""
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(',') if p.strip()]
    elif isinstance(value, (list, tuple)):
        parts = list(value)
    else:
        raise ValueError(f"windows must be a list or comma separated string, got {value!r}")
    try:
        windows = [int(p) for p in parts]
    except (TypeError, ValueError):
        raise ValueError(f"windows must be whole numbers of days, got {value!r}")
    if not windows or any(w < 0 for w in windows):
        raise ValueError(f"windows must be non-negative day counts, got {value!r}")
    return windows


def _coerce(key: str, value: Any) -> Any:
    if key == 'windows':
        return parse_windows(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValueError(f"setting '{key}' must be an integer, got {value!r}")


def _read_yaml(path: str) -> Dict[str, Any]:
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        logger.warning("Could not read settings from %s, using defaults: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        logger.warning("Settings file %s is not a mapping, using defaults", path)
        return {}
    return data


def load_settings(path: Optional[str] = None, overrides: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    """
    Load landscape settings.

    Precedence: explicit overrides (e.g. CLI flags) > LANDSCAPE_* environment
    variables > YAML file > DEFAULT_SETTINGS. Unknown keys are ignored.
    Raises ValueError for values that cannot be coerced.
    """
    if not path:
        path = default_settings_path()
    settings = {k: (list(v) if isinstance(v, list) else v) for k, v in DEFAULT_SETTINGS.items()}

    data = _read_yaml(path) if os.path.exists(path) else {}
    for key in DEFAULT_SETTINGS:
        if data.get(key) is not None:
            settings[key] = _coerce(key, data[key])

    for key in DEFAULT_SETTINGS:
        env_val = os.getenv(ENV_PREFIX + key.upper())
        if env_val:
            settings[key] = _coerce(key, env_val)

    for key, value in (overrides or {}).items():
        if key in DEFAULT_SETTINGS and value is not None:
            settings[key] = _coerce(key, value)
    return settings


def safe_percentage(part: float, total: float) -> float:
    """Percentage of part in total; 0.0 when total is zero."""
    if not total:
        return 0.0
    return 100.0 * part / total
