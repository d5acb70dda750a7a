from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import yaml

DEFAULT_CONFIG_PATH = Path(__file__).parent / "config.default.yaml"
LOCAL_CONFIG_NAME = "timetracker.yaml"


def _read_yaml_dict(path: Path) -> Dict[str, Any]:
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"YAML root must be a mapping: {path}")
    return data


def deep_merge(base: Any, override: Any) -> Any:
    """Merge override onto base.

    - dicts merge recursively
    - lists are replaced whole
    - scalars override
    """
    if isinstance(base, dict) and isinstance(override, dict):
        merged: Dict[str, Any] = {}
        for key in base.keys():
            if key in override:
                merged[key] = deep_merge(base[key], override[key])
            else:
                merged[key] = base[key]
        for key in override.keys():
            if key not in base:
                merged[key] = override[key]
        return merged
    return override


def resolve_local_config(explicit: Optional[str], cwd: Optional[Path] = None) -> Optional[Path]:
    """Return the local override path: an explicit --config, else ./timetracker.yaml if present."""
    if explicit:
        path = Path(explicit).expanduser()
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path
    candidate = (cwd or Path.cwd()) / LOCAL_CONFIG_NAME
    return candidate if candidate.exists() else None


def load_default_and_local(
    local_path: Optional[Path] = None,
    default_path: Path = DEFAULT_CONFIG_PATH,
) -> Tuple[Dict[str, Any], Dict[str, Any], bool]:
    if not default_path.exists():
        raise FileNotFoundError(f"Missing required config: {default_path}")
    default_cfg = _read_yaml_dict(default_path)

    if local_path is not None and local_path.exists():
        local_cfg = _read_yaml_dict(local_path)
        has_local = True
    else:
        local_cfg = {}
        has_local = False
    return default_cfg, local_cfg, has_local


def load_effective_config(
    local_path: Optional[Path] = None,
    default_path: Path = DEFAULT_CONFIG_PATH,
) -> Tuple[Dict[str, Any], bool]:
    default_cfg, local_cfg, has_local = load_default_and_local(local_path, default_path=default_path)
    merged = deep_merge(default_cfg, local_cfg)
    return merged, has_local


def section(cfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    """Return cfg[name] when it is a mapping, else an empty dict."""
    value = cfg.get(name)
    return value if isinstance(value, dict) else {}
