from __future__ import annotations

import logging
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)


class _SmartDumper(yaml.SafeDumper):
    pass


def _is_scalar(x: Any) -> bool:
    return isinstance(x, (int, float, bool, str))


def _list_representer(dumper: yaml.Dumper, seq: list):
    # 1) component pairs / triples: [a, b] or [a, b, c] -> flow
    if len(seq) in (2, 3) and all(_is_scalar(v) for v in seq):
        return dumper.represent_sequence("tag:yaml.org,2002:seq", seq, flow_style=True)

    # 2) Default: block (PyYAML style standard for lists)
    return dumper.represent_sequence("tag:yaml.org,2002:seq", seq, flow_style=False)


_SmartDumper.add_representer(list, _list_representer)


def dump_yaml(data: Dict[str, Any], path: str) -> None:
    """Write `data` to `path` with PyYAML's safe dumper, keeping key order."""
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(
            data,
            f,
            Dumper=_SmartDumper,
            sort_keys=False,
            default_flow_style=False,
            width=120,
            indent=2,
        )
    logger.debug("wrote %d top-level keys to %s", len(data), path)


def load_yaml(path: str) -> Dict[str, Any]:
    """Read a YAML mapping from `path`."""
    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f)
    if not isinstance(data, dict):
        raise ValueError("YAML root must be a mapping (dict).")
    logger.debug("read %d top-level keys from %s", len(data), path)
    return data
