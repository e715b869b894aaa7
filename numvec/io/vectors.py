from __future__ import annotations

import logging
from typing import Dict, Mapping

from numvec.geometry.vector2 import Vector2
from numvec.io._yaml import dump_yaml, load_yaml

logger = logging.getLogger(__name__)


def save_vectors(vectors: Mapping[str, Vector2], path: str) -> None:
    """
    Write named vectors to a YAML file under the root key ``vectors``.

    Each entry is stored with ``Vector2.to_dict``, so the numeric
    representation (int / float32 / float64 / registered custom type)
    survives the round trip.
    """
    dump_yaml({"vectors": {str(k): v.to_dict() for k, v in vectors.items()}}, path)
    logger.debug("saved %d vectors to %s", len(vectors), path)


def load_vectors(path: str) -> Dict[str, Vector2]:
    """Read vectors written by `save_vectors`."""
    d = load_yaml(path)
    try:
        entries = d["vectors"]
    except KeyError as e:
        raise KeyError("The specified YAML file does not contain a field called 'vectors'") from e
    vectors = {str(k): Vector2.from_dict(v) for k, v in (entries or {}).items()}
    logger.debug("loaded %d vectors from %s", len(vectors), path)
    return vectors
