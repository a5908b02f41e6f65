"""Manifest and sidecar I/O — atomic replace-on-write, YAML or JSON by suffix."""

from __future__ import annotations

import json
import os
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import IO, Any, TypeVar

from pydantic import BaseModel
from ruamel.yaml import YAML

ModelT = TypeVar("ModelT", bound=BaseModel)

YAML_SUFFIXES = {".yaml", ".yml"}

_yaml = YAML()
_yaml.default_flow_style = False
_yaml.width = 120


@contextmanager
def atomic_open(path: Path | str) -> Iterator[IO[str]]:
    """Write through a hidden sibling temp file that replaces ``path`` on success.

    If the block raises, the temp file is removed and ``path`` is left as it
    was, so an interrupted save never truncates a manifest.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as handle:
            yield handle
        tmp_path.replace(path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise


def read_yaml(path: Path | str) -> dict:
    with open(path, encoding="utf-8") as f:
        data = _yaml.load(f) or {}
    # ruamel returns CommentedMap/CommentedSeq; round-trip through JSON for plain types
    return json.loads(json.dumps(data))


def write_yaml(path: Path | str, data: dict) -> None:
    with atomic_open(path) as f:
        _yaml.dump(data, f)


def read_json(path: Path | str) -> Any:
    with open(path, encoding="utf-8") as f:
        return json.load(f)


def write_json(path: Path | str, data: Any) -> None:
    with atomic_open(path) as f:
        json.dump(data, f, indent=2, ensure_ascii=False)
        f.write("\n")


def _is_yaml(path: Path) -> bool:
    return path.suffix.lower() in YAML_SUFFIXES


def load_model(path: Path | str, model_cls: type[ModelT]) -> ModelT:
    """Validate a YAML (``.yaml``/``.yml``) or JSON document into a model."""
    path = Path(path)
    data = read_yaml(path) if _is_yaml(path) else read_json(path)
    return model_cls.model_validate(data)


def save_model(path: Path | str, model: BaseModel) -> None:
    """Dump a model in JSON mode and write it atomically, format by suffix."""
    path = Path(path)
    data = model.model_dump(mode="json")
    if _is_yaml(path):
        write_yaml(path, data)
    else:
        write_json(path, data)
