"""Read an ImportConfig from a YAML file."""

from __future__ import annotations

from pathlib import Path

import yaml

from .schema import ImportConfig


def load_config(path: Path | str) -> ImportConfig:
    """Validate the YAML mapping at *path* as an ImportConfig.

    An empty file yields the defaults. A relative ``glottolog_languoids``
    path is taken relative to the directory holding the config file.
    """
    path = Path(path)
    with path.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
    cfg = ImportConfig.model_validate(raw)
    languoids = cfg.glottolog_languoids
    if languoids is not None and not languoids.is_absolute():
        cfg = cfg.model_copy(update={"glottolog_languoids": path.parent / languoids})
    return cfg
