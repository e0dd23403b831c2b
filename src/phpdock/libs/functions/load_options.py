from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

from omegaconf import DictConfig, OmegaConf

from phpdock.libs.schemas.options import ProjectOptions

OPTIONS_FILE_SUFFIXES = {".yaml", ".yml", ".json"}


def _load_options_file(path: Path) -> DictConfig:
    if path.suffix not in OPTIONS_FILE_SUFFIXES:
        raise ValueError(f"Unsupported options file format: {path.suffix}")

    conf = OmegaConf.load(path)
    if not isinstance(conf, DictConfig):
        raise ValueError(f"Options file must contain a mapping: {path}")

    return conf


def load_options(
    data: Sequence[Mapping[str, Any]],
    options_files: Sequence[Path],
) -> ProjectOptions:
    """Merge options files, then inline data, into a validated snapshot.

    Later sources win. Options files that do not exist are skipped so the
    default file names can be listed unconditionally.
    """
    conf = OmegaConf.merge(
        OmegaConf.create({}),
        *(_load_options_file(path) for path in options_files if path.exists()),
        *(OmegaConf.create(dict(d)) for d in data),
    )

    return ProjectOptions.model_validate(OmegaConf.to_container(conf, resolve=True))
