from collections.abc import Iterable
from pathlib import Path

from phpdock.libs.classes.generator import GeneratedFile


def write_files(
    files: Iterable[GeneratedFile],
    output_dir: Path,
    *,
    overwrite: bool = False,
) -> list[Path]:
    files = list(files)
    targets = [output_dir / file.filename for file in files]

    if not overwrite:
        for target in targets:
            if target.exists():
                raise FileExistsError(f"Refusing to overwrite existing file: {target}")

    for file, target in zip(files, targets, strict=True):
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(file.contents, encoding="utf-8")

    return targets
