import logging
import stat
from pathlib import Path
from typing import Dict, List, Union

from .templates import TEMPLATES

logger = logging.getLogger("bluegreen.generator")

EXECUTABLE_SUFFIXES = (".sh",)


def get_templates() -> Dict[str, str]:
    """Return a copy of the filename -> content template map."""
    return dict(TEMPLATES)


def write_templates(output_dir: Union[str, Path]) -> List[Path]:
    """
    Write every template file under output_dir.

    Existing files are overwritten. Parent directories are created as
    needed. Any OSError (unwritable path, a directory in the way) is
    propagated to the caller.

    Args:
        output_dir: Destination directory

    Returns:
        Paths written, in template order
    """
    root = Path(output_dir)
    root.mkdir(parents=True, exist_ok=True)

    written = []
    for name, content in TEMPLATES.items():
        path = root / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))

        if name.endswith(EXECUTABLE_SUFFIXES):
            mode = path.stat().st_mode
            path.chmod(mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)

        logger.debug(f"Wrote {path}")
        written.append(path)

    logger.info(f"Generated {len(written)} files in {root}")
    return written
