from __future__ import annotations

import logging
import zipfile
from pathlib import Path
from typing import Iterable

logger = logging.getLogger(__name__)


def bundle_zip(paths: Iterable[Path], zip_path: Path) -> Path:
    """Package the written layer files into one ZIP, flat, by file name."""
    zip_path = Path(zip_path)
    zip_path.parent.mkdir(parents=True, exist_ok=True)
    with zipfile.ZipFile(zip_path, "w", compression=zipfile.ZIP_DEFLATED) as zf:
        for path in paths:
            path = Path(path)
            zf.write(path, arcname=path.name)
            logger.debug("Added %s to %s", path.name, zip_path.name)
    return zip_path
