"""Options controlling a single conversion."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

from .reader import DEFAULT_MAX_DEPTH


@dataclass
class ConvertOptions:
    """Per-conversion settings, passed explicitly to the convert functions.

    Attributes:
        debug: Log the decoded version, root text and node count at INFO.
        keep_manifest: Write ``map.json`` into the current directory when
            building a dotMind file and leave it there afterwards, as older
            releases did. By default it lives in a temporary directory.
        temp_dir: Parent directory for temporary files (system default if None).
        max_depth: Deepest node nesting accepted when decoding.
    """
    debug: bool = False
    keep_manifest: bool = False
    temp_dir: Optional[Union[str, Path]] = None
    max_depth: int = DEFAULT_MAX_DEPTH
