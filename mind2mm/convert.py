"""Convert between dotMind (.mind) and freemind (.mm) files.

The two formats number their versions differently, so the version is never
carried across: every conversion stamps the target format's own marker.
"""

from __future__ import annotations

import logging
import tempfile
from pathlib import Path
from typing import Optional, Union

from .archive import pack, unpack
from .config import ConvertOptions
from .errors import DecodeError, FileIOError
from .models import Document
from .reader import DEFAULT_MAX_DEPTH, decode_json, decode_xml
from .writer import encode_json, encode_xml

logger = logging.getLogger(__name__)

FREEMIND_VERSION = "1.0.1"
DOTMIND_VERSION = "2.6"
MANIFEST_NAME = "map.json"

PathLike = Union[str, Path]


def dotmind_to_freemind(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH,
                        debug: bool = False) -> bytes:
    """Translate a ``map.json`` payload into freemind XML."""
    document = decode_json(data, max_depth=max_depth)
    _trace(document, debug)
    document.version = FREEMIND_VERSION
    try:
        return encode_xml(document)
    except RecursionError as exc:
        raise DecodeError(f"Node tree is too deep to encode (max_depth={max_depth})") from exc


def freemind_to_dotmind(data: bytes, *, max_depth: int = DEFAULT_MAX_DEPTH,
                        debug: bool = False) -> bytes:
    """Translate freemind XML into a ``map.json`` payload."""
    document = decode_xml(data, max_depth=max_depth)
    _trace(document, debug)
    document.version = DOTMIND_VERSION
    try:
        return encode_json(document)
    except RecursionError as exc:
        raise DecodeError(f"Node tree is too deep to encode (max_depth={max_depth})") from exc


def convert_dotmind_to_freemind(
    input_path: PathLike,
    output_path: PathLike,
    options: Optional[ConvertOptions] = None,
) -> Path:
    """Convert a dotMind archive into a freemind ``.mm`` file.

    The archive is unpacked into a temporary directory that is removed
    whether or not the conversion succeeds.

    Returns:
        The path written to.

    Raises:
        PathTraversalError: If an archive entry escapes the temp directory.
        ArchiveIOError: If the archive can't be read.
        DecodeError: If ``map.json`` is malformed.
        FileIOError: If ``map.json`` is missing or the output can't be written.
    """
    options = options or ConvertOptions()
    output_path = Path(output_path)

    with tempfile.TemporaryDirectory(prefix="mind2mm-", dir=options.temp_dir) as tmp:
        unpack(input_path, tmp)
        data = _read_bytes(Path(tmp) / MANIFEST_NAME)
        xml_bytes = dotmind_to_freemind(data, max_depth=options.max_depth, debug=options.debug)
        _write_bytes(output_path, xml_bytes)

    logger.info("Wrote freemind map %s", output_path)
    return output_path


def convert_freemind_to_dotmind(
    input_path: PathLike,
    output_path: PathLike,
    options: Optional[ConvertOptions] = None,
) -> Path:
    """Convert a freemind ``.mm`` file into a dotMind archive.

    The JSON payload is staged as ``map.json`` in a temporary directory and
    packed under that entry name. With ``options.keep_manifest`` it is staged
    in the current directory instead and left behind.

    Returns:
        The path written to.

    Raises:
        DecodeError: If the input isn't a well-formed freemind document.
        FileIOError: If the input can't be read or ``map.json`` can't be written.
        ArchiveIOError: If the archive can't be created.
    """
    options = options or ConvertOptions()
    output_path = Path(output_path)

    data = _read_bytes(Path(input_path))
    json_bytes = freemind_to_dotmind(data, max_depth=options.max_depth, debug=options.debug)

    if options.keep_manifest:
        manifest = Path.cwd() / MANIFEST_NAME
        _write_bytes(manifest, json_bytes)
        pack(output_path, [(MANIFEST_NAME, manifest)])
    else:
        with tempfile.TemporaryDirectory(prefix="mind2mm-", dir=options.temp_dir) as tmp:
            manifest = Path(tmp) / MANIFEST_NAME
            _write_bytes(manifest, json_bytes)
            pack(output_path, [(MANIFEST_NAME, manifest)])

    logger.info("Wrote dotMind archive %s", output_path)
    return output_path


def convert(
    input_path: PathLike,
    output_path: PathLike,
    *,
    to_freemind: bool = True,
    options: Optional[ConvertOptions] = None,
) -> Path:
    """Convert in either direction; dotMind to freemind by default."""
    if to_freemind:
        return convert_dotmind_to_freemind(input_path, output_path, options)
    return convert_freemind_to_dotmind(input_path, output_path, options)


def _trace(document: Document, debug: bool) -> None:
    if debug:
        logger.info(
            "Decoded map version %r, root %r, %d nodes",
            document.version, document.node.text, document.node_count,
        )


def _read_bytes(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as exc:
        raise FileIOError(f"Cannot read {path}: {exc}") from exc


def _write_bytes(path: Path, data: bytes) -> None:
    try:
        path.write_bytes(data)
    except OSError as exc:
        raise FileIOError(f"Cannot write {path}: {exc}") from exc
