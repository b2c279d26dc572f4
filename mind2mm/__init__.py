"""mind2mm: Convert between dotMind and freemind mind maps.

dotMind (.mind) files are zip archives holding a single ``map.json``;
freemind (.mm) files are plain XML. Both project onto the same tree of
labelled nodes.

Usage:
    import mind2mm

    # Whole-file conversion
    mind2mm.convert_dotmind_to_freemind("ideas.mind", "ideas.mm")
    mind2mm.convert_freemind_to_dotmind("ideas.mm", "ideas.mind")

    # Work with the tree directly
    doc = mind2mm.decode_xml(open("ideas.mm", "rb").read())
    for node in doc.walk():
        print(node.text, len(node.children))
"""

__version__ = "0.1.0"

from .models import Document, Node
from .errors import (
    ArchiveIOError,
    ConversionError,
    DecodeError,
    FileIOError,
    PathTraversalError,
)
from .archive import pack, unpack
from .reader import decode_json, decode_xml
from .writer import encode_json, encode_xml
from .config import ConvertOptions
from .convert import (
    DOTMIND_VERSION,
    FREEMIND_VERSION,
    convert,
    convert_dotmind_to_freemind,
    convert_freemind_to_dotmind,
    dotmind_to_freemind,
    freemind_to_dotmind,
)

__all__ = [
    "Document",
    "Node",
    "ConversionError",
    "PathTraversalError",
    "ArchiveIOError",
    "DecodeError",
    "FileIOError",
    "pack",
    "unpack",
    "decode_json",
    "decode_xml",
    "encode_json",
    "encode_xml",
    "ConvertOptions",
    "DOTMIND_VERSION",
    "FREEMIND_VERSION",
    "convert",
    "convert_dotmind_to_freemind",
    "convert_freemind_to_dotmind",
    "dotmind_to_freemind",
    "freemind_to_dotmind",
]
