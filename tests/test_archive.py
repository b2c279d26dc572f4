"""Tests for zip unpack/pack."""

import os
import stat
import zipfile

import pytest

from mind2mm import ArchiveIOError, PathTraversalError, pack, unpack


def test_unpack_files_and_directories(tmp_path):
    archive = tmp_path / "in.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("map.json", '{"root": {}}')
        zf.writestr("assets/", "")
        zf.writestr("assets/img/logo.txt", "logo")

    dest = tmp_path / "out"
    dest.mkdir()
    written = unpack(archive, dest)

    assert written == [dest / "map.json", dest / "assets/", dest / "assets/img/logo.txt"]
    assert (dest / "map.json").read_text() == '{"root": {}}'
    assert (dest / "assets").is_dir()
    assert (dest / "assets" / "img" / "logo.txt").read_text() == "logo"


def test_unpack_rejects_parent_traversal(tmp_path):
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("../escape.txt", "gotcha")

    dest = tmp_path / "dest"
    dest.mkdir()
    with pytest.raises(PathTraversalError):
        unpack(archive, dest)

    assert not (tmp_path / "escape.txt").exists()
    assert list(dest.iterdir()) == []


def test_unpack_rejects_absolute_entry(tmp_path):
    outside = tmp_path / "outside.txt"
    archive = tmp_path / "evil.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(zipfile.ZipInfo(str(outside)), "gotcha")

    dest = tmp_path / "dest"
    dest.mkdir()
    with pytest.raises(PathTraversalError):
        unpack(archive, dest)
    assert not outside.exists()


def test_unpack_stops_at_first_bad_entry(tmp_path):
    archive = tmp_path / "mixed.zip"
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr("ok.txt", "fine")
        zf.writestr("sub/../../bad.txt", "bad")
        zf.writestr("later.txt", "never")

    dest = tmp_path / "dest"
    dest.mkdir()
    with pytest.raises(PathTraversalError):
        unpack(archive, dest)

    # earlier siblings stay, nothing after the bad entry is written
    assert (dest / "ok.txt").exists()
    assert not (dest / "later.txt").exists()
    assert not (tmp_path / "bad.txt").exists()


@pytest.mark.skipif(os.name != "posix", reason="permission bits are POSIX only")
def test_unpack_preserves_mode(tmp_path):
    archive = tmp_path / "mode.zip"
    info = zipfile.ZipInfo("script.sh")
    info.external_attr = (stat.S_IFREG | 0o750) << 16
    with zipfile.ZipFile(archive, "w") as zf:
        zf.writestr(info, "#!/bin/sh\n")

    dest = tmp_path / "dest"
    dest.mkdir()
    unpack(archive, dest)
    assert stat.S_IMODE((dest / "script.sh").stat().st_mode) == 0o750


def test_unpack_bad_archive(tmp_path):
    bogus = tmp_path / "bogus.mind"
    bogus.write_bytes(b"not a zip file")
    with pytest.raises(ArchiveIOError):
        unpack(bogus, tmp_path)

    with pytest.raises(ArchiveIOError):
        unpack(tmp_path / "missing.mind", tmp_path)


def test_pack_named_entries(tmp_path):
    source = tmp_path / "staging" / "payload.json"
    source.parent.mkdir()
    source.write_text('{"a": 1}')

    archive = pack(tmp_path / "out.mind", [("map.json", source)])

    with zipfile.ZipFile(archive) as zf:
        assert zf.namelist() == ["map.json"]
        info = zf.getinfo("map.json")
        assert info.compress_type == zipfile.ZIP_DEFLATED
        assert zf.read("map.json") == b'{"a": 1}'


def test_pack_plain_path_keeps_given_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    (tmp_path / "map.json").write_text("{}")
    (tmp_path / "notes.txt").write_text("hello")

    pack("out.mind", ["map.json", "notes.txt"])

    with zipfile.ZipFile(tmp_path / "out.mind") as zf:
        assert zf.namelist() == ["map.json", "notes.txt"]


def test_pack_missing_file_leaves_partial_archive(tmp_path):
    good = tmp_path / "good.txt"
    good.write_text("ok")
    archive = tmp_path / "out.zip"

    with pytest.raises(ArchiveIOError):
        pack(archive, [("good.txt", good), ("gone.txt", tmp_path / "gone.txt")])
    assert archive.exists()


def test_pack_then_unpack(tmp_path):
    source = tmp_path / "map.json"
    source.write_text('{"root": {"title": "x"}}')
    archive = pack(tmp_path / "x.mind", [("map.json", source)])

    dest = tmp_path / "dest"
    dest.mkdir()
    assert unpack(archive, dest) == [dest / "map.json"]
    assert (dest / "map.json").read_text() == source.read_text()


def corrupt_deflated_archive(path):
    """Write a deflated single-entry zip, then scramble its compressed data."""
    with zipfile.ZipFile(path, "w", zipfile.ZIP_DEFLATED) as zf:
        zf.writestr("map.json", '{"root": {"title": "padding"}}' * 200)

    raw = bytearray(path.read_bytes())
    data_start = 30 + len("map.json")  # local header + name, no extra field
    for i in range(data_start, data_start + 40):
        raw[i] ^= 0xFF
    path.write_bytes(bytes(raw))
    return path


def test_unpack_corrupt_entry_is_archive_error(tmp_path):
    archive = corrupt_deflated_archive(tmp_path / "corrupt.mind")
    dest = tmp_path / "dest"
    dest.mkdir()
    with pytest.raises(ArchiveIOError):
        unpack(archive, dest)


def test_pack_bare_absolute_path_drops_leading_slash(tmp_path):
    source = tmp_path / "map.json"
    source.write_text("{}")
    archive = pack(tmp_path / "abs.mind", [str(source)])

    with zipfile.ZipFile(archive) as zf:
        assert zf.namelist() == [source.as_posix().lstrip("/")]
