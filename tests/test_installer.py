from __future__ import annotations

import io
import os
import zipfile
from pathlib import Path

import pytest

from addon_updater.common.errors import (
    ArchiveOpenError,
    CleanupIOError,
    ConflictError,
    ExtractionIOError,
)
from addon_updater.core.installer import (
    check_conflicts,
    install_addon,
    sanitize_path,
    scan_owned_folders,
)


def tree(root: Path):
    """Return {relative posix path: bytes} for every file below root."""
    result = {}
    for path in sorted(root.rglob("*")):
        if path.is_file():
            result[path.relative_to(root).as_posix()] = path.read_bytes()
    return result


@pytest.mark.parametrize(
    "name, expected",
    [
        ("AddonA/init.lua", ("AddonA", "init.lua")),
        ("./AddonA/./init.lua", ("AddonA", "init.lua")),
        ("/AddonA/init.lua", ("AddonA", "init.lua")),
        ("AddonA//sub/data.txt", ("AddonA", "sub", "data.txt")),
        ("AddonA/sub/../init.lua", ("AddonA", "init.lua")),
        ("AddonA\\sub\\data.txt", ("AddonA", "sub", "data.txt")),
        ("C:/AddonA/init.lua", ("AddonA", "init.lua")),
        ("../AddonA/init.lua", ()),
        ("../../etc/passwd", ()),
        ("a/../../etc/passwd", ()),
        ("a/b/../../c", ("c",)),
        ("..", ()),
        ("/", ()),
        (".", ()),
        ("", ()),
        ("AddonA/..", ()),
    ],
)
def test_sanitize_path(name, expected):
    assert sanitize_path(name).parts == expected


@pytest.mark.parametrize(
    "name",
    ["../../etc/passwd", "../../../x", "a/b/../../../../c", "..\\..\\boot.ini", "/../../root/.ssh/keys"],
)
def test_sanitize_path_never_leaves_root(tmp_path, name):
    root = tmp_path.resolve()
    target = Path(os.path.normpath(root.joinpath(*sanitize_path(name).parts)))
    assert target == root or root in target.parents


def test_scan_example_archive(make_zip):
    data = make_zip([
        ("AddonA/init.lua", b"print('a')"),
        ("AddonA/sub/", b""),
        ("AddonA/sub/data.txt", b"data"),
    ])
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert scan_owned_folders(zf) == ["AddonA"]


def test_scan_is_first_seen_order_and_repeatable(make_zip):
    data = make_zip([
        ("Beta/a.lua", b""),
        ("Alpha/a.lua", b""),
        ("Beta/b.lua", b""),
        ("Gamma/", b""),
        ("./Alpha/../Delta/x.lua", b""),
        ("../../", b""),
    ])
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        first = scan_owned_folders(zf)
        second = scan_owned_folders(zf)
    assert first == ["Beta", "Alpha", "Delta"]
    assert second == first


def test_scan_counts_top_level_files(make_zip):
    data = make_zip([("README.txt", b"hi"), ("Addon/x.lua", b"")])
    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert scan_owned_folders(zf) == ["README.txt", "Addon"]


def test_install_example_archive(make_zip, addons_dir):
    data = make_zip([
        ("AddonA/init.lua", b"print('a')"),
        ("AddonA/sub/", b""),
        ("AddonA/sub/data.txt", b"data"),
    ])

    folders = install_addon(data, addons_dir, [])

    assert folders == ["AddonA"]
    assert tree(addons_dir) == {
        "AddonA/init.lua": b"print('a')",
        "AddonA/sub/data.txt": b"data",
    }


def test_traversal_entry_is_contained(make_zip, tmp_path, addons_dir):
    data = make_zip([
        ("../../escape.txt", b"nope"),
        ("..", b"nope"),
        ("Addon/ok.lua", b"ok"),
    ])

    folders = install_addon(data, addons_dir)

    assert folders == ["Addon"]
    assert not (tmp_path / "escape.txt").exists()
    assert not (tmp_path.parent / "escape.txt").exists()
    assert tree(addons_dir) == {"Addon/ok.lua": b"ok"}


def test_entry_sanitizing_to_nothing_is_skipped(make_zip, addons_dir):
    data = make_zip([("../..", b"nothing"), ("Addon/a.lua", b"a")])

    assert install_addon(data, addons_dir) == ["Addon"]
    assert tree(addons_dir) == {"Addon/a.lua": b"a"}


def test_conflict_with_unowned_folder_leaves_destination_untouched(make_zip, addons_dir):
    foo = addons_dir / "Foo"
    foo.mkdir()
    (foo / "user.lua").write_bytes(b"mine")
    (addons_dir / "Other").mkdir()
    data = make_zip([("Foo/addon.lua", b"theirs")])

    before = tree(addons_dir)
    with pytest.raises(ConflictError) as exc:
        install_addon(data, addons_dir, ["Other"])

    assert exc.value.folder == "Foo"
    assert "Foo already exists" in str(exc.value)
    assert tree(addons_dir) == before
    assert (addons_dir / "Other").is_dir()


def test_conflict_is_checked_for_all_folders_before_reaping(make_zip, addons_dir):
    (addons_dir / "Mine").mkdir()
    (addons_dir / "Mine" / "a.lua").write_bytes(b"a")
    (addons_dir / "Theirs").mkdir()
    data = make_zip([("Mine/a.lua", b"new"), ("Theirs/b.lua", b"b")])

    with pytest.raises(ConflictError):
        install_addon(data, addons_dir, ["Mine"])

    assert (addons_dir / "Mine" / "a.lua").read_bytes() == b"a"


def test_check_conflicts_allows_owned_and_missing(addons_dir):
    (addons_dir / "Owned").mkdir()
    check_conflicts(addons_dir, ["Owned", "New"], ["Owned"])


def test_reinstall_is_idempotent(make_zip, addons_dir):
    data = make_zip([
        ("Addon/init.lua", b"1"),
        ("Addon/lib/util.lua", b"2"),
        ("Addon_Options/opt.lua", b"3"),
    ])

    first = install_addon(data, addons_dir, [])
    first_tree = tree(addons_dir)
    second = install_addon(data, addons_dir, first)

    assert second == first == ["Addon", "Addon_Options"]
    assert tree(addons_dir) == first_tree


def test_update_replaces_previously_owned_folders(make_zip, addons_dir):
    old = addons_dir / "OldUI"
    old.mkdir()
    (old / "stale.lua").write_bytes(b"old")
    (addons_dir / "Unrelated").mkdir()
    data = make_zip([("NewUI/core.lua", b"new")])

    folders = install_addon(data, addons_dir, ["OldUI"])

    assert folders == ["NewUI"]
    assert not old.exists()
    assert (addons_dir / "NewUI" / "core.lua").read_bytes() == b"new"
    assert (addons_dir / "Unrelated").is_dir()


def test_update_removes_stale_files_inside_owned_folder(make_zip, addons_dir):
    first = install_addon(make_zip([("Addon/a.lua", b"a"), ("Addon/gone.lua", b"x")]), addons_dir)
    install_addon(make_zip([("Addon/a.lua", b"a2")]), addons_dir, first)

    assert tree(addons_dir) == {"Addon/a.lua": b"a2"}


def test_owned_single_file_is_removed(make_zip, addons_dir):
    (addons_dir / "loose.txt").write_bytes(b"x")

    assert install_addon(make_zip([("Addon/a.lua", b"a")]), addons_dir, ["loose.txt"]) == ["Addon"]
    assert not (addons_dir / "loose.txt").exists()


def test_missing_owned_folder_is_a_cleanup_error(make_zip, addons_dir):
    data = make_zip([("Addon/a.lua", b"a")])

    with pytest.raises(CleanupIOError):
        install_addon(data, addons_dir, ["Vanished"])

    assert not (addons_dir / "Addon").exists()


def test_owned_names_that_escape_root_are_refused(make_zip, tmp_path, addons_dir):
    outside = tmp_path / "precious"
    outside.mkdir()
    data = make_zip([("Addon/a.lua", b"a")])

    with pytest.raises(CleanupIOError):
        install_addon(data, addons_dir, ["../precious"])

    assert outside.is_dir()


def test_invalid_archive_raises_open_error(addons_dir):
    with pytest.raises(ArchiveOpenError):
        install_addon(b"this is not a zip file", addons_dir)
    assert list(addons_dir.iterdir()) == []


def test_extraction_failure_raises_extraction_error(make_zip, addons_dir):
    # A file entry named like the folder the next entry needs.
    data = make_zip([("Addon", b"file"), ("Addon/a.lua", b"a")])

    with pytest.raises(ExtractionIOError):
        install_addon(data, addons_dir)


def test_accepts_stream_and_open_zipfile(make_zip, addons_dir):
    data = make_zip([("Addon/a.lua", b"a")])

    with io.BytesIO(data) as stream:
        assert install_addon(stream, addons_dir) == ["Addon"]
        assert not stream.closed

    with zipfile.ZipFile(io.BytesIO(data)) as zf:
        assert install_addon(zf, str(addons_dir), ["Addon"]) == ["Addon"]
        # The caller's archive stays open and readable
        assert zf.read("Addon/a.lua") == b"a"


def test_corrupt_entry_data_raises_extraction_error(make_corrupt_zip, addons_dir):
    data = make_corrupt_zip("AddonA/init.lua")

    with pytest.raises(ExtractionIOError, match="AddonA/init.lua"):
        install_addon(data, addons_dir, [])
