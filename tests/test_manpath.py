import os
from pathlib import Path
from unittest import mock

import pytest

from erlman.errors import ManPathNotFoundError
from erlman.manpath import (
    ManPageSource,
    convert_reference,
    discover_manpath,
    find_erl,
    mandirs,
)


def _fake_erl(man_root: Path) -> Path:
    erl = man_root.parent / "bin" / "erl"
    erl.parent.mkdir(parents=True, exist_ok=True)
    erl.write_text("#!/bin/sh\n")
    return erl


def test_discover_manpath_from_erl(man_root):
    erl = _fake_erl(man_root)
    assert discover_manpath(erl) == man_root


def test_discover_manpath_follows_symlink(man_root, tmp_path):
    erl = _fake_erl(man_root)
    link_dir = tmp_path / "usr" / "bin"
    link_dir.mkdir(parents=True)
    link = link_dir / "erl"
    try:
        os.symlink(erl, link)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")
    assert discover_manpath(link) == man_root.resolve()


def test_discover_manpath_missing(tmp_path):
    erl = tmp_path / "bin" / "erl"
    erl.parent.mkdir()
    erl.write_text("")
    with pytest.raises(ManPathNotFoundError):
        discover_manpath(erl)


def test_find_erl_uses_which():
    with mock.patch("erlman.manpath.shutil.which", return_value="/opt/otp/bin/erl") as which:
        assert find_erl() == Path("/opt/otp/bin/erl")
        which.assert_called_once_with("erl")
    with mock.patch("erlman.manpath.shutil.which", return_value=None):
        assert find_erl("erl27") is None


def test_mandirs_filters_entries(man_root):
    (man_root / "man3.txt").write_text("not a dir")
    (man_root / "html").mkdir()
    assert [p.name for p in mandirs(man_root)] == ["man1", "man3"]


def test_convert_reference():
    assert convert_reference(":crypto.hash") == ["crypto", "hash"]
    assert convert_reference("crypto") == ["crypto"]
    assert convert_reference("::lists.map") == ["lists", "map"]


def test_page_source_finds_section_by_directory(man_root):
    source = ManPageSource(man_root)
    assert source.find(":crypto.hash") == man_root / "man3" / "crypto.3"
    assert source.find(":erl") == man_root / "man1" / "erl.1"
    assert source.read(":crypto").startswith(".TH crypto 3")


def test_page_source_missing_page(man_root, tmp_path):
    assert ManPageSource(man_root).find(":nosuchmodule") is None
    assert ManPageSource(man_root).read(":nosuchmodule") is None
    assert ManPageSource(tmp_path / "absent").read(":crypto") is None
