"""Test icon directory discovery."""

from iconkit.core.icons_dir import detect_mobile_targets, find_icons_dir
from iconkit.core.types import Platform


def test_conventional_path_wins(tmp_path):
    (tmp_path / "src-tauri" / "icons").mkdir(parents=True)
    (tmp_path / "aaa" / "icons").mkdir(parents=True)

    assert find_icons_dir(tmp_path) == tmp_path / "src-tauri" / "icons"


def test_recursive_search(tmp_path):
    target = tmp_path / "packages" / "desktop" / "icons"
    target.mkdir(parents=True)

    assert find_icons_dir(tmp_path) == target


def test_shallowest_match_first(tmp_path):
    (tmp_path / "a" / "b" / "icons").mkdir(parents=True)
    (tmp_path / "z" / "icons").mkdir(parents=True)

    assert find_icons_dir(tmp_path) == tmp_path / "z" / "icons"


def test_skips_dependency_folders(tmp_path):
    (tmp_path / "node_modules" / "pkg" / "icons").mkdir(parents=True)
    (tmp_path / ".git" / "icons").mkdir(parents=True)

    assert find_icons_dir(tmp_path) is None


def test_respects_max_depth(tmp_path):
    (tmp_path / "a" / "b" / "c" / "icons").mkdir(parents=True)

    assert find_icons_dir(tmp_path, max_depth=3) is None
    assert find_icons_dir(tmp_path, max_depth=4) == tmp_path / "a" / "b" / "c" / "icons"


def test_missing_root(tmp_path):
    assert find_icons_dir(tmp_path / "missing") is None


def test_detect_mobile_targets(tmp_path):
    assert detect_mobile_targets(tmp_path) == []

    (tmp_path / "src-tauri" / "gen" / "apple").mkdir(parents=True)
    assert detect_mobile_targets(tmp_path) == [Platform.IOS]

    (tmp_path / "src-tauri" / "gen" / "android").mkdir(parents=True)
    assert detect_mobile_targets(tmp_path) == [Platform.ANDROID, Platform.IOS]
