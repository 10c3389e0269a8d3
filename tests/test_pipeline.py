"""Test the end-to-end icon pipeline."""

import pytest
from PIL import Image

from iconkit import generate
from iconkit.constants import (
    ANDROID_DENSITIES,
    IOS_APPICON_SLOTS,
    MACOS_ICNS_SIZES,
    WINDOWS_ICO_SIZES,
)
from iconkit.core import pipeline as pipeline_module
from iconkit.core.encoders import read_icns_entries, read_ico_entries
from iconkit.core.errors import (
    ContainerEncodeFailure,
    DecodeFailure,
    DirectoryCreationFailure,
    MigrationFailure,
    SourceNotFound,
)
from iconkit.core.pipeline import IconPipeline
from iconkit.core.types import MaskStyle, PipelineState, Platform, parse_platforms
from iconkit.models.icon_models import GenerationReport


def test_parse_platforms():
    assert parse_platforms(["desktop"]) == [Platform.WINDOWS, Platform.MACOS]
    assert parse_platforms(["Android", "mobile"]) == [Platform.ANDROID, Platform.IOS]
    assert parse_platforms("macos") == [Platform.MACOS]
    assert parse_platforms([Platform.IOS]) == [Platform.IOS]
    with pytest.raises(ValueError):
        parse_platforms(["linux"])
    with pytest.raises(ValueError):
        parse_platforms([])


def test_desktop_produces_one_ico_and_one_icns(make_source, tmp_path):
    target = tmp_path / "out"
    result = generate(make_source(), target, ["desktop"], apply_mask=True)

    assert result.success, result.message
    assert sorted(p.name for p in target.iterdir()) == ["icon.icns", "icon.ico"]

    ico = read_ico_entries(target / "icon.ico")
    icns = read_icns_entries(target / "icon.icns")
    assert [e.declared_size for e in ico] == list(WINDOWS_ICO_SIZES)
    assert [e.declared_size for e in icns] == list(MACOS_ICNS_SIZES)
    assert all(e.is_consistent for e in ico + icns)

    report = result.data
    assert isinstance(report, GenerationReport)
    assert report.migration is None
    assert [a.platform for a in report.artifacts] == [Platform.WINDOWS, Platform.MACOS]


def test_android_run_migrates_into_native_layout(make_source, tmp_path):
    target = tmp_path / "app" / "icons"
    result = generate(make_source(), target, ["android"], apply_mask=True)

    assert result.success, result.message
    parent = tmp_path / "app"
    for density in ANDROID_DENSITIES:
        assert (parent / "gen" / "android" / f"mipmap-{density}" / "ic_launcher.png").is_file()
        assert not (target / f"mipmap-{density}").exists()
    assert (target / "icon_512x512.png").is_file()
    assert (target / "icon_1024x1024.png").is_file()

    with Image.open(parent / "gen" / "android" / "mipmap-xxxhdpi" / "ic_launcher.png") as im:
        assert im.size == (192, 192)
        assert im.getpixel((0, 0))[3] == 0

    assert len(result.data.migration.moved) == 5


def test_ios_run_moves_appicons(make_source, tmp_path):
    target = tmp_path / "icons"
    result = generate(make_source(), target, ["ios"], apply_mask=True)

    assert result.success, result.message
    apple = tmp_path / "gen" / "apple"
    assert len(list(apple.glob("AppIcon-*.png"))) == len(IOS_APPICON_SLOTS)
    assert not list(target.glob("AppIcon-*.png"))

    with Image.open(apple / "AppIcon-83.5x83.5@2x.png") as im:
        assert im.size == (167, 167)
        # iOS icons stay square and opaque
        assert im.getpixel((0, 0))[3] == 255


def test_store_icons_written_once_for_both_mobile_platforms(make_source, tmp_path):
    result = generate(make_source(), tmp_path / "icons", ["mobile"], apply_mask=False)

    assert result.success, result.message
    names = [a.path.name for a in result.data.artifacts]
    assert names.count("icon_512x512.png") == 1
    assert names.count("icon_1024x1024.png") == 1


def test_each_platform_size_appears_once():
    pipeline = IconPipeline()
    for platform in Platform:
        sizes = [s.size for s in pipeline.specs_for(platform, True)]
        assert len(sizes) == len(set(sizes))
        assert sizes == sorted(sizes)


def test_mask_styles_follow_request():
    pipeline = IconPipeline()
    assert {s.mask_style for s in pipeline.specs_for(Platform.MACOS, True)} == {MaskStyle.SQUIRCLE}
    assert {s.mask_style for s in pipeline.specs_for(Platform.MACOS, False)} == {MaskStyle.NONE}
    assert {s.mask_style for s in pipeline.specs_for(Platform.WINDOWS, True)} == {MaskStyle.NONE}

    android = {s.size: s.mask_style for s in pipeline.specs_for(Platform.ANDROID, True)}
    assert android[48] == MaskStyle.ROUNDED_RECT
    assert android[512] == MaskStyle.NONE


def test_macos_content_is_padded_and_masked(make_source, tmp_path):
    pipeline = IconPipeline()
    specs = {s.size: s for s in pipeline.specs_for(Platform.MACOS, True)}
    assert specs[256].content_fraction == 0.82

    result = pipeline.generate(make_source((512, 512)), tmp_path, ["macos"], True)
    assert result.success

    with Image.open(tmp_path / "icon.icns") as im:
        largest = im.convert("RGBA")
    assert largest.size == (1024, 1024)
    # transparent margin around opaque artwork
    assert largest.getpixel((40, 512))[3] == 0
    assert largest.getpixel((512, 512))[3] == 255


def test_missing_source(tmp_path):
    pipeline = IconPipeline()
    result = pipeline.generate(tmp_path / "nope.png", tmp_path / "out", ["desktop"])

    assert not result.success
    assert isinstance(result.error, SourceNotFound)
    assert result.error.path == tmp_path / "nope.png"
    assert pipeline.state == PipelineState.FAILED
    assert pipeline.history == [PipelineState.IDLE, PipelineState.DECODING, PipelineState.FAILED]
    assert not (tmp_path / "out").exists()


def test_corrupt_source(tmp_path):
    bad = tmp_path / "logo.png"
    bad.write_text("not an image")

    result = generate(bad, tmp_path / "out", ["windows"])

    assert not result.success
    assert isinstance(result.error, DecodeFailure)


def test_unknown_platform_is_rejected(make_source, tmp_path):
    result = generate(make_source(), tmp_path / "out", ["linux"])

    assert not result.success
    assert isinstance(result.error, ValueError)
    assert not (tmp_path / "out").exists()


def test_target_dir_that_is_a_file(make_source, tmp_path):
    target = tmp_path / "icons"
    target.write_bytes(b"not a directory")
    pipeline = IconPipeline()

    result = pipeline.generate(make_source(), target, ["windows"])

    assert not result.success
    assert isinstance(result.error, DirectoryCreationFailure)
    assert result.error.operation == "mkdir"
    assert result.error.path == target
    assert pipeline.state == PipelineState.FAILED


def test_migration_failure_stops_run(make_source, tmp_path):
    target = tmp_path / "app" / "icons"
    target.mkdir(parents=True)
    (tmp_path / "app" / "gen").write_bytes(b"not a directory")
    pipeline = IconPipeline()

    result = pipeline.generate(make_source(), target, ["android"])

    assert not result.success
    assert isinstance(result.error, MigrationFailure)
    assert result.error.operation == "mkdir"
    assert pipeline.history[-2:] == [PipelineState.MIGRATING, PipelineState.FAILED]
    # Generated files stay where they were written
    assert (target / "mipmap-mdpi" / "ic_launcher.png").is_file()


def test_first_failure_aborts_without_rollback(make_source, tmp_path, monkeypatch):
    def broken_icns(path, images, platform):
        raise ContainerEncodeFailure("encoder fault", path, "encode")

    monkeypatch.setattr(pipeline_module, "write_icns", broken_icns)
    target = tmp_path / "out"
    pipeline = IconPipeline()

    result = pipeline.generate(make_source(), target, ["windows", "macos", "android"])

    assert not result.success
    assert isinstance(result.error, ContainerEncodeFailure)
    assert (target / "icon.ico").exists()
    assert not (target / "mipmap-mdpi").exists()
    assert pipeline.history[-1] == PipelineState.FAILED
    assert PipelineState.MIGRATING not in pipeline.history


def test_progress_callback(make_source, tmp_path):
    calls = []
    result = generate(
        make_source(),
        tmp_path / "icons",
        ["windows", "android"],
        progress_callback=lambda current, total, message: calls.append((current, total)),
    )

    assert result.success
    assert calls == [(1, 3), (2, 3), (3, 3)]


def test_pipeline_runs_once(make_source, tmp_path):
    pipeline = IconPipeline()
    assert pipeline.generate(make_source(), tmp_path, ["windows"]).success
    assert pipeline.state == PipelineState.DONE
    with pytest.raises(RuntimeError):
        pipeline.generate(make_source(), tmp_path, ["windows"])
