from __future__ import annotations

import json

import pytest
from PIL import Image

from coverforge import cli


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    preset = tmp_path / "cover-preset.json"
    preset.write_text(json.dumps({"tint": "#204a87", "title1": "LEARNING", "title2": "Perl", "author": "Jane"}))
    Image.new("RGB", (160, 256), (240, 240, 240)).save(tmp_path / "bg.png")
    Image.new("RGBA", (20, 10), (255, 255, 255, 255)).save(tmp_path / "logo.png")
    return tmp_path


def test_parse_args_defaults_and_options():
    opts = cli.parse_args(["p.json", "out", "--background", "bg.png", "--viewport", "1440x900"])
    assert opts["preset"] == "p.json"
    assert opts["output_dir"] == "out"
    assert opts["background"] == "bg.png"
    assert opts["logo"] == "img/logo.png"
    assert opts["viewport"] == (1440, 900)


@pytest.mark.parametrize("argv", [[], ["a", "b", "c"], ["p.json", "--logo"], ["p.json", "--viewport", "wide"]])
def test_parse_args_rejects_bad_usage(argv):
    with pytest.raises(SystemExit):
        cli.parse_args(argv)


def test_main_renders_export_preview_and_preset(workspace, capsys):
    cli.main([
        "cover-preset.json", "out",
        "--background", "bg.png", "--logo", "logo.png",
        "--viewport", "1440x900", "--save-preset", "saved.json",
    ])
    result = json.loads(capsys.readouterr().out)

    with Image.open(result["output_image"]) as img:
        assert img.size == (160, 256)
    with Image.open(result["preview_image"]) as img:
        assert img.size == (480, 768)
    saved = json.loads((workspace / "saved.json").read_text())
    assert saved["title1"] == "LEARNING"
    assert saved["subtitle"] == ""


def test_missing_assets_fall_back(workspace, capsys):
    cli.main(["cover-preset.json"])
    result = json.loads(capsys.readouterr().out)
    with Image.open(result["output_image"]) as img:
        assert img.size == (1600, 2560)
    assert result["preview_image"] is None
    assert result["preset_file"] is None


def test_invalid_preset_is_reported(workspace, capsys):
    (workspace / "bad.json").write_text("{nope")
    with pytest.raises(SystemExit) as info:
        cli.main(["bad.json"])
    assert info.value.code == 1
    assert "Invalid preset" in capsys.readouterr().err


def test_save_preset_into_directory_uses_default_name(workspace, capsys):
    (workspace / "presets").mkdir()
    cli.main(["cover-preset.json", "out", "--background", "bg.png", "--save-preset", "presets"])
    result = json.loads(capsys.readouterr().out)

    expected = workspace / "presets" / "cover-preset.json"
    assert (workspace / result["preset_file"]).resolve() == expected.resolve()
    assert json.loads(expected.read_text())["title2"] == "Perl"
