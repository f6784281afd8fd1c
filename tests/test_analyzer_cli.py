import json

from analyzer.cli import main
from settings import get_font_preference


def test_analyze_prints_report(sample_image, tmp_path, capsys):
    rc = main(["analyze", str(sample_image), "--font", "calibri", "--uploads", str(tmp_path / "up")])
    assert rc == 0
    out = capsys.readouterr().out
    assert "Compared to Calibri" in out
    assert "Character Details" in out
    assert (tmp_path / "up" / "sample.png").exists()


def test_analyze_json_and_output_file(sample_image, tmp_path, capsys):
    dest = tmp_path / "exports" / "run.json"
    rc = main(
        [
            "analyze",
            str(sample_image),
            "--compare",
            str(sample_image),
            "--json",
            "--output",
            str(dest),
            "--uploads",
            str(tmp_path / "up"),
        ]
    )
    assert rc == 0
    printed = json.loads(capsys.readouterr().out)
    saved = json.loads(dest.read_text(encoding="utf-8"))
    assert printed == saved
    assert printed["comparison_type"] == "image"
    assert printed["comparison_target"] == "Custom Image"
    assert 0 <= printed["similarity_score"] <= 100


def test_analyze_bad_input_exits_2(tmp_path, capsys):
    txt = tmp_path / "notes.txt"
    txt.write_text("hi")
    rc = main(["analyze", str(txt), "--uploads", str(tmp_path / "up")])
    assert rc == 2
    assert "error:" in capsys.readouterr().err


def test_fonts_marks_default(capsys):
    assert main(["fonts"]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 4
    assert lines[0].startswith("* times")


def test_config_updates_font(capsys):
    assert main(["config", "--font", "helvetica"]) == 0
    assert "font:     helvetica" in capsys.readouterr().out
    assert get_font_preference() == "helvetica"
    assert main(["config", "--reset"]) == 0
    assert get_font_preference() == "times"


def test_config_unknown_font_exits_2(capsys):
    assert main(["config", "--font", "comic"]) == 2


def test_analyze_uploads_path_is_a_file_exits_2(sample_image, tmp_path, capsys):
    not_a_dir = tmp_path / "uploads.txt"
    not_a_dir.write_text("taken")
    rc = main(["analyze", str(sample_image), "--uploads", str(not_a_dir)])
    assert rc == 2
    assert "error:" in capsys.readouterr().err


def test_analyze_output_is_a_directory_exits_2(sample_image, tmp_path, capsys):
    out_dir = tmp_path / "exports"
    out_dir.mkdir()
    rc = main(
        [
            "analyze",
            str(sample_image),
            "--output",
            str(out_dir),
            "--uploads",
            str(tmp_path / "up"),
        ]
    )
    assert rc == 2
    assert "error:" in capsys.readouterr().err
