import json

from picture_sorter.__main__ import main


def test_cli_sorts_files(source, dest, make_image, capsys):
    make_image(source / "a.jpg", taken="2021:05:03 10:00:00")
    assert main([str(source), str(dest), "--workers", "2"]) == 0
    out = capsys.readouterr().out
    assert "[1/1] a.jpg" in out
    assert "Done: 1 moved, 0 failed, 0 skipped" in out
    assert (dest / "2021-05" / "a.jpg").exists()


def test_cli_no_eligible_files(source, dest, capsys):
    assert main([str(source), str(dest)]) == 0
    assert "No image files found" in capsys.readouterr().out


def test_cli_bad_source(tmp_path, dest):
    assert main([str(tmp_path / "missing"), str(dest)]) == 2


def test_cli_reads_settings_file(tmp_path, source, dest, make_image):
    settings = tmp_path / "settings.json"
    settings.write_text(json.dumps({"folder_format": "%Y/%m"}))
    make_image(source / "a.jpg", taken="2021:05:03 10:00:00")
    assert main([str(source), str(dest), "--config", str(settings)]) == 0
    assert (dest / "2021" / "05" / "a.jpg").exists()


def test_cli_reports_failures(source, dest, make_image, monkeypatch, capsys):
    from picture_sorter import classifier as classifier_module

    make_image(source / "a.jpg")

    def denied(path):
        raise PermissionError(13, "Permission denied", str(path))

    monkeypatch.setattr(classifier_module, "extract_date", denied)
    assert main([str(source), str(dest)]) == 1
    assert "Error processing file a.jpg: Permission denied" in capsys.readouterr().err
