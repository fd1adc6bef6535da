import pandas as pd
import pytest

from workout_mapper.cli import main


@pytest.fixture
def data_dir(tmp_path):
    return str(tmp_path / "data")


def _add(data_dir, *extra):
    return main(["--data-dir", data_dir, "add", "--lat", "51.5", "--lng", "-0.12", *extra])


def test_add_and_list(data_dir, capsys):
    assert _add(data_dir, "--type", "running", "--distance", "5", "--duration", "30", "--cadence", "178") == 0
    assert _add(data_dir, "--type", "cycling", "--distance", "20", "--duration", "60", "--elevation", "-50") == 0
    capsys.readouterr()

    assert main(["--data-dir", data_dir, "list"]) == 0
    out = capsys.readouterr().out.splitlines()
    assert len(out) == 2
    assert "Running on" in out[0] and "6 min/km" in out[0]
    assert "Cycling on" in out[1] and "-50 m" in out[1]


def test_add_rejects_invalid_input(data_dir, capsys):
    assert _add(data_dir, "--type", "running", "--distance", "0", "--duration", "30", "--cadence", "10") == 1
    assert "Inputs have to be positive numbers" in capsys.readouterr().err

    main(["--data-dir", data_dir, "list"])
    assert "No workouts stored." in capsys.readouterr().out


def test_add_refuses_to_overwrite_corrupt_snapshot(tmp_path, capsys):
    data = tmp_path / "data"
    data.mkdir()
    (data / "storage.json").write_text('{"workouts": "garbage"}')

    assert _add(str(data), "--type", "running", "--distance", "5", "--duration", "30", "--cadence", "178") == 1
    assert (data / "storage.json").read_text() == '{"workouts": "garbage"}'


def test_export_and_summary(data_dir, tmp_path, capsys):
    _add(data_dir, "--type", "running", "--distance", "5", "--duration", "30", "--cadence", "178")
    out_csv = tmp_path / "export.csv"

    assert main(["--data-dir", data_dir, "export", "-o", str(out_csv)]) == 0
    assert len(pd.read_csv(out_csv)) == 1

    capsys.readouterr()
    assert main(["--data-dir", data_dir, "summary"]) == 0
    assert "running" in capsys.readouterr().out


def test_reset_requires_confirmation(data_dir, capsys):
    _add(data_dir, "--type", "running", "--distance", "5", "--duration", "30", "--cadence", "178")

    assert main(["--data-dir", data_dir, "reset"]) == 2
    assert main(["--data-dir", data_dir, "reset", "--yes"]) == 0

    capsys.readouterr()
    main(["--data-dir", data_dir, "list"])
    assert "No workouts stored." in capsys.readouterr().out
