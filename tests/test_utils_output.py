"""Tests for utils/output.py — JSON/CSV/table output routing."""
import json

from spotify_library.models.library import Artist, Image
from spotify_library.utils.output import OutputFormat, _cell, print_csv, print_json, print_output


# ── print_json ───────────────────────────────────────────────────────

def test_print_json_list(capsys):
    print_json([{"id": "1"}, {"id": "2"}])
    assert len(json.loads(capsys.readouterr().out)) == 2


def test_print_json_empty(capsys):
    print_json([])
    assert json.loads(capsys.readouterr().out) == []


def test_print_output_json_models(capsys):
    print_output([Artist(artist_id="X", name="T. Rex", genres=["glam rock"])], OutputFormat.JSON)
    data = json.loads(capsys.readouterr().out)
    assert data == [{"artist_id": "X", "images": [], "genres": ["glam rock"], "name": "T. Rex"}]


def test_print_output_single_dict(capsys):
    print_output({"status": "ok"}, OutputFormat.JSON)
    assert json.loads(capsys.readouterr().out) == [{"status": "ok"}]


# ── print_csv ────────────────────────────────────────────────────────

def test_print_csv_basic(capsys):
    print_csv([{"name": "a", "val": "1"}, {"name": "b", "val": "2"}])
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines == ["name,val", "a,1", "b,2"]


def test_print_csv_columns_and_lists(capsys):
    print_output(
        [Artist(artist_id="X", name="T. Rex", genres=["glam rock", "protopunk"])],
        OutputFormat.CSV,
        columns=["name", "genres"],
    )
    lines = capsys.readouterr().out.strip().splitlines()
    assert lines[0] == "name,genres"
    assert lines[1] == 'T. Rex,"glam rock, protopunk"'


def test_print_csv_empty(capsys):
    print_csv([])
    assert capsys.readouterr().out == ""


# ── table ────────────────────────────────────────────────────────────

def test_print_table_goes_to_stderr(capsys):
    print_output([{"a": 1}], OutputFormat.TABLE, title="T")
    captured = capsys.readouterr()
    assert captured.out == ""


# ── _cell ────────────────────────────────────────────────────────────

def test_cell_values():
    assert _cell(None) == ""
    assert _cell(3) == "3"
    assert _cell(["a", "b"]) == "a, b"
    assert _cell({"date": "1972-06-16", "precision": "day"}) == "1972-06-16"
    assert _cell(Image(url="https://x").model_dump()) == "https://x"
