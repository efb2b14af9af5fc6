"""
Tests for the load_achievement_catalog.py seed script.
Run: cd backend && python -m pytest tests/test_load_achievement_catalog.py -v
"""
import json
import uuid

from sqlalchemy import func, select

from liftbook.models import Achievement
from load_achievement_catalog import main, parse_args


def count_rows(db, code):
    stmt = select(func.count()).select_from(Achievement).where(Achievement.code == code)
    return db.execute(stmt).scalar_one()


def test_parse_args_defaults_to_bundled_catalog():
    assert parse_args([]).path is None
    assert str(parse_args(["--path", "x.json"]).path) == "x.json"

def test_seeds_bundled_catalog(db, capsys):
    assert main([]) == 0
    assert "Loaded 29 achievements" in capsys.readouterr().out
    assert count_rows(db, "FIRST_WORKOUT") == 1

    # rerunning refreshes instead of duplicating
    assert main([]) == 0
    assert count_rows(db, "FIRST_WORKOUT") == 1

def test_loads_a_custom_path(db, tmp_path, capsys):
    code = f"SEEDED_{uuid.uuid4().hex[:8].upper()}"
    path = tmp_path / "catalog.json"
    path.write_text(json.dumps([{"code": code, "name": "Seeded", "category": "MILESTONE"}]))

    assert main(["--path", str(path)]) == 0
    assert "Loaded 1 achievements" in capsys.readouterr().out
    assert count_rows(db, code) == 1

def test_missing_file_exits_nonzero(tmp_path, capsys):
    assert main(["--path", str(tmp_path / "nope.json")]) == 1
    assert "Catalog not found" in capsys.readouterr().out
