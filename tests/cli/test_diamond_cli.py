"""Tests for the diamond-plans CLI commands."""

import json

from cli.cli import app
from diamond_plans.planning.service import generate_plan_from_input
from diamond_plans.schemas.plan import GroupingInputSchema


def _stored_plan(sample_input_path, tmp_path, seed=5):
    payload = GroupingInputSchema.model_validate_json(sample_input_path.read_text())
    stored = generate_plan_from_input(payload, seed=seed)
    path = tmp_path / "plan.json"
    path.write_text(stored.model_dump_json())
    return path, stored


def test_plan_renders_table(runner, sample_input_path):
    result = runner.invoke(app, ["plan", str(sample_input_path), "--seed", "5"])

    assert result.exit_code == 0, result.output
    assert "Floating: Chase" in result.output
    assert "Team game: 10 min, total 60 min" in result.output


def test_plan_json_output(runner, sample_input_path, tmp_path):
    _, expected = _stored_plan(sample_input_path, tmp_path)

    result = runner.invoke(app, ["plan", str(sample_input_path), "--seed", "5", "--json"])

    assert result.exit_code == 0, result.output
    assert '"format": "stations"' in result.output
    assert expected.floating_coach_ids == ["c-chase"]


def test_plan_rejects_invalid_input(runner, tmp_path):
    path = tmp_path / "bad.json"
    path.write_text(json.dumps({"present_players": [{"id": "", "name": "x", "skill_level": "pro"}]}))

    result = runner.invoke(app, ["plan", str(path)])

    assert result.exit_code == 1


def test_plan_without_coaches_is_unavailable(runner, sample_input_path, tmp_path):
    data = json.loads(sample_input_path.read_text())
    data["present_coaches"] = []
    path = tmp_path / "no_coaches.json"
    path.write_text(json.dumps(data))

    result = runner.invoke(app, ["plan", str(path)])

    assert result.exit_code == 0, result.output
    assert "Practice unavailable" in result.output


def test_validate_ok(runner, sample_input_path, tmp_path):
    path, stored = _stored_plan(sample_input_path, tmp_path)

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 0, result.output
    assert "OK" in result.output
    assert f"{len(stored.segments)} segments, 60 min" in result.output


def test_validate_broken_timeline(runner, sample_input_path, tmp_path):
    path, stored = _stored_plan(sample_input_path, tmp_path)
    broken = stored.model_copy(update={"segments": stored.segments[:-1]})
    path.write_text(broken.model_dump_json())

    result = runner.invoke(app, ["validate", str(path)])

    assert result.exit_code == 1
    assert "INVALID_AGENDA" in result.output


def test_run_rehearses_practice(runner, sample_input_path):
    result = runner.invoke(
        app,
        ["run", str(sample_input_path), "--seed", "5", "--speed", "10000000", "--tick", "0"],
    )

    assert result.exit_code == 0, result.output
    assert "Practice complete" in result.output
    assert "1/11" in result.output


def test_run_exits_for_unavailable_plan(runner, sample_input_path, tmp_path):
    data = json.loads(sample_input_path.read_text())
    data["present_players"] = []
    path = tmp_path / "no_players.json"
    path.write_text(json.dumps(data))

    result = runner.invoke(app, ["run", str(path), "--tick", "0"])

    assert result.exit_code == 1
    assert "Practice unavailable" in result.output
