"""
End-to-end tests for the command line interface.
"""
import pytest

import main as cli


@pytest.fixture
def run(tmp_path, capsys):
    db = str(tmp_path / "cli.db")

    def _run(*argv, user="alice"):
        code = cli.main(["--db", db, "--user", user, *argv])
        return code, capsys.readouterr().out.strip()

    return _run


@pytest.fixture
def project_id(run):
    code, out = run("project", "create", "Music video")
    assert code == 0
    return out


def scene_titles(run, project_id):
    _, out = run("scene", "list", project_id)
    return [line.split(None, 2)[2] for line in out.splitlines()]


def test_project_list_is_per_user(run, project_id):
    assert run("project", "list")[1].endswith("Music video")
    assert run("project", "list", user="bob")[1] == ""


def test_scene_lifecycle(run, project_id):
    for title in ["Intro", "Verse", "Chorus"]:
        assert run("scene", "add", project_id, "--title", title)[0] == 0

    assert run("scene", "move", project_id, "2", "0")[0] == 0
    assert scene_titles(run, project_id) == ["Chorus", "Intro", "Verse"]

    _, out = run("scene", "list", project_id)
    intro_id = out.splitlines()[1].split()[1]
    assert run("scene", "delete", project_id, intro_id, "-y")[0] == 0
    assert scene_titles(run, project_id) == ["Chorus", "Verse"]

    _, out = run("scene", "list", project_id)
    assert [line.split()[0] for line in out.splitlines()] == ["0", "1"]


def test_scene_defaults(run, project_id):
    run("scene", "add", project_id)
    assert scene_titles(run, project_id) == ["Scene 1"]


def test_edit_scene(run, project_id):
    _, scene_id = run("scene", "add", project_id)
    assert run("scene", "edit", project_id, scene_id, "--title", "Bridge")[0] == 0
    assert scene_titles(run, project_id) == ["Bridge"]


def test_invalid_move_fails(run, project_id):
    run("scene", "add", project_id)
    assert run("scene", "move", project_id, "0", "5")[0] == 1


def test_other_user_denied(run, project_id):
    assert run("scene", "list", project_id, user="bob")[0] == 1


def test_keyframes(run, project_id):
    _, scene_id = run("scene", "add", project_id, "--title", "Intro")

    assert run("keyframe", "add", project_id, scene_id, "Late", "150", "--duration", "120")[0] == 1
    assert run("keyframe", "add", project_id, scene_id, "Cue2", "90", "--duration", "120")[0] == 0
    assert run("keyframe", "add", project_id, scene_id, "Cue1", "60", "--duration", "120")[0] == 0

    _, out = run("keyframe", "list", project_id)
    assert [line.split()[2] for line in out.splitlines()] == ["Cue1", "Cue2"]

    assert run("keyframe", "clear", project_id) == (0, "2")
    assert run("keyframe", "list", project_id) == (0, "")
