import pytest

from sshman import core
from sshman.hostlib import Profile
from sshman.tools import add, delete, edit, listing, snippet, ssh


def _seed(app, *profiles):
    app.store.save(list(profiles))


def _count_saves(app, monkeypatch):
    saves = []
    original = app.store.save

    def save(profiles):
        saves.append([Profile(**p.to_dict()) for p in profiles])
        original(profiles)

    monkeypatch.setattr(app.store, "save", save)
    return saves


def test_add_then_list(app, capsys):
    add.main(app, "db1", "10.0.0.1", 22, "root")
    listing.main(app)
    out = capsys.readouterr().out.splitlines()
    assert out == [
        "Connection added!",
        "Name: db1, Host: 10.0.0.1, Port: 22, Username: root",
    ]


def test_list_empty(app, capsys):
    listing.main(app)
    assert capsys.readouterr().out == "No SSH connections found.\n"


def test_add_keeps_welcome_message(app):
    _seed(app, Profile("a", "h", 22, "u"))
    add.main(app, "b", "h2", 2222, "u2", "Hello!")
    assert app.store.load() == [
        Profile("a", "h", 22, "u"),
        Profile("b", "h2", 2222, "u2", "Hello!"),
    ]


def test_delete_leaves_other_profiles(app, capsys):
    _seed(app, Profile("a", "h1", 22, "u"), Profile("b", "h2", 22, "u"))
    delete.main(app, "a")
    assert [p.name for p in app.store.load()] == ["b"]
    assert capsys.readouterr().out == "Connection deleted!\n"


def test_delete_unknown_name_still_saves_and_reports(app, capsys, monkeypatch):
    _seed(app, Profile("a", "h1", 22, "u"))
    saves = _count_saves(app, monkeypatch)
    delete.main(app, "ghost")
    assert saves == [[Profile("a", "h1", 22, "u")]]
    assert capsys.readouterr().out == "Connection deleted!\n"


def test_edit_port_persists(app, capsys):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    edit.main(app, "db1.port", "2222")
    assert app.store.load()[0].port == 2222
    assert capsys.readouterr().out == "Connection updated!\n"


def test_edit_welcome_message(app):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    edit.main(app, "db1.welcome_message", "Production, careful!")
    assert app.store.load()[0].welcome_message == "Production, careful!"


def test_edit_unknown_property_still_saves(app, capsys, monkeypatch):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    saves = _count_saves(app, monkeypatch)
    edit.main(app, "db1.password", "secret")
    assert saves == [[Profile("db1", "10.0.0.1", 22, "root")]]
    assert capsys.readouterr().out == "Invalid property 'password'.\n"


def test_edit_unknown_name_does_not_save(app, capsys, monkeypatch):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    saves = _count_saves(app, monkeypatch)
    edit.main(app, "ghost.host", "example.org")
    assert saves == []
    assert capsys.readouterr().out == "Connection 'ghost' not found.\n"


def test_edit_bad_port_is_fatal_and_not_saved(app, monkeypatch):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    saves = _count_saves(app, monkeypatch)
    with pytest.raises(core.InvalidValueError):
        edit.main(app, "db1.port", "twenty-two")
    assert saves == []


def test_edit_identifier_without_dot_is_fatal(app):
    with pytest.raises(core.InvalidValueError):
        edit.main(app, "db1", "x")


def test_open_unknown_name_spawns_nothing(app, spawned, capsys):
    assert ssh.main(app, "ghost") == 0
    assert spawned == []
    assert capsys.readouterr().out == "Connection 'ghost' not found.\n"


def test_open_runs_ssh_and_returns_its_status(app, spawned, capsys):
    _seed(app, Profile("db1", "10.0.0.1", 2222, "root", "hi"))
    spawned.returncode = 255
    assert ssh.main(app, "db1") == 255
    argv = spawned[0].argv
    assert argv[:5] == ["ssh", "-t", "root@10.0.0.1", "-p", "2222"]
    assert argv[5].startswith("echo hi; ")
    assert capsys.readouterr().out == (
        "Opening SSH connection: ssh root@10.0.0.1 -p 2222\n"
    )


def test_open_uses_first_match(app, spawned):
    _seed(app, Profile("x", "first", 22, "u"), Profile("x", "second", 22, "u"))
    ssh.main(app, "x")
    assert "u@first" in spawned[0].argv


def test_snippet_pipes_file_and_reports_success(app, spawned, tmp_path, capsys):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    script = tmp_path / "hello.sh"
    script.write_bytes(b"#!/bin/sh\necho hello\n")
    snippet.main(app, "db1", str(script))
    assert b"".join(spawned[0].stdin.chunks) == b"#!/bin/sh\necho hello\n"
    assert "root@10.0.0.1" in spawned[0].argv
    assert capsys.readouterr().out == "Snippet executed successfully!\n"


def test_snippet_failure_is_reported_not_raised(app, spawned, tmp_path, capsys):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    script = tmp_path / "fail.sh"
    script.write_text("exit 4\n", encoding="utf-8")
    spawned.returncode = 4
    assert snippet.main(app, "db1", str(script)) is None
    assert "successfully" not in capsys.readouterr().out


def test_snippet_unknown_name_spawns_nothing(app, spawned, capsys):
    snippet.main(app, "ghost", "/does/not/matter.sh")
    assert spawned == []
    assert capsys.readouterr().out == "Connection 'ghost' not found.\n"


def test_snippet_unreadable_file_is_fatal(app, spawned, tmp_path):
    _seed(app, Profile("db1", "10.0.0.1", 22, "root"))
    with pytest.raises(core.SnippetError):
        snippet.main(app, "db1", str(tmp_path / "missing.sh"))
    assert spawned == []
