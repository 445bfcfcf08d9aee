from __future__ import annotations

from pathlib import Path

from invoice_swift.session import FileSession, InMemorySession


def test_in_memory_session_round_trip() -> None:
    session = InMemorySession()
    assert session.get_token() is None

    session.store("tok-1", {"name": "Asha"})
    user = session.get_user()
    user["name"] = "changed"

    assert session.get_token() == "tok-1"
    assert session.get_user() == {"name": "Asha"}

    session.logout()
    assert session.get_token() is None
    assert session.get_user() is None


def test_file_session_persists_between_instances(tmp_path: Path) -> None:
    path = tmp_path / "nested" / "session.json"
    FileSession(path).store("tok-2", {"email": "asha@example.com"})

    reopened = FileSession(path)
    assert reopened.get_token() == "tok-2"
    assert reopened.get_user() == {"email": "asha@example.com"}

    reopened.logout()
    assert FileSession(path).get_token() is None
    assert FileSession(path).get_user() is None


def test_file_session_keeps_unrelated_keys(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text('{"emailForSignIn": "asha@example.com"}', encoding="utf-8")

    session = FileSession(path)
    session.store("tok-3")
    session.logout()

    assert "emailForSignIn" in path.read_text(encoding="utf-8")


def test_file_session_unreadable_file_counts_as_logged_out(tmp_path: Path) -> None:
    path = tmp_path / "session.json"
    path.write_text("{not json", encoding="utf-8")
    assert FileSession(path).get_token() is None


def test_file_session_default_path(tmp_path: Path, monkeypatch) -> None:
    monkeypatch.setenv("INVOICE_SWIFT_SESSION_FILE", str(tmp_path / "from-env.json"))
    session = FileSession()
    session.store("tok-4")
    assert (tmp_path / "from-env.json").exists()
