"""Tests for the database Core and account/note operations."""

import sqlite3

import pytest

from pocketnotes.db import Core, get_core, init_db


def add_account(core: Core, email: str = "ann@x.com") -> str:
    return core.account.create("Ann", email, "$2b$04$hash")["id"]


class TestCore:
    """Tests for Core lifecycle."""

    def test_context_manager_requires_atomic(self, test_settings):
        init_db(test_settings.database_path)
        core = get_core(database_path=test_settings.database_path)

        with pytest.raises(RuntimeError):
            with core:
                pass
        core.close()

    def test_atomic_commits_on_success(self, test_settings, core):
        with get_core(atomic=True, database_path=test_settings.database_path) as atomic:
            owner_id = add_account(atomic)

        assert core.account.get_by_id(owner_id) is not None

    def test_atomic_rolls_back_on_error(self, test_settings, core):
        with pytest.raises(ValueError):
            with get_core(atomic=True, database_path=test_settings.database_path) as atomic:
                add_account(atomic)
                raise ValueError("boom")

        assert core.account.get_by_email("ann@x.com") is None

    def test_init_db_is_idempotent(self, test_settings, core):
        add_account(core)
        init_db(test_settings.database_path)

        assert core.account.get_by_email("ann@x.com") is not None

    def test_foreign_keys_enforced(self, core):
        with pytest.raises(sqlite3.IntegrityError):
            core.note.create("missing-owner", "t", "c")


class TestAccountOperations:
    """Tests for core.account."""

    def test_create_and_get(self, core):
        row = core.account.create("Ann", "Ann@X.com", "$2b$04$hash")

        assert row["name"] == "Ann"
        assert row["email"] == "ann@x.com"
        assert "password_hash" not in row.keys()
        assert core.account.get_by_id(row["id"])["email"] == "ann@x.com"

    def test_get_by_email_case_insensitive(self, core):
        account_id = add_account(core)
        assert core.account.get_by_email("ANN@x.COM")["id"] == account_id

    def test_get_with_password(self, core):
        add_account(core)
        row = core.account.get_with_password("ann@x.com")
        assert row["password_hash"] == "$2b$04$hash"

    def test_missing_returns_none(self, core):
        assert core.account.get_by_id("nope") is None
        assert core.account.get_by_email("nope@x.com") is None
        assert core.account.get_with_password("nope@x.com") is None

    def test_duplicate_email_integrity_error(self, core):
        add_account(core)
        with pytest.raises(sqlite3.IntegrityError):
            core.account.create("Other", "ANN@x.com", "$2b$04$other")


class TestNoteOperations:
    """Tests for core.note."""

    def test_create_and_get(self, core):
        owner_id = add_account(core)
        note_id = core.note.create(owner_id, "title", "content", is_favorite=True)

        row = core.note.get_by_id(note_id)
        assert row["owner_id"] == owner_id
        assert row["title"] == "title"
        assert row["is_favorite"] == 1
        assert row["created_at"] == row["updated_at"]

    def test_get_missing_returns_none(self, core):
        assert core.note.get_by_id("nope") is None

    def test_list_by_owner_newest_first(self, core):
        ann = add_account(core)
        bob = add_account(core, "bob@x.com")
        first = core.note.create(ann, "1", "c")
        core.note.create(bob, "bob", "c")
        second = core.note.create(ann, "2", "c")

        rows = core.note.list_by_owner(ann)
        assert [r["id"] for r in rows] == [second, first]

    def test_list_by_owner_favorite_filter(self, core):
        ann = add_account(core)
        core.note.create(ann, "plain", "c")
        fav = core.note.create(ann, "fav", "c", is_favorite=True)

        assert [r["id"] for r in core.note.list_by_owner(ann, is_favorite=True)] == [fav]
        assert len(core.note.list_by_owner(ann, is_favorite=False)) == 1

    def test_update_partial(self, core):
        ann = add_account(core)
        note_id = core.note.create(ann, "old", "content")
        before = core.note.get_by_id(note_id)

        core.note.update(note_id, {"title": "new", "is_favorite": True})

        row = core.note.get_by_id(note_id)
        assert row["title"] == "new"
        assert row["content"] == "content"
        assert row["is_favorite"] == 1
        assert row["updated_at"] >= before["updated_at"]

    def test_update_never_touches_owner(self, core):
        ann = add_account(core)
        bob = add_account(core, "bob@x.com")
        note_id = core.note.create(ann, "t", "c")

        core.note.update(note_id, {"owner_id": bob, "id": "other", "title": "x"})

        row = core.note.get_by_id(note_id)
        assert row["owner_id"] == ann
        assert row["title"] == "x"

    def test_update_nothing_is_noop(self, core):
        ann = add_account(core)
        note_id = core.note.create(ann, "t", "c")
        before = core.note.get_by_id(note_id)

        assert core.note.update(note_id, {"title": None}) == 0

        assert core.note.get_by_id(note_id)["updated_at"] == before["updated_at"]

    def test_delete(self, core):
        ann = add_account(core)
        note_id = core.note.create(ann, "t", "c")

        core.note.delete(note_id)
        assert core.note.get_by_id(note_id) is None

    def test_update_and_delete_report_rowcount(self, core):
        ann = add_account(core)
        note_id = core.note.create(ann, "t", "c")

        assert core.note.update(note_id, {"title": "x"}) == 1
        assert core.note.delete(note_id) == 1
        assert core.note.update(note_id, {"title": "y"}) == 0
        assert core.note.delete(note_id) == 0

    def test_list_by_owner_search(self, core):
        ann = add_account(core)
        core.note.create(ann, "Shopping", "milk")
        core.note.create(ann, "Work", "Quarterly MILKSHAKE report")
        core.note.create(ann, "Other", "nothing")

        titles = [r["title"] for r in core.note.list_by_owner(ann, search="MiLk")]
        assert titles == ["Work", "Shopping"]

    def test_list_by_owner_search_escapes_wildcards(self, core):
        ann = add_account(core)
        core.note.create(ann, "a_b", "c")
        core.note.create(ann, "axb", "c")

        titles = [r["title"] for r in core.note.list_by_owner(ann, search="a_b")]
        assert titles == ["a_b"]
