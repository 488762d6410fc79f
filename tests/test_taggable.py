"""
Tests for tag stores, association tables and tag-set replacement
"""
import uuid

import pytest
from sqlalchemy import event
from unittest.mock import patch

from portfolio.exceptions import ConflictException, NotFoundException, ValidationException
from portfolio.models import Project, ProjectTag, ProjectTagRelation
from portfolio.repositories import ProjectRepository, TagStore, fold_tag_name, normalize_tag_name


@pytest.fixture
def repo(session):
    return ProjectRepository(session)


def _project(repo, title="Project", tags=None, order=0):
    fields = {"title": title, "description": "desc", "display_order": order}
    return repo.create_with_tags(fields, tags or [])


def _names(tags):
    return [tag.name for tag in tags]


def _relation_count(session, project_id=None):
    query = session.query(ProjectTagRelation)
    if project_id is not None:
        query = query.filter(ProjectTagRelation.project_id == project_id)
    return query.count()


class TestTagNamePolicy:
    """Tests for the tag name policy functions"""

    def test_literal_names_are_kept(self):
        assert normalize_tag_name("Go") == "Go"
        assert normalize_tag_name(" web ") == " web "

    @pytest.mark.parametrize("bad", ["", "   ", None, 42])
    def test_rejects_empty_or_non_string(self, bad):
        with pytest.raises(ValidationException):
            normalize_tag_name(bad)

    def test_rejects_overlong_name(self):
        with pytest.raises(ValidationException):
            normalize_tag_name("x" * 51)

    def test_fold_policy(self):
        assert fold_tag_name("  GoLang ") == "golang"


class TestTagStore:
    """Tests for get-or-create tag resolution"""

    def test_resolve_creates_then_reuses(self, repo, session):
        first = repo.tag_store.resolve("go")
        second = repo.tag_store.resolve("go")
        session.commit()

        assert first.id == second.id
        assert session.query(ProjectTag).filter_by(name="go").count() == 1

    def test_resolve_is_case_sensitive_by_default(self, repo, session):
        upper = repo.tag_store.resolve("Go")
        lower = repo.tag_store.resolve("go")
        session.commit()

        assert upper.id != lower.id

    def test_fold_policy_merges_variants(self, session):
        store = TagStore(ProjectTag, "project", session, normalizer=fold_tag_name)
        a = store.resolve("Go ")
        b = store.resolve("go")
        session.commit()

        assert a.id == b.id
        assert a.name == "go"

    def test_resolve_absorbs_concurrent_insert(self, repo, session):
        """A lost insert race reuses the winner's row instead of failing"""
        existing = repo.tag_store.create("go")
        real_find = TagStore.find_by_name
        calls = []

        def stale_then_real(self, name):
            calls.append(name)
            if len(calls) == 1:
                return None
            return real_find(self, name)

        with patch.object(TagStore, "find_by_name", autospec=True, side_effect=stale_then_real):
            resolved = repo.tag_store.resolve("go")
        session.commit()

        assert resolved.id == existing.id
        assert len(calls) == 2
        assert session.query(ProjectTag).filter_by(name="go").count() == 1

    def test_get_all_ordered_by_name(self, repo):
        for name in ["web", "api", "go"]:
            repo.tag_store.create(name)

        assert _names(repo.get_all_tags()) == ["api", "go", "web"]

    def test_explicit_create_conflicts(self, repo):
        repo.tag_store.create("go", color="#00ADD8")
        with pytest.raises(ConflictException):
            repo.tag_store.create("go")

    def test_create_conflict_then_resolve_reuses(self, repo):
        created = repo.create_tag("go")
        with pytest.raises(ConflictException):
            repo.create_tag("go")

        project = _project(repo, tags=["go"])
        assert [tag.id for tag in project.tags] == [created.id]

    def test_delete_tag_detaches_owners(self, repo, session):
        project = _project(repo, tags=["go", "web"])
        go = repo.tag_store.find_by_name("go")

        repo.delete_tag(go.id)

        assert _names(repo.get_by_id_with_tags(project.id).tags) == ["web"]
        with pytest.raises(NotFoundException):
            repo.tag_store.get(go.id)


class TestTagAssociation:
    """Tests for link/unlink and batch loading"""

    def test_link_is_idempotent(self, repo, session):
        project = _project(repo)
        tag = repo.tag_store.create("go")

        repo.tags.link(project.id, tag.id)
        repo.tags.link(project.id, tag.id)
        session.commit()

        assert _relation_count(session, project.id) == 1
        assert repo.tags.is_linked(project.id, tag.id)

    def test_unlink_reports_removal(self, repo, session):
        project = _project(repo, tags=["go"])
        tag = repo.tag_store.find_by_name("go")

        assert repo.tags.unlink(project.id, tag.id) is True
        assert repo.tags.unlink(project.id, tag.id) is False

    def test_tags_for_is_name_ordered(self, repo):
        project = _project(repo, tags=["web", "api", "go"])
        assert _names(repo.tags.tags_for(project.id)) == ["api", "go", "web"]

    def test_tags_for_many_matches_tags_for(self, repo):
        a = _project(repo, "A", ["go", "web"])
        b = _project(repo, "B", ["web"])
        untagged = _project(repo, "C")

        batch = repo.tags.tags_for_many([a.id, b.id, untagged.id])

        assert set(batch) == {a.id, b.id, untagged.id}
        for owner_id in (a.id, b.id, untagged.id):
            assert _names(batch[owner_id]) == _names(repo.tags.tags_for(owner_id))
        assert batch[untagged.id] == []

    def test_tags_for_many_empty_input_issues_no_query(self, repo, app):
        from portfolio.db import db

        statements = []

        def record(conn, cursor, statement, *args):
            statements.append(statement)

        event.listen(db.engine, "before_cursor_execute", record)
        try:
            assert repo.tags.tags_for_many([]) == {}
        finally:
            event.remove(db.engine, "before_cursor_execute", record)
        assert statements == []


class TestTaggableRepository:
    """Tests for owner operations that carry a tag set"""

    def test_duplicate_names_collapse(self, repo, session):
        project = _project(repo, tags=["go", "go", "web"])

        assert _names(project.tags) == ["go", "web"]
        assert _relation_count(session, project.id) == 2

    def test_update_replaces_tag_set(self, repo):
        project = _project(repo, tags=["a", "b"])

        updated = repo.update_with_tags(project.id, {"title": "Renamed"}, ["b", "c"])

        assert updated.title == "Renamed"
        assert _names(updated.tags) == ["b", "c"]
        assert _names(repo.get_by_id_with_tags(project.id).tags) == ["b", "c"]

    def test_update_without_tags_keeps_them(self, repo):
        project = _project(repo, tags=["a", "b"])
        updated = repo.update_with_tags(project.id, {"title": "Renamed"}, None)
        assert _names(updated.tags) == ["a", "b"]

    def test_update_with_empty_list_clears_tags(self, repo):
        project = _project(repo, tags=["a"])
        assert repo.update_with_tags(project.id, {}, []).tags == []

    def test_failed_update_rolls_back_everything(self, repo, session):
        project = _project(repo, title="Original", tags=["keep"])

        with pytest.raises(ValidationException):
            repo.update_with_tags(project.id, {"title": "Changed"}, ["fresh", "   "])

        reloaded = repo.get_by_id_with_tags(project.id)
        assert reloaded.title == "Original"
        assert _names(reloaded.tags) == ["keep"]
        assert repo.tag_store.find_by_name("fresh") is None

    def test_failed_create_leaves_nothing(self, repo, session):
        with pytest.raises(ValidationException):
            _project(repo, title="Broken", tags=["ok", ""])

        assert session.query(Project).count() == 0
        assert session.query(ProjectTag).count() == 0

    def test_update_missing_owner(self, repo):
        with pytest.raises(NotFoundException):
            repo.update_with_tags(uuid.uuid4(), {"title": "x"}, ["a"])

    def test_delete_removes_links_and_keeps_tags(self, repo, session):
        project = _project(repo, tags=["go", "web"])

        repo.delete_with_tags(project.id)

        assert _relation_count(session, project.id) == 0
        assert session.get(Project, project.id) is None
        assert _names(repo.get_all_tags()) == ["go", "web"]

    def test_delete_missing_owner(self, repo):
        with pytest.raises(NotFoundException):
            repo.delete_with_tags(uuid.uuid4())

    def test_list_all_with_tags_uses_two_queries(self, repo, app):
        from portfolio.db import db

        for i in range(5):
            _project(repo, f"P{i}", ["shared", f"own-{i}"], order=i)
        db.session.expire_all()

        selects = []

        def record(conn, cursor, statement, *args):
            if statement.lstrip().upper().startswith("SELECT"):
                selects.append(statement)

        event.listen(db.engine, "before_cursor_execute", record)
        try:
            projects = repo.list_all_with_tags()
        finally:
            event.remove(db.engine, "before_cursor_execute", record)

        assert len(selects) == 2
        assert [p.title for p in projects] == ["P0", "P1", "P2", "P3", "P4"]
        assert _names(projects[3].tags) == ["own-3", "shared"]

    def test_list_by_tag(self, repo):
        _project(repo, "A", ["go"], order=1)
        _project(repo, "B", ["web"], order=2)
        _project(repo, "C", ["go"], order=3)
        go = repo.tag_store.find_by_name("go")

        assert [p.title for p in repo.list_by_tag(go.id)] == ["A", "C"]

    def test_add_tag_twice_conflicts(self, repo):
        project = _project(repo)
        tag = repo.create_tag("go")

        assert _names(repo.add_tag(project.id, tag.id).tags) == ["go"]
        with pytest.raises(ConflictException):
            repo.add_tag(project.id, tag.id)

    def test_add_unknown_tag(self, repo):
        project = _project(repo)
        with pytest.raises(NotFoundException):
            repo.add_tag(project.id, uuid.uuid4())
