"""
HTTP-level tests for the REST API
"""
import io
import os

import pytest
from sqlalchemy.exc import OperationalError
from unittest.mock import patch

from portfolio.exceptions import DatabaseException
from portfolio.services import get_services

PNG = b"\x89PNG\r\n\x1a\nfake"


def _data(response):
    body = response.get_json()
    assert body["success"] is True, body
    return body["data"]


def _files(folder):
    if not os.path.isdir(folder):
        return []
    return os.listdir(folder)


class TestHealth:
    """Tests for the health endpoint"""

    def test_health(self, client):
        response = client.get("/api/health")

        assert response.status_code == 200
        body = response.get_json()
        assert body["status"] == "ok"
        assert body["database"] == "ok"
        assert body["service"] == "portfolio-api"
        assert body["upload"]["provider"] == "local"

    def test_metrics_exposed(self, client):
        client.get("/api/health")
        response = client.get("/api/metrics")

        assert response.status_code == 200
        assert b"portfolio_api_requests_total" in response.data

    def test_cors_headers(self, client):
        response = client.get("/api/v1/projects", headers={"Origin": "https://site.example"})
        assert response.headers.get("Access-Control-Allow-Origin") == "*"


class TestProjectsApi:
    """Tests for /api/v1/projects"""

    def test_json_crud_with_tags(self, client, sample_project):
        created = client.post("/api/v1/projects", json=sample_project)
        assert created.status_code == 201
        project = _data(created)
        assert [t["name"] for t in project["tags"]] == ["flask", "python"]
        assert project["demo_url"] == "#"

        listed = _data(client.get("/api/v1/projects"))
        assert [p["id"] for p in listed] == [project["id"]]
        assert len(listed[0]["tags"]) == 2

        bare = _data(client.get(f"/api/v1/projects/{project['id']}?with_tags=false"))
        assert "tags" not in bare

        updated = client.put(f"/api/v1/projects/{project['id']}", json={"tags": ["rest"]})
        assert updated.status_code == 200
        assert [t["name"] for t in _data(updated)["tags"]] == ["rest"]
        assert _data(updated)["title"] == sample_project["title"]

        deleted = client.delete(f"/api/v1/projects/{project['id']}")
        assert deleted.status_code == 200
        assert client.get(f"/api/v1/projects/{project['id']}").status_code == 404

    def test_missing_required_field(self, client):
        response = client.post("/api/v1/projects", json={"title": "No description"})

        assert response.status_code == 400
        body = response.get_json()
        assert body["code"] == "VALIDATION_ERROR"
        assert body["details"]["field"] == "description"

    def test_null_for_required_column(self, client, sample_project):
        project = _data(client.post("/api/v1/projects", json=sample_project))

        response = client.put(f"/api/v1/projects/{project['id']}", json={"status": None})

        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"
        assert response.get_json()["details"]["field"] == "status"
        assert _data(client.get(f"/api/v1/projects/{project['id']}"))["status"] == "published"

    def test_invalid_id(self, client):
        response = client.get("/api/v1/projects/not-a-uuid")
        assert response.status_code == 400
        assert response.get_json()["code"] == "VALIDATION_ERROR"

    def test_unknown_id(self, client):
        response = client.get("/api/v1/projects/00000000-0000-0000-0000-000000000000")
        assert response.status_code == 404
        assert response.get_json()["error"] is True
        assert response.get_json()["code"] == "NOT_FOUND"

    def test_create_with_image_is_served(self, client, upload_dir):
        response = client.post(
            "/api/v1/projects/with-image",
            data={"title": "Shots", "description": "With a picture", "tags": ["ui", "design"],
                  "image": (io.BytesIO(PNG), "shot.png")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 201
        project = _data(response)
        assert project["image_url"].startswith("/uploads/projects/")
        assert [t["name"] for t in project["tags"]] == ["design", "ui"]
        assert len(_files(os.path.join(upload_dir, "projects"))) == 1

        served = client.get(project["image_url"])
        assert served.status_code == 200
        assert served.data == PNG

    def test_rejects_image_extension(self, client, upload_dir):
        response = client.post(
            "/api/v1/projects/with-image",
            data={"title": "Bad", "description": "x", "image": (io.BytesIO(b"MZ"), "run.exe")},
            content_type="multipart/form-data",
        )

        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "image"
        assert _files(os.path.join(upload_dir, "projects")) == []

    def test_failed_create_removes_upload(self, client, app, upload_dir):
        repository = get_services().projects.repository
        with patch.object(repository, "create_with_tags", side_effect=DatabaseException("disk full")):
            response = client.post(
                "/api/v1/projects/with-image",
                data={"title": "Doomed", "description": "x", "image": (io.BytesIO(PNG), "shot.png")},
                content_type="multipart/form-data",
            )

        assert response.status_code == 500
        assert response.get_json()["code"] == "DATABASE_ERROR"
        assert _files(os.path.join(upload_dir, "projects")) == []

    def test_replacing_image_removes_old_file(self, client, upload_dir):
        project = _data(client.post(
            "/api/v1/projects/with-image",
            data={"title": "Shots", "description": "x", "image": (io.BytesIO(PNG), "one.png")},
            content_type="multipart/form-data",
        ))

        updated = _data(client.put(
            f"/api/v1/projects/{project['id']}",
            data={"image": (io.BytesIO(PNG), "two.png")},
            content_type="multipart/form-data",
        ))

        assert updated["image_url"] != project["image_url"]
        remaining = _files(os.path.join(upload_dir, "projects"))
        assert remaining == [updated["image_url"].rsplit("/", 1)[-1]]


class TestProjectTagsApi:
    """Tests for /api/v1/tags and the per-project tag endpoints"""

    def test_tag_lifecycle(self, client):
        created = client.post("/api/v1/tags", json={"name": "go", "color": "#00ADD8"})
        assert created.status_code == 201
        tag = _data(created)

        duplicate = client.post("/api/v1/tags", json={"name": "go"})
        assert duplicate.status_code == 409
        assert duplicate.get_json()["code"] == "CONFLICT"

        assert [t["name"] for t in _data(client.get("/api/v1/tags"))] == ["go"]

        assert client.delete(f"/api/v1/tags/{tag['id']}").status_code == 200
        assert client.delete(f"/api/v1/tags/{tag['id']}").status_code == 404

    def test_membership(self, client, sample_project):
        project = _data(client.post("/api/v1/projects", json=dict(sample_project, tags=[])))
        tag = _data(client.post("/api/v1/tags", json={"name": "go"}))
        base = f"/api/projects/{project['id']}/tags"

        added = client.post(base, json={"tag_id": tag["id"]})
        assert added.status_code == 200
        assert [t["name"] for t in _data(added)["tags"]] == ["go"]

        again = client.post(base, json={"tag_id": tag["id"]})
        assert again.status_code == 409

        assert [t["id"] for t in _data(client.get(base))] == [tag["id"]]
        by_tag = _data(client.get(f"/api/v1/tags/{tag['id']}/projects"))
        assert [p["id"] for p in by_tag] == [project["id"]]

        removed = client.delete(f"{base}/{tag['id']}")
        assert removed.status_code == 200
        assert _data(removed)["tags"] == []
        assert _data(client.get(base)) == []

    def test_membership_needs_tag_id(self, client, sample_project):
        project = _data(client.post("/api/v1/projects", json=sample_project))
        response = client.post(f"/api/projects/{project['id']}/tags", json={})
        assert response.status_code == 400


class TestBlogApi:
    """Tests for /api/v1/blog"""

    def test_slug_lookup_counts_views(self, client, sample_post):
        assert client.post("/api/v1/blog", json=sample_post).status_code == 201

        first = _data(client.get("/api/v1/blog/slug/hello-world"))
        second = _data(client.get("/api/v1/blog/slug/hello-world"))

        assert (first["view_count"], second["view_count"]) == (0, 1)
        assert [t["name"] for t in second["tags"]] == ["go", "web"]

    def test_duplicate_slug(self, client, sample_post):
        client.post("/api/v1/blog", json=sample_post)
        response = client.post("/api/v1/blog", json=sample_post)
        assert response.status_code == 409

    def test_published_and_tags(self, client, sample_post):
        client.post("/api/v1/blog", json=sample_post)
        client.post("/api/v1/blog", json={"title": "Draft", "slug": "draft"})

        published = _data(client.get("/api/v1/blog/published"))
        assert [p["slug"] for p in published] == ["hello-world"]
        assert [t["name"] for t in _data(client.get("/api/v1/blog/tags"))] == ["go", "web"]

    def test_invalid_status(self, client):
        response = client.post("/api/v1/blog", json={"title": "x", "slug": "x", "status": "live"})
        assert response.status_code == 400


class TestSkillsApi:
    """Tests for /api/v1/skills"""

    def test_value_range(self, client):
        response = client.post("/api/v1/skills", json={"name": "Go", "value": 150})
        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "value"

    def test_create_with_icon_and_filters(self, client, upload_dir):
        response = client.post(
            "/api/v1/skills/with-icon",
            data={"name": "Python", "value": "90", "category": "programming", "is_featured": "true",
                  "icon": (io.BytesIO(b"<svg/>"), "python.svg")},
            content_type="multipart/form-data",
        )
        assert response.status_code == 201
        skill = _data(response)
        assert skill["value"] == 90
        assert skill["icon_url"].startswith("/uploads/skills/")

        client.post("/api/v1/skills", json={"name": "Docker", "value": 70, "category": "tools"})

        assert [s["name"] for s in _data(client.get("/api/v1/skills/featured"))] == ["Python"]
        assert [s["name"] for s in _data(client.get("/api/v1/skills/category/tools"))] == ["Docker"]

        assert client.delete(f"/api/v1/skills/{skill['id']}").status_code == 200
        assert _files(os.path.join(upload_dir, "skills")) == []

    def test_replace_icon(self, client, upload_dir):
        skill = _data(client.post(
            "/api/v1/skills/with-icon",
            data={"name": "Go", "value": "80", "icon": (io.BytesIO(b"<svg/>"), "go.svg")},
            content_type="multipart/form-data",
        ))

        updated = _data(client.put(
            f"/api/v1/skills/{skill['id']}/with-icon",
            data={"value": "85", "icon": (io.BytesIO(PNG), "go.png")},
            content_type="multipart/form-data",
        ))

        assert updated["value"] == 85
        assert updated["icon_url"].endswith(".png")
        assert _files(os.path.join(upload_dir, "skills")) == [updated["icon_url"].rsplit("/", 1)[-1]]

    def test_duplicate_name(self, client):
        client.post("/api/v1/skills", json={"name": "Go", "value": 80})
        assert client.post("/api/v1/skills", json={"name": "Go", "value": 60}).status_code == 409


class TestCertificatesApi:
    """Tests for /api/v1/certificates"""

    def test_with_image_requires_file(self, client):
        response = client.post(
            "/api/v1/certificates/with-image",
            data={"name": "AWS"},
            content_type="multipart/form-data",
        )
        assert response.status_code == 400
        assert response.get_json()["details"]["field"] == "image"

    def test_pdf_upload_and_delete(self, client, upload_dir):
        response = client.post(
            "/api/v1/certificates/with-image",
            data={"name": "AWS", "issuer": "Amazon", "issue_date": "2024-03-01",
                  "image": (io.BytesIO(b"%PDF-1.4"), "aws.pdf")},
            content_type="multipart/form-data",
        )
        assert response.status_code == 201
        certificate = _data(response)
        assert certificate["issue_date"] == "2024-03-01"
        assert len(_files(os.path.join(upload_dir, "certificates"))) == 1

        assert client.delete(f"/api/v1/certificates/{certificate['id']}").status_code == 200
        assert _files(os.path.join(upload_dir, "certificates")) == []

    def test_json_create_needs_image_url(self, client):
        response = client.post("/api/v1/certificates", json={"name": "AWS"})
        assert response.status_code == 400

        created = client.post("/api/v1/certificates", json={"name": "AWS", "image_url": "https://cdn.example/aws.png"})
        assert created.status_code == 201
        assert _data(created)["issuer"] == "-"


class TestProfileApi:
    """Tests for education, experiences and testimonials"""

    def test_education_achievements_replaced(self, client):
        education = _data(client.post("/api/v1/education", json={
            "school": "MIT", "major": "CS",
            "achievements": [{"achievement": "Dean's list", "display_order": 1}, {"achievement": "Thesis"}],
        }))
        assert [a["achievement"] for a in education["achievements"]] == ["Thesis", "Dean's list"]

        unchanged = _data(client.put(f"/api/v1/education/{education['id']}", json={"major": "EECS"}))
        assert unchanged["major"] == "EECS"
        assert len(unchanged["achievements"]) == 2

        replaced = _data(client.put(f"/api/v1/education/{education['id']}",
                                    json={"achievements": [{"achievement": "Summa cum laude"}]}))
        assert [a["achievement"] for a in replaced["achievements"]] == ["Summa cum laude"]

    def test_experience_skills_deduplicated(self, client):
        response = client.post("/api/v1/experiences", json={
            "title": "Engineer", "company": "Acme", "location": "Remote",
            "start_year": "2020", "end_year": "2023",
            "responsibilities": [{"description": "APIs", "display_order": 0},
                                 {"description": "Ops", "display_order": 1}],
            "skills": ["Python", {"skill_name": "Go"}, "Python"],
        })
        assert response.status_code == 201
        experience = _data(response)
        assert [s["skill_name"] for s in experience["skills"]] == ["Go", "Python"]
        assert [r["description"] for r in experience["responsibilities"]] == ["APIs", "Ops"]

        updated = _data(client.put(f"/api/v1/experiences/{experience['id']}", json={"skills": ["Rust"]}))
        assert [s["skill_name"] for s in updated["skills"]] == ["Rust"]
        assert len(updated["responsibilities"]) == 2

        assert client.delete(f"/api/v1/experiences/{experience['id']}").status_code == 200
        assert _data(client.get("/api/v1/experiences")) == []

    def test_testimonials(self, client):
        base = {"name": "Ada", "title": "CTO", "message": "Great work"}
        assert client.post("/api/v1/testimonials", json=dict(base, rating=6)).status_code == 400

        client.post("/api/v1/testimonials", json=dict(base, rating=5, is_featured=True))
        client.post("/api/v1/testimonials", json=dict(base, name="Bob", rating=4, status="pending"))

        pending = _data(client.get("/api/v1/testimonials/status/pending"))
        assert [t["name"] for t in pending] == ["Bob"]
        assert [t["name"] for t in _data(client.get("/api/v1/testimonials/featured"))] == ["Ada"]
        assert client.get("/api/v1/testimonials/status/unknown").status_code == 400


class TestContentApi:
    """Tests for sections, social links and settings"""

    @pytest.mark.parametrize("path,payload,unique", [
        ("/api/v1/sections", {"section_id": "about", "label": "About"}, "section_id"),
        ("/api/v1/social-links", {"platform": "github", "url": "https://github.com/me"}, "platform"),
        ("/api/v1/settings", {"key": "site_title", "value": "My site"}, "key"),
    ])
    def test_crud_and_conflict(self, client, path, payload, unique):
        created = client.post(path, json=payload)
        assert created.status_code == 201
        item = _data(created)

        assert client.post(path, json=payload).status_code == 409
        assert [i["id"] for i in _data(client.get(path))] == [item["id"]]

        updated = _data(client.put(f"{path}/{item['id']}", json={unique: "renamed"}))
        assert updated[unique] == "renamed"

        assert client.delete(f"{path}/{item['id']}").status_code == 200
        assert client.get(f"{path}/{item['id']}").status_code == 404

    def test_setting_defaults_to_string_type(self, client):
        setting = _data(client.post("/api/v1/settings", json={"key": "theme", "value": "dark"}))
        assert setting["data_type"] == "string"


class TestErrorPayloads:
    """Errors keep the structured payload when exceptions are not propagated"""

    @pytest.fixture
    def live_client(self, test_settings):
        from portfolio.app import create_app
        from portfolio.db import db

        live_app = create_app(config={"TESTING": False}, settings=test_settings)
        with live_app.app_context():
            yield live_app.test_client()
            db.session.remove()

    def test_unreachable_store_on_read(self, live_client):
        repository = get_services().projects.repository
        error = OperationalError("SELECT ...", {}, Exception("unable to open database file"))
        with patch.object(repository, "get_all", side_effect=error):
            response = live_client.get("/api/v1/projects")

        assert response.status_code == 503
        body = response.get_json()
        assert body["error"] is True
        assert body["code"] == "STORE_UNAVAILABLE"

    def test_method_not_allowed(self, live_client):
        response = live_client.patch("/api/v1/projects")

        assert response.status_code == 405
        body = response.get_json()
        assert body["error"] is True
        assert body["code"] == "METHOD_NOT_ALLOWED"

    def test_unexpected_error(self, live_client):
        repository = get_services().projects.repository
        with patch.object(repository, "get_all", side_effect=RuntimeError("boom")):
            response = live_client.get("/api/v1/projects")

        assert response.status_code == 500
        assert response.get_json()["code"] == "INTERNAL_ERROR"
