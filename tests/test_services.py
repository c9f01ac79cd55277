"""
Unit tests for the CMS and user services against the in-memory backend.
"""

import pytest
from fastapi import HTTPException

from cms.services import cms_service, user_service
from tests.helpers import TEST_PASSWORD


@pytest.mark.unit
class TestPages:

    def test_create_normalizes_url(self, fake_db):
        page = cms_service.create_page("/About/Team/", "Our Team", "hello")

        assert page["url"] == "about/team"
        assert page["is_published"] is True
        assert page["created_date"]

    def test_get_page_by_any_spelling(self, sample_page):
        assert cms_service.get_page("/about/team")["id"] == sample_page["id"]
        assert cms_service.get_page("ABOUT/TEAM/")["id"] == sample_page["id"]

    def test_get_page_missing(self, fake_db):
        assert cms_service.get_page("nothing/here") is None
        assert cms_service.get_page("") is None

    def test_unpublished_page_hidden(self, fake_db):
        cms_service.create_page("draft", "Draft", "wip", is_published=False)

        assert cms_service.get_page("draft") is None
        assert cms_service.get_page("draft", include_unpublished=True)["title"] == "Draft"

    def test_duplicate_url_conflicts(self, sample_page):
        with pytest.raises(HTTPException) as exc_info:
            cms_service.create_page("about/team", "Again", "")

        assert exc_info.value.status_code == 409

    def test_page_cannot_take_redirect_url(self, sample_redirect):
        with pytest.raises(HTTPException) as exc_info:
            cms_service.create_page("docs", "Docs page", "")

        assert exc_info.value.status_code == 409

    @pytest.mark.parametrize("url", ["account/settings", "admin", "static/site.css", "health"])
    def test_reserved_urls_rejected(self, fake_db, url):
        with pytest.raises(HTTPException) as exc_info:
            cms_service.create_page(url, "Nope", "")

        assert exc_info.value.status_code == 400

    def test_invalid_url_characters_rejected(self, fake_db):
        with pytest.raises(HTTPException) as exc_info:
            cms_service.create_page("bad url?", "Nope", "")

        assert exc_info.value.status_code == 400

    def test_update_keeps_own_url(self, sample_page):
        updated = cms_service.update_page(sample_page["id"], "about/team", "New title", "new body", True)

        assert updated["title"] == "New title"
        assert cms_service.get_page("about/team")["contents"] == "new body"

    def test_update_missing_page(self, fake_db):
        with pytest.raises(HTTPException) as exc_info:
            cms_service.update_page(404, "ghost", "Ghost", "")

        assert exc_info.value.status_code == 404

    def test_backend_failure_becomes_500(self, fake_db):
        fake_db.fail = True

        with pytest.raises(HTTPException) as exc_info:
            cms_service.all_pages()

        assert exc_info.value.status_code == 500

    def test_render_markdown(self):
        html = cms_service.render_markdown("# Title\n\nSome **bold** text.")

        assert "<h1>Title</h1>" in html
        assert "<strong>bold</strong>" in html
        assert cms_service.render_markdown(None) == ""


@pytest.mark.unit
class TestRedirects:

    def test_get_redirect(self, sample_redirect):
        redirect = cms_service.get_redirect("/Docs")

        assert redirect["url"] == "https://docs.example.com/start"
        assert redirect["clicks"] == 0

    def test_record_click(self, sample_redirect):
        cms_service.record_redirect_click(sample_redirect)
        cms_service.record_redirect_click(cms_service.get_redirect("docs"))

        assert cms_service.get_redirect("docs")["clicks"] == 2

    def test_target_must_be_url_or_path(self, fake_db):
        with pytest.raises(HTTPException) as exc_info:
            cms_service.create_redirect("go", "javascript:alert(1)", "Bad")

        assert exc_info.value.status_code == 400

    def test_name_defaults_to_short_url(self, fake_db):
        redirect = cms_service.create_redirect("home", "/", "")

        assert redirect["name"] == "home"

    def test_update_redirect(self, sample_redirect):
        cms_service.update_redirect(sample_redirect["id"], "documentation", "https://docs.example.com/", "Docs")

        assert cms_service.get_redirect("docs") is None
        assert cms_service.get_redirect("documentation")["url"] == "https://docs.example.com/"


@pytest.mark.unit
class TestUsers:

    def test_create_user_hashes_password(self, user):
        assert user["hashed_password"] != TEST_PASSWORD
        assert user_service.verify_hash(user["hashed_password"], TEST_PASSWORD)
        assert user["email"] == "reader@example.com"
        assert user["is_admin"] is False

    def test_duplicate_email_conflicts(self, user):
        with pytest.raises(HTTPException) as exc_info:
            user_service.create_user("Other", "READER@example.com", TEST_PASSWORD)

        assert exc_info.value.status_code == 409

    def test_invalid_email_rejected(self, fake_db):
        with pytest.raises(HTTPException) as exc_info:
            user_service.create_user("Other", "not-an-email", TEST_PASSWORD)

        assert exc_info.value.status_code == 400

    def test_short_password_rejected(self, fake_db):
        with pytest.raises(HTTPException) as exc_info:
            user_service.create_user("Other", "other@example.com", "abc")

        assert exc_info.value.status_code == 400

    def test_login_success_records_last_login(self, user):
        logged_in = user_service.login_user("reader@example.com", TEST_PASSWORD)

        assert logged_in["id"] == user["id"]
        assert logged_in["last_login"] is not None

    def test_login_wrong_password(self, user):
        assert user_service.login_user("reader@example.com", "wrong-password") is None

    def test_login_unknown_email(self, fake_db):
        assert user_service.login_user("nobody@example.com", TEST_PASSWORD) is None

    def test_verify_hash_garbage(self):
        assert user_service.verify_hash("not-a-hash", "x") is False
        assert user_service.verify_hash(None, "x") is False

    def test_public_profile_drops_hash(self, user):
        profile = user_service.public_profile(user)

        assert "hashed_password" not in profile
        assert profile["name"] == "Sam Reader"
        assert user_service.public_profile(None) is None
