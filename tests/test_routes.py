"""Tests for the HTTP proxy and feed routes."""

from unittest.mock import AsyncMock, patch

import httpx
import pytest
from starlette.testclient import TestClient

from repo_showcase.exceptions import AuthenticationError, FetchError, GitHubAPIError
from repo_showcase.server import create_app


@pytest.fixture
def app():
    return create_app()


@pytest.fixture
def anonymous(app) -> TestClient:
    return TestClient(app)


@pytest.fixture
def signed_in(app) -> TestClient:
    return TestClient(app, cookies={"gh_token": "visitor_token"})


@pytest.fixture
def mock_github():
    with patch("repo_showcase.routes.starred.GitHubClient") as mock_client_cls:
        yield mock_client_cls


class TestStarredList:

    def test_missing_cookie(self, anonymous, mock_github):
        response = anonymous.get("/api/github/starred-list")

        assert response.status_code == 401
        assert response.json() == {"authed": False, "repos": []}
        mock_github.assert_not_called()

    def test_success(self, signed_in, mock_github):
        mock_github.return_value.list_starred = AsyncMock(return_value=[{"name": "alpha", "id": 1}])

        response = signed_in.get("/api/github/starred-list")

        assert response.status_code == 200
        assert response.json() == {"authed": True, "repos": [{"name": "alpha", "id": 1}]}
        mock_github.assert_called_once_with("visitor_token")

    def test_upstream_status_is_forwarded(self, signed_in, mock_github):
        mock_github.return_value.list_starred = AsyncMock(
            side_effect=GitHubAPIError("HTTP 403: Forbidden", status_code=403)
        )

        response = signed_in.get("/api/github/starred-list")

        assert response.status_code == 403
        assert response.json() == {"authed": False, "repos": []}

    def test_network_failure(self, signed_in, mock_github):
        mock_github.return_value.list_starred = AsyncMock(side_effect=httpx.ConnectError("Connection failed"))

        response = signed_in.get("/api/github/starred-list")

        assert response.status_code == 500
        assert response.json() == {"authed": False, "repos": [], "error": "Connection failed"}

    def test_non_json_listing(self, signed_in, mock_github):
        mock_github.return_value.list_starred = AsyncMock(
            side_effect=ValueError("Expecting value: line 1 column 1 (char 0)")
        )

        response = signed_in.get("/api/github/starred-list")

        assert response.status_code == 500
        assert response.json() == {
            "authed": False,
            "repos": [],
            "error": "Expecting value: line 1 column 1 (char 0)",
        }

    @pytest.mark.parametrize("listing", [{"message": "Moved Permanently"}, ["not-a-repo"]])
    def test_malformed_listing(self, signed_in, mock_github, listing):
        mock_github.return_value.list_starred = AsyncMock(return_value=listing)

        response = signed_in.get("/api/github/starred-list")

        assert response.status_code == 500
        body = response.json()
        assert body["authed"] is False
        assert body["repos"] == []
        assert body["error"]

    def test_cookie_name_is_configurable(self, app, mock_github, monkeypatch):
        monkeypatch.setenv("SESSION_COOKIE_NAME", "session")
        mock_github.return_value.list_starred = AsyncMock(return_value=[])

        response = TestClient(app, cookies={"session": "abc"}).get("/api/github/starred-list")

        assert response.status_code == 200
        mock_github.assert_called_once_with("abc")


class TestStarredStatus:

    def test_missing_cookie(self, anonymous):
        response = anonymous.get("/api/github/starred", params={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 401
        assert response.json() == {"authed": False, "starred": False}

    @pytest.mark.parametrize("starred", [True, False])
    def test_status(self, signed_in, mock_github, starred):
        mock_github.return_value.is_starred = AsyncMock(return_value=starred)

        response = signed_in.get("/api/github/starred", params={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 200
        assert response.json() == {"authed": True, "starred": starred}
        mock_github.return_value.is_starred.assert_awaited_once_with("octocat", "alpha")

    def test_invalid_owner(self, signed_in, mock_github):
        response = signed_in.get("/api/github/starred", params={"owner": "-bad-", "repo": "alpha"})

        assert response.status_code == 400
        assert response.json()["starred"] is False
        mock_github.assert_not_called()

    def test_rejected_token(self, signed_in, mock_github):
        mock_github.return_value.is_starred = AsyncMock(
            side_effect=GitHubAPIError("HTTP 401", status_code=401)
        )

        response = signed_in.get("/api/github/starred", params={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 401
        assert response.json() == {"authed": False, "starred": False}


class TestStar:

    def test_missing_cookie(self, anonymous, mock_github):
        response = anonymous.post("/api/github/star", json={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 401
        assert response.json() == {"ok": False}
        mock_github.assert_not_called()

    def test_success_echoes_count(self, signed_in, mock_github):
        mock_github.return_value.star_repository = AsyncMock(return_value=6)

        response = signed_in.post("/api/github/star", json={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 200
        assert response.json() == {"ok": True, "count": 6}
        mock_github.return_value.star_repository.assert_awaited_once_with("octocat", "alpha")

    def test_success_without_count(self, signed_in, mock_github):
        mock_github.return_value.star_repository = AsyncMock(return_value=None)

        response = signed_in.post("/api/github/star", json={"owner": "octocat", "repo": "alpha"})

        assert response.json() == {"ok": True}

    def test_rejected_token(self, signed_in, mock_github):
        mock_github.return_value.star_repository = AsyncMock(side_effect=AuthenticationError(status_code=401))

        response = signed_in.post("/api/github/star", json={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 401
        assert response.json() == {"ok": False}

    def test_upstream_failure(self, signed_in, mock_github):
        mock_github.return_value.star_repository = AsyncMock(
            side_effect=GitHubAPIError("HTTP 404", status_code=404)
        )

        response = signed_in.post("/api/github/star", json={"owner": "octocat", "repo": "missing"})

        assert response.status_code == 404
        assert response.json() == {"ok": False}

    def test_network_failure(self, signed_in, mock_github):
        mock_github.return_value.star_repository = AsyncMock(side_effect=httpx.ReadTimeout("timed out"))

        response = signed_in.post("/api/github/star", json={"owner": "octocat", "repo": "alpha"})

        assert response.status_code == 500
        assert response.json() == {"ok": False, "error": "timed out"}

    @pytest.mark.parametrize(
        "body",
        [b"not json", b"[1, 2]", b'{"owner": "octocat"}', b'{"owner": "\xff\xfe"}'],
        ids=["not-json", "array", "missing-repo", "invalid-utf8"],
    )
    def test_bad_body(self, signed_in, mock_github, body):
        response = signed_in.post(
            "/api/github/star", content=body, headers={"Content-Type": "application/json"}
        )

        assert response.status_code == 400
        assert response.json()["ok"] is False
        mock_github.assert_not_called()


class TestRepositoriesFeed:

    def test_feed(self, anonymous, sample_repos):
        with patch("repo_showcase.routes.repos.fetch_repos", AsyncMock(return_value=sample_repos)):
            response = anonymous.get("/api/github/repos", params={"language": "Shell", "sort": "created"})

        assert response.status_code == 200
        data = response.json()
        assert [r["name"] for r in data["repositories"]] == ["delta", "alpha"]
        assert data["total_count"] == 2
        assert data["sort_by"] == "created"
        assert data["languages"] == ["All", "Go", "Python", "TypeScript"]

    def test_feed_defaults(self, anonymous, sample_repos):
        with patch("repo_showcase.routes.repos.fetch_repos", AsyncMock(return_value=sample_repos)):
            data = anonymous.get("/api/github/repos").json()

        assert data["language"] == "All"
        assert data["sort_by"] == "activity"
        assert data["total_count"] == 4

    def test_unknown_sort(self, anonymous):
        response = anonymous.get("/api/github/repos", params={"sort": "forks"})
        assert response.status_code == 400

    def test_upstream_listing_failure(self, anonymous):
        with patch(
            "repo_showcase.routes.repos.fetch_repos",
            AsyncMock(side_effect=FetchError(403, "API rate limit exceeded")),
        ):
            response = anonymous.get("/api/github/repos")

        assert response.status_code == 502
        assert "403" in response.json()["error"]
