"""
Shared pytest fixtures.

FakeGitHub stands in for api.github.com: routes are registered per path and
every request the client makes is recorded so tests can assert on order,
count and headers.
"""

import base64

import httpx
import pytest
from typer.testing import CliRunner

from git_notes.config import Config

OWNER = "octo"
REPO = "notes-demo"
NOTES_REF = "notes/ai"
REPO_PATH = f"/repos/{OWNER}/{REPO}/git"

NOTE_A = "a" * 40
NOTE_B = "b" * 40


def encode_blob(text: str) -> str:
    """Base64 the way GitHub serves it: wrapped with newlines."""
    return base64.encodebytes(text.encode("utf-8")).decode("ascii")


class FakeGitHub:
    def __init__(self):
        self.routes: dict[str, tuple[int, dict]] = {}
        self.requests: list[httpx.Request] = []

    def add(self, path: str, json=None, status: int = 200, text: str = None):
        body = {"text": text} if text is not None else {"json": json}
        self.routes[path] = (status, body)

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get(request.url.path)
        if route is None:
            return httpx.Response(404, json={"message": "Not Found"})
        status, body = route
        return httpx.Response(status, **body)

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handler)

    @property
    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]

    def add_ref(self, refs: list[dict]):
        self.add(f"{REPO_PATH}/matching-refs/{NOTES_REF}", json=refs)

    def add_commit(self, sha: str, tree_sha: str):
        self.add(f"{REPO_PATH}/commits/{sha}", json={"sha": sha, "tree": {"sha": tree_sha}})

    def add_tree(self, sha: str, entries: list[dict], truncated: bool = False):
        self.add(f"{REPO_PATH}/trees/{sha}", json={"sha": sha, "tree": entries, "truncated": truncated})

    def add_blob(self, sha: str, text: str):
        self.add(
            f"{REPO_PATH}/blobs/{sha}",
            json={"sha": sha, "content": encode_blob(text), "encoding": "base64"},
        )


def ref_payload(name: str, sha: str) -> dict:
    return {"ref": f"refs/{name}", "object": {"sha": sha, "type": "commit"}}


@pytest.fixture
def config() -> Config:
    return Config(
        owner=OWNER,
        repo=REPO,
        notes_ref=NOTES_REF,
        api_url="https://api.github.com",
    )


@pytest.fixture
def fake_github() -> FakeGitHub:
    return FakeGitHub()


@pytest.fixture
def notes_repo(fake_github) -> FakeGitHub:
    """
    A notes ref with two notes and one subtree:

        refs/notes/ai -> commit c0mmit -> tree 7ree
            <NOTE_A>  blob bl0b-a
            nested/   tree 5ub
            <NOTE_B>  blob bl0b-b
    """
    fake_github.add_ref([ref_payload(NOTES_REF, "c0mmit")])
    fake_github.add_commit("c0mmit", "7ree")
    fake_github.add_tree("7ree", [
        {"path": NOTE_A, "mode": "100644", "type": "blob", "sha": "bl0b-a"},
        {"path": "nested", "mode": "040000", "type": "tree", "sha": "5ub"},
        {"path": NOTE_B, "mode": "100644", "type": "blob", "sha": "bl0b-b"},
    ])
    fake_github.add_blob("bl0b-a", "Reviewed by the assistant.\n\n")
    fake_github.add_blob("bl0b-b", "Needs follow-up:\n- add tests\n")
    return fake_github


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provides a fresh Typer CliRunner instance for CLI tests."""
    return CliRunner()
