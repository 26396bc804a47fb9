from __future__ import annotations

import io
import tarfile
from pathlib import Path

import pytest
import requests

from _fakes import FakeResponse, FakeSession, make_tarball
from create_x402.adapters.github_source import GitHubTemplateSource, github_token_from_env
from create_x402.domain.template import SourceLocator
from create_x402.ports.template_source import TemplateFetchError
from create_x402.settings import RuntimeSettings

EXPRESS = SourceLocator.parse("coinbase/x402/examples/typescript/servers/express")

ARCHIVE_FILES = {
    "README.md": b"root readme",
    "examples/typescript/servers/express/package.json": b'{"name": "express"}',
    "examples/typescript/servers/express/src/index.ts": b"export {}\n",
    "examples/typescript/servers/hono/package.json": b'{"name": "hono"}',
}


def make_source(settings: RuntimeSettings, response: FakeResponse, token: str | None = None) -> tuple[GitHubTemplateSource, FakeSession]:
    session = FakeSession(response)
    return GitHubTemplateSource(settings, session=session, token=token), session


def test_fetch_extracts_only_subpath(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    source, session = make_source(runtime_settings, FakeResponse(body=make_tarball(ARCHIVE_FILES)))
    target = tmp_path / "my-app"

    summary = source.fetch(EXPRESS, target)

    assert summary.destination == target
    assert summary.skipped == 0
    request = session.requests[0]
    assert request["url"] == "https://codeload.github.com/coinbase/x402/tar.gz/main"
    assert request["stream"] is True
    assert request["timeout"] == runtime_settings.request_timeout
    assert "Authorization" not in request["headers"]
    files = sorted(path.relative_to(target).as_posix() for path in target.rglob("*") if path.is_file())
    assert files == ["package.json", "src/index.ts"]
    assert session.response.closed


def test_fetch_whole_repository_and_ref(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    archive = make_tarball({"package.json": b"{}", "lib/a.js": b"1"}, top="x402-starter-kit-v1")
    source, session = make_source(runtime_settings, FakeResponse(body=archive), token="secret")
    target = tmp_path / "kit"

    source.fetch(SourceLocator.parse("dabit3/x402-starter-kit#v1"), target)

    assert session.requests[0]["url"].endswith("/dabit3/x402-starter-kit/tar.gz/v1")
    assert session.requests[0]["headers"]["Authorization"] == "Bearer secret"
    assert (target / "package.json").read_text() == "{}"
    assert (target / "lib" / "a.js").exists()


def test_fetch_overwrites_existing_files(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    target = tmp_path / "my-app"
    target.mkdir()
    (target / "package.json").write_text("stale", encoding="utf-8")
    source, _ = make_source(runtime_settings, FakeResponse(body=make_tarball(ARCHIVE_FILES)))

    source.fetch(EXPRESS, target)

    assert (target / "package.json").read_text(encoding="utf-8") == '{"name": "express"}'


def test_missing_subpath_is_fetch_error(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    source, _ = make_source(runtime_settings, FakeResponse(body=make_tarball(ARCHIVE_FILES)))
    with pytest.raises(TemplateFetchError, match="not found"):
        source.fetch(SourceLocator.parse("coinbase/x402/examples/typescript/nope"), tmp_path / "nope")


def test_http_errors_are_fetch_errors(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    source, _ = make_source(runtime_settings, FakeResponse(status_code=404, reason="Not Found"))
    with pytest.raises(TemplateFetchError, match="not found"):
        source.fetch(EXPRESS, tmp_path / "a")

    source, _ = make_source(runtime_settings, FakeResponse(status_code=503, reason="Service Unavailable"))
    with pytest.raises(TemplateFetchError, match="503"):
        source.fetch(EXPRESS, tmp_path / "b")


def test_network_errors_are_fetch_errors(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    session = FakeSession(error=requests.ConnectionError("offline"))
    source = GitHubTemplateSource(runtime_settings, session=session, token="")
    with pytest.raises(TemplateFetchError, match="offline"):
        source.fetch(EXPRESS, tmp_path / "a")


def test_corrupt_archive_is_fetch_error(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    source, _ = make_source(runtime_settings, FakeResponse(body=b"definitely not gzip"))
    with pytest.raises(TemplateFetchError, match="corrupt"):
        source.fetch(EXPRESS, tmp_path / "a")


def test_escaping_members_and_links_are_skipped(tmp_path: Path, runtime_settings: RuntimeSettings) -> None:
    buffer = io.BytesIO()
    with tarfile.open(fileobj=buffer, mode="w:gz") as archive:
        for name, data in (("repo-main/ok.txt", b"ok"), ("repo-main/../evil.txt", b"evil")):
            info = tarfile.TarInfo(name)
            info.size = len(data)
            archive.addfile(info, io.BytesIO(data))
        link = tarfile.TarInfo("repo-main/link")
        link.type = tarfile.SYMTYPE
        link.linkname = "/etc/passwd"
        archive.addfile(link)
    source, _ = make_source(runtime_settings, FakeResponse(body=buffer.getvalue()))
    target = tmp_path / "out"

    summary = source.fetch(SourceLocator.parse("owner/repo"), target)

    assert (summary.extracted, summary.skipped) == (1, 2)
    assert (target / "ok.txt").read_bytes() == b"ok"
    assert not (tmp_path / "evil.txt").exists()
    assert not (target / "link").exists()


def test_token_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert github_token_from_env() is None
    monkeypatch.setenv("GH_TOKEN", " abc ")
    assert github_token_from_env() == "abc"
    monkeypatch.setenv("GITHUB_TOKEN", "xyz")
    assert github_token_from_env() == "xyz"
