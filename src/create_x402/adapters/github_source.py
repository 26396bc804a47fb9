"""Template source backed by GitHub tarball downloads."""

from __future__ import annotations

import os
import shutil
import tarfile
import tempfile
from pathlib import Path, PurePosixPath
from typing import Sequence

import requests

from create_x402.domain.template import SourceLocator
from create_x402.ports.template_source import FetchSummary, TemplateFetchError, TemplateSource
from create_x402.settings import RuntimeSettings

TOKEN_ENV_VARS = ("GITHUB_TOKEN", "GH_TOKEN")
CHUNK_SIZE = 64 * 1024


def github_token_from_env() -> str | None:
    for name in TOKEN_ENV_VARS:
        value = os.environ.get(name, "").strip()
        if value:
            return value
    return None


class GitHubTemplateSource(TemplateSource):
    def __init__(
        self,
        settings: RuntimeSettings,
        session: requests.Session | None = None,
        token: str | None = None,
    ) -> None:
        self._settings = settings
        self._session = session or requests.Session()
        self._token = token if token is not None else github_token_from_env()

    def archive_url(self, locator: SourceLocator) -> str:
        ref = locator.ref or self._settings.default_ref
        host = self._settings.archive_host.rstrip("/")
        return f"{host}/{locator.owner}/{locator.repo}/tar.gz/{ref}"

    def fetch(self, locator: SourceLocator, destination: Path) -> FetchSummary:
        url = self.archive_url(locator)
        headers = {"User-Agent": f"create-x402/{self._settings.cli_version}"}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        with tempfile.TemporaryDirectory(prefix="create-x402-") as tmp_dir:
            archive_path = Path(tmp_dir) / "template.tar.gz"
            try:
                response = self._session.get(
                    url, headers=headers, stream=True, timeout=self._settings.request_timeout
                )
                with response:
                    if response.status_code == 404:
                        raise TemplateFetchError(f"{locator} not found ({url})")
                    if response.status_code >= 400:
                        raise TemplateFetchError(
                            f"download of {locator} failed: {response.status_code} {response.reason}"
                        )
                    with archive_path.open("wb") as fh:
                        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                            if chunk:
                                fh.write(chunk)
            except requests.RequestException as exc:
                raise TemplateFetchError(f"download of {locator} failed: {exc}") from exc

            subpath = [part for part in locator.subpath.split("/") if part]
            summary = _extract_subtree(archive_path, subpath, destination)

        if summary.extracted == 0:
            raise TemplateFetchError(f"{locator} not found in repository archive")
        return summary


def _extract_subtree(archive_path: Path, prefix: Sequence[str], destination: Path) -> FetchSummary:
    """Copy members under ``<top>/<prefix>`` into ``destination``."""

    prefix = tuple(prefix)
    extracted = 0
    skipped = 0
    try:
        with tarfile.open(archive_path, mode="r:gz") as archive:
            for member in archive:
                name = PurePosixPath(member.name)
                if name.is_absolute():
                    continue
                # GitHub wraps the tree in a single "<repo>-<ref>/" folder
                parts = name.parts[1:]
                if parts[: len(prefix)] != prefix:
                    continue
                relative = parts[len(prefix):]
                if any(part == ".." for part in relative):
                    skipped += 1
                    continue
                target = destination.joinpath(*relative)
                if member.isdir():
                    target.mkdir(parents=True, exist_ok=True)
                    extracted += 1
                elif member.isfile() and relative:
                    source = archive.extractfile(member)
                    if source is None:
                        continue
                    target.parent.mkdir(parents=True, exist_ok=True)
                    with source, target.open("wb") as fh:
                        shutil.copyfileobj(source, fh)
                    if member.mode & 0o111:
                        target.chmod(0o755)
                    extracted += 1
                elif relative:
                    # links and special files are not materialised
                    skipped += 1
    except (tarfile.TarError, EOFError) as exc:
        raise TemplateFetchError(f"template archive is corrupt: {exc}") from exc
    except OSError as exc:
        raise TemplateFetchError(f"could not write template into {destination}: {exc}") from exc
    return FetchSummary(destination=destination, extracted=extracted, skipped=skipped)
