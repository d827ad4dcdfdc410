"""Parsing and formatting of ``git://repo?revision#path`` document URIs."""

from __future__ import annotations

from dataclasses import dataclass
from urllib.parse import quote, unquote, urlsplit

__all__ = ["GitURI", "make_git_uri", "parse_git_uri"]

_SAFE = "/@+:,=$!"


@dataclass(frozen=True, slots=True)
class GitURI:
    """Components of a document URI.

    Attributes:
        repo: Repository name, host included (``github.com/foo/bar``).
        commit: Revision or commit the document was opened at.
        path: File path inside the repository.

    """

    repo: str
    commit: str
    path: str


def parse_git_uri(uri: str) -> GitURI:
    """Split a ``git://`` URI into repository, revision and path.

    Args:
        uri: URI such as ``git://github.com/foo/bar?rev#dir/file.go``.

    Returns:
        The decoded components.

    Raises:
        ValueError: If the URI is not a ``git://`` URI with a repository.

    """
    parts = urlsplit(uri)
    if parts.scheme != "git" or not parts.netloc:
        raise ValueError(f"Not a repository URI: {uri!r}")
    repo = parts.netloc + parts.path
    return GitURI(repo=repo, commit=unquote(parts.query), path=unquote(parts.fragment))


def make_git_uri(repo: str, revision: str, path: str) -> str:
    """Format a ``git://`` URI for a file at a revision."""
    return f"git://{repo}?{quote(revision, safe=_SAFE)}#{quote(path, safe=_SAFE)}"
