"""Mapping of source URLs onto workspace cache paths."""

from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlsplit

from repocache.core.exceptions.errors import URLError


def derive_workspace_path(workspace_root: Path | str, source_url: str) -> Path:
    """Map a source URL to its cache directory under the workspace root.

    The last path segment of the URL, minus its extension, names the
    directory. The path is percent-decoded first. Scheme, host, query and
    fragment are ignored, so two sources sharing a base name share a cache
    entry.

    Args:
        workspace_root: Workspace root directory.
        source_url: Repository URL, scp-style address or local path.

    Returns:
        Path of the cache entry.

    Raises:
        URLError: If the URL cannot be parsed or has no usable base name.
    """
    try:
        url_path = unquote(urlsplit(source_url).path)
    except ValueError as e:
        raise URLError(f"Invalid source URL: {source_url}", url=source_url) from e

    # scp-style addresses (git@host:org/repo.git) keep the colon in the path
    base_name = PurePosixPath(url_path.rsplit(":", 1)[-1]).name
    name = PurePosixPath(base_name).stem if base_name else ""

    if name in ("", ".", ".."):
        raise URLError(
            f"Source URL has no base name to derive a cache path from: {source_url}",
            url=source_url,
        )

    return Path(workspace_root) / name
