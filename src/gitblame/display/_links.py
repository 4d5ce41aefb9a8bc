"""Commit web links."""

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from gitblame.exceptions import InvalidCommitUrlError

from ._tokens import parse_tokens

_HTTP_URL = TypeAdapter(AnyHttpUrl)


def build_commit_url(template: str, commit_hash: str) -> str | None:
    """Build the web URL for a commit.

    Args:
        template: URL template where ``${hash}`` is the full commit hash,
            for example ``https://example.com/repo/commit/${hash}``.
        commit_hash: Hash to substitute.

    Returns:
        The URL, or None if the template is empty.

    Raises:
        InvalidCommitUrlError: If the result is not an http(s) URL.
    """
    if not template:
        return None

    url = parse_tokens(template, {"hash": commit_hash})
    try:
        _ = _HTTP_URL.validate_python(url)
    except ValidationError as e:
        msg = f"Malformed commit URL '{url}'. Must be a valid web URL."
        raise InvalidCommitUrlError(msg, url=url) from e
    return url
