"""Application-level exception types.

Convention:
- ``InternalServerError``: for errors whose details must never reach clients
  (configuration problems, data-integrity violations, etc.). The global
  handler logs the full message at ERROR and returns a generic
  "Internal server error" (500) to the client.
- ``RepositoryError``: the content repository could not answer (network,
  authentication, unexpected status or malformed payload). The global handler
  returns 502. "No matching item" is never an error: services return ``None``
  or an empty sequence instead.
"""

from __future__ import annotations


class InternalServerError(Exception):
    """Raised for internal errors whose details must not be exposed to clients.

    The global exception handler in ``kontent_site/main.py`` catches this, logs
    the full message server-side, and returns HTTP 500 with a generic
    ``"Internal server error"`` detail.
    """


class RepositoryError(Exception):
    """Raised when a content repository request fails.

    ``status_code`` is the HTTP status returned by the repository, or ``None``
    when the request never produced a response (DNS, connect, timeout).
    """

    def __init__(self, message: str, *, url: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class AmbiguousSlugError(InternalServerError):
    """Several pages claim the same slug in one language.

    Only raised when ``duplicate_slug_policy`` is ``"error"``; the default
    policy logs and takes the first result.
    """

    def __init__(self, slug: str, language: str, codenames: list[str]) -> None:
        super().__init__(
            f"Slug {slug!r} in language {language!r} is claimed by {len(codenames)} pages: "
            f"{', '.join(codenames)}"
        )
        self.slug = slug
        self.language = language
        self.codenames = codenames
