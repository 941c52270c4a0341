"""Database URL redaction for CLI output."""

from sqlalchemy.engine import make_url


def sanitize_url(url: str) -> str:
    """Render a database URL with its password replaced by ``***``.

    Only the password component is redacted; secrets placed in query
    parameters are shown as given.

    Example:
        ``postgresql+psycopg://gigcal:s3cr3t@db/gigcal`` becomes
        ``postgresql+psycopg://gigcal:***@db/gigcal``.
    """
    return make_url(url).render_as_string(hide_password=True)
