"""Common validation utilities."""

from ..exceptions import ValidationError
from ..models import SortKey

_USERNAME_CHARS = frozenset('abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789-')


def validate_github_username(username: str | None) -> str:
    """Validate a GitHub owner login.

    Args:
        username: GitHub username to validate

    Returns:
        Validated username, stripped of surrounding whitespace

    Raises:
        ValidationError: If username is invalid
    """
    if not username or not isinstance(username, str):
        raise ValidationError("Username must be a non-empty string", field_errors={"owner": "missing"})

    username = username.strip()
    if not username:
        raise ValidationError("Username cannot be empty or whitespace", field_errors={"owner": "blank"})

    if len(username) > 39:
        raise ValidationError("Username cannot be longer than 39 characters", field_errors={"owner": "too long"})

    # Alphanumerics and single inner hyphens only
    if username.startswith('-') or username.endswith('-') or '--' in username:
        raise ValidationError("Username has misplaced hyphens", field_errors={"owner": "hyphens"})

    if not set(username) <= _USERNAME_CHARS:
        raise ValidationError(
            "Username can only contain alphanumeric characters and hyphens",
            field_errors={"owner": "characters"},
        )

    return username


def validate_repo_name(repo_name: str | None) -> str:
    """Validate GitHub repository name format.

    Raises:
        ValidationError: If repository name is invalid
    """
    if not repo_name or not isinstance(repo_name, str):
        raise ValidationError("Repository name must be a non-empty string", field_errors={"repo": "missing"})

    repo_name = repo_name.strip()
    if not repo_name:
        raise ValidationError("Repository name cannot be empty or whitespace", field_errors={"repo": "blank"})

    if len(repo_name) > 100:
        raise ValidationError("Repository name cannot be longer than 100 characters", field_errors={"repo": "too long"})

    if repo_name.startswith('.') or repo_name.startswith('-'):
        raise ValidationError("Repository name cannot start with '.' or '-'", field_errors={"repo": "prefix"})

    if '/' in repo_name:
        raise ValidationError("Repository name cannot contain '/'", field_errors={"repo": "characters"})

    return repo_name


def validate_sort_key(sort_by: str | None) -> SortKey:
    """Validate a sort key name, defaulting to most recent activity.

    Raises:
        ValidationError: If the name is not a known sort key
    """
    if not sort_by:
        return SortKey.ACTIVITY
    try:
        return SortKey(sort_by.strip().lower())
    except ValueError:
        valid = ", ".join(key.value for key in SortKey)
        raise ValidationError(
            f"Unknown sort key: {sort_by}. Must be one of {valid}",
            field_errors={"sort": "unknown"},
        ) from None
