from blognote.core.modules.post.models import PostInput
from blognote.errors import FieldError, ValidationError

MIN_TITLE_LENGTH = 5


def validate_post_input(post_input: PostInput) -> list[FieldError]:
    """Collect every problem with a post payload.

    Requirements:
    - Title is not empty and has at least 5 characters
    """
    errors: list[FieldError] = []
    if not post_input.title or len(post_input.title) < MIN_TITLE_LENGTH:
        errors.append(FieldError(field="title", message="Title invalid"))
    return errors


def ensure_valid_post_input(post_input: PostInput) -> None:
    """Raise a single ValidationError listing every problem with the payload."""
    errors = validate_post_input(post_input)
    if errors:
        raise ValidationError("Invalid input", errors)
