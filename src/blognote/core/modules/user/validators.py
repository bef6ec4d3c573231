from email_validator import EmailNotValidError, validate_email

from blognote.errors import FieldError

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def is_email(value: str) -> bool:
    """Check email syntax only, without any DNS lookups."""
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return False
    return True


def validate_registration(email: str, password: str) -> list[FieldError]:
    """Collect every problem with registration input.

    Requirements:
    - Email is a syntactically valid address
    - Password is not empty and fits into bcrypt's 72 byte limit

    Returns:
        All field errors found, empty when input is valid
    """
    errors: list[FieldError] = []
    if not is_email(email):
        errors.append(FieldError(field="email", message="Email is invalid"))

    if not password:
        errors.append(FieldError(field="password", message="Password invalid"))
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(FieldError(field="password", message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long"))

    return errors
