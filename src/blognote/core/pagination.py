from pydantic import BaseModel, Field

from blognote.errors import FieldError, ValidationError


class PageWindow(BaseModel):
    """Slice of an ordered result set for a 1-based page number."""

    page: int = Field(..., description="1-based page number", ge=1)
    per_page: int = Field(..., description="Maximum items per page", ge=1)

    @property
    def offset(self) -> int:
        """Number of items skipped before this page."""
        return (self.page - 1) * self.per_page

    @property
    def limit(self) -> int:
        return self.per_page


def page_window(page: int | None, per_page: int) -> PageWindow:
    """Build the window for `page`, defaulting to the first page.

    Pages past the end are allowed and simply yield nothing.

    Raises:
        ValidationError: If page is below 1
    """
    if page is None:
        page = 1
    if page < 1:
        raise ValidationError(errors=[FieldError(field="page", message="Page must be 1 or greater")])
    return PageWindow(page=page, per_page=per_page)
