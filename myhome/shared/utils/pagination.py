# 📄 File: myhome/shared/utils/pagination.py
# 🧭 Purpose (Layman Explanation):
# Describes "which page of results, and how many per page" for list lookups.
# 🧪 Purpose (Technical Summary):
# Zero-based page request value object translated to SQL offset/limit by repositories.
# 🔗 Dependencies:
# pydantic, myhome.shared.config.settings, myhome.shared.core.exceptions
# 🔄 Connected Modules / Calls From:
# Domain services (list operations), repository implementations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from myhome.shared.config.settings import get_settings
from myhome.shared.core.exceptions import ValidationError


class PageRequest(BaseModel):
    """A zero-based page of ``size`` records."""

    model_config = ConfigDict(frozen=True)

    page: int = Field(default=0, ge=0)
    size: int = Field(default=20, gt=0)

    @property
    def offset(self) -> int:
        return self.page * self.size

    @property
    def limit(self) -> int:
        return self.size

    @classmethod
    def of(cls, page: int = 0, size: Optional[int] = None) -> "PageRequest":
        """
        Build a page request, applying the configured default and maximum size.

        Raises:
            ValidationError: If page is negative or size is outside 1..MAX_PAGE_SIZE
        """
        settings = get_settings()
        size = settings.DEFAULT_PAGE_SIZE if size is None else size

        if page < 0:
            raise ValidationError("Page index must not be negative", field="page", value=page)
        if size <= 0 or size > settings.MAX_PAGE_SIZE:
            raise ValidationError(
                f"Page size must be between 1 and {settings.MAX_PAGE_SIZE}",
                field="size",
                value=size,
            )
        return cls(page=page, size=size)
