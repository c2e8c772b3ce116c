"""
Shared response schemas
"""
import re
from typing import Any, List, Optional

from pydantic import BaseModel, Field

URL_PATTERN = re.compile(r"^https?://[^\s/$.?#][^\s]*$", re.IGNORECASE)


class MessageResponse(BaseModel):
    message: str


class SuccessResponse(BaseModel):
    success: bool = True


class PageResponse(BaseModel):
    """Pagination fields shared by list endpoints"""

    total: int = Field(..., description="Rows matching the filters")
    page: int = Field(..., description="1-based page number")
    page_size: int = Field(..., description="Rows per page")
    total_pages: int


def blank_to_none(value: Any) -> Any:
    """Treat empty strings as missing"""
    if isinstance(value, str) and not value.strip():
        return None
    return value


def validate_url(value: Optional[str]) -> Optional[str]:
    """http(s) URL or None; empty strings become None"""
    value = blank_to_none(value)
    if value is None:
        return None
    if not URL_PATTERN.match(value):
        raise ValueError("Invalid URL")
    return value


def split_csv(values: Optional[List[str]]) -> List[str]:
    """Accept repeated query params as well as comma-separated ones"""
    result = []
    for value in values or []:
        result.extend(part.strip() for part in value.split(",") if part.strip())
    return result
