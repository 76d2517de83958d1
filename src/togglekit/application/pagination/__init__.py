"""Application pagination – offset page primitives used by flag listing."""
from togglekit.application.pagination.page import Page
from togglekit.application.pagination.page_request import MAX_PAGE_SIZE, PageRequest

__all__ = ["MAX_PAGE_SIZE", "Page", "PageRequest"]
