"""Page/offset arithmetic shared by list query handlers."""


def clamp_page(page: int, page_size: int, max_page_size: int) -> tuple[int, int]:
    """Normalize a requested page.

    Args:
        page: Requested 1-based page (values below 1 become 1).
        page_size: Requested size (clamped to 1..max_page_size).
        max_page_size: Upper bound from settings.

    Returns:
        Tuple of (page, page_size).
    """
    return max(page, 1), min(max(page_size, 1), max_page_size)


def page_offset(page: int, page_size: int) -> int:
    """Row offset of a 1-based page."""
    return (page - 1) * page_size
