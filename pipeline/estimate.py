"""Height estimation — approximate rendered pixel height of one entry.

There is no layout engine behind pagination, so each kind gets a fixed
height or a cheap character/image-count heuristic. These numbers decide
what "fits on a page"; changing any of them changes every page plan.

  heading          60
  text             max(100, len(text) // 2)
  photo            180   (four photos share an 820 px page)
  menu             600   (always isolated anyway)
  full_page_photo  600   (always isolated anyway)
  blog             200 + len(body) * 3 // 10 + 200 per image
  anything else    100
"""
from collections.abc import Callable

from models.content import BlogEntry, ContentEntry, TextEntry

HEADING_HEIGHT = 60
TEXT_MIN_HEIGHT = 100
PHOTO_HEIGHT = 180
ISOLATED_HEIGHT = 600
BLOG_BASE_HEIGHT = 200
BLOG_IMAGE_HEIGHT = 200
DEFAULT_HEIGHT = 100


def _text_height(entry: ContentEntry) -> int:
    text = entry.payload.text if isinstance(entry, TextEntry) else ""
    # Integer arithmetic keeps floor(len * 0.5) exact
    return max(TEXT_MIN_HEIGHT, len(text) // 2)


def _blog_height(entry: ContentEntry) -> int:
    if not isinstance(entry, BlogEntry):
        return BLOG_BASE_HEIGHT
    blog = entry.payload
    return BLOG_BASE_HEIGHT + len(blog.body) * 3 // 10 + BLOG_IMAGE_HEIGHT * blog.image_count


_ESTIMATORS: dict[str, Callable[[ContentEntry], int]] = {
    "heading": lambda _: HEADING_HEIGHT,
    "text": _text_height,
    "photo": lambda _: PHOTO_HEIGHT,
    "menu": lambda _: ISOLATED_HEIGHT,
    "full_page_photo": lambda _: ISOLATED_HEIGHT,
    "blog": _blog_height,
}


def estimate_height(entry: ContentEntry) -> int:
    """Estimated pixel height of `entry`. Never raises for unknown kinds."""
    estimator = _ESTIMATORS.get(entry.kind)
    if estimator is None:
        return DEFAULT_HEIGHT
    return estimator(entry)
