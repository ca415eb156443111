"""Link-preview metadata for shared "Stay Famous" moments."""
import re
from typing import List
from urllib.parse import unquote
from pydantic import BaseModel, Field
from famous_since.config import settings

_UNDERSCORES = re.compile(r"_+")

TITLE_PREFIX = "Check out my Famous Since Moment"


class OpenGraphMetadata(BaseModel):
    title: str
    description: str
    type: str = "website"
    url: str
    images: List[str] = Field(default_factory=list)


class TwitterMetadata(BaseModel):
    card: str = "summary_large_image"
    title: str
    description: str
    images: List[str] = Field(default_factory=list)


class ShareMetadata(BaseModel):
    """Everything a crawler needs to render a link preview."""
    title: str
    description: str
    url: str
    image: str
    open_graph: OpenGraphMetadata
    twitter: TwitterMetadata


def decode_description(segment: str) -> str:
    """
    Recover the human-readable description from a path segment.

    The storefront joins words with underscores and percent-encodes the
    result, so "Remote_Work" -> "Remote Work".
    """
    return _UNDERSCORES.sub(" ", unquote(segment))


def build_share_metadata(segment: str) -> ShareMetadata:
    """
    Build title, description, canonical URL and preview image for a
    shared moment.

    Args:
        segment: The path segment as it appears in the shared URL

    Returns:
        ShareMetadata with Open Graph and Twitter card variants
    """
    description = decode_description(segment)
    site_url = settings.site_url.rstrip("/")

    title = f"{TITLE_PREFIX}: Famous Since {description}"
    summary = (
        f"{TITLE_PREFIX}: {description}. Design and order custom t-shirts "
        f"featuring your famous moment at Famousince.com"
    )
    url = f"{site_url}/StayFamous/{segment}"
    image = f"{site_url}/{settings.preview_image_path.lstrip('/')}"

    return ShareMetadata(
        title=title,
        description=summary,
        url=url,
        image=image,
        open_graph=OpenGraphMetadata(title=title, description=summary, url=url, images=[image]),
        twitter=TwitterMetadata(title=title, description=summary, images=[image])
    )
