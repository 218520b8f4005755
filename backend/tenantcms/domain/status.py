import enum


class PageStatus(str, enum.Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


class MediaKind(str, enum.Enum):
    IMAGES = "images"
    DOCUMENTS = "documents"
    VIDEOS = "videos"


DOCUMENT_MIME_TYPES = (
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
    "text/plain",
)


def media_kind_of(mime_type: str) -> str:
    """Bucket a mime type into images/documents/videos/other."""
    if mime_type.startswith("image/"):
        return MediaKind.IMAGES.value
    if mime_type.startswith("video/"):
        return MediaKind.VIDEOS.value
    if mime_type in DOCUMENT_MIME_TYPES:
        return MediaKind.DOCUMENTS.value
    return "other"
