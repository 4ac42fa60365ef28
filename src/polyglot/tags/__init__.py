from polyglot.tags.crud import create_tag, delete_tag, get_tag, get_tags, update_tag
from polyglot.tags.models import (
    Tag,
    TagCreate,
    TaggedTranslation,
    TagPublic,
    TagSummary,
    TagTranslation,
    TagUpdate,
    TagWithTranslations,
)

__all__ = [
    # Models
    "Tag",
    "TagCreate",
    "TagPublic",
    "TagSummary",
    "TagTranslation",
    "TagUpdate",
    "TagWithTranslations",
    "TaggedTranslation",
    # CRUD
    "create_tag",
    "delete_tag",
    "get_tag",
    "get_tags",
    "update_tag",
]
