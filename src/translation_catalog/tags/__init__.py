from translation_catalog.tags.crud import (
    create_or_retrieve_tags,
    create_tag,
    delete_tag,
    get_tag,
    get_tag_by_name,
    get_tags,
    get_tags_by_names,
)
from translation_catalog.tags.models import (
    Tag,
    TagBase,
    TagCreate,
    TagPublic,
    TranslationTag,
)

__all__ = [
    # Models
    "Tag",
    "TagBase",
    "TagCreate",
    "TagPublic",
    "TranslationTag",
    # CRUD
    "create_or_retrieve_tags",
    "create_tag",
    "delete_tag",
    "get_tag",
    "get_tag_by_name",
    "get_tags",
    "get_tags_by_names",
]
