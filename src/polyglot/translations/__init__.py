from polyglot.translations.crud import (
    attach_tags,
    create_translation,
    delete_translation,
    get_translation,
    get_translations,
    get_translations_by_key,
    sync_tags,
    update_translation,
)
from polyglot.translations.models import (
    DEFAULT_GROUP,
    Translation,
    TranslationCreate,
    TranslationFilters,
    TranslationPublic,
    TranslationUpdate,
    TranslationWithLanguage,
)

__all__ = [
    "DEFAULT_GROUP",
    # Models
    "Translation",
    "TranslationCreate",
    "TranslationFilters",
    "TranslationPublic",
    "TranslationUpdate",
    "TranslationWithLanguage",
    # CRUD
    "attach_tags",
    "create_translation",
    "delete_translation",
    "get_translation",
    "get_translations",
    "get_translations_by_key",
    "sync_tags",
    "update_translation",
]
