from polyglot.languages.crud import (
    create_language,
    delete_language,
    get_language,
    get_languages,
    update_language,
)
from polyglot.languages.models import (
    Language,
    LanguageBase,
    LanguageCreate,
    LanguageListItem,
    LanguagePublic,
    LanguageSummary,
    LanguageUpdate,
)

__all__ = [
    # Models
    "Language",
    "LanguageBase",
    "LanguageCreate",
    "LanguageListItem",
    "LanguagePublic",
    "LanguageSummary",
    "LanguageUpdate",
    # CRUD
    "create_language",
    "delete_language",
    "get_language",
    "get_languages",
    "update_language",
]
