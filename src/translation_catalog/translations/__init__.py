from translation_catalog.translations.crud import (
    build_translation_conditions,
    create_translation,
    delete_translation,
    export_translations,
    get_translation,
    list_translations,
    normalize_tag_names,
    update_translation,
)
from translation_catalog.translations.models import (
    PAGE_SIZE,
    Translation,
    TranslationBase,
    TranslationCreate,
    TranslationExport,
    TranslationFilters,
    TranslationPublic,
    TranslationsPage,
    TranslationUpdate,
)

__all__ = [
    "PAGE_SIZE",
    # Models
    "Translation",
    "TranslationBase",
    "TranslationCreate",
    "TranslationExport",
    "TranslationFilters",
    "TranslationPublic",
    "TranslationsPage",
    "TranslationUpdate",
    # CRUD
    "build_translation_conditions",
    "create_translation",
    "delete_translation",
    "export_translations",
    "get_translation",
    "list_translations",
    "normalize_tag_names",
    "update_translation",
]
