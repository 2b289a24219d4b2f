from translation_catalog.locales.crud import (
    create_locale,
    create_or_retrieve_locales_by_code,
    create_or_retrieve_locales_by_name,
    get_locale,
    get_locale_by_code,
    get_locale_by_name,
    get_locales,
    locale_exists_by_code,
)
from translation_catalog.locales.models import (
    Locale,
    LocaleBase,
    LocaleCreate,
    LocalePublic,
)

__all__ = [
    # Models
    "Locale",
    "LocaleBase",
    "LocaleCreate",
    "LocalePublic",
    # CRUD
    "create_locale",
    "create_or_retrieve_locales_by_code",
    "create_or_retrieve_locales_by_name",
    "get_locale",
    "get_locale_by_code",
    "get_locale_by_name",
    "get_locales",
    "locale_exists_by_code",
]
