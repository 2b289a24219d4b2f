from fastapi import APIRouter

from translation_catalog.api.routes import locales, tags, translations

api_router = APIRouter()
api_router.include_router(translations.router)
api_router.include_router(locales.router)
api_router.include_router(tags.router)
