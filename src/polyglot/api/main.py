from fastapi import APIRouter

from polyglot.api.routes import languages, tags, translations

api_router = APIRouter()
api_router.include_router(languages.router)
api_router.include_router(tags.router)
api_router.include_router(translations.router)
