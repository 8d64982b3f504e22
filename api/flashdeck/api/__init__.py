"""
API router aggregation.
"""
from fastapi import APIRouter
from flashdeck.api.endpoints import users, decks, cards

api_router = APIRouter()

# Each router defines its own prefix
api_router.include_router(users.router)
api_router.include_router(decks.router)
api_router.include_router(cards.router)
