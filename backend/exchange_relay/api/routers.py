from fastapi import APIRouter

from .endpoints import chat
from .endpoints import health
from .endpoints import home
from .endpoints import metadata

api_router = APIRouter()

# Include endpoint routers
api_router.include_router(health.router, prefix="", tags=["health"])
api_router.include_router(chat.router, prefix="", tags=["chat"])
api_router.include_router(metadata.router, prefix="", tags=["metadata"])

# Landing pages live outside the /kea/v1 prefix
home_router = home.router
