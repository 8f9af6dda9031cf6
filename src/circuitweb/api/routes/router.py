from fastapi import APIRouter

from src.circuitweb.api.routes import auth, circuits, projects, storage, users

api_router = APIRouter(prefix="/api")
api_router.include_router(auth.router)
api_router.include_router(users.router)
api_router.include_router(projects.router)
api_router.include_router(circuits.router)
api_router.include_router(storage.router)
