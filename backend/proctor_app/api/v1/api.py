from fastapi import APIRouter

from .endpoints import proctoring

api_router = APIRouter()

api_router.include_router(proctoring.router, prefix="/proctoring", tags=["proctoring"])


@api_router.get("/health")
def health_check():
    return {"status": "ok", "message": "API is healthy"}
