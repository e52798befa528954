from fastapi import APIRouter
from app.api.v1.endpoints import allocations, documents, internships, tech_sessions, resources, users, health

api_router = APIRouter()

# Liveness / readiness probes
api_router.include_router(health.router)


# Simple health check endpoint for load balancers
@api_router.get("/health", tags=["Health"])
async def health_check():
    """Simple health check endpoint"""
    return {"status": "healthy", "service": "interntrack-backend"}


api_router.include_router(allocations.router)
api_router.include_router(documents.router)
api_router.include_router(internships.router)
api_router.include_router(tech_sessions.router)
api_router.include_router(resources.router)
api_router.include_router(users.router)
