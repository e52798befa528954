# API endpoints
from . import allocations, documents, internships, tech_sessions, resources, users, health

__all__ = ["allocations", "documents", "internships", "tech_sessions", "resources", "users", "health"]
