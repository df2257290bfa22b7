# backend/consultation_portal/routes/v1/__init__.py
"""
API v1 Routes

Versioned API endpoints under /api/v1.
"""

from . import auth, bookings, faculty, health, profile

__all__ = ["auth", "bookings", "faculty", "health", "profile"]
