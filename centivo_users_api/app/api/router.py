"""
Top-level API router.

Routes are mounted without a version prefix so that the public path
stays ``/users/{id}``.
"""

from fastapi import APIRouter

from .endpoints import users

router = APIRouter()

router.include_router(users.router, prefix="/users", tags=["users"])
