"""
Main API router that includes all route modules.
"""
from fastapi import APIRouter
from tripledger.api.routes import expenses, settlements, invites

api_router = APIRouter()

# Include all route modules
api_router.include_router(expenses.router)
api_router.include_router(settlements.router)
api_router.include_router(invites.router)
