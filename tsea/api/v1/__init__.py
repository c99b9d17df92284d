"""
API v1 routes.
"""

from fastapi import APIRouter

from tsea.api.v1 import assistant, auth, billing, curriculum, projects

router = APIRouter()

router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
router.include_router(curriculum.router, prefix="/curriculum", tags=["Curriculum"])
router.include_router(assistant.router, prefix="/assistant", tags=["Assistant"])
router.include_router(projects.router, prefix="/projects", tags=["Projects"])
router.include_router(billing.router, prefix="/billing", tags=["Billing"])
