from fastapi import APIRouter

from htw_api.routers.v1 import (
    analytics,
    companies,
    events,
    imports,
    industries,
    islands,
    linkedin_posts,
    members,
)

v1_router = APIRouter(prefix="/v1")

v1_router.include_router(industries.router)
v1_router.include_router(companies.router)
v1_router.include_router(members.router)
v1_router.include_router(events.router)
v1_router.include_router(linkedin_posts.router)
v1_router.include_router(islands.router)
v1_router.include_router(analytics.router)
v1_router.include_router(imports.router)
