from fastapi import APIRouter
from alumni.api.endpoints import auth, profile, directory, events, news, forums, gallery, donations, board_minutes
from alumni.api.endpoints.admin import admin_router

api_router = APIRouter()

api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(profile.router, prefix="/profile", tags=["Profile"])
api_router.include_router(directory.router, prefix="/directory", tags=["Directory"])
api_router.include_router(events.router, prefix="/events", tags=["Events"])
api_router.include_router(news.router, prefix="/news", tags=["News"])
api_router.include_router(forums.router, prefix="/forums", tags=["Forums"])
api_router.include_router(gallery.router, prefix="/gallery", tags=["Gallery"])
api_router.include_router(donations.router, prefix="/donations", tags=["Donations"])
api_router.include_router(board_minutes.router, prefix="/board-minutes", tags=["Board Minutes"])

# Admin endpoints
api_router.include_router(admin_router)
