from aiogram import Router

from sweatbot.handlers.common import router as common_router
from sweatbot.handlers.reports import router as reports_router

router = Router()

router.include_router(common_router)   # /start, /help only
router.include_router(reports_router)  # every other text message
