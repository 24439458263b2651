from aiogram import Router

from .start import start_router
from .admin import admin_router
from .donate import donate_router


def get_all_routers() -> Router:
    """Функция для регистрации всех router"""

    router = Router()
    router.include_router(start_router)
    router.include_router(admin_router)
    router.include_router(donate_router)

    return router
