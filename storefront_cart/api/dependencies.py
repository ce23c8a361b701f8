from fastapi import Request

from ..services.cart_store import CartStore
from ..services.notifications import CartNotifier


def get_cart_store(request: Request) -> CartStore:
    """Dependency для получения корзины сессии"""
    return request.app.state.cart_store


def get_notifier(request: Request) -> CartNotifier:
    """Dependency для получения канала уведомлений"""
    return request.app.state.notifier
