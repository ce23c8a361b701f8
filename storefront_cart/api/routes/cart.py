from fastapi import APIRouter, Depends, HTTPException

from ...schemas.cart import AddProductRequest, CartResponse, CartSummary, UpdateProductAmount
from ...services.cart_store import CartResult, CartStore, RejectReason, ResultStatus
from ...services.notifications import CartNotifier
from ..dependencies import get_cart_store, get_notifier

router = APIRouter()


def _to_response(result: CartResult, notifier: CartNotifier) -> CartResponse:
    """Переводит итог операции в ответ API или HTTP ошибку"""
    notification = notifier.notify(result)

    if result.status == ResultStatus.REJECTED:
        status_code = 409 if result.reason == RejectReason.OUT_OF_STOCK else 404
        raise HTTPException(status_code=status_code, detail=notification.message)
    if result.status == ResultStatus.FAILED:
        raise HTTPException(status_code=502, detail=notification.message)

    return CartResponse(status=result.status.value, items=list(result.cart))


@router.get("/cart", response_model=CartResponse)
async def get_cart(store: CartStore = Depends(get_cart_store)):
    """Текущая корзина"""
    return CartResponse(status="ok", items=list(store.get_snapshot()))


@router.get("/cart/summary", response_model=CartSummary)
async def get_cart_summary(store: CartStore = Depends(get_cart_store)):
    """Итоги корзины"""
    return store.summary()


@router.post("/cart/items", response_model=CartResponse)
async def add_product(
        item: AddProductRequest,
        store: CartStore = Depends(get_cart_store),
        notifier: CartNotifier = Depends(get_notifier)
):
    """Добавление единицы товара в корзину"""
    return _to_response(await store.add_product(item.product_id), notifier)


@router.put("/cart/items/{product_id}", response_model=CartResponse)
async def update_product_amount(
        product_id: int,
        item: UpdateProductAmount,
        store: CartStore = Depends(get_cart_store),
        notifier: CartNotifier = Depends(get_notifier)
):
    """Изменение количества товара (0 и меньше игнорируются)"""
    return _to_response(await store.update_product_amount(product_id, item.amount), notifier)


@router.delete("/cart/items/{product_id}", response_model=CartResponse)
async def remove_product(
        product_id: int,
        store: CartStore = Depends(get_cart_store),
        notifier: CartNotifier = Depends(get_notifier)
):
    """Удаление товара из корзины"""
    return _to_response(await store.remove_product(product_id), notifier)


@router.delete("/cart", response_model=CartResponse)
async def clear_cart(
        store: CartStore = Depends(get_cart_store),
        notifier: CartNotifier = Depends(get_notifier)
):
    """Очистка корзины"""
    return _to_response(await store.clear(), notifier)
