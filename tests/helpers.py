"""Shared test data"""
from storefront_cart.schemas import LineItem

CART_KEY = "@RocketShoes:cart"


def line(product_id, amount, name="Shoe", price=100.0):
    """Позиция корзины для тестов"""
    return LineItem(id=product_id, name=name, price=price, amount=amount)
