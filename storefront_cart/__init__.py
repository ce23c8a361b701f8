"""Корзина покупок витрины: сверка с остатками, хранение и публикация."""
