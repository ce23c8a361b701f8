from .publisher import CartEventPublisher

__all__ = ["CartEventPublisher"]
