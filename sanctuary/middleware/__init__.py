from sanctuary.middleware.logging import LoggingMiddleware

__all__ = ["LoggingMiddleware"]
