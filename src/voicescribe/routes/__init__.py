from .scribe import router as scribe_router

__all__ = ["scribe_router"]
