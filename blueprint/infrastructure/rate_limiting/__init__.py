from .in_memory_window_repository import InMemoryRateLimitWindowRepository

__all__ = ["InMemoryRateLimitWindowRepository"]
