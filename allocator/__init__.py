from allocator.engine import allocate

__all__ = ["allocate"]
