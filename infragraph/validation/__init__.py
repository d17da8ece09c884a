from .engine import ValidationEngine, has_blocking_errors

__all__ = ["ValidationEngine", "has_blocking_errors"]
