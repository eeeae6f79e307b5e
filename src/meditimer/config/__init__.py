from .core_config import MeditimerConfig

__all__ = ["MeditimerConfig"]
