from .runtime import DrawRuntime, RuntimePaths

__all__ = ["DrawRuntime", "RuntimePaths"]
