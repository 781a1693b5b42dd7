from .core import ResolutionRequest, ResolutionResult, Resolver, resolve
from .filters import is_plausible
from .strategies import STRATEGIES, ResolutionContext

__all__ = [
    "ResolutionRequest",
    "ResolutionResult",
    "Resolver",
    "resolve",
    "is_plausible",
    "STRATEGIES",
    "ResolutionContext",
]
