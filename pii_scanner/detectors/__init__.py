"""PII detection engines."""

from .patterns import BeninPIIPatterns, detect
from .validators import PiiValidator

__all__ = ["BeninPIIPatterns", "PiiValidator", "detect"]
