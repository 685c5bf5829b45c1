"""hostsan - host normalization and public-suffix boundary detection."""

__version__ = "1.0.0"

from hostsan.normalizer import HostNormalizer, NormalizeResult, normalize
from hostsan.suffixes import LocateResult, SuffixLocator, SuffixMatch

__all__ = [
    "HostNormalizer",
    "NormalizeResult",
    "normalize",
    "LocateResult",
    "SuffixLocator",
    "SuffixMatch",
]
