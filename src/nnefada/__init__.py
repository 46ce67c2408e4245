__docformat__ = "restructuredtext"
__version__ = "2026.1.0"
__all__ = [
    "LOWERED_OPERATIONS",
    "NNEFAda",
]

from nnefada._nnefada import NNEFAda
from nnefada.presets import LOWERED_OPERATIONS
