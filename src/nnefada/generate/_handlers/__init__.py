"""Operation handlers for code generation.

Handler registry and operation-specific code generators.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "HANDLERS",
    "SOURCE_HANDLERS",
    "get_handler",
    "handle_call",
    "order_inputs",
    "register_handler",
    "register_source_handlers",
]

from nnefada.generate._handlers._calls import handle_call, order_inputs
from nnefada.generate._handlers._registry import HANDLERS, get_handler, register_handler
from nnefada.generate._handlers._sources import SOURCE_HANDLERS, register_source_handlers
