"""Handler registry for operation code generation.

Provides dispatcher for operation-specific code generators.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "HANDLERS",
    "Handler",
    "get_handler",
    "register_handler",
]

from collections.abc import Callable

from nnefada.generate._context import EmissionContext
from nnefada.ir import Operation

# Handler type: appends the code for one operation to the emission context
Handler = Callable[[Operation, EmissionContext], None]

# Global handler registry
HANDLERS: dict[str, Handler] = {}


def register_handler(operation_name: str, handler: Handler) -> None:
    """Register handler for an operation kind.

    :param operation_name: Operation kind (e.g., "external", "variable")
    :param handler: Handler function
    """
    HANDLERS[operation_name] = handler


def get_handler(operation_name: str) -> Handler | None:
    """Get handler for an operation kind.

    :param operation_name: Operation kind
    :return: Handler function or None if not found
    """
    return HANDLERS.get(operation_name)
