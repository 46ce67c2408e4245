"""Stage 3: Ada Code Generation.

Generates Ada package specification, body and runner from a graph.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "AdaProgram",
    "EmissionContext",
    "build_known_operation_names",
    "emit_graph",
    "format_attribute",
    "format_value",
    "generate_ada_program",
    "resolve_identifier",
    "type_name",
]

from nnefada.generate._attributes import format_attribute
from nnefada.generate._context import EmissionContext
from nnefada.generate._emitter import emit_graph
from nnefada.generate._identifiers import build_known_operation_names, resolve_identifier
from nnefada.generate._type_mapping import type_name
from nnefada.generate._utils import format_value
from nnefada.generate.code_generator import AdaProgram, generate_ada_program
