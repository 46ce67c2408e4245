"""Emission state threaded through the operation handlers."""

__docformat__ = "restructuredtext"
__all__ = ["EmissionContext"]

from collections.abc import Mapping

from nnefada.generate._identifiers import build_known_operation_names, resolve_identifier
from nnefada.generate._type_mapping import tensor_declaration, tensor_type_name
from nnefada.ir import Graph, Tensor, ValueKind, value_kind


class EmissionContext:
    """Accumulated declarations, statements and stub types for one graph.

    Created once per generation run and passed explicitly to each handler.
    Buffers are append-only and keep operation order.
    """

    def __init__(
        self,
        graph: Graph,
        known_operation_names: frozenset[str] | None = None,
        spatial_rank_offsets: Mapping[str, int] | None = None,
    ):
        self.graph = graph
        if known_operation_names is None:
            known_operation_names = build_known_operation_names(graph)
        self.known_operation_names = known_operation_names
        self.output_names = frozenset(graph.outputs)
        self.spatial_rank_offsets = spatial_rank_offsets
        # Package-level declarations of "variable" tensors
        self.declarations: list[str] = []
        # Declarations of intermediate (non-output) tensors
        self.forward_declarations: list[str] = []
        # Forward procedure statements
        self.statements: list[str] = []
        # Types needing External / Variable / Output stubs in the runner
        self.external_types: set[str] = set()
        self.variable_types: set[str] = set()
        self.output_types: set[str] = set()

    def resolve(self, name: str) -> str:
        """Get emitted name for a tensor identifier."""
        return resolve_identifier(name, self.known_operation_names)

    def declaration(self, tensor: Tensor) -> str:
        """Get object declaration for a tensor."""
        return tensor_declaration(tensor, self.known_operation_names)

    def output_tensor(self, param: str, value) -> Tensor:
        """Get tensor bound to an operation output.

        :param param: Output parameter name
        :param value: Output value (must be an identifier)
        :return: Referenced tensor
        :raises ValueError: If the output is not a tensor reference
        """
        if value_kind(value) is not ValueKind.IDENTIFIER:
            raise ValueError(f"Output '{param}' is not a tensor reference: {value!r}")
        return self.graph.tensor(value)

    def is_graph_output(self, tensor: Tensor) -> bool:
        return tensor.name in self.output_names

    def add_statement(self, statement: str) -> None:
        self.statements.append(statement)

    def add_declaration(self, tensor: Tensor) -> None:
        self.declarations.append(self.declaration(tensor))

    def add_forward_declaration(self, tensor: Tensor) -> None:
        self.forward_declarations.append(self.declaration(tensor))

    def mark_external_type(self, tensor: Tensor) -> None:
        self.external_types.add(tensor_type_name(tensor))

    def mark_variable_type(self, tensor: Tensor) -> None:
        self.variable_types.add(tensor_type_name(tensor))

    def mark_output_type(self, tensor: Tensor) -> None:
        self.output_types.add(tensor_type_name(tensor))
