"""Main Ada code generation orchestrator.

Assembles the package specification, package body and runner procedure
from the emitted declarations and statements of a graph.
"""

__docformat__ = "restructuredtext"
__all__ = ["AdaProgram", "generate_ada_program"]

from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from nnefada.generate._context import EmissionContext
from nnefada.generate._emitter import emit_graph
from nnefada.generate._templates import (
    BODY_SUFFIX,
    BODY_TEMPLATE,
    EXTERNAL_STUB_TEMPLATE,
    INDENT,
    OUTPUT_CALL_TEMPLATE,
    OUTPUT_STUB_TEMPLATE,
    RUNNER_SUFFIX,
    RUNNER_TEMPLATE,
    SPEC_SUFFIX,
    SPEC_TEMPLATE,
    VARIABLE_STUB_TEMPLATE,
)
from nnefada.ir import Graph


@dataclass(frozen=True)
class AdaProgram:
    """Generated Ada sources for one graph.

    :param name: Package name (graph name)
    :param specification: Package specification (.ads) with all declarations
    :param body: Package body (.adb) with the Forward procedure
    :param runner: Runner procedure (_run.adb) with host stubs
    """

    name: str
    specification: str
    body: str
    runner: str

    def sections(self) -> list[tuple[str, str]]:
        """Get (file label, source) pairs in output order."""
        return [
            (f"{self.name}{SPEC_SUFFIX}", self.specification),
            (f"{self.name}{BODY_SUFFIX}", self.body),
            (f"{self.name}{RUNNER_SUFFIX}", self.runner),
        ]

    def files(self) -> dict[str, str]:
        """Get sources keyed by GNAT file name (lowercase unit name)."""
        return {label.lower(): text for label, text in self.sections()}

    def render(self) -> str:
        """Render all three sources, each preceded by a file name comment."""
        return "".join(f"-- {label}\n{text}" for label, text in self.sections())


def _indented(lines: Iterable[str], depth: int = 1) -> str:
    return "".join(f"{INDENT * depth}{line}\n" for line in lines)


def _generate_specification(graph: Graph, ctx: EmissionContext) -> str:
    io_declarations = [
        ctx.declaration(graph.tensor(name)) for name in (*graph.inputs, *graph.outputs)
    ]
    declarations = [*io_declarations, *ctx.declarations, *ctx.forward_declarations]
    return SPEC_TEMPLATE.format(
        name=graph.name,
        indent=INDENT,
        declarations=_indented(declarations),
    )


def _generate_body(graph: Graph, ctx: EmissionContext) -> str:
    return BODY_TEMPLATE.format(
        name=graph.name,
        indent=INDENT,
        statements=_indented(ctx.statements, depth=2),
    )


def _generate_stubs(ctx: EmissionContext) -> str:
    """Generate one host stub per distinct type, sorted for stable output."""
    stubs = []
    for template, type_names in (
        (EXTERNAL_STUB_TEMPLATE, ctx.external_types),
        (VARIABLE_STUB_TEMPLATE, ctx.variable_types),
        (OUTPUT_STUB_TEMPLATE, ctx.output_types),
    ):
        stubs.extend(
            template.format(indent=INDENT, type_name=type_name) for type_name in sorted(type_names)
        )
    return "".join(stubs)


def _generate_runner(graph: Graph, ctx: EmissionContext) -> str:
    outputs = "".join(
        OUTPUT_CALL_TEMPLATE.format(indent=INDENT, code_name=ctx.resolve(name), name=name)
        for name in graph.outputs
    )
    return RUNNER_TEMPLATE.format(
        name=graph.name,
        indent=INDENT,
        stubs=_generate_stubs(ctx),
        outputs=outputs,
    )


def generate_ada_program(
    graph: Graph,
    spatial_rank_offsets: Mapping[str, int] | None = None,
) -> AdaProgram:
    """Generate Ada sources from a shape-inferred graph.

    Creates three compilation units:
    - Package specification with tensor declarations and Forward
    - Package body with one statement per operation, in graph order
    - Runner procedure with External/Variable/Output stubs

    :param graph: Shape-inferred graph
    :param spatial_rank_offsets: Leading non-spatial dimensions per operation
        kind, used when synthesizing default attribute aggregates
    :return: Generated program
    """
    ctx = emit_graph(graph, spatial_rank_offsets)

    return AdaProgram(
        name=graph.name,
        specification=_generate_specification(graph, ctx),
        body=_generate_body(graph, ctx),
        runner=_generate_runner(graph, ctx),
    )
