__docformat__ = "restructuredtext"
__all__ = ["NNEFAda"]

import sys
from collections.abc import Iterable, Mapping
from pathlib import Path

from nnefada.generate import AdaProgram, generate_ada_program
from nnefada.ir import Graph
from nnefada.presets import LOWERED_OPERATIONS


class NNEFAda:
    def __init__(
        self,
        verbose: bool = False,
        lowered: Iterable[str] = LOWERED_OPERATIONS,
        spatial_rank_offsets: Mapping[str, int] | None = None,
    ):
        self.verbose = verbose
        self.lowered = frozenset(lowered)
        self.spatial_rank_offsets = spatial_rank_offsets

    def _log(self, message: str) -> None:
        if self.verbose:
            print(message, file=sys.stderr)

    def load(self, graph_path: str, stdlib: str | None = None) -> Graph:
        """Load and shape-infer a model.

        :param graph_path: Path to an .onnx file or an NNEF model
        :param stdlib: Replacement NNEF standard library source
        :return: Shape-inferred graph
        """
        from nnefada.load import load_graph

        self._log(f"Loading graph: {graph_path}")
        graph = load_graph(graph_path, stdlib=stdlib, lowered=self.lowered)
        self._log(
            f"Loaded graph '{graph.name}': {len(graph.operations)} operations, "
            f"{len(graph.tensors)} tensors"
        )
        return graph

    def generate(self, graph: Graph) -> AdaProgram:
        """Generate Ada sources for a loaded graph.

        :param graph: Shape-inferred graph
        :return: Generated program
        """
        self._log(f"Generating Ada code for '{graph.name}'")
        return generate_ada_program(graph, spatial_rank_offsets=self.spatial_rank_offsets)

    def convert(
        self,
        graph_path: str,
        stdlib: str | None = None,
        output_dir: str | None = None,
    ) -> AdaProgram:
        """Convert a model to Ada sources.

        :param graph_path: Path to an .onnx file or an NNEF model
        :param stdlib: Replacement NNEF standard library source
        :param output_dir: Directory to write the .ads/.adb files to (None = don't write)
        :return: Generated program
        """
        # Stage 1-2: Load graph and infer shapes
        graph = self.load(graph_path, stdlib=stdlib)

        # Stage 3: Generate Ada code
        program = self.generate(graph)

        # Save outputs
        if output_dir is not None:
            self.save(program, output_dir)

        return program

    def save(self, program: AdaProgram, output_dir: str) -> list[Path]:
        """Write generated sources using GNAT file naming.

        :param program: Generated program
        :param output_dir: Target directory (created if missing)
        :return: Paths of the written files
        """
        target_dir = Path(output_dir)
        target_dir.mkdir(parents=True, exist_ok=True)
        written = []
        for file_name, text in program.files().items():
            target_path = target_dir / file_name
            target_path.write_text(text)
            self._log(f"Generated: {target_path}")
            written.append(target_path)
        return written
