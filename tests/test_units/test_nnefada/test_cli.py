"""Command-Line Tests - nnef2ada and nnef-tensor-info drivers.

Test Coverage:
- TestNNEF2Ada: generation output, options and exit codes
- TestTensorInfo: info and compare modes and exit codes
- TestNNEFAda: converter facade
"""

import numpy as np
import pytest

from nnefada import NNEFAda
from nnefada.cli import (
    EXIT_GENERATION_ERROR,
    EXIT_INFERENCE_ERROR,
    EXIT_LOAD_ERROR,
    EXIT_USAGE_ERROR,
    main,
    tensor_info_main,
)
from nnefada.ir import Identifier, Operation, Tensor
from tests.test_units.test_nnefada.fixtures.synthetic_graphs import make_graph
from tests.test_units.test_nnefada.fixtures.synthetic_models import SyntheticONNXModels


class TestNNEF2Ada:
    """Test the nnef2ada driver."""

    def test_prints_all_sections(self, identity_model, capsys):
        """Verify the three sources are printed with file name comments."""
        assert main([identity_model]) == 0
        out = capsys.readouterr().out
        assert out.startswith("-- Identity.ads\nwith Generic_Real_Arrays;\n")
        assert "-- Identity.adb\npackage body Identity is\n" in out
        assert "-- Identity_run.adb\nwith Identity; use Identity;\n" in out
        assert "        copy (x => X, y => Y);\n" in out

    def test_missing_input_path(self, capsys):
        """Verify a missing input path is a usage error."""
        assert main([]) == EXIT_USAGE_ERROR
        assert "Input file name must be provided" in capsys.readouterr().err

    def test_unknown_option_ignored(self, identity_model, capsys):
        """Verify unknown options are reported and ignored."""
        assert main([identity_model, "--bogus"]) == 0
        assert "Unrecognized option: --bogus; ignoring" in capsys.readouterr().err

    def test_missing_model_file(self, tmp_path, capsys):
        """Verify a missing model file is a load error."""
        assert main([str(tmp_path / "missing.onnx")]) == EXIT_LOAD_ERROR
        assert "not found" in capsys.readouterr().err

    def test_unsupported_model(self, unsupported_model, capsys):
        """Verify conversion failures are load errors."""
        assert main([unsupported_model]) == EXIT_LOAD_ERROR
        assert "Erf" in capsys.readouterr().err

    def test_shape_inference_failure(self, save_onnx, capsys):
        """Verify shape inference failures have their own exit code."""
        model = SyntheticONNXModels.create_broadcast_mismatch_model()
        path = save_onnx(model, "mismatch.onnx")
        assert main([path]) == EXIT_INFERENCE_ERROR
        assert "Shape inference failed" in capsys.readouterr().err

    def test_generation_failure(self, identity_model, monkeypatch, capsys):
        """Verify generation failures have their own exit code."""
        bad_graph = make_graph(
            "Bad",
            [Tensor("a", "scalar", (2,))],
            [Operation(name="relu", inputs=(("x", Identifier("a")),), outputs=(("y", 1.0),))],
        )
        monkeypatch.setattr(NNEFAda, "load", lambda self, path, stdlib=None: bad_graph)
        assert main([identity_model]) == EXIT_GENERATION_ERROR
        assert "Cannot generate code for operation 'relu'" in capsys.readouterr().err

    def test_output_dir(self, identity_model, tmp_path, capsys):
        """Verify generated files are written with GNAT names."""
        out_dir = tmp_path / "ada"
        assert main([identity_model, "--output-dir", str(out_dir)]) == 0
        assert sorted(path.name for path in out_dir.iterdir()) == [
            "identity.adb",
            "identity.ads",
            "identity_run.adb",
        ]
        assert (out_dir / "identity.adb").read_text().startswith("package body Identity is\n")

    def test_missing_stdlib_file_skipped(self, identity_model, tmp_path, capsys):
        """Verify unreadable stdlib files are reported and skipped."""
        missing = tmp_path / "missing.nnef"
        assert main([identity_model, "--stdlib", str(missing)]) == 0
        assert f"file not found: {missing}" in capsys.readouterr().err

    def test_stdlib_without_value(self, identity_model, capsys):
        """Verify --stdlib without a file name is reported."""
        assert main([identity_model, "--stdlib"]) == 0
        assert "Stdlib file name must be provided" in capsys.readouterr().err

    def test_stdlib_with_onnx_warns(self, identity_model, tmp_path, capsys):
        """Verify a readable stdlib override is passed on (and ignored for ONNX)."""
        stdlib = tmp_path / "stdlib.nnef"
        stdlib.write_text("fragment f( x: tensor<scalar> ) -> ( y: tensor<scalar> );")
        with pytest.warns(UserWarning, match="only applies to NNEF"):
            assert main([identity_model, "--stdlib", str(stdlib)]) == 0

    def test_verbose_logs_to_stderr(self, identity_model, capsys):
        """Verify --verbose reports progress on stderr only."""
        assert main([identity_model, "--verbose"]) == 0
        captured = capsys.readouterr()
        assert "Loading graph:" in captured.err
        assert "Loading graph:" not in captured.out


class TestTensorInfo:
    """Test the nnef-tensor-info driver."""

    @pytest.fixture
    def tensor_files(self, tmp_path):
        first = tmp_path / "first.npy"
        second = tmp_path / "second.npy"
        np.save(first, np.array([3.0, 4.0], dtype=np.float32))
        np.save(second, np.array([3.0, 4.5], dtype=np.float32))
        return str(first), str(second)

    def test_info(self, tensor_files, capsys):
        """Verify one file prints header and contents."""
        assert tensor_info_main([tensor_files[0]]) == 0
        assert capsys.readouterr().out == "scalar\n1..2\n3.0\n4.0\n"

    def test_compare(self, tensor_files, capsys):
        """Verify two files print headers and relative difference."""
        assert tensor_info_main(list(tensor_files)) == 0
        out = capsys.readouterr().out
        assert out.startswith("tensor #1:\nscalar\n1..2\ntensor #2:\nscalar\n1..2\n")
        assert float(out.splitlines()[-1]) == pytest.approx(0.1)

    @pytest.mark.parametrize("count", [0, 3])
    def test_wrong_argument_count(self, tensor_files, count, capsys):
        """Verify only one or two files are accepted."""
        files = [tensor_files[0]] * count
        assert tensor_info_main(files) == EXIT_USAGE_ERROR
        assert "Only 1 (info) or 2 (compare) parameters supported" in capsys.readouterr().err

    def test_info_missing_file(self, tmp_path):
        """Verify an unreadable file in info mode is a usage error."""
        assert tensor_info_main([str(tmp_path / "missing.npy")]) == EXIT_USAGE_ERROR

    def test_compare_missing_first(self, tensor_files, tmp_path):
        """Verify an unreadable first file in compare mode."""
        missing = str(tmp_path / "missing.npy")
        assert tensor_info_main([missing, tensor_files[1]]) == EXIT_LOAD_ERROR

    def test_compare_missing_second(self, tensor_files, tmp_path):
        """Verify an unreadable second file in compare mode."""
        missing = str(tmp_path / "missing.npy")
        assert tensor_info_main([tensor_files[0], missing]) == EXIT_INFERENCE_ERROR


class TestNNEFAda:
    """Test the converter facade."""

    def test_convert(self, add_scalar_model):
        """Verify convert loads and generates in one call."""
        program = NNEFAda().convert(add_scalar_model)
        assert program.name == "Add_Scalar"
        assert "add (x => X, y => 2.0, z => Y);" in program.body

    def test_convert_writes_files(self, add_scalar_model, tmp_path):
        """Verify convert writes files when given an output directory."""
        out_dir = tmp_path / "nested" / "out"
        NNEFAda().convert(add_scalar_model, output_dir=str(out_dir))
        assert (out_dir / "add_scalar.ads").exists()

    def test_save_returns_paths(self, add_scalar_graph, tmp_path):
        """Verify save reports every written file."""
        converter = NNEFAda()
        paths = converter.save(converter.generate(add_scalar_graph), str(tmp_path))
        assert [path.name for path in paths] == [
            "add_scalar.ads",
            "add_scalar.adb",
            "add_scalar_run.adb",
        ]

    def test_quiet_by_default(self, add_scalar_graph, capsys):
        """Verify nothing is logged without verbose."""
        NNEFAda().generate(add_scalar_graph)
        assert capsys.readouterr().err == ""

    def test_custom_spatial_rank_offsets(self):
        """Verify spatial rank offsets configured on the converter are applied."""
        operation = Operation(
            name="box",
            inputs=(("input", Identifier("x")),),
            outputs=(("output", Identifier("y")),),
            attribs={"size": []},
        )
        graph = make_graph(
            "Box",
            [Tensor("x", "scalar", (1, 3, 4)), Tensor("y", "scalar", (1, 3, 4))],
            [operation],
            outputs=["y"],
        )
        program = NNEFAda(spatial_rank_offsets={"box": 1}).generate(graph)
        assert "box (input => x, size => (0, 0), output => y);" in program.body
