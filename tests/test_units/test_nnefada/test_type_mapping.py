"""Type Mapping Tests - element kind and rank to Ada array types."""

import pytest

from nnefada.generate import type_name
from nnefada.generate._type_mapping import tensor_declaration
from nnefada.ir import Tensor


class TestTypeName:
    """Test Ada type names for element kinds and ranks."""

    @pytest.mark.parametrize(
        ("dtype", "rank", "expected"),
        [
            ("scalar", 1, "Real_Vector"),
            ("scalar", 2, "Real_Matrix"),
            ("scalar", 3, "Real_Tensor_3D"),
            ("scalar", 4, "Real_Tensor_4D"),
            ("integer", 1, "Integer_Vector"),
            ("integer", 4, "Integer_Tensor_4D"),
            ("logical", 2, "Boolean_Matrix"),
            ("logical", 3, "Boolean_Tensor_3D"),
        ],
    )
    def test_known_ranks(self, dtype, rank, expected):
        """Verify ranks 1-4 map to dedicated array types."""
        assert type_name(dtype, rank) == expected

    @pytest.mark.parametrize(("rank", "expected"), [(0, "Real_Tensor"), (5, "Real_Tensor")])
    def test_other_ranks_use_generic_suffix(self, rank, expected):
        """Verify ranks outside 1-4 fall back to the generic Tensor suffix."""
        assert type_name("scalar", rank) == expected

    def test_unknown_element_kind_used_verbatim(self):
        """Verify unknown element kinds are used as the family prefix."""
        assert type_name("complex64", 2) == "complex64_Matrix"


class TestTensorDeclaration:
    """Test tensor object declarations."""

    def test_declaration(self):
        """Verify declaration carries name, type and extents."""
        tensor = Tensor("x", "scalar", (2, 3))
        assert tensor_declaration(tensor, frozenset()) == "x: Real_Matrix (1..2, 1..3);"

    def test_declaration_renames_colliding_tensor(self):
        """Verify tensors named like an operation are renamed."""
        tensor = Tensor("conv", "scalar", (1, 4, 8, 8))
        assert (
            tensor_declaration(tensor, frozenset({"conv"}))
            == "conv_0: Real_Tensor_4D (1..1, 1..4, 1..8, 1..8);"
        )
