"""Preset configurations for graph loading and Ada code generation.

Provides the operation vocabularies and default-value policies shared by
the frontends and the generator.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "ATTRIBUTE_FREE_OPERATIONS",
    "AXIS_ATTRIBUTES",
    "AXIS_LIST_ATTRIBUTES",
    "COMMUTATIVE_OPERATIONS",
    "DEFAULT_SYMBOLS",
    "DTYPE_FAMILIES",
    "LOWERED_OPERATIONS",
    "RANK_SUFFIXES",
    "RESERVED_OPERATION_NAMES",
    "SPATIAL_RANK_OFFSETS",
]


# Composite operations the NNEF loader expands into primitive operations
LOWERED_OPERATIONS = frozenset(
    {
        "separable_conv",
        "separable_deconv",
        "rms_pool",
        "local_response_normalization",
        "local_mean_normalization",
        "local_variance_normalization",
        "local_contrast_normalization",
        "l1_normalization",
        "l2_normalization",
        "batch_normalization",
        "area_downsample",
        "nearest_downsample",
        "nearest_upsample",
        "linear_quantize",
        "logarithmic_quantize",
        "leaky_relu",
        "prelu",
        "clamp",
    }
)

# Always treated as operation names, whether or not the graph uses them
RESERVED_OPERATION_NAMES = ("local_response_normalization",)

# Element kind -> Ada element family
DTYPE_FAMILIES = {
    "scalar": "Real",
    "integer": "Integer",
    "logical": "Boolean",
}

# Rank -> Ada array type suffix (other ranks use "Tensor")
RANK_SUFFIXES = {
    1: "Vector",
    2: "Matrix",
    3: "Tensor_3D",
    4: "Tensor_4D",
}

# Non-spatial leading dimensions (batch, channel) per operation kind
SPATIAL_RANK_OFFSETS = {
    "conv": 2,
}

# Symbols emitted for empty attribute arrays
DEFAULT_SYMBOLS = {
    "padding": "Padding_Auto",
    "stride": "Default_Stride",
    "dilation": "Default_Dilation",
}

# Integer attributes renumbered from 0-based to 1-based
AXIS_ATTRIBUTES = frozenset({"axis", "axis_start"})
AXIS_LIST_ATTRIBUTES = frozenset({"axes"})

# Calls that take the tensor operand before a literal operand
COMMUTATIVE_OPERATIONS = frozenset({"add", "mul"})

# Calls emitted without attribute arguments
ATTRIBUTE_FREE_OPERATIONS = frozenset({"reshape"})
