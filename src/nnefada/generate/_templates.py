"""Code templates and constants for Ada code generation.

This module provides string templates and constants used throughout
the code generation process.
"""

__docformat__ = "restructuredtext"
__all__ = [
    "BODY_SUFFIX",
    "BODY_TEMPLATE",
    "EXTERNAL_STUB_TEMPLATE",
    "INDENT",
    "OUTPUT_CALL_TEMPLATE",
    "OUTPUT_STUB_TEMPLATE",
    "RUNNER_SUFFIX",
    "RUNNER_TEMPLATE",
    "SPEC_SUFFIX",
    "SPEC_TEMPLATE",
    "VARIABLE_STUB_TEMPLATE",
]

# Naming constants
INDENT = "    "
SPEC_SUFFIX = ".ads"
BODY_SUFFIX = ".adb"
RUNNER_SUFFIX = "_run.adb"

# Package specification template
SPEC_TEMPLATE = """\
with Generic_Real_Arrays;
with Generic_Real_Arrays.Operators;
package {name} is
{indent}pragma Preelaborate;
{indent}package Real_Arrays is new Generic_Real_Arrays(Real => Float);
{indent}package Operators is new Real_Arrays.Operators;
{indent}use Real_Arrays;
{indent}use Operators;
{declarations}{indent}procedure Forward;
end {name};
"""

# Package body template
BODY_TEMPLATE = """\
package body {name} is
{indent}procedure Forward is
{indent}begin
{statements}{indent}end Forward;
end {name};
"""

# Runner procedure template
RUNNER_TEMPLATE = """\
with {name}; use {name};
use {name}.Real_Arrays;
procedure {name}_Run is
{stubs}begin
{indent}Forward;
{outputs}end {name}_Run;
"""

EXTERNAL_STUB_TEMPLATE = """\
{indent}procedure External (Var_Name: String; Tensor: out {type_name}) is
{indent}begin
{indent}{indent}null;
{indent}end External;
"""

VARIABLE_STUB_TEMPLATE = """\
{indent}procedure Variable (Var_Name: String; Tensor: out {type_name}) is
{indent}begin
{indent}{indent}null;
{indent}end Variable;
"""

OUTPUT_STUB_TEMPLATE = """\
{indent}procedure Output (Tensor: {type_name}; Var_Name: String) is
{indent}begin
{indent}{indent}null;
{indent}end Output;
"""

OUTPUT_CALL_TEMPLATE = '{indent}Output ({code_name}, "{name}");\n'
