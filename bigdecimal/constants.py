"""Numeric limits and wire-format constants shared across the package."""

# Largest number of digits allowed after the decimal point
MAX_PRECISION = 128

# Hard cap on Newton (approx_root) and binary-expansion (log2) iterations
MAX_ITERATIONS = 300

# Binary decimal encoding: big-endian uint32 precision prefix
PRECISION_FIXED_SIZE = 4

# First byte of an encoded integer: version << 1 | sign bit
INT_ENCODING_VERSION = 1

# Rendered in place of a value for nil (uninitialized) instances
NIL_STRING = "<nil>"
