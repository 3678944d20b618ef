# Codec limits
MIN_CHUNKS = 2

# Stripe member name for the parity chunk (data members are addressed by index)
PARITY = "parity"

# Buffers at least this long take the vectorized XOR path
XOR_VECTOR_THRESHOLD = 1024

# Padding byte appended to the trailing data chunk(s)
PAD_BYTE = 0x00

# Printable ASCII range used by the chunk dumps; anything else renders as '.'
ASCII_PRINTABLE_MIN = 32
ASCII_PRINTABLE_MAX = 126
ASCII_PLACEHOLDER = "."

# CLI / demo defaults
DEFAULT_DEMO_DATA = "HELLO WORLD"
DEFAULT_NUM_CHUNKS = 3
DEMO_MAX_CHUNKS = 10  # interactive prompt limit only, not a codec limit
