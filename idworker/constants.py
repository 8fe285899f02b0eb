"""Bit layout of a generated ID.

The 64-bit ID is packed, most significant bits first, as:
timestamp (ms since ``TWEPOCH``) | datacenter id | worker id | sequence
"""

# 2013-01-01T00:00:00Z
TWEPOCH = 1356998400000

WORKER_ID_BITS = 5
DATACENTER_ID_BITS = 5
SEQUENCE_BITS = 12

MAX_WORKER_ID = -1 ^ (-1 << WORKER_ID_BITS)  # 31
MAX_DATACENTER_ID = -1 ^ (-1 << DATACENTER_ID_BITS)  # 31
SEQUENCE_MASK = -1 ^ (-1 << SEQUENCE_BITS)  # 4095

WORKER_ID_SHIFT = SEQUENCE_BITS
DATACENTER_ID_SHIFT = SEQUENCE_BITS + WORKER_ID_BITS
TIMESTAMP_LEFT_SHIFT = SEQUENCE_BITS + WORKER_ID_BITS + DATACENTER_ID_BITS
