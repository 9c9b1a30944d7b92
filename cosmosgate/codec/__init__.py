"""Binary codecs: hex/base64/byte maps and protobuf messages."""

from cosmosgate.codec.wire import (
    b64decode_str,
    b64encode_str,
    bytes_to_hex,
    bytes_to_int_list,
    hex_to_bytes,
    index_map_to_bytes,
    reconstruct_bytes,
    strip_hex_prefix,
)

__all__ = [
    "b64decode_str",
    "b64encode_str",
    "bytes_to_hex",
    "bytes_to_int_list",
    "hex_to_bytes",
    "index_map_to_bytes",
    "reconstruct_bytes",
    "strip_hex_prefix",
]
