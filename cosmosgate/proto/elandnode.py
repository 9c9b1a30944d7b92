"""elandnode.reg.v1 message types (land registry module)."""

from cosmosgate.codec.protobuf import INT64, MESSAGE, STRING, Field, register_file

_REGISTRY_FIELDS = [
    Field("registry_id", 1, STRING),
    Field("creator", 2, STRING),
    Field("owner", 3, STRING),
    Field("metadata", 4, STRING),
    Field("created_at", 5, INT64),
]

_query = register_file(
    "elandnode/reg/v1/query.proto",
    "elandnode.reg.v1",
    {
        "Registry": _REGISTRY_FIELDS,
        "QueryGetRegistryRequest": [Field("registry_id", 1, STRING)],
        "QueryGetRegistryResponse": [Field("registry", 1, MESSAGE, "elandnode.reg.v1.Registry")],
    },
)
Registry = _query["Registry"]
QueryGetRegistryRequest = _query["QueryGetRegistryRequest"]
QueryGetRegistryResponse = _query["QueryGetRegistryResponse"]

_tx = register_file(
    "elandnode/reg/v1/tx.proto",
    "elandnode.reg.v1",
    {"MsgRegisterLandRegistryResponse": [Field("registry_id", 1, STRING)]},
)
MsgRegisterLandRegistryResponse = _tx["MsgRegisterLandRegistryResponse"]
