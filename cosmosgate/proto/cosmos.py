"""Cosmos SDK message types used by the gateway.

Field numbers follow the upstream cosmos-sdk .proto files.
"""

from cosmosgate.codec.protobuf import (
    ANY_PROTO,
    BOOL,
    BYTES,
    MESSAGE,
    STRING,
    UINT64,
    Field,
    register_file,
)

PAGINATION_PROTO = "cosmos/base/query/v1beta1/pagination.proto"
COIN_PROTO = "cosmos/base/v1beta1/coin.proto"

_pagination = register_file(
    PAGINATION_PROTO,
    "cosmos.base.query.v1beta1",
    {
        "PageRequest": [
            Field("key", 1, BYTES),
            Field("offset", 2, UINT64),
            Field("limit", 3, UINT64),
            Field("count_total", 4, BOOL),
            Field("reverse", 5, BOOL),
        ],
        "PageResponse": [
            Field("next_key", 1, BYTES),
            Field("total", 2, UINT64),
        ],
    },
)
PageRequestMessage = _pagination["PageRequest"]
PageResponseMessage = _pagination["PageResponse"]

_coin = register_file(
    COIN_PROTO,
    "cosmos.base.v1beta1",
    {"Coin": [Field("denom", 1, STRING), Field("amount", 2, STRING)]},
)
Coin = _coin["Coin"]

_abci = register_file(
    "cosmos/base/abci/v1beta1/abci.proto",
    "cosmos.base.abci.v1beta1",
    {
        "MsgData": [Field("msg_type", 1, STRING), Field("data", 2, BYTES)],
        "TxMsgData": [
            Field("data", 1, MESSAGE, "cosmos.base.abci.v1beta1.MsgData", repeated=True),
            Field("msg_responses", 2, MESSAGE, "google.protobuf.Any", repeated=True),
        ],
    },
    dependencies=[ANY_PROTO],
)
MsgData = _abci["MsgData"]
TxMsgData = _abci["TxMsgData"]

_bank_query = register_file(
    "cosmos/bank/v1beta1/query.proto",
    "cosmos.bank.v1beta1",
    {
        "QueryBalanceRequest": [Field("address", 1, STRING), Field("denom", 2, STRING)],
        "QueryBalanceResponse": [Field("balance", 1, MESSAGE, "cosmos.base.v1beta1.Coin")],
        "QueryAllBalancesRequest": [
            Field("address", 1, STRING),
            Field("pagination", 2, MESSAGE, "cosmos.base.query.v1beta1.PageRequest"),
            Field("resolve_denom", 3, BOOL),
        ],
        "QueryAllBalancesResponse": [
            Field("balances", 1, MESSAGE, "cosmos.base.v1beta1.Coin", repeated=True),
            Field("pagination", 2, MESSAGE, "cosmos.base.query.v1beta1.PageResponse"),
        ],
        "QueryTotalSupplyRequest": [
            Field("pagination", 1, MESSAGE, "cosmos.base.query.v1beta1.PageRequest"),
        ],
        "QueryTotalSupplyResponse": [
            Field("supply", 1, MESSAGE, "cosmos.base.v1beta1.Coin", repeated=True),
            Field("pagination", 2, MESSAGE, "cosmos.base.query.v1beta1.PageResponse"),
        ],
    },
    dependencies=[PAGINATION_PROTO, COIN_PROTO],
)
QueryBalanceRequest = _bank_query["QueryBalanceRequest"]
QueryBalanceResponse = _bank_query["QueryBalanceResponse"]
QueryAllBalancesRequest = _bank_query["QueryAllBalancesRequest"]
QueryAllBalancesResponse = _bank_query["QueryAllBalancesResponse"]
QueryTotalSupplyRequest = _bank_query["QueryTotalSupplyRequest"]
QueryTotalSupplyResponse = _bank_query["QueryTotalSupplyResponse"]

_bank_tx = register_file(
    "cosmos/bank/v1beta1/tx.proto",
    "cosmos.bank.v1beta1",
    {"MsgSendResponse": [], "MsgMultiSendResponse": []},
)
MsgSendResponse = _bank_tx["MsgSendResponse"]
MsgMultiSendResponse = _bank_tx["MsgMultiSendResponse"]
