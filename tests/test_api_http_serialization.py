from cosmosgate.api.http.serialization import MAX_SAFE_INTEGER, to_jsonable
from cosmosgate.chain.registry import unknown_type_placeholder
from cosmosgate.proto import elandnode


def test_large_integers_become_strings():
    assert to_jsonable(MAX_SAFE_INTEGER) == MAX_SAFE_INTEGER
    assert to_jsonable(MAX_SAFE_INTEGER + 1) == str(MAX_SAFE_INTEGER + 1)
    assert to_jsonable(-(MAX_SAFE_INTEGER + 1)) == str(-(MAX_SAFE_INTEGER + 1))


def test_bools_and_none_pass_through():
    assert to_jsonable({"ok": True, "x": None}) == {"ok": True, "x": None}


def test_bytes_become_index_maps_recursively():
    assert to_jsonable({"v": [b"\x00\xff", (1, 2)]}) == {"v": [{"0": 0, "1": 255}, [1, 2]]}
    assert to_jsonable(b"") == {}


def test_placeholder_raw_bytes_stay_integer_lists():
    placeholder = unknown_type_placeholder("/x.y.Unknown", b"\x01\x02")
    assert to_jsonable(placeholder)["rawBytes"] == [1, 2]


def test_protobuf_message_is_converted():
    message = elandnode.MsgRegisterLandRegistryResponse(registry_id="r")
    assert to_jsonable(message) == {"registryId": "r"}
