import pytest

from cosmosgate.chain.broadcast import broadcast_signed_tx, extract_and_decode_messages, extract_tx_hash
from cosmosgate.chain.broadcast_client import BroadcastClient, tx_hash_of
from cosmosgate.chain.registry import build_default_registry
from cosmosgate.chain.types import BroadcastOptions
from cosmosgate.codec.wire import b64encode_str, hex_to_bytes
from cosmosgate.proto import cosmos, elandnode
from cosmosgate.utils.exceptions import BroadcastError, RpcRejectionError, ValidationError

OPTIONS = BroadcastOptions(service="upload-service", action="/elandnode.reg.v1.MsgRegisterLandRegistry")
ELAND_URL = "/elandnode.reg.v1.MsgRegisterLandRegistryResponse"


class _FakeBroadcastClient:
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error
        self.sent = []
        self.closed = 0

    async def broadcast_tx(self, tx):
        self.sent.append(tx)
        if self.error is not None:
            raise self.error
        return self.result

    async def close(self):
        self.closed += 1


def _connector(client):
    async def _connect(node):
        return client

    return _connect


def _eland_bytes(registry_id: str) -> bytes:
    return elandnode.MsgRegisterLandRegistryResponse(registry_id=registry_id).SerializeToString()


@pytest.mark.asyncio
async def test_code_zero_is_success(node_config):
    client = _FakeBroadcastClient({"code": 0, "transactionHash": "ABC123", "msgResponses": []})
    result = await broadcast_signed_tx("0x0a8f01", OPTIONS, build_default_registry(), node=node_config, connect=_connector(client))

    assert result.success is True
    assert result.tx_hash == "ABC123"
    assert result.decoded_messages == ()
    assert client.sent == [b"\x0a\x8f\x01"]
    assert client.closed == 1


@pytest.mark.asyncio
async def test_nonzero_code_raises_with_code_and_log(node_config):
    client = _FakeBroadcastClient({"code": 5, "rawLog": "insufficient funds", "transactionHash": "X"})
    with pytest.raises(RpcRejectionError) as excinfo:
        await broadcast_signed_tx("0a8f01", OPTIONS, None, node=node_config, connect=_connector(client))

    message = str(excinfo.value)
    assert "5" in message
    assert "insufficient funds" in message
    assert client.closed == 1


@pytest.mark.asyncio
async def test_without_registry_messages_are_not_decoded(node_config):
    client = _FakeBroadcastClient(
        {"code": 0, "transactionHash": "H", "msgResponses": [{"typeUrl": ELAND_URL, "value": _eland_bytes("r")}]}
    )
    result = await broadcast_signed_tx("0a8f01", OPTIONS, None, node=node_config, connect=_connector(client))
    assert result.decoded_messages is None
    assert "decodedMessages" not in result.to_dict()


@pytest.mark.asyncio
async def test_registered_and_unregistered_responses_keep_order(node_config):
    client = _FakeBroadcastClient(
        {
            "code": 0,
            "transactionHash": "H",
            "msgResponses": [
                {"typeUrl": ELAND_URL, "value": _eland_bytes("reg-7")},
                {"typeUrl": "/other.v1.MsgThingResponse", "value": {"0": 1, "1": 2}},
            ],
        }
    )
    result = await broadcast_signed_tx("0a8f01", OPTIONS, build_default_registry(), node=node_config, connect=_connector(client))

    first, second = result.decoded_messages
    assert first.type_url == ELAND_URL
    assert first.decoded_value == {"registryId": "reg-7"}
    assert second.type_url == "/other.v1.MsgThingResponse"
    assert second.decoded_value == {"error": "Unknown message type: /other.v1.MsgThingResponse", "rawBytes": [1, 2]}


@pytest.mark.asyncio
async def test_empty_hex_is_rejected_before_connecting(node_config):
    client = _FakeBroadcastClient({"code": 0})
    with pytest.raises(ValidationError):
        await broadcast_signed_tx("", OPTIONS, None, node=node_config, connect=_connector(client))
    assert client.sent == []


@pytest.mark.asyncio
async def test_empty_node_response_and_unexpected_errors_become_broadcast_error(node_config):
    with pytest.raises(BroadcastError, match="empty broadcast response"):
        await broadcast_signed_tx("0a", OPTIONS, None, node=node_config, connect=_connector(_FakeBroadcastClient({})))

    failing = _FakeBroadcastClient(error=RuntimeError("socket exploded"))
    with pytest.raises(BroadcastError, match="socket exploded"):
        await broadcast_signed_tx("0a", OPTIONS, None, node=node_config, connect=_connector(failing))
    assert failing.closed == 1


def test_extract_tx_hash_priority_and_missing():
    assert extract_tx_hash({"txhash": "B", "hash": "C"}) == "B"
    assert extract_tx_hash({"transactionHash": "A", "txhash": "B"}) == "A"
    assert extract_tx_hash({"code": 0}) == ""


def test_non_list_msg_responses_yield_empty_list():
    assert extract_and_decode_messages({"msgResponses": "nope"}, build_default_registry()) == []
    assert extract_and_decode_messages({}, build_default_registry()) == []


def test_bad_value_shape_becomes_error_entry():
    decoded = extract_and_decode_messages(
        {"msgResponses": [{"typeUrl": ELAND_URL, "value": 3.5}]},
        build_default_registry(),
    )
    assert decoded[0].type_url == ELAND_URL
    assert "Unsupported binary representation" in decoded[0].decoded_value["error"]


@pytest.mark.asyncio
async def test_full_pipeline_against_fake_node(fake_node, node_config):
    signed_hex = "0a8f01deadbeef"
    tx_hash = tx_hash_of(hex_to_bytes(signed_hex))
    tx_msg_data = cosmos.TxMsgData()
    tx_msg_data.msg_responses.add(type_url=ELAND_URL, value=_eland_bytes("reg-1"))

    fake_node.on("broadcast_tx_sync", lambda params: {"code": 0, "hash": tx_hash, "log": "[]"})
    fake_node.on(
        "tx",
        lambda params: {
            "hash": tx_hash,
            "height": "10",
            "index": 0,
            "tx_result": {"code": 0, "data": b64encode_str(tx_msg_data.SerializeToString())},
        },
    )

    async def _connect(node):
        return await BroadcastClient.connect(node, transport=fake_node.transport())

    result = await broadcast_signed_tx(signed_hex, OPTIONS, build_default_registry(), node=node_config, connect=_connect)

    assert result.tx_hash == tx_hash
    assert result.decoded_messages[0].decoded_value == {"registryId": "reg-1"}
    assert fake_node.calls[1][1] == {"tx": b64encode_str(hex_to_bytes(signed_hex))}
