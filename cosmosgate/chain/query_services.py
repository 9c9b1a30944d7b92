"""Query services: explicit method tables over `abci_query`.

Each service family declares its methods up front (name, request type,
response type). Lookups go through that table, so the list of available
methods is always known without inspecting object members.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Awaitable, Callable, ClassVar, Protocol

from google.protobuf.message import Message
from loguru import logger

from cosmosgate.codec.protobuf import message_to_dict, parse_message, to_message
from cosmosgate.codec.wire import b64decode_str
from cosmosgate.chain.rpc_client import CometRpcClient
from cosmosgate.proto import cosmos, elandnode
from cosmosgate.utils.exceptions import NotFoundError, RpcRejectionError

QueryCallable = Callable[[Any], Awaitable[Any]]


class SupportsQueryMethods(Protocol):
    """What the dispatcher needs from a service handle."""

    def available_methods(self) -> list[str]: ...

    def get_method(self, name: str) -> QueryCallable | None: ...


@dataclass(frozen=True)
class QueryMethod:
    name: str
    request_type: type[Message]
    response_type: type[Message]


class QueryService:
    """Base query service bound to one open node connection."""

    service_name: ClassVar[str] = ""
    methods: ClassVar[tuple[QueryMethod, ...]] = ()

    def __init__(self, rpc: CometRpcClient):
        self.rpc = rpc
        self._table: dict[str, QueryCallable] = {m.name: self._bind(m) for m in self.methods}

    @classmethod
    def method_names(cls) -> list[str]:
        return [m.name for m in cls.methods]

    def available_methods(self) -> list[str]:
        return list(self._table)

    def get_method(self, name: str) -> QueryCallable | None:
        return self._table.get(name)

    def _bind(self, method: QueryMethod) -> QueryCallable:
        async def invoke(request: Any) -> dict[str, Any]:
            return await self._invoke(method, request)

        invoke.__name__ = method.name
        return invoke

    async def _invoke(self, method: QueryMethod, request: Any) -> dict[str, Any]:
        message = to_message(method.request_type, request)
        path = f"/{self.service_name}/{method.name}"
        logger.debug("abci_query {}", path)
        result = await self.rpc.abci_query(path, message.SerializeToString())
        response = result.get("response") if isinstance(result, dict) else None
        response = response if isinstance(response, dict) else {}
        code = int(response.get("code") or 0)
        if code != 0:
            raise RpcRejectionError(
                code,
                str(response.get("log") or ""),
                codespace=str(response.get("codespace") or ""),
                prefix=f"Query {path} failed",
            )
        value = b64decode_str(response.get("value"))
        return message_to_dict(parse_message(method.response_type, value))


class RegistryQueryService(QueryService):
    """elandnode land registry queries."""

    service_name = "elandnode.reg.v1.Query"
    methods = (
        QueryMethod("GetRegistry", elandnode.QueryGetRegistryRequest, elandnode.QueryGetRegistryResponse),
    )


class BankQueryService(QueryService):
    """cosmos.bank balances and supply."""

    service_name = "cosmos.bank.v1beta1.Query"
    methods = (
        QueryMethod("Balance", cosmos.QueryBalanceRequest, cosmos.QueryBalanceResponse),
        QueryMethod("AllBalances", cosmos.QueryAllBalancesRequest, cosmos.QueryAllBalancesResponse),
        QueryMethod("TotalSupply", cosmos.QueryTotalSupplyRequest, cosmos.QueryTotalSupplyResponse),
    )


QUERY_SERVICES: dict[str, type[QueryService]] = {
    cls.service_name: cls for cls in (RegistryQueryService, BankQueryService)
}


def resolve_query_service(service_name: str) -> type[QueryService]:
    service_cls = QUERY_SERVICES.get(service_name)
    if service_cls is None:
        raise NotFoundError("Query service", service_name, available=sorted(QUERY_SERVICES))
    return service_cls


def describe_query_services() -> dict[str, list[str]]:
    return {name: cls.method_names() for name, cls in QUERY_SERVICES.items()}
