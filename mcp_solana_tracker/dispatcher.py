"""
Dispatcher for Solana Tracker tool calls.

Each catalog tool has exactly one RequestTemplate here (same name). Invoking a
tool resolves its template, checks that the required arguments are present,
fills in the path, attaches the allowed query parameters and performs a single
GET. The upstream body is returned untouched; every failure is reported as a
typed Failure rather than raised.
"""

import string
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Tuple, Union
from urllib.parse import quote

import httpx
from mcp.server.fastmcp.utilities.logging import get_logger
from pydantic import BaseModel

from mcp_solana_tracker.catalog import TOOLS, ToolDescriptor
from mcp_solana_tracker.config import API_KEY_HEADER, Settings

logger = get_logger(__name__)

# --- Data Structures ---

class RequestTemplate(BaseModel):
    model_config = {"frozen": True}

    path: str # May embed {placeholders}, all of them required tool parameters
    query: Tuple[str, ...] = ()
    method: str = "GET"

    @property
    def path_parameters(self) -> List[str]:
        return [field for _, field, _, _ in string.Formatter().parse(self.path) if field]


class ErrorKind(str, Enum):
    UNKNOWN_TOOL = "UnknownTool"
    INVALID_ARGUMENTS = "InvalidArguments"
    UPSTREAM_ERROR = "UpstreamError"
    INTERNAL = "Internal"


class Success(BaseModel):
    payload: Any


class Failure(BaseModel):
    kind: ErrorKind
    message: str
    status_code: Optional[int] = None


ToolResult = Union[Success, Failure]


def _get(path: str, *query: str) -> RequestTemplate:
    return RequestTemplate(path=path, query=query)


TRADE_QUERY = ("cursor", "showMeta", "parseJupiter", "hideArb")
CHART_QUERY = ("type", "time_from", "time_to", "marketCap", "removeOutliers")
SEARCH_QUERY = (
    "query", "page", "limit", "sortBy", "sortOrder", "showAllPools",
    "minCreatedAt", "maxCreatedAt", "minLiquidity", "maxLiquidity",
    "minMarketCap", "maxMarketCap", "minBuys", "maxBuys", "minSells", "maxSells",
    "minTotalTransactions", "maxTotalTransactions", "lpBurn", "market",
    "freezeAuthority", "mintAuthority", "deployer", "showPriceChanges",
)

# --- Request Templates ---

REQUEST_TEMPLATES: Dict[str, RequestTemplate] = {
    "get_token_information": _get("/tokens/{tokenAddress}"),
    "get_token_information_by_pool": _get("/tokens/by-pool/{poolAddress}"),
    "get_token_holders_top": _get("/tokens/{tokenAddress}/holders/top"),
    "get_token_ath": _get("/tokens/{tokenAddress}/ath"),
    "get_tokens_created_by_wallet": _get("/deployer/{wallet}"),
    "search_tokens": _get("/search", *SEARCH_QUERY),
    "get_latest_tokens": _get("/tokens/latest", "page"),
    "get_trending_tokens": _get("/tokens/trending"),
    "get_trending_tokens_timeframe": _get("/tokens/trending/{timeframe}"),
    "get_tokens_volume": _get("/tokens/volume"),
    "get_tokens_multi_all": _get("/tokens/multi/all"),
    "get_tokens_multi_graduated": _get("/tokens/multi/graduated"),
    "get_token_price": _get("/price", "token", "priceChanges"),
    "get_token_price_history": _get("/price/history", "token"),
    "get_token_price_history_timestamp": _get("/price/history/timestamp", "token", "timestamp"),
    "get_tokens_price_multi": _get("/price/multi", "tokens", "priceChanges"),
    "get_wallet_tokens": _get("/wallet/{owner}"),
    "get_wallet_tokens_basic": _get("/wallet/{owner}/basic"),
    "get_wallet_tokens_page": _get("/wallet/{owner}/page/{page}"),
    "get_wallet_trades": _get("/wallet/{owner}/trades", "cursor"),
    "get_trades_token": _get("/trades/{tokenAddress}", *TRADE_QUERY),
    "get_trades_token_pool": _get("/trades/{tokenAddress}/{poolAddress}", *TRADE_QUERY),
    "get_trades_token_pool_owner": _get("/trades/{tokenAddress}/{poolAddress}/{owner}", *TRADE_QUERY),
    "get_trades_token_by_wallet": _get("/trades/{tokenAddress}/by-wallet/{owner}", *TRADE_QUERY),
    "get_chart_token": _get("/chart/{token}", *CHART_QUERY),
    "get_chart_token_pool": _get("/chart/{token}/{pool}", *CHART_QUERY),
    "get_pnl_wallet": _get("/pnl/{wallet}", "showHistoricPnL", "holdingCheck", "hideDetails"),
    "get_first_buyers": _get("/first-buyers/{token}"),
    "get_pnl_wallet_token": _get("/pnl/{wallet}/{token}"),
    "get_top_traders_all": _get("/top-traders/all", "page", "expandPnl", "sortBy"),
    "get_top_traders_token": _get("/top-traders/{token}"),
    "get_stats_token_pool": _get("/stats/{token}/{pool}"),
    "get_stats_token": _get("/stats/{token}"),
}


def create_http_client(settings: Settings) -> httpx.AsyncClient:
    """Builds the shared upstream client; its configuration is read-only afterwards."""
    return httpx.AsyncClient(
        base_url=settings.base_url,
        headers={API_KEY_HEADER: settings.api_key},
        timeout=settings.timeout,
    )


SCALAR_TYPES = (str, int, float, bool)


def _path_value(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return quote(str(value), safe="")


class Dispatcher:
    """Maps tool invocations onto upstream GET requests."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        tools: Tuple[ToolDescriptor, ...] = TOOLS,
        templates: Optional[Dict[str, RequestTemplate]] = None,
    ):
        self.client = client
        self.tools = {tool.name: tool for tool in tools}
        self.templates = REQUEST_TEMPLATES if templates is None else templates

    async def aclose(self) -> None:
        await self.client.aclose()

    async def invoke(self, tool_name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        logger.info(f"Received {tool_name} request")
        try:
            return await self._invoke(tool_name, arguments)
        except Exception as e:
            logger.exception(f"Unexpected error while dispatching {tool_name}: {e}")
            return Failure(kind=ErrorKind.INTERNAL, message=f"Internal error while calling {tool_name}.")

    async def _invoke(self, tool_name: str, arguments: Optional[Mapping[str, Any]]) -> ToolResult:
        template = self.templates.get(tool_name)
        descriptor = self.tools.get(tool_name)
        if template is None or descriptor is None:
            logger.warning(f"Unknown tool requested: {tool_name}")
            return Failure(kind=ErrorKind.UNKNOWN_TOOL, message=f"Unknown tool: {tool_name}")

        if arguments is None:
            arguments = {}
        if not isinstance(arguments, Mapping):
            return Failure(
                kind=ErrorKind.INVALID_ARGUMENTS,
                message=f"Arguments for {tool_name} must be an object.",
            )

        # Only scalars fit in a path segment or a single query value
        malformed = [
            name for name in template.path_parameters + list(template.query)
            if arguments.get(name) is not None and not isinstance(arguments[name], SCALAR_TYPES)
        ]
        if malformed:
            return Failure(
                kind=ErrorKind.INVALID_ARGUMENTS,
                message=f"Argument(s) for {tool_name} must be a string, number or boolean: {', '.join(malformed)}",
            )

        missing = [name for name in descriptor.required_names if arguments.get(name) is None]
        if missing:
            return Failure(
                kind=ErrorKind.INVALID_ARGUMENTS,
                message=f"Missing required argument(s) for {tool_name}: {', '.join(missing)}",
            )

        path_values = {}
        for name in template.path_parameters:
            value = _path_value(arguments[name])
            if not value:
                return Failure(
                    kind=ErrorKind.INVALID_ARGUMENTS,
                    message=f"Argument {name} for {tool_name} must not be empty.",
                )
            path_values[name] = value

        path = template.path.format(**path_values)
        # Absent optional parameters are omitted, never sent empty
        params = [(name, arguments[name]) for name in template.query if arguments.get(name) is not None]

        logger.debug(f"{template.method} {path} params={params}")
        try:
            response = await self.client.request(template.method, path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"Solana Tracker API request for {tool_name} failed: {e!r}")
            return Failure(kind=ErrorKind.UPSTREAM_ERROR, message=f"Solana Tracker API error: {e}")

        if response.status_code != 200:
            logger.warning(f"Solana Tracker API returned {response.status_code} for {tool_name}")
            return Failure(
                kind=ErrorKind.UPSTREAM_ERROR,
                message=(f"Solana Tracker API returned status code: "
                         f"{response.status_code}: {response.reason_phrase}"),
                status_code=response.status_code,
            )

        try:
            payload = response.json()
        except ValueError as e:
            logger.error(f"Solana Tracker API returned a non-JSON body for {tool_name}: {e}")
            return Failure(
                kind=ErrorKind.UPSTREAM_ERROR,
                message=f"Solana Tracker API returned an invalid JSON body: {e}",
                status_code=response.status_code,
            )

        return Success(payload=payload)
