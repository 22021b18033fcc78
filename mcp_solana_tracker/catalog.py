"""
Tool catalog for the Solana Tracker MCP server.

The catalog is static metadata: an ordered tuple of tool descriptors, each with
a JSON-schema-shaped input contract that the calling agent uses to build its
arguments. Nothing here performs I/O; the matching HTTP request templates live
in dispatcher.py and are keyed by the same tool names.
"""

from typing import Any, Dict, List, Literal, Optional, Tuple

from mcp import types
from pydantic import BaseModel

ParameterType = Literal["string", "integer", "number", "boolean"]


class ToolParameter(BaseModel):
    model_config = {"frozen": True}

    name: str
    type: ParameterType
    description: str
    required: bool = False


class ToolDescriptor(BaseModel):
    model_config = {"frozen": True}

    name: str
    description: str
    parameters: Tuple[ToolParameter, ...] = ()

    @property
    def required_names(self) -> List[str]:
        return [p.name for p in self.parameters if p.required]

    @property
    def input_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {
                p.name: {"type": p.type, "description": p.description}
                for p in self.parameters
            },
        }
        if self.required_names:
            schema["required"] = self.required_names
        return schema

    def to_mcp_tool(self) -> types.Tool:
        return types.Tool(name=self.name, description=self.description, inputSchema=self.input_schema)


def _param(name: str, type: ParameterType, description: str, required: bool = False) -> ToolParameter:
    return ToolParameter(name=name, type=type, description=description, required=required)


# --- Shared parameters ---

TOKEN_ADDRESS = _param("tokenAddress", "string", "The address of the token.", required=True)
TRADED_TOKEN = _param("tokenAddress", "string", "The token address", required=True)
POOL_ADDRESS = _param("poolAddress", "string", "The pool address", required=True)
TOKEN = _param("token", "string", "The token address", required=True)
POOL = _param("pool", "string", "The pool address", required=True)
OWNER = _param("owner", "string", "The wallet address", required=True)
WALLET = _param("wallet", "string", "The wallet address", required=True)
CURSOR = _param("cursor", "string", "Cursor for pagination")

TRADE_FLAGS = (
    CURSOR,
    _param("showMeta", "string", "Set to 'true' to add metadata for from and to tokens"),
    _param(
        "parseJupiter", "string",
        "Set to 'true' to combine all transfers within a Jupiter swap into a single transaction. "
        "By default, each transfer is shown separately.",
    ),
    _param(
        "hideArb", "string",
        "Set to 'true' to hide arbitrage or other transactions that don't have both the 'from' "
        "and 'to' token addresses matching the token parameter.",
    ),
)

CHART_OPTIONS = (
    _param("type", "string", "Time interval (e.g., '1s', '1m', '1h', '1d')"),
    _param("time_from", "integer", "Start time (Unix timestamp in seconds)"),
    _param("time_to", "integer", "End time (Unix timestamp in seconds)"),
    _param("marketCap", "string", "Return chart for market cap instead of pricing"),
    _param("removeOutliers", "string", "Set to false to disable outlier removal, true by default."),
)

SEARCH_FILTERS = (
    _param("query", "string", "Search term for token symbol, name, or address", required=True),
    _param("page", "integer", "Page number for pagination"),
    _param("limit", "integer", "Number of results per page"),
    _param("sortBy", "string", "Field to sort by"),
    _param("sortOrder", "string", "Sort order: asc (ascending) or desc (descending)"),
    _param("showAllPools", "string", "Return all pools for a token in a response if enabled"),
    _param("minCreatedAt", "integer", "Minimum creation date in unix time in ms"),
    _param("maxCreatedAt", "integer", "Maximum creation date in unix time in ms"),
    _param("minLiquidity", "number", "Minimum liquidity in USD"),
    _param("maxLiquidity", "number", "Maximum liquidity in USD"),
    _param("minMarketCap", "integer", "Minimum market cap in USD"),
    _param("maxMarketCap", "integer", "Maximum market cap in USD"),
    _param("minBuys", "string", "Minimum number of buy transactions"),
    _param("maxBuys", "string", "Maximum number of buy transactions"),
    _param("minSells", "string", "Minimum number of sell transactions"),
    _param("maxSells", "string", "Maximum number of sell transactions"),
    _param("minTotalTransactions", "string", "Minimum total number of transactions"),
    _param("maxTotalTransactions", "string", "Maximum total number of transactions"),
    _param("lpBurn", "integer", "LP token burn percentage"),
    _param("market", "string", "Market identifier"),
    _param("freezeAuthority", "string", "Freeze authority address"),
    _param("mintAuthority", "string", "Mint authority address"),
    _param("deployer", "string", "Deployer address"),
    _param("showPriceChanges", "boolean", "Include price change data in response"),
)


def _tool(name: str, description: str, *parameters: ToolParameter) -> ToolDescriptor:
    return ToolDescriptor(name=name, description=description, parameters=parameters)


# --- Catalog (order is the order reported to clients) ---

TOOLS: Tuple[ToolDescriptor, ...] = (
    # Tokens
    _tool("get_token_information", "Retrieve all information for a specific token.", TOKEN_ADDRESS),
    _tool(
        "get_token_information_by_pool",
        "Retrieve all information for a specific token by searching by pool address.",
        _param("poolAddress", "string", "The address of the pool.", required=True),
    ),
    _tool("get_token_holders_top", "Get the top 20 holders for a token.", TOKEN_ADDRESS),
    _tool("get_token_ath", "Retrieve the all time high price of a token.", TOKEN_ADDRESS),
    _tool(
        "get_tokens_created_by_wallet",
        "Retrieve all tokens created by wallet.",
        _param("wallet", "string", "The address of the wallet.", required=True),
    ),
    _tool(
        "search_tokens",
        "Search for pools and tokens with support for multiple filtering criteria and pagination.",
        *SEARCH_FILTERS,
    ),
    _tool(
        "get_latest_tokens",
        "Retrieve the latest 100 tokens.",
        _param("page", "string", "The page number (1-10)"),
    ),
    _tool(
        "get_trending_tokens",
        "Get the top 100 trending tokens based on transaction volume in the past hour.",
    ),
    _tool(
        "get_trending_tokens_timeframe",
        "Returns trending tokens for a specific time interval.",
        _param(
            "timeframe", "string",
            "Time interval (e.g., 5m, 15m, 30m, 1h, 2h, 3h, 4h, 5h, 6h, 12h, 24h)",
            required=True,
        ),
    ),
    _tool("get_tokens_volume", "Retrieve the top 100 tokens sorted by highest volume."),
    _tool("get_tokens_multi_all", "Get an overview of latest, graduating, and graduated tokens."),
    _tool("get_tokens_multi_graduated", "Overview of all graduated pumpfun/moonshot tokens."),
    # Prices
    _tool(
        "get_token_price",
        "Get price information for a single token.",
        TOKEN,
        _param("priceChanges", "boolean", "Returns price change percentages for the token up to 24 hours ago"),
    ),
    _tool("get_token_price_history", "Get historic price information for a single token.", TOKEN),
    _tool(
        "get_token_price_history_timestamp",
        "Get specific historic price information for a token at a given timestamp.",
        TOKEN,
        _param("timestamp", "integer", "The target timestamp (unix timestamp)", required=True),
    ),
    _tool(
        "get_tokens_price_multi",
        "Get price information for multiple tokens (up to 100).",
        _param("tokens", "string", "Comma-separated list of token addresses", required=True),
        _param("priceChanges", "boolean", "Returns price change percentages for the tokens up to 24 hours ago"),
    ),
    # Wallets
    _tool("get_wallet_tokens", "Get all tokens in a wallet with current value in USD.", OWNER),
    _tool(
        "get_wallet_tokens_basic",
        "Get all tokens in a wallet with current value in USD, more lightweight and faster non cached option.",
        OWNER,
    ),
    _tool(
        "get_wallet_tokens_page",
        "Retrieve wallet tokens using pagination with a limit of 250 tokens per request.",
        OWNER,
        _param("page", "integer", "The page number", required=True),
    ),
    _tool("get_wallet_trades", "Get the latest trades of a wallet.", OWNER, CURSOR),
    # Trades
    _tool(
        "get_trades_token",
        "Get the latest trades for a token across all pools.",
        TRADED_TOKEN,
        *TRADE_FLAGS,
    ),
    _tool(
        "get_trades_token_pool",
        "Get the latest trades for a specific token and pool pair.",
        TRADED_TOKEN,
        POOL_ADDRESS,
        *TRADE_FLAGS,
    ),
    _tool(
        "get_trades_token_pool_owner",
        "Get the latest trades for a specific token, pool, and wallet address.",
        TRADED_TOKEN,
        POOL_ADDRESS,
        OWNER,
        *TRADE_FLAGS,
    ),
    _tool(
        "get_trades_token_by_wallet",
        "Get the latest trades for a specific token and wallet address.",
        TRADED_TOKEN,
        OWNER,
        *TRADE_FLAGS,
    ),
    # Charts
    _tool(
        "get_chart_token",
        "Get OLCVH (Open, Low, Close, Volume, High) data for charts for a token.",
        TOKEN,
        *CHART_OPTIONS,
    ),
    _tool(
        "get_chart_token_pool",
        "Get OLCVH (Open, Low, Close, Volume, High) data for charts for a token and pool.",
        TOKEN,
        POOL,
        *CHART_OPTIONS,
    ),
    # PnL
    _tool(
        "get_pnl_wallet",
        "Get Profit and Loss data for all positions of a wallet.",
        WALLET,
        _param("showHistoricPnL", "string", "Adds PnL data for 1d, 7d and 30d intervals (BETA)"),
        _param(
            "holdingCheck", "string",
            "Does an extra check to check current holding value in wallet (increases response time)",
        ),
        _param("hideDetails", "string", "Return only summary for the pnl without separate data for every token."),
    ),
    _tool(
        "get_first_buyers",
        "Retrieve the first 100 buyers of a token with Profit and Loss data for each wallet.",
        TOKEN,
    ),
    _tool("get_pnl_wallet_token", "Get Profit and Loss data for a specific token in a wallet.", WALLET, TOKEN),
    # Top traders
    _tool(
        "get_top_traders_all",
        "Get the most profitable traders across all tokens.",
        _param("page", "string", "The page number"),
        _param("expandPnl", "string", "Include detailed PnL data for each token if true"),
        _param("sortBy", "string", "Sort results by metric ('total' or 'winPercentage')"),
    ),
    _tool("get_top_traders_token", "Get top 100 traders by PnL for a token.", TOKEN),
    # Stats
    _tool(
        "get_stats_token_pool",
        "Get detailed stats for a token-pool pair over various time intervals.",
        TOKEN,
        POOL,
    ),
    _tool("get_stats_token", "Get detailed stats for a token over various time intervals.", TOKEN),
)

_TOOLS_BY_NAME: Dict[str, ToolDescriptor] = {tool.name: tool for tool in TOOLS}


def list_tool_descriptors() -> List[ToolDescriptor]:
    """Returns the full catalog in declaration order."""
    return list(TOOLS)


def get_tool_descriptor(name: str) -> Optional[ToolDescriptor]:
    return _TOOLS_BY_NAME.get(name)
