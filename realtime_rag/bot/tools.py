"""
Tool execution for function calls made by the realtime model.

The only tool offered to the model is "search", which queries the product
catalog and reports the ranked results as plain text lines.
"""

import json
import logging
from typing import List, Optional, Protocol

from realtime_rag.config.constants import LOGGER_NAME, SEARCH_MAX_RESULTS
from realtime_rag.errors import MalformedToolArguments, UnsupportedTool
from realtime_rag.models.session import FunctionTool
from realtime_rag.services.search import Product

logger = logging.getLogger(LOGGER_NAME)

SEARCH_TOOL_NAME = "search"

SEARCH_TOOL = FunctionTool(
    name=SEARCH_TOOL_NAME,
    description="Search the product catalog for product information",
    parameters={
        "type": "object",
        "properties": {
            "query": {
                "type": "string",
                "description": "The search query e.g. 'miami themed products'",
            }
        },
        "required": ["query"],
    },
)


class ProductSearch(Protocol):
    async def search(self, query: str, max_results: int = SEARCH_MAX_RESULTS) -> List[Product]:
        ...


def format_search_results(products: List[Product]) -> str:
    """
    Render search results as one line per product followed by a total line.

    Args:
        products: Products in ranking order

    Returns:
        str: Newline-terminated result lines
    """
    lines = [
        f"Product: {product.name}, Description: {product.description}"
        for product in products
    ]
    lines.append(f"Total results: {len(products)}")
    return "".join(f"{line}\n" for line in lines)


def parse_search_query(function_arguments: str) -> str:
    """
    Extract the required "query" string from the search tool arguments.

    Raises:
        MalformedToolArguments: If the arguments are not a JSON object with a string query
    """
    try:
        arguments = json.loads(function_arguments)
    except json.JSONDecodeError as e:
        raise MalformedToolArguments(SEARCH_TOOL_NAME, function_arguments, f"invalid JSON: {e}") from e
    if not isinstance(arguments, dict):
        raise MalformedToolArguments(SEARCH_TOOL_NAME, function_arguments, "arguments must be an object")
    query = arguments.get("query")
    if not isinstance(query, str):
        raise MalformedToolArguments(SEARCH_TOOL_NAME, function_arguments, "'query' must be a string")
    return query


class ToolExecutor:
    """
    Runs the tools the model is allowed to call.
    """

    def __init__(self, search_client: ProductSearch, max_results: int = SEARCH_MAX_RESULTS):
        self.search_client = search_client
        self.max_results = max_results

    @property
    def tools(self) -> List[FunctionTool]:
        """Declarations of the tools this executor provides."""
        return [SEARCH_TOOL]

    async def invoke(self, function_name: Optional[str], function_arguments: str) -> str:
        """
        Run a tool and return its textual result.

        Args:
            function_name: Name of the tool requested by the model
            function_arguments: JSON-encoded argument object

        Returns:
            str: The tool result; an empty string means there is nothing to report

        Raises:
            MalformedToolArguments: If the arguments cannot be interpreted
            UnsupportedTool: If the tool name is unknown
        """
        if function_name == SEARCH_TOOL_NAME:
            query = parse_search_query(function_arguments)
            return await self.search(query)

        raise UnsupportedTool(function_name)

    async def search(self, query: str) -> str:
        products = await self.search_client.search(query, max_results=self.max_results)
        documentation = format_search_results(products)
        logger.info(f" -> Retrieved documentation:\n{documentation}")
        return documentation
