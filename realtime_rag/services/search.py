"""
Product catalog search backed by Azure AI Search.

This module wraps the async Azure AI Search client and returns products in
the ranking order the search service produced.
"""

import logging
from typing import List, Optional

from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import AzureError
from azure.search.documents.aio import SearchClient
from pydantic import BaseModel

from realtime_rag.config.constants import LOGGER_NAME, SEARCH_MAX_RESULTS
from realtime_rag.errors import SearchServiceError

logger = logging.getLogger(LOGGER_NAME)


class Product(BaseModel):
    """A product document from the catalog index."""
    name: str = ""
    description: str = ""


class ProductSearchClient:
    """
    Client for querying the product catalog index.
    """

    def __init__(
        self,
        endpoint: str,
        index_name: str,
        api_key: str,
        search_client: Optional[SearchClient] = None,
    ):
        """
        Initialize the product search client.

        Args:
            endpoint: Azure AI Search service endpoint
            index_name: Name of the index holding the product catalog
            api_key: Query or admin key for the search service
            search_client: Pre-built SearchClient, mainly for tests
        """
        self.endpoint = endpoint
        self.index_name = index_name
        self._client = search_client or SearchClient(
            endpoint=endpoint,
            index_name=index_name,
            credential=AzureKeyCredential(api_key),
        )
        logger.info(f"ProductSearchClient initialized for index: {index_name}")

    async def search(self, query: str, max_results: int = SEARCH_MAX_RESULTS) -> List[Product]:
        """
        Run a full text search against the catalog.

        Args:
            query: Search text
            max_results: Maximum number of ranked results to return

        Returns:
            List[Product]: Matching products in ranking order

        Raises:
            SearchServiceError: If the search service request fails
        """
        logger.info(f"Executing search for query: {query}")
        products: List[Product] = []
        try:
            results = await self._client.search(search_text=query, top=max_results)
            async for document in results:
                products.append(
                    Product(
                        name=document.get("name") or "",
                        description=document.get("description") or "",
                    )
                )
        except AzureError as e:
            logger.error(f"Error executing search: {e}")
            raise SearchServiceError(query, str(e)) from e

        logger.info(f"Found {len(products)} results for query: {query}")
        return products

    async def close(self) -> None:
        """Close the underlying search client."""
        await self._client.close()

    async def __aenter__(self) -> "ProductSearchClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()
