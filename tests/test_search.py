"""
Unit tests for the product search client.
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import HttpResponseError, ServiceRequestError

from realtime_rag.errors import SearchServiceError
from realtime_rag.services.search import Product, ProductSearchClient


class AsyncResults:
    """Async iterable standing in for a page of search results."""

    def __init__(self, documents):
        self.documents = documents

    def __aiter__(self):
        return self._iterate()

    async def _iterate(self):
        for document in self.documents:
            yield document


@pytest.fixture
def mock_search_client():
    """Create a mock Azure SearchClient."""
    return AsyncMock()


@pytest.fixture
def product_search(mock_search_client):
    """Create a ProductSearchClient around the mock client."""
    return ProductSearchClient(
        "https://example.search.windows.net", "products", "search-key",
        search_client=mock_search_client,
    )


@pytest.mark.asyncio
async def test_search_returns_products_in_ranking_order(product_search, mock_search_client):
    """Test that documents are mapped to products in the order returned."""
    mock_search_client.search.return_value = AsyncResults([
        {"name": "Miami Heat Jersey", "description": "Home jersey", "@search.score": 3.2},
        {"name": "Sun Visor", "description": "Miami themed visor", "@search.score": 1.1},
    ])

    products = await product_search.search("miami themed products", max_results=5)

    mock_search_client.search.assert_awaited_once_with(search_text="miami themed products", top=5)
    assert products == [
        Product(name="Miami Heat Jersey", description="Home jersey"),
        Product(name="Sun Visor", description="Miami themed visor"),
    ]


@pytest.mark.asyncio
async def test_search_default_limit(product_search, mock_search_client):
    """Test that searches are limited to five results by default."""
    mock_search_client.search.return_value = AsyncResults([])

    assert await product_search.search("tents") == []
    assert mock_search_client.search.await_args.kwargs["top"] == 5


@pytest.mark.asyncio
async def test_search_missing_fields(product_search, mock_search_client):
    """Test that documents lacking name or description yield empty strings."""
    mock_search_client.search.return_value = AsyncResults([{"name": None}, {}])

    products = await product_search.search("anything")

    assert products == [Product(), Product()]


@pytest.mark.asyncio
async def test_context_manager_closes_client(product_search, mock_search_client):
    """Test that leaving the context closes the underlying client."""
    async with product_search as client:
        assert client is product_search

    mock_search_client.close.assert_awaited_once()


def test_builds_azure_client():
    """Test that an Azure SearchClient is created with a key credential."""
    with patch("realtime_rag.services.search.SearchClient", new=MagicMock()) as mock_cls:
        client = ProductSearchClient("https://example.search.windows.net", "products", "search-key")

    kwargs = mock_cls.call_args.kwargs
    assert kwargs["endpoint"] == "https://example.search.windows.net"
    assert kwargs["index_name"] == "products"
    assert isinstance(kwargs["credential"], AzureKeyCredential)
    assert kwargs["credential"].key == "search-key"
    assert client.index_name == "products"


@pytest.mark.asyncio
async def test_search_request_failure(product_search, mock_search_client):
    """Test that a failed search request is raised as SearchServiceError."""
    mock_search_client.search.side_effect = HttpResponseError(message="index not found")

    with pytest.raises(SearchServiceError) as exc_info:
        await product_search.search("tents")

    assert exc_info.value.query == "tents"
    assert "index not found" in str(exc_info.value)
    assert isinstance(exc_info.value.__cause__, HttpResponseError)


@pytest.mark.asyncio
async def test_search_failure_while_paging(product_search, mock_search_client):
    """Test that a failure while iterating results is raised as SearchServiceError."""

    class FailingResults:
        def __aiter__(self):
            return self

        async def __anext__(self):
            raise ServiceRequestError("connection reset")

    mock_search_client.search.return_value = FailingResults()

    with pytest.raises(SearchServiceError, match="connection reset"):
        await product_search.search("tents")
