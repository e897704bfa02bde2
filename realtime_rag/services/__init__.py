"""
Services module for external API integrations in the realtime RAG client.

Key components:
- search: ProductSearchClient, a thin async wrapper around the Azure AI
  Search client that returns Product models in ranking order.

Usage examples:
```python
from realtime_rag.services.search import ProductSearchClient

async def find_products():
    async with ProductSearchClient(endpoint, "products", api_key) as client:
        for product in await client.search("miami themed products", max_results=5):
            print(product.name, product.description)
```
"""

from realtime_rag.services.search import Product, ProductSearchClient

__all__ = ["Product", "ProductSearchClient"]
