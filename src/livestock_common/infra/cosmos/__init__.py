"""Cosmos DB infrastructure."""

from livestock_common.infra.cosmos.cosmos_base import BaseCosmosClient

__all__ = ["BaseCosmosClient"]
