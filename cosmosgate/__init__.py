"""cosmosgate - HTTP gateway for presigned Cosmos transactions and chain queries."""

__version__ = "0.1.0"
__logo__ = "🛰"
