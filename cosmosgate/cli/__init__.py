"""CLI module for cosmosgate."""
