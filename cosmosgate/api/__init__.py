"""HTTP boundary for cosmosgate."""
