"""Application services sitting between routes and provider clients."""
