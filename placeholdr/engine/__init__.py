"""Request-to-artifact engine: resolver, cache, raster stage and orchestrator."""
