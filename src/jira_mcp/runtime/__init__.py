"""Runtime layer: retry and observability."""
