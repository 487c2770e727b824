"""Daily NHL game stories: schedule ingestion, AI narratives, dated archive."""
