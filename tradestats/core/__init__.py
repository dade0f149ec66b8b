"""Trade records, ingestion, and instrument specifications."""
