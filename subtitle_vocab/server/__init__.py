"""HTTP API for the Subtitle Vocabulary Extractor (FastAPI)."""
