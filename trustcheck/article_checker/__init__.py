"""Article trust-check pipeline: aspect extraction, aggregation and trust classification."""
