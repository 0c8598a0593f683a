class TrustCheckError(Exception):
    """Base class for every error raised inside the trust-check pipeline."""


class InvalidInput(TrustCheckError):
    """The submitted URL is malformed."""


class FetchError(TrustCheckError):
    """The remote browser or the fallback extraction service failed."""


class ExtractionError(TrustCheckError):
    """An LLM extraction call failed or returned data outside its schema."""


class ClassificationError(TrustCheckError):
    """The trust-level classification call failed."""
