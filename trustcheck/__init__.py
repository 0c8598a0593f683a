"""Article trust checker: scores a news article on seven journalistic-integrity aspects."""

__version__ = "0.1.0"
