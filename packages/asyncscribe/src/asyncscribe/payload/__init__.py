from .extractor import Payload, PayloadTypeExtractor

__all__ = ["Payload", "PayloadTypeExtractor"]
