"""Infrastructure layer for the update connector payload builder.

This layer contains the schema registry, the XML/JSON encoders and the
logging adapters.
"""

__all__ = []
