"""Domain layer for the update connector payload builder.

This layer contains schema entities, element models and the validation
rules. It is independent of the CLI and of any transport.
"""
