"""Domain layer — records, business rules, and validation.

Pure Python plus pydantic.  Must never import from infrastructure,
services, commands, or output.
"""
