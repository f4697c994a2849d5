"""Domain layer: task types, title grammar, dates, and the rule engine.

This layer depends only on stdlib and pydantic.
It must never import from services, infrastructure, commands, or config.
"""
