"""
Infrastructure adapters for the vessel bounded context.

Each adapter implements a domain port (ABC) and connects
to an external system: the relational store or a notification channel.
"""
