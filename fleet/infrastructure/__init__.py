"""
Infrastructure layer package.

Contains concrete implementations (adapters) of the ports
defined in the domain layer. This is where the relational store
and the notification channels live.
"""
