"""
Vessel bounded context: domain layer.

Entities, errors, ports, the pagination model and the search
predicate builder for the vessel aggregate.
"""
