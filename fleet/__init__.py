"""
Fleet: vessel resource management service.

Application package root. A modular monolith using hexagonal
architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - vessel: Vessels with their officer and cargo boxes, optimistic
      concurrency on updates, filtered and paged search.

Layers:
    - domain: Pure business logic, entities, ports (ABCs), errors.
    - application: Read and write services orchestrating the domain.
    - infrastructure: Adapters (SQL store, notifications) implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas, composition root.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
