"""
PetCare: pet and owner management service.

Application package root. This is a modular monolith using
hexagonal architecture (ports & adapters) with domain-driven design.

Bounded contexts:
    - pets: Animals (dogs, cats, birds), owners, care needs and cost estimates.

Layers:
    - domain: Pure business logic, entities, value objects, ports (ABCs), errors.
    - application: Use cases, DTOs, response assembly.
    - infrastructure: SQL adapters implementing domain ports.
    - interfaces: FastAPI routers, Pydantic schemas.
    - shared: Cross-cutting concerns (errors, security, logging).
"""
