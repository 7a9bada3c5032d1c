"""Services Layer — orchestration of core rules around repositories and collaborators.

Invariants:
    - Services receive a unit of work or a unit-of-work factory; they never build engines
    - Write paths commit exactly once, at the end

Design Decisions:
    - One file per operation for locality (orchestrator, reader, survey, thread linker)
"""
