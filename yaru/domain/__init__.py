"""Domain layer for yaru.

Pure business logic with no I/O:

- ``shared`` - Result values, errors, events, value object bases
- ``task`` - task aggregate, value objects, specifications, repository contract
- ``tag`` - tag aggregate, value objects, repository contract
- ``services`` - stateless computations over many aggregates
"""
