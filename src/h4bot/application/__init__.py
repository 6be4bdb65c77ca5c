"""
Application Layer

Use cases, command/query handlers and application services.
This layer orchestrates domain objects and infrastructure adapters.

Structure:
- commands/: write operations (rename members, play track, join voice)
- queries/: read operations (queue listing)
- services/: batch coordination, mutation worker, queue controller
- interfaces/: port interfaces implemented by infrastructure adapters
"""
