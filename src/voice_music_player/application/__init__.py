"""
Application Layer

Contains use cases, command/query handlers, and application services.
This layer orchestrates domain objects and infrastructure to fulfill use cases.

Structure:
- commands/: CQRS write operations (StartFavoritesCommand, StartStreamCommand)
- queries/: CQRS read operations (ResolvePlayableQuery)
- services/: The playback session engine
- interfaces/: Port interfaces for infrastructure adapters
"""
