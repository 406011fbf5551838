"""Infrastructure layer - Adapters and external integrations.

This layer contains implementations of domain protocols (ports):
- persistence/: PostgreSQL models and tenant-scoped repositories
- storage/: S3 object storage for protocol PDFs, signatures and documents
- logging/: structlog console adapter
- events/: In-memory event bus and logging subscriber

The infrastructure layer depends on the domain layer (implements protocols)
but the domain layer does NOT depend on infrastructure.
"""
