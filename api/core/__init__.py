"""
Shared, cross-cutting code for the API.

`core/` holds the building blocks every feature uses (DB handle, settings,
logging, error types and the error responder). Feature-specific SQL and
business logic live in the feature package (e.g. `students/`).
"""
