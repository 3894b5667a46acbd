"""
Student identity service.

Normalization, validation and display formatting of Chilean national
identifiers (RUT) for the attendance platform:
- módulo 11 check digit computation
- Pydantic schema types for enrollment and guardian request bodies
- Structured JSON logging with structlog
- CLI interface for batch checks
"""

__version__ = "0.1.0"
