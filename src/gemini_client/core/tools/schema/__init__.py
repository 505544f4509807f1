"""Function declaration schema generation and validation."""

from .parameter_factory import DeclarationField, DeclarationParameterFactory
from .schema_validator import SchemaValidator

__all__ = ["SchemaValidator", "DeclarationParameterFactory", "DeclarationField"]
