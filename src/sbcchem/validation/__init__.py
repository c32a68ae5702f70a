"""Requirement validation for candidate squads."""

from .requirements import RequirementValidator, ValidationResult, validate

__all__ = ["RequirementValidator", "ValidationResult", "validate"]
