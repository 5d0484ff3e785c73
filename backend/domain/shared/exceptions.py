"""
Domain Exceptions.

Every failure a command can report. Each carries a stable machine code
and a details dict so callers can render or log it without parsing the
message.
"""

from typing import Any, Dict, List, Optional


class DomainException(Exception):
    """Base exception for all studio domain errors."""

    code = "DOMAIN_ERROR"

    def __init__(
        self,
        message: str,
        code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "details": self.details}


class EntityNotFoundException(DomainException):
    """A command addressed a project or child id the registry does not hold."""

    code = "ENTITY_NOT_FOUND"

    def __init__(self, entity_type: str, entity_id: Any):
        self.entity_type = entity_type
        super().__init__(
            f"{entity_type} '{entity_id}' does not exist",
            details={"entity_type": entity_type, "entity_id": str(entity_id)},
        )


class InvalidReferenceException(DomainException):
    """A new child entity points at an owner that does not exist."""

    code = "INVALID_REFERENCE"

    def __init__(self, entity_type: str, field: str, reference_id: Any):
        self.field = field
        super().__init__(
            f"{entity_type}.{field} references unknown id '{reference_id}'",
            details={
                "entity_type": entity_type,
                "field": field,
                "reference_id": str(reference_id),
            },
        )


class ValidationException(DomainException):
    """Input rejected before any state changed; field names the culprit."""

    code = "VALIDATION_ERROR"

    def __init__(self, message: str, field: Optional[str] = None, value: Any = None):
        self.field = field
        super().__init__(
            message,
            details={"field": field, "value": None if value is None else str(value)},
        )


class StatusTransitionException(DomainException):
    """The active transition table has no edge from current to target."""

    code = "INVALID_STATUS_TRANSITION"

    def __init__(
        self,
        entity_type: str,
        current_status: str,
        target_status: str,
        allowed_transitions: Optional[List[str]] = None
    ):
        super().__init__(
            f"{entity_type} cannot move from {current_status} to {target_status}",
            details={
                "entity_type": entity_type,
                "current_status": current_status,
                "target_status": target_status,
                "allowed_transitions": list(allowed_transitions or []),
            },
        )


class BusinessRuleViolationException(DomainException):
    """A command is well formed but the project is not in a state to accept it."""

    code = "BUSINESS_RULE_VIOLATION"

    def __init__(self, rule: str, message: str):
        super().__init__(message, details={"rule": rule})
