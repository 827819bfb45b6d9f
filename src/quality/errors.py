"""Typed errors raised by the assessment pipeline.

They extend Protean's exception hierarchy so the FastAPI integration maps them
to HTTP responses without extra glue: guard failures behave like any other
validation error, missing assessments like any other missing object.
"""

from protean.exceptions import ObjectNotFoundError, ProteanException, ValidationError


class GuardViolation(ValidationError):
    """The assessment's current status does not permit the requested transition."""

    def __init__(self, current, action, expected=None):
        self.current = current
        self.action = action
        message = f"Cannot {action.value} an assessment in {current.value}"
        if expected:
            message += f" (allowed from: {', '.join(sorted(s.value for s in expected))})"
        super().__init__({"status": [message]})


class AssessmentNotFound(ObjectNotFoundError):
    """No assessment exists for the given product."""

    def __init__(self, product_id):
        self.product_id = str(product_id)
        super().__init__(f"No assessment found for product {product_id}")


class PersistenceError(ProteanException):
    """The underlying store failed while applying a transition."""

    def __init__(self, message):
        self.message = message
        super().__init__({"store": [message]})
