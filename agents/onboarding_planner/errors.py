"""
Onboarding Planner Errors

Exceptions raised inside planner steps. Every step catches these and turns
them into the state's ``failure`` field, so none of them escape a run.
"""


class PlannerError(Exception):
    """Base exception for onboarding planner errors"""
    pass


class ToolInvocationError(PlannerError):
    """A tool contract reported failure (e.g. constraint violation)"""
    pass


class StoreError(PlannerError):
    """The backing datastore rejected or failed an operation"""
    pass


class ExtractionError(PlannerError):
    """No JSON-like region found in the model's text"""
    pass


class PlanParseError(PlannerError):
    """Extracted region is not valid JSON"""
    pass


class PlanValidationError(PlannerError):
    """JSON parsed but required plan fields are missing"""

    def __init__(self, missing_fields: list[str]):
        self.missing_fields = missing_fields
        detail = ", ".join(missing_fields)
        super().__init__(f"AI response missing required fields: {detail}")


class PreconditionError(PlannerError):
    """A step's required input is absent from state"""
    pass


class StateInvariantError(PlannerError):
    """A merge would overwrite a write-once state field"""
    pass
