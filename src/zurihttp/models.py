"""
models.py
---------
Defines the Pydantic schemas exchanged with the workflow broker: the task
invocation handed to the worker, and the outcome the worker reports back.
"""
from pydantic import BaseModel, Field
from typing import Any, Dict, Union
import enum


# Enum

class OutcomeType(str, enum.Enum):
    COMPLETE = "COMPLETE"
    FAIL = "FAIL"
    THROW_ERROR = "THROW_ERROR"
    PENDING = "PENDING"


# Inbound

class TaskInvocation(BaseModel):
    key: Union[int, str]
    process_instance_key: Union[int, str]
    custom_headers: Dict[str, str] = Field(default_factory=dict)
    variables: Dict[str, Any] = Field(default_factory=dict)
    retries: int = 3

    class Config:
        frozen = True


# Outcomes

class Outcome(BaseModel):
    type: OutcomeType

    class Config:
        frozen = True

class Complete(Outcome):
    type: OutcomeType = OutcomeType.COMPLETE
    variables: Dict[str, Any] = Field(default_factory=dict)

class Fail(Outcome):
    """Retryable failure; `retries` is the budget the broker keeps for the job."""
    type: OutcomeType = OutcomeType.FAIL
    error_message: str
    retries: int

class ThrowError(Outcome):
    type: OutcomeType = OutcomeType.THROW_ERROR
    error_code: str
    error_message: str

class Pending(Outcome):
    """The job stays open until something completes it asynchronously."""
    type: OutcomeType = OutcomeType.PENDING
