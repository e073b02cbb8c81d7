"""Byproducts record: what a step command printed and how it exited."""

from typing import Dict

from pydantic import BaseModel, ConfigDict, Field

SIGNAL_TERMINATION_SENTINEL = "Process terminated by signal"


class Byproducts(BaseModel):
    """Observable result of a step command.

    Serialized as the three-key map {"stdout", "stderr", "return-value"}.
    """
    stdout: str
    stderr: str
    return_value: str = Field(alias="return-value")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def to_dict(self) -> Dict[str, str]:
        return self.model_dump(by_alias=True)


def format_return_value(returncode: int) -> str:
    """Render an exit status; negative codes mean the child was killed by a signal."""
    if returncode < 0:
        return SIGNAL_TERMINATION_SENTINEL
    return str(returncode)
