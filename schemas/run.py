from pydantic import BaseModel
from typing import Literal


class RunRequest(BaseModel):
    # absent or null code is written to the source file as empty content
    code: str | None = None


class RunResponse(BaseModel):
    output: str


class CompileResult(BaseModel):
    stdout: str = ""
    stderr: str = ""
    exit_code: int | None = None
    error: str | None = None
    error_type: Literal["compile", "system", "timeout"] | None = None
    execution_time: float | None = None

    @property
    def succeeded(self) -> bool:
        return self.error_type is None and self.exit_code == 0
