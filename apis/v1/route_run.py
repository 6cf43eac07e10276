from fastapi import APIRouter

from execute import execute_code, render_output
from schemas.run import RunRequest, RunResponse

router = APIRouter()


@router.post("/run", response_model=RunResponse)
async def run_code(run_request: RunRequest) -> RunResponse:
    result = await execute_code(run_request)
    return RunResponse(output=render_output(result))
