"""FastAPI web adapter for the LC-3 simulator."""

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field
from typing import Annotated, Optional

from lc3sim import run_image, image_from_words, RunOptions, ImageFormatError


# Constants
MAX_IMAGE_WORDS = (1 << 16) + 1  # origin + full address space

Word = Annotated[int, Field(ge=0, le=0xFFFF)]


# Request/Response models
class RunOptionsModel(BaseModel):
    max_steps: int = Field(default=100_000, ge=1, le=1_000_000)
    trace: bool = False
    trace_watch: list[Word] = Field(default_factory=list)
    initial_memory: dict[str, Word] = Field(default_factory=dict)
    initial_registers: dict[str, Word] = Field(default_factory=dict)


class RunRequest(BaseModel):
    image: list[int] = Field(min_length=1)
    options: Optional[RunOptionsModel] = None


class ErrorResponse(BaseModel):
    type: str
    message: str
    step: int
    addr: int


class FinalState(BaseModel):
    registers: list[int]
    pc: int
    cond: str
    running: bool


class RunResponse(BaseModel):
    status: str
    steps_executed: int
    final_state: FinalState
    trace_watch: list[int]
    trace: list[dict]
    invalid_opcodes: int
    error: Optional[ErrorResponse] = None


def _int_keys(values: dict[str, int], name: str, limit: int) -> dict[int, int]:
    """Convert JSON string keys to ints within [0, limit)."""
    result = {}
    for k, v in values.items():
        try:
            key = int(k, 0)
        except ValueError:
            raise HTTPException(status_code=400, detail=f"Invalid {name} key: {k}")
        if not 0 <= key < limit:
            raise HTTPException(status_code=400, detail=f"{name} key out of range: {k}")
        result[key] = v
    return result


# Create FastAPI app
app = FastAPI(
    title="LC-3 Simulator",
    description="Web API for executing LC-3 program images with tracing",
    version="0.1.0",
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.post("/api/run", response_model=RunResponse)
async def run_code(request: RunRequest):
    """Execute an LC-3 program image.

    Args:
        request: Image words (origin first) and execution options

    Returns:
        Execution result with trace and final state
    """
    if len(request.image) > MAX_IMAGE_WORDS:
        raise HTTPException(
            status_code=400,
            detail=f"Image exceeds limit of {MAX_IMAGE_WORDS} words",
        )

    try:
        image = image_from_words(request.image)
    except ImageFormatError as e:
        raise HTTPException(status_code=400, detail=e.message)

    opts = request.options or RunOptionsModel()
    run_opts = RunOptions(
        max_steps=opts.max_steps,
        trace=opts.trace,
        trace_watch=opts.trace_watch,
        initial_memory=_int_keys(opts.initial_memory, "initial_memory", 1 << 16),
        initial_registers=_int_keys(opts.initial_registers, "initial_registers", 8),
    )

    result = run_image(image, run_opts)
    return result.to_dict()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8080)
