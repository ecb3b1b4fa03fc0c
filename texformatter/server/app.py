from __future__ import annotations

import os

from fastapi import FastAPI, HTTPException
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger
from pydantic import BaseModel, Field

from texformatter.gallery import get_examples, render_example
from texformatter.tex.convert import convert_with_report

DEFAULT_MAX_INPUT_CHARS = 1_000_000


class ConvertRequest(BaseModel):
    text: str = Field(..., description="ChatGPT-style LaTeX / Markdown to convert")


class ConvertResponse(BaseModel):
    text: str = Field(..., description="Obsidian-compatible output")
    changed: bool
    stages: list[str] = Field(
        default_factory=list, description="Pipeline stages that rewrote the text"
    )
    dialect: str = Field(..., description="Math dialect detected on the input")
    inputChars: int
    outputChars: int


class ExampleResponse(BaseModel):
    title: str
    description: str
    source: str
    converted: str


def _max_input_chars() -> int:
    raw = (os.getenv("TEXFORMATTER_MAX_INPUT_CHARS") or "").strip()
    if not raw:
        return DEFAULT_MAX_INPUT_CHARS
    try:
        return int(raw)
    except ValueError:
        logger.warning(
            f"Ignoring invalid TEXFORMATTER_MAX_INPUT_CHARS={raw!r}; "
            f"using {DEFAULT_MAX_INPUT_CHARS}"
        )
        return DEFAULT_MAX_INPUT_CHARS


app = FastAPI(title="texformatter", version="0.1.0")

# ---------------------------------------------------------------------------
# CORS
#
# The browser shell (two text areas, auto-convert with debounce, copy
# button) calls this backend directly.
#
# Env vars (preferred in prod):
# - TEXFORMATTER_CORS_ALLOW_ORIGINS="https://app.example.com,https://staging.example.com"
# - TEXFORMATTER_CORS_ALLOW_ORIGIN_REGEX="https://.*\\.example\\.com"
# ---------------------------------------------------------------------------


def _cors_allow_origins_from_env() -> list[str] | None:
    raw = (os.getenv("TEXFORMATTER_CORS_ALLOW_ORIGINS") or "").strip()
    if not raw:
        return None
    origins = [o.strip() for o in raw.split(",") if o.strip()]
    return origins or None


def _cors_allow_origin_regex_from_env() -> str | None:
    raw = (os.getenv("TEXFORMATTER_CORS_ALLOW_ORIGIN_REGEX") or "").strip()
    return raw or None


cors_allow_origins = _cors_allow_origins_from_env()
cors_allow_origin_regex = _cors_allow_origin_regex_from_env()

if cors_allow_origins:
    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_allow_origins,
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )
else:
    # Dev default: any localhost port.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[],
        allow_origin_regex=cors_allow_origin_regex
        or r"https?://(localhost|127\.0\.0\.1):\d+",
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


# Sync on purpose: FastAPI runs it in its threadpool and the converter is
# reentrant.
@app.post("/convert", response_model=ConvertResponse)
def convert_text(req: ConvertRequest) -> ConvertResponse:
    limit = _max_input_chars()
    if len(req.text) > limit:
        raise HTTPException(
            status_code=413,
            detail=f"Input is {len(req.text)} characters; the limit is {limit}.",
        )

    result = convert_with_report(req.text)
    logger.debug(
        f"Converted {len(req.text)} chars (dialect={result.dialect.value}, "
        f"stages={list(result.stages)})"
    )
    return ConvertResponse(
        text=result.content,
        changed=result.changed,
        stages=list(result.stages),
        dialect=result.dialect.value,
        inputChars=len(req.text),
        outputChars=len(result.content),
    )


@app.get("/examples", response_model=list[ExampleResponse])
async def examples() -> list[ExampleResponse]:
    out = []
    for ex in get_examples():
        source, converted = render_example(ex)
        out.append(
            ExampleResponse(
                title=ex.title,
                description=ex.description,
                source=source,
                converted=converted,
            )
        )
    return out


def main() -> None:  # pragma: no cover
    import uvicorn

    uvicorn.run(
        app,
        host=os.getenv("HOST", "127.0.0.1"),
        port=int(os.getenv("PORT", "8000")),
        reload=False,
    )


if __name__ == "__main__":  # pragma: no cover
    main()
