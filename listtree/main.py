import os
from typing import Dict, List, Optional
from uuid import uuid4

from fastapi import FastAPI, Header, HTTPException, Request, Response, status
from pydantic import BaseModel, Field

from .observability import (
    CONTENT_TYPE_LATEST,
    correlation_id_ctx,
    generate_metrics,
    logger,
)
from .render import DEFAULT_INDENT, render_text
from .source import build_list
from .tree import ListTree


def _flag(name: str, default: str) -> bool:
    value = os.getenv(name, default)
    if value not in {"0", "1"}:
        raise ValueError(f"{name} must be '0' or '1', got {value!r}")
    return value == "1"


EXPECTED_API_KEY = os.getenv("API_KEY")
MAX_TREES = int(os.getenv("LISTTREE_MAX_TREES", "100"))
ENABLE_METRICS = _flag("ENABLE_METRICS", "1")

# Trees live in process memory only.
TREES: Dict[str, ListTree] = {}

app = FastAPI(title="List Trees")


def check_api_key(x_api_key: Optional[str]):
    if EXPECTED_API_KEY and x_api_key != EXPECTED_API_KEY:
        raise HTTPException(status_code=401, detail="Invalid API key")


def get_tree(tree_id: str) -> ListTree:
    tree = TREES.get(tree_id)
    if tree is None:
        raise HTTPException(status_code=404, detail="Tree not found")
    return tree


@app.middleware("http")
async def correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-Id") or str(uuid4())
    token = correlation_id_ctx.set(correlation_id)
    try:
        response = await call_next(request)
    finally:
        correlation_id_ctx.reset(token)
    response.headers["X-Correlation-Id"] = correlation_id
    return response


# --- Models ---
class ListIn(BaseModel):
    values: List[int] = Field(..., min_length=1)


class ListOut(BaseModel):
    values: List[int]
    count: int
    total: int
    depth: int
    size: int


class TreeOut(BaseModel):
    tree_id: str
    size: int


class EntryOut(BaseModel):
    depth: int
    values: Optional[List[int]] = None


class TraversalOut(BaseModel):
    tree_id: str
    size: int
    entries: List[EntryOut]


# --- Endpoints ---
@app.get("/api/status")
async def read_status():
    return {"status": "alive", "trees": len(TREES)}


@app.post("/api/trees", response_model=TreeOut, status_code=status.HTTP_201_CREATED)
async def create_tree(x_api_key: Optional[str] = Header(None)):
    check_api_key(x_api_key)
    if len(TREES) >= MAX_TREES:
        raise HTTPException(status_code=429, detail="Tree limit reached")
    tree_id = f"t_{len(TREES)+1:05d}"
    TREES[tree_id] = ListTree()
    logger.info("tree created", extra={"tree_id": tree_id})
    return TreeOut(tree_id=tree_id, size=0)


@app.post(
    "/api/trees/{tree_id}/lists",
    response_model=ListOut,
    status_code=status.HTTP_201_CREATED,
)
async def insert_list(tree_id: str, body: ListIn, x_api_key: Optional[str] = Header(None)):
    check_api_key(x_api_key)
    tree = get_tree(tree_id)
    lst = build_list(body.values)
    depth = tree.insert(lst)
    logger.info(
        "list inserted",
        extra={"tree_id": tree_id, "count": lst.count, "total": lst.total, "depth": depth},
    )
    return ListOut(
        values=list(lst),
        count=lst.count,
        total=lst.total,
        depth=depth,
        size=tree.size,
    )


@app.get("/api/trees/{tree_id}", response_model=TraversalOut)
async def read_tree(tree_id: str, x_api_key: Optional[str] = Header(None)):
    check_api_key(x_api_key)
    tree = get_tree(tree_id)
    entries = [
        EntryOut(depth=depth, values=list(values) if values is not None else None)
        for depth, values in tree.traverse()
    ]
    return TraversalOut(tree_id=tree_id, size=tree.size, entries=entries)


@app.get("/api/trees/{tree_id}/render")
async def render_tree(
    tree_id: str,
    indent: int = DEFAULT_INDENT,
    x_api_key: Optional[str] = Header(None),
):
    check_api_key(x_api_key)
    tree = get_tree(tree_id)
    if indent < 0:
        raise HTTPException(status_code=400, detail="indent must not be negative")
    return Response(content=render_text(tree.traverse(), indent), media_type="text/plain")


if ENABLE_METRICS:

    @app.get("/metrics")
    async def metrics():
        return Response(content=generate_metrics(), media_type=CONTENT_TYPE_LATEST)
