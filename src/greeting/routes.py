"""Greeting routes, mounted under the API router at /hello."""

from dataclasses import asdict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.datastructures import QueryParams

from src.greeting.schema import Failure, validate_greeting_query

router = APIRouter(prefix="/hello", tags=["greeting"])


@router.get("/")
@router.get("", include_in_schema=False)
async def greet(request: Request):
    """Greet the caller by the `name` query parameter.

    400 with the list of validation issues if `name` is missing or not a
    single string; otherwise 200 with a plain-text greeting.
    """
    result = validate_greeting_query(query_to_mapping(request.query_params))

    if isinstance(result, Failure):
        return JSONResponse(
            status_code=400,
            content=[asdict(issue) for issue in result.issues],
        )

    return PlainTextResponse(f"Hello {result.value.name}", status_code=200)


def query_to_mapping(query_params: QueryParams) -> dict[str, str | list[str]]:
    """Flatten a query multi-dict: repeated keys become lists of values."""
    mapping: dict[str, str | list[str]] = {}
    for key in query_params.keys():
        values = query_params.getlist(key)
        mapping[key] = values[0] if len(values) == 1 else values
    return mapping
