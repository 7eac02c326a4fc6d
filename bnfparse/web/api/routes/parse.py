"""
Parse API endpoint.

Accepts raw grammar text and returns the parsed grammar as JSON.
"""

import logging

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import JSONResponse

from bnfparse.grammar import ParseFailure, parse_grammar
from bnfparse.web.api.models import Grammar, ParseErrorResponse

router = APIRouter()
logger = logging.getLogger("bnfparse.web.api.parse")


@router.post(
    "/parse",
    response_model=Grammar,
    responses={400: {"model": ParseErrorResponse}},
)
async def parse(request: Request):
    """
    Parse a grammar.

    The request body is the grammar text itself, not JSON. Returns the rule
    definitions on success, or 400 with the failure position and what was
    expected there.
    """
    body = await request.body()
    try:
        text = body.decode("utf-8")
    except UnicodeDecodeError as e:
        logger.info(f"Rejected non-UTF-8 request body: {e}")
        raise HTTPException(status_code=400, detail="Request body must be UTF-8 text")

    try:
        result = parse_grammar(text)

        if isinstance(result, ParseFailure):
            logger.info(f"Grammar rejected: {result.message}")
            return JSONResponse(
                status_code=400,
                content=ParseErrorResponse(error=result.message, failure=result.to_dict()).model_dump(),
            )

        logger.info(f"Parsed grammar with {len(result)} rules")
        return result.to_dict()
    except Exception as e:
        logger.error(f"Error parsing grammar: {e}", exc_info=True)
        raise HTTPException(status_code=500, detail=str(e))
