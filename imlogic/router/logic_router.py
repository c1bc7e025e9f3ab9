from fastapi import APIRouter, HTTPException

from imlogic.errors import LogicSyntaxError, UnknownConstraintCodeError
from imlogic.logging_config import get_logger, log_performance
from imlogic.logic.evaluate import evaluate
from imlogic.logic.nodes import LogicNode
from imlogic.logic.parser import parse_logic
from imlogic.logic.render import render, render_verbose
from imlogic.router.models import (
    ErrorDetail,
    EvaluateRequest,
    EvaluateResponse,
    LogicSource,
    ParseRequest,
    ParseResponse,
    RenderRequest,
    RenderResponse,
)

logger = get_logger(__name__)

_ERROR_RESPONSES = {
    400: {"model": ErrorDetail, "description": "Malformed logic expression"},
    422: {"model": ErrorDetail, "description": "Unknown constraint code"},
}


def _http_error(error: Exception) -> HTTPException:
    if isinstance(error, LogicSyntaxError):
        detail = ErrorDetail(
            error="syntax", message=str(error), position=error.position
        )
        return HTTPException(status_code=400, detail=detail.model_dump())
    detail = ErrorDetail(error="unknown_code", message=str(error), codes=list(error.codes))
    return HTTPException(status_code=422, detail=detail.model_dump())


def _source_node(source: LogicSource) -> LogicNode:
    if source.logic is not None:
        return source.logic
    return parse_logic(source.expression)


class LogicRouter(APIRouter):
    """Router exposing parse, render and evaluate for constraint logic."""

    def __init__(self, prefix: str = "/logic", **kwargs):
        super().__init__(prefix=prefix, **kwargs)
        logger.info("Initializing LogicRouter at prefix: %s", prefix)

        self.add_api_route(
            "/parse",
            self.parse_expression,
            methods=["POST"],
            response_model=ParseResponse,
            responses=_ERROR_RESPONSES,
            summary="Parse a logic expression",
            description="Parses constraint logic text into a logic tree and its canonical form.",
        )
        self.add_api_route(
            "/render",
            self.render_logic,
            methods=["POST"],
            response_model=RenderResponse,
            responses=_ERROR_RESPONSES,
            summary="Render constraint logic",
            description="Renders logic in canonical code form and, given descriptions, verbosely.",
        )
        self.add_api_route(
            "/evaluate",
            self.evaluate_logic,
            methods=["POST"],
            response_model=EvaluateResponse,
            responses=_ERROR_RESPONSES,
            summary="Evaluate constraint logic",
            description="Evaluates logic against whether each constraint holds.",
        )

    @log_performance(logger, "parse logic")
    def parse_expression(self, request: ParseRequest) -> ParseResponse:
        try:
            node = parse_logic(request.expression, request.codes)
        except (LogicSyntaxError, UnknownConstraintCodeError) as e:
            raise _http_error(e) from e
        return ParseResponse(logic=node, rendered=render(node), codes=node.codes())

    @log_performance(logger, "render logic")
    def render_logic(self, request: RenderRequest) -> RenderResponse:
        try:
            node = _source_node(request)
            verbose = (
                render_verbose(node, request.descriptions)
                if request.descriptions is not None
                else None
            )
        except (LogicSyntaxError, UnknownConstraintCodeError) as e:
            raise _http_error(e) from e
        return RenderResponse(rendered=render(node), verbose=verbose)

    @log_performance(logger, "evaluate logic")
    def evaluate_logic(self, request: EvaluateRequest) -> EvaluateResponse:
        try:
            node = _source_node(request)
            result = evaluate(node, request.results)
        except (LogicSyntaxError, UnknownConstraintCodeError) as e:
            raise _http_error(e) from e
        return EvaluateResponse(result=result, rendered=render(node))
