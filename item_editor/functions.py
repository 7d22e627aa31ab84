"""Wire codec for group aggregation functions.

Functions travel as a single string: the kind on its own (``AVG``) or the
kind followed by its parameters, all joined by ``_`` (``THRESHOLD_10_20``).
"""

import structlog

from item_editor.models import FUNCTION_ARITY, NO_GROUP_TYPE, AggregationFunction

logger = structlog.get_logger()

SEPARATOR = "_"
MAX_PARAMS = 2


def arity(kind: str) -> int:
    """Return the number of parameters a function kind takes."""
    return FUNCTION_ARITY.get(kind, 0)


def is_parametric(kind: str) -> bool:
    """Return True if the function kind carries parameters."""
    return arity(kind) > 0


def decode(wire: str | None) -> AggregationFunction | None:
    """Decode a wire string into a function descriptor.

    Returns None when no function is configured. Segments beyond the kind
    and two parameters are ignored.
    """
    if not wire or wire == NO_GROUP_TYPE:
        return None

    kind, *params = wire.split(SEPARATOR)
    if not kind:
        logger.debug("Function has empty kind", wire=wire)
        return None
    if len(params) > MAX_PARAMS:
        logger.debug("Dropping trailing function segments", wire=wire, dropped=params[MAX_PARAMS:])
        params = params[:MAX_PARAMS]

    function = AggregationFunction(kind=kind, params=tuple(params))
    logger.debug("Decoded function", wire=wire, kind=function.kind, params=function.params)
    return function


def encode(function: AggregationFunction | None) -> str | None:
    """Encode a function descriptor into its wire string.

    Returns None for an absent function or one with an empty kind.
    """
    if function is None or function.is_empty:
        return None
    if not function.params:
        return function.kind
    return SEPARATOR.join((function.kind, *function.params))
