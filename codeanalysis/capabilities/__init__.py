"""Analysis capabilities runnable through :func:`codeanalysis.action.action`."""

from .ast import AstCallback, AstCfg, AstResponse
from .base import Capability, CapabilityError, ParsedSource
from .comment import CommentCallback, CommentCfg, CommentResponse, comment_dialect
from .function import FunctionCallback, FunctionCfg, FunctionResponse
from .metrics import MetricsCallback, MetricsCfg, MetricsResponse

__all__ = [
    "AstCallback",
    "AstCfg",
    "AstResponse",
    "Capability",
    "CapabilityError",
    "CommentCallback",
    "CommentCfg",
    "CommentResponse",
    "FunctionCallback",
    "FunctionCfg",
    "FunctionResponse",
    "MetricsCallback",
    "MetricsCfg",
    "MetricsResponse",
    "ParsedSource",
    "comment_dialect",
]
