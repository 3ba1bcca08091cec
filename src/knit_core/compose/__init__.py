"""Composition utilities: pipe(), compose(), and the Pipeline value."""

from knit_core.compose.pipe import (
    AsyncPipeline,
    Pipeline,
    compose,
    identity,
    pipe,
    pipe_async,
    pipe_value,
)

__all__ = [
    'AsyncPipeline',
    'Pipeline',
    'compose',
    'identity',
    'pipe',
    'pipe_async',
    'pipe_value',
]
