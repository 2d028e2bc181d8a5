"""Executors shipped with dbbench."""

from dbbench.executors.factory import ExecutorFactory
from dbbench.executors.script import ScriptExecutor

__all__ = ["ExecutorFactory", "ScriptExecutor"]
