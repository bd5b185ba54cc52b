"""Runner implementations."""

from cmdkit.runners.fake import FakeCommand, FakeRunner, get_execution_folder_path
from cmdkit.runners.real import RealRunner, build_environment, capture_stream
from cmdkit.types import Runner

__all__ = [
    "FakeCommand",
    "FakeRunner",
    "RealRunner",
    "Runner",
    "build_environment",
    "capture_stream",
    "get_execution_folder_path",
]
