"""FlowTree daemon - HTTP service exposing the tree transform."""

from flowtree.daemon.app import create_app
from flowtree.daemon.lifecycle import build_server, run_server

__all__ = [
    "build_server",
    "create_app",
    "run_server",
]
