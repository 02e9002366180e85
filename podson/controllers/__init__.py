"""Controllers module for podson.

This module provides the controllers that read node and pod data from a
Kubernetes cluster.
"""

from __future__ import annotations

from podson.controllers.base import BaseController
from podson.controllers.pods.controller import PodsOnController

__all__ = [
    "BaseController",
    "PodsOnController",
]
