"""Base controller classes."""

from podson.controllers.base.base_controller import BaseController, GetRawFunc

__all__ = ["BaseController", "GetRawFunc"]
