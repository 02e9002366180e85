"""Pod parser - decodes pod payloads from list responses into PodInfo."""

from __future__ import annotations

import json
from contextlib import suppress
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Union

from pydantic import ValidationError

from podson.constants.values import POD_KIND
from podson.errors import DecodeError, UnexpectedTypeError
from podson.models.core.pod_info import OwnerReference, PodInfo


@dataclass(frozen=True)
class TypedPayload:
    """A pod that arrived as an already-decoded object."""

    obj: dict[str, Any]


@dataclass(frozen=True)
class RawPayload:
    """A pod that arrived as an encoded JSON document."""

    data: bytes


PodPayload = Union[TypedPayload, RawPayload]


class PodParser:
    """Parses list response items into PodInfo objects."""

    @staticmethod
    def _parse_iso_timestamp(timestamp: Any) -> datetime | None:
        """Parse kubernetes timestamp strings into aware datetimes."""
        if not isinstance(timestamp, str) or not timestamp:
            return None
        with suppress(ValueError, TypeError):
            return datetime.fromisoformat(timestamp.replace("Z", "+00:00"))
        return None

    @staticmethod
    def classify(item: Any, index: int) -> PodPayload:
        """Tell typed objects from encoded payloads.

        Table rows (``{"cells": [...], "object": ...}``) are unwrapped to their
        embedded object first.
        """
        if isinstance(item, dict) and "cells" in item and "object" in item:
            item = item["object"]
        if isinstance(item, dict):
            return TypedPayload(item)
        if isinstance(item, str):
            return RawPayload(item.encode())
        if isinstance(item, (bytes, bytearray)):
            return RawPayload(bytes(item))
        raise UnexpectedTypeError(
            f"unexpected object type in row {index}: {type(item).__name__} (expected Pod)",
            index=index,
        )

    @staticmethod
    def decode(payload: PodPayload, index: int) -> dict[str, Any]:
        """Resolve a payload into a pod object.

        Raises:
            DecodeError: The encoded payload is not valid JSON or not an object.
            UnexpectedTypeError: The object is not a Pod.
        """
        if isinstance(payload, RawPayload):
            try:
                obj = json.loads(payload.data)
            except (json.JSONDecodeError, UnicodeDecodeError) as exc:
                raise DecodeError(f"failed to decode pod in row {index}: {exc}", index=index) from exc
            if not isinstance(obj, dict):
                raise DecodeError(
                    f"failed to decode pod in row {index}: expected a JSON object, "
                    f"got {type(obj).__name__}",
                    index=index,
                )
        else:
            obj = payload.obj

        # Items of a PodList omit kind; anything that declares one must be a Pod.
        kind = obj.get("kind")
        if kind is not None and kind != POD_KIND:
            raise UnexpectedTypeError(
                f"unexpected object type in row {index}: {kind} (expected {POD_KIND})",
                index=index,
            )
        return obj

    def parse_pod(self, obj: dict[str, Any], index: int = 0) -> PodInfo:
        """Parse a single pod object into PodInfo.

        Args:
            obj: Pod object from the API
            index: Position of the pod in its page, used in error messages

        Returns:
            PodInfo object.
        """
        try:
            return self._build_pod(obj, index)
        except (ValidationError, AttributeError, TypeError) as exc:
            raise DecodeError(f"failed to decode pod in row {index}: {exc}", index=index) from exc

    def _build_pod(self, obj: dict[str, Any], index: int) -> PodInfo:
        metadata = obj.get("metadata") or {}
        spec = obj.get("spec") or {}
        status = obj.get("status") or {}

        name = metadata.get("name")
        if not isinstance(name, str) or not name:
            raise DecodeError(f"failed to decode pod in row {index}: missing metadata.name", index=index)

        pod_ip = status.get("podIP") or ""
        pod_ips = status.get("podIPs") or []
        if not isinstance(pod_ips, list):
            raise DecodeError(
                f"failed to decode pod in row {index}: status.podIPs is not a list", index=index
            )
        if pod_ips and isinstance(pod_ips[0], dict):
            pod_ip = pod_ips[0].get("ip") or pod_ip

        return PodInfo(
            namespace=metadata.get("namespace") or "",
            name=name,
            node_name=spec.get("nodeName") or "",
            owner_references=[
                OwnerReference(
                    kind=owner.get("kind") or "",
                    name=owner.get("name") or "",
                    uid=owner.get("uid") or "",
                )
                for owner in metadata.get("ownerReferences") or []
            ],
            resource_version=metadata.get("resourceVersion") or "",
            phase=status.get("phase") or "Unknown",
            pod_ip=pod_ip,
            creation_timestamp=self._parse_iso_timestamp(metadata.get("creationTimestamp")),
            raw=obj,
        )

    def parse_items(self, items: list[Any]) -> list[PodInfo]:
        """Decode and parse every item of one page.

        Any failing item aborts the whole page; no partial result is returned.
        """
        return [
            self.parse_pod(self.decode(self.classify(item, index), index), index)
            for index, item in enumerate(items)
        ]
