"""Sequential release asset upload.

An UploadSession uploads files one at a time, in order, and reports progress
to listeners as events:

    UploadStarted(path)
    AssetUploaded(path, asset)   or   AssetSkipped(path, error)

A file whose name already exists on the release is skipped and the session
moves on. Any other failure stops the session: later files are never
attempted and no terminal event is emitted for the failing file.

Creating a session does no work. Uploads begin on ``run()``, so listeners
attached between creation and ``run()`` see every event:

    session = upload_assets(http, release.upload_url, paths)
    session.add_listener(print_event)
    result = session.run()
"""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Literal

from ghr.core.result import Err, Ok, Result
from ghr.github.http import GitHubHttp
from ghr.release.errors import AssetError
from ghr.release.model import AssetStatus, ReleaseAsset
from ghr.release.upload import AssetUploadRequest, upload_asset

__all__ = [
    "AssetOutcome",
    "AssetSkipped",
    "AssetUploaded",
    "SessionState",
    "UploadEvent",
    "UploadFailure",
    "UploadListener",
    "UploadSession",
    "UploadStarted",
    "upload_assets",
]


@dataclass(frozen=True, slots=True)
class UploadStarted:
    path: str


@dataclass(frozen=True, slots=True)
class AssetUploaded:
    path: str
    asset: ReleaseAsset


@dataclass(frozen=True, slots=True)
class AssetSkipped:
    path: str
    error: AssetError


type UploadEvent = UploadStarted | AssetUploaded | AssetSkipped
type UploadListener = Callable[[UploadEvent], None]

SessionState = Literal["pending", "running", "completed", "failed", "cancelled"]


@dataclass(frozen=True, slots=True)
class AssetOutcome:
    path: str
    status: AssetStatus
    asset: ReleaseAsset | None = None
    error: AssetError | None = None


@dataclass(frozen=True, slots=True)
class UploadFailure:
    """Why a session stopped before the last file.

    Attributes:
        path: The file that failed, or the first file not attempted when
            cancelled.
        index: Position of ``path`` in the input.
        reason: ``error`` for a fatal upload error, ``cancelled`` for cancel().
        error: The upload error, passed through unchanged.
        completed: Outcomes of the files handled before the stop.
    """

    path: str
    index: int
    reason: Literal["error", "cancelled"]
    error: AssetError | None
    completed: tuple[AssetOutcome, ...]

    @property
    def message(self) -> str:
        if self.error is None:
            return f"upload cancelled before {self.path}"
        return str(self.error)


def _no_listeners() -> list[UploadListener]:
    return []


def _no_events() -> list[UploadEvent]:
    return []


def _no_outcomes() -> list[AssetOutcome]:
    return []


@dataclass
class UploadSession:
    """One pass over a list of files for a single release."""

    http: GitHubHttp
    requests: tuple[AssetUploadRequest, ...]
    skip_duplicates: bool = True
    state: SessionState = "pending"
    events: list[UploadEvent] = field(default_factory=_no_events)
    outcomes: list[AssetOutcome] = field(default_factory=_no_outcomes)
    _listeners: list[UploadListener] = field(default_factory=_no_listeners, repr=False)
    _cancel_requested: bool = field(default=False, repr=False)

    def add_listener(self, listener: UploadListener) -> UploadListener:
        self._listeners.append(listener)
        return listener

    def remove_listener(self, listener: UploadListener) -> None:
        self._listeners.remove(listener)

    def cancel(self) -> None:
        """Stop before the next file. An upload in flight finishes first."""
        self._cancel_requested = True

    def _emit(self, event: UploadEvent) -> None:
        self.events.append(event)
        for listener in list(self._listeners):
            listener(event)

    def _fail(
        self,
        index: int,
        *,
        reason: Literal["error", "cancelled"],
        error: AssetError | None,
    ) -> Err[UploadFailure]:
        self.state = "failed" if reason == "error" else "cancelled"
        return Err(
            UploadFailure(
                path=self.requests[index].path,
                index=index,
                reason=reason,
                error=error,
                completed=tuple(self.outcomes),
            )
        )

    def run(self) -> Result[list[AssetOutcome], UploadFailure]:
        """Upload every file in order, stopping at the first fatal error.

        Returns:
            Ok with one outcome per file, or Err describing where it stopped.

        Raises:
            RuntimeError: if the session has already run.
        """
        if self.state != "pending":
            raise RuntimeError(f"upload session already {self.state}")
        self.state = "running"

        for index, request in enumerate(self.requests):
            if self._cancel_requested:
                return self._fail(index, reason="cancelled", error=None)

            self._emit(UploadStarted(request.path))
            result = upload_asset(self.http, request.path, request.upload_url, label=request.label)

            match result:
                case Ok(asset):
                    self.outcomes.append(AssetOutcome(request.path, "uploaded", asset=asset))
                    self._emit(AssetUploaded(request.path, asset))
                case Err(error) if self.skip_duplicates and error.is_duplicate_asset:
                    self.outcomes.append(AssetOutcome(request.path, "skipped", error=error))
                    self._emit(AssetSkipped(request.path, error))
                case Err(error):
                    return self._fail(index, reason="error", error=error)

        self.state = "completed"
        return Ok(list(self.outcomes))


def upload_assets(
    http: GitHubHttp,
    upload_url: str,
    paths: Sequence[str | Path],
    *,
    skip_duplicates: bool = True,
    label: str | None = None,
) -> UploadSession:
    """Prepare a session that uploads ``paths`` to ``upload_url``.

    The session is returned unstarted; call ``run()`` after attaching
    listeners.
    """
    requests = tuple(
        AssetUploadRequest(path=str(p), upload_url=upload_url, label=label) for p in paths
    )
    return UploadSession(http=http, requests=requests, skip_duplicates=skip_duplicates)
