from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from ghr.github.http import ApiError
    from ghr.release.model import Release


ReleaseErrorKind = Literal[
    "not_found",
    "ambiguous",
    "api",
    "invalid_response",
]


def _no_candidates() -> tuple[Release, ...]:
    return ()


@dataclass(frozen=True, slots=True)
class ReleaseError:
    kind: ReleaseErrorKind
    message: str
    hint: str | None = None
    # Every match when kind == "ambiguous".
    candidates: tuple[Release, ...] = field(default_factory=_no_candidates)
    api: ApiError | None = None


AssetErrorKind = Literal["filesystem", "api"]


@dataclass(frozen=True, slots=True)
class AssetError:
    """Failure of a single asset upload.

    For ``api`` errors, ``message`` is the API error message unchanged so
    that the duplicate-asset classifier can read it.
    """

    kind: AssetErrorKind
    path: str
    message: str
    api: ApiError | None = None

    @property
    def is_duplicate_asset(self) -> bool:
        return self.api is not None and self.api.is_duplicate_asset

    def __str__(self) -> str:
        if self.api is not None:
            return f"{self.path}: {self.api}"
        return f"{self.path}: {self.message}"
