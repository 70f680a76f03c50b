"""Release lookup, lifecycle operations and asset uploads."""

from .errors import AssetError, ReleaseError
from .model import Release, ReleaseAsset, ReleaseQuery, ReleaseRequest
from .pipeline import (
    AssetOutcome,
    AssetSkipped,
    AssetUploaded,
    UploadFailure,
    UploadSession,
    UploadStarted,
    upload_assets,
)
from .resolver import (
    create_release,
    delete_release,
    edit_release,
    filter_releases,
    find_release,
    get_release,
    list_releases,
    upload_target,
)
from .upload import upload_asset

__all__ = [
    # errors
    "AssetError",
    "ReleaseError",
    # model
    "Release",
    "ReleaseAsset",
    "ReleaseQuery",
    "ReleaseRequest",
    # pipeline
    "AssetOutcome",
    "AssetSkipped",
    "AssetUploaded",
    "UploadFailure",
    "UploadSession",
    "UploadStarted",
    "upload_assets",
    # resolver
    "create_release",
    "delete_release",
    "edit_release",
    "filter_releases",
    "find_release",
    "get_release",
    "list_releases",
    "upload_target",
    # upload
    "upload_asset",
]
