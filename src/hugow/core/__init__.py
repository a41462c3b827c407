"""Core utilities for hugow."""

from hugow.core.config import SiteConfig, load_site_config
from hugow.core.errors import (
    AlreadyExists,
    CollaboratorFailure,
    HugowError,
    InvalidArgument,
    NotConfigured,
    NotFound,
    PathInvalid,
    WriteFailure,
)
from hugow.core.slug import slugify

__all__ = [
    # Config
    "SiteConfig",
    "load_site_config",
    # Errors
    "HugowError",
    "InvalidArgument",
    "NotConfigured",
    "PathInvalid",
    "AlreadyExists",
    "NotFound",
    "CollaboratorFailure",
    "WriteFailure",
    # Slugs
    "slugify",
]
