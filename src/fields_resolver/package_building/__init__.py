"""Package fields build exports."""

from .build_contracts import BuildOutcome, BuildRequest
from .fields_build_use_case import FIELDS_FILE_PATTERNS, FieldsBuildError, build_package_fields

__all__ = [
    "BuildOutcome",
    "BuildRequest",
    "FIELDS_FILE_PATTERNS",
    "FieldsBuildError",
    "build_package_fields",
]
