"""Source rewrite passes for bundled builds: NLS placeholders and private-field mangling."""

from bundlepass.mangle import ConvertPrivateFieldsResult, convert_private_fields
from bundlepass.nls import (
    NlsCollector,
    NlsEntry,
    analyze_localize_calls,
    finalize_nls,
    post_process_nls,
    transform_to_placeholders,
)
from bundlepass.text import TextEdit, apply_edits

__all__ = [
    "ConvertPrivateFieldsResult",
    "NlsCollector",
    "NlsEntry",
    "TextEdit",
    "analyze_localize_calls",
    "apply_edits",
    "convert_private_fields",
    "finalize_nls",
    "post_process_nls",
    "transform_to_placeholders",
]
