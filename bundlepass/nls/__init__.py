"""Localization (NLS) extraction, indexing and output post-processing."""

from bundlepass.nls.analysis import NlsImports, analyze_localize_calls, collect_nls_imports
from bundlepass.nls.collector import NlsCollector, create_nls_collector
from bundlepass.nls.finalize import (
    DEFAULT_MESSAGES_GLOBAL,
    NLS_KEYS_JSON,
    NLS_MESSAGES_JS,
    NLS_MESSAGES_JSON,
    NLS_METADATA_JSON,
    build_nls_index,
    finalize_nls,
    render_nls_assets,
)
from bundlepass.nls.literal import (
    LocalizeLiteralError,
    parse_localize_key,
    parse_localize_key_or_value,
    parse_localize_message,
)
from bundlepass.nls.model import (
    LocalizeCall,
    LocalizeFunction,
    LocalizeKey,
    NlsEntry,
    NlsFinalizeResult,
    NlsIndex,
    NlsTransformResult,
    StructuredKey,
    key_string,
    key_to_json,
    make_placeholder,
)
from bundlepass.nls.postprocess import (
    PLACEHOLDER_RE,
    NlsPostProcessResult,
    post_process_nls,
    post_process_nls_with_stats,
    replace_in_output,
)
from bundlepass.nls.transform import compute_module_id, transform_to_placeholders

__all__ = [
    "DEFAULT_MESSAGES_GLOBAL",
    "NLS_KEYS_JSON",
    "NLS_MESSAGES_JS",
    "NLS_MESSAGES_JSON",
    "NLS_METADATA_JSON",
    "PLACEHOLDER_RE",
    "LocalizeCall",
    "LocalizeFunction",
    "LocalizeKey",
    "LocalizeLiteralError",
    "NlsCollector",
    "NlsEntry",
    "NlsFinalizeResult",
    "NlsImports",
    "NlsIndex",
    "NlsPostProcessResult",
    "NlsTransformResult",
    "StructuredKey",
    "analyze_localize_calls",
    "build_nls_index",
    "collect_nls_imports",
    "compute_module_id",
    "create_nls_collector",
    "finalize_nls",
    "key_string",
    "key_to_json",
    "make_placeholder",
    "parse_localize_key",
    "parse_localize_key_or_value",
    "parse_localize_message",
    "post_process_nls",
    "post_process_nls_with_stats",
    "render_nls_assets",
    "replace_in_output",
    "transform_to_placeholders",
]
