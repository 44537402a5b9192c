from .aliases import FIELD_ALIASES, normalize_header, resolve_field
from .normalizer import cell_to_text, expand_scientific_code, parse_ambiguous_number
from .reader import SAMPLE_LINES, UploadedFile, extract_raw_lines, parse_order_file, to_order_line

__all__ = [
    "FIELD_ALIASES",
    "normalize_header",
    "resolve_field",
    "cell_to_text",
    "expand_scientific_code",
    "parse_ambiguous_number",
    "SAMPLE_LINES",
    "UploadedFile",
    "extract_raw_lines",
    "parse_order_file",
    "to_order_line",
]
