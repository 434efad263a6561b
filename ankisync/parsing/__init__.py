from ankisync.parsing.exceptions import EmptyMappingError, InvalidMappingError, ParsingError
from ankisync.parsing.extractor import extract_records, validate_mapping
from ankisync.parsing.header import parse_header, strip_header
from ankisync.parsing.models import DecodedHeader, Record

__all__ = [
    "DecodedHeader",
    "EmptyMappingError",
    "InvalidMappingError",
    "ParsingError",
    "Record",
    "extract_records",
    "parse_header",
    "strip_header",
    "validate_mapping",
]
