from .jsonl_parser import JsonlRecordingParser, parse_recording

__all__ = [
    "JsonlRecordingParser",
    "parse_recording",
]
