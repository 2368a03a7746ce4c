from recordgen.codegen import generate, generate_file
from recordgen.recording import parse_recording

__all__ = [
    "generate",
    "generate_file",
    "parse_recording",
]
