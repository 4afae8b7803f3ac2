import sys
from pathlib import Path
import structlog
from swiftemplate.exceptions import OutputError

log = structlog.get_logger(__name__)

def write_to_stdout(text_content: str):
    # writes generated source to standard output as utf-8 bytes.
    data = text_content.encode("utf-8")
    try:
        sys.stdout.buffer.write(data)
        sys.stdout.buffer.flush()
    except AttributeError:
        # text-only streams (e.g. test runners) have no .buffer
        sys.stdout.write(text_content)
        sys.stdout.flush()

def write_to_file(output_file_path: Path, text_content: str):
    # writes generated source byte-for-byte to the specified file path.
    log.info("writing_output_to_file", path=str(output_file_path))
    try:
        output_file_path.write_bytes(text_content.encode("utf-8"))
    except OSError as e:
        raise OutputError(f"failed to write to file '{output_file_path}': {e}") from e
