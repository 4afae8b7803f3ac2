import structlog

log = structlog.get_logger(__name__)
utf8_bom = b"\xef\xbb\xbf"

def strip_utf8_bom(data: bytes) -> bytes:
    # removes the utf-8 byte order mark from byte data if present.
    if data.startswith(utf8_bom):
        return data[len(utf8_bom):]
    return data

def split_source_lines(text: str) -> list[str]:
    # splits template source into lines; a missing trailing newline keeps the last line.
    if not text:
        return []
    # only \r\n is a line break besides \n; a lone \r stays part of its line.
    lines = text.replace("\r\n", "\n").split("\n")
    if lines[-1] == "":
        lines.pop()
    log.debug("source_split_into_lines", count=len(lines))
    return lines
