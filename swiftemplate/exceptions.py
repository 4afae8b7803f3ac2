class SwiftemplateError(Exception):
    # base exception for all application-specific errors.
    pass

class ConfigError(SwiftemplateError):
    # errors related to configuration.
    pass

class InputError(SwiftemplateError):
    # errors while reading template source files.
    pass

class OutputError(SwiftemplateError):
    # errors during output operations.
    pass


class TemplateParseError(SwiftemplateError):
    """
    A syntax fault in a template source file.

    Carries the file name, the 1-based line number and the offending text
    (either a raw fragment of the line or a directive rendered back to text).
    """
    description = "Template parse error"

    def __init__(self, filename: str, line_number: int, text: str):
        self.filename = filename
        self.line_number = line_number
        self.text = text
        super().__init__(f"{filename}:{line_number}: {self.description}: {text}")

    def __eq__(self, other):
        return (
            type(self) is type(other)
            and (self.filename, self.line_number, self.text)
            == (other.filename, other.line_number, other.text)
        )

    def __hash__(self):
        return hash((type(self), self.filename, self.line_number, self.text))

class InvalidDirective(TemplateParseError):
    description = "Invalid directive"

class UnexpectedAtTopLevel(TemplateParseError):
    description = "Unexpected directive at top level"

class UnexpectedInTemplate(TemplateParseError):
    description = "Unexpected directive in template"

class UnclosedExpression(TemplateParseError):
    description = "Unclosed expression"

class UnclosedCodeBlock(TemplateParseError):
    description = "Unclosed code block"
