"""
Centralized exception definitions for the country XML codec.

Each exception inherits from BaseAppError, which itself extends Werkzeug's
HTTPException, so codec failures surface cleanly both to Python callers and
to Flask's error system as JSON-formatted API responses.

Domain Groups:
--------------
1. Encode Errors (409 / 422)
2. Decode Errors (400)
3. I/O Errors (500)
4. System and Request Errors (400 / 500)
"""

from werkzeug.exceptions import HTTPException


class BaseAppError(HTTPException):
    """Root application error, base for all custom exceptions."""
    code = 500
    description = "Application error"

    def __init__(self, message=None, details=None, code=None):
        super().__init__(description=message or self.description)
        self.message = message or self.description
        self.details = details or {}
        if code:
            self.code = code

    def __str__(self):
        return self.message

    def to_dict(self):
        """Serialize error info into a JSON-safe dictionary."""
        return {
            "status": "error",
            "error": self.__class__.__name__,
            "message": self.message,
            "details": self.details
        }


class CodecError(BaseAppError):
    description = "Country document could not be processed"


# ==============================================================================
# 1. ENCODE ERRORS (HTTP 409 / 422)
# ==============================================================================

class EncodeError(CodecError):
    code = 422
    description = "Failed to serialize countries"


class MissingRequiredFieldError(EncodeError):
    description = "Required country field is empty"

    def __init__(self, field, index=None):
        self.field = field
        self.index = index
        where = f" (country #{index})" if index is not None else ""
        super().__init__(
            f"Required field '{field}' is missing or empty{where}",
            {"field": field, "index": index},
        )


class InvalidFieldValueError(EncodeError):
    description = "Country field holds characters XML cannot carry"

    def __init__(self, field, index=None):
        self.field = field
        self.index = index
        where = f" (country #{index})" if index is not None else ""
        super().__init__(
            f"Field '{field}' contains characters not allowed in XML{where}",
            {"field": field, "index": index},
        )


class DestinationExistsError(EncodeError):
    code = 409
    description = "Destination document already exists"

    def __init__(self, path):
        self.path = str(path)
        super().__init__(
            f"Document already exists: {self.path}",
            {"path": self.path},
        )


# ==============================================================================
# 2. DECODE ERRORS (HTTP 400)
# ==============================================================================

class DecodeError(CodecError):
    code = 400
    description = "Failed to parse countries document"


class MalformedDocumentError(DecodeError):
    description = "Document is not well-formed XML"

    def __init__(self, reason, line=None, column=None):
        self.line = line
        self.column = column
        where = f" at line {line}, column {column}" if line is not None else ""
        super().__init__(
            f"Malformed document{where}: {reason}",
            {"line": line, "column": column},
        )


class SchemaMismatchError(DecodeError):
    description = "Document does not match the countries schema"

    def __init__(self, expected, found, context=None):
        self.expected = expected
        self.found = found
        self.context = context
        where = f" in <{context}>" if context else ""
        super().__init__(
            f"Expected {expected}, found {found}{where}",
            {"expected": expected, "found": found, "context": context},
        )


# ==============================================================================
# 3. I/O ERRORS (HTTP 500)
# ==============================================================================

class IOFailureError(CodecError):
    code = 500
    description = "Document could not be read or written"

    def __init__(self, cause, path=None):
        self.cause = cause
        self.path = str(path) if path is not None else None
        super().__init__(
            f"{self.description}: {cause}",
            {"path": self.path, "cause": str(cause)},
        )


class EncodeIOError(EncodeError, IOFailureError):
    code = 500
    description = "Document could not be written"


class DecodeIOError(DecodeError, IOFailureError):
    code = 500
    description = "Document could not be read"


# ==============================================================================
# 4. SYSTEM AND REQUEST ERRORS (HTTP 400 / 500)
# ==============================================================================

class ConfigurationError(BaseAppError):
    code = 500
    description = "Configuration missing or invalid"


class ValidationError(BaseAppError):
    code = 400
    description = "Invalid request payload"
