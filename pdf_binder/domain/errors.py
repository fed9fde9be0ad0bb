class PdfBinderError(Exception):
    pass


class InvalidInputError(PdfBinderError):
    pass


class DuplicateFileError(InvalidInputError):
    pass


class MalformedSourceError(PdfBinderError):
    pass


class UnsupportedTextError(InvalidInputError):
    pass
