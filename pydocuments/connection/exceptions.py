class DocumentsError(Exception):
    pass


class SessionNotInitializedError(DocumentsError):
    pass


class NoResultError(DocumentsError):
    pass


class UnsupportedDialectError(DocumentsError, ValueError):
    pass
