class FocusForestError(Exception):
    """Base class for errors surfaced through the API."""

    status_code = 400

    def __init__(self, detail: str):
        super().__init__(detail)
        self.detail = detail


class NotFoundError(FocusForestError):
    status_code = 404


class ConflictError(FocusForestError):
    status_code = 409


class InvalidCategoryError(FocusForestError):
    status_code = 422
