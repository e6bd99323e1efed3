class RobusphereError(Exception):
    """Base error, rendered as an HTTP response by the app's exception handler."""

    status_code = 500
    message: str | None = "Internal server error"

    def __init__(self, message: str | None = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class BadRequest(RobusphereError):
    status_code = 400
    message = "Bad request"


class Conflict(BadRequest):
    message = "Already exists"


class UserAlreadyExists(Conflict):
    message = "User already exists"


class Unauthorized(RobusphereError):
    status_code = 401
    message = "Invalid credentials"


class Forbidden(RobusphereError):
    """Rendered as a bare 403 with no body."""

    status_code = 403
    message = None


class TokenError(Forbidden):
    pass


class TokenInvalid(TokenError):
    pass


class TokenExpired(TokenError):
    pass


class NotFound(RobusphereError):
    status_code = 404
    message = "Not found"


class UserNotFound(NotFound):
    message = "User not found"
