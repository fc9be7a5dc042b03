"""
Domain errors raised by the auth service layer.

``main.domain_exception_handler`` renders every ``DomainError`` as a JSON
response carrying ``status_code`` and the error message.
"""
from typing import Optional


class DomainError(Exception):
    status_code = 400
    message = "Request could not be processed"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.message)

    @property
    def detail(self) -> str:
        return str(self)


class DuplicateEmailError(DomainError):
    message = "Email is already registered"


class UserNotFoundError(DomainError):
    message = "User does not exist"


class InvalidCredentialsError(DomainError):
    message = "Incorrect password"
