from typing import Any

from .api import ApiClient, RequestError
from .schemas import User


def _unwrap_user(response: Any, error_message: str) -> User:
    # The backend answers either {"user": {...}} or the bare user object
    if isinstance(response, dict):
        if response.get("user"):
            return User.model_validate(response["user"])
        if response.get("id") and response.get("email"):
            return User.model_validate(response)
    raise RequestError(error_message)


class AuthApi:
    """Cookie-session auth endpoints. Login stores the session cookie on the client."""

    def __init__(self, client: ApiClient):
        self.client = client

    def signup(self, email: str, password: str, name: str) -> Any:
        return self.client.post(
            "/auth/signup", {"email": email, "password": password, "name": name}
        )

    def login(self, email: str, password: str) -> User:
        response = self.client.post("/auth/login", {"email": email, "password": password})
        return _unwrap_user(response, "Invalid login response format")

    def current_user(self) -> User:
        return _unwrap_user(self.client.get("/auth/me"), "Invalid user response format")

    def logout(self) -> None:
        self.client.post("/auth/logout")
