"""Auth form schemas (login and registration pages).

Fields default to "" so that missing input reaches local validation and is
shown inline instead of failing request parsing.
"""

from pydantic import BaseModel


class LoginForm(BaseModel):
    """Form body for POST / (sign in)."""

    email: str = ""
    password: str = ""


class RegisterForm(BaseModel):
    """Form body for POST /register."""

    email: str = ""
    password: str = ""
    confirm_password: str = ""
