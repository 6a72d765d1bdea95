from novel_nest.domains.identity.schemas import (
    Role, UserSummary, UserResponse, UserCreate, UserLogin,
    LoginResponse, TokenData
)

__all__ = [
    "Role",
    "UserSummary", "UserResponse", "UserCreate", "UserLogin",
    "LoginResponse", "TokenData"
]
