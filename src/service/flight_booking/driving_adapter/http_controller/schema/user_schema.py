"""
User API Schemas - Pydantic models for request/response
"""

from pydantic import BaseModel, EmailStr, Field, SecretStr

from src.service.flight_booking.domain.enum.user_role import UserRole


class CreateUserRequest(BaseModel):
    """Create user request schema

    `role: admin` is only honoured when the caller is a signed-in administrator.
    """

    email: EmailStr
    password: SecretStr = Field(
        ...,
        min_length=6,
        max_length=72,
        description='Password must be 6-72 characters (bcrypt limit)',
    )
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.CUSTOMER

    class Config:
        json_schema_extra = {
            'example': {
                'email': 'user@example.com',
                'password': 'P@ssw0rd',
                'name': 'John Doe',
                'role': 'customer',
            }
        }


class LoginRequest(BaseModel):
    """User login request schema"""

    email: EmailStr
    password: SecretStr = Field(
        ..., min_length=1, max_length=72, description='User password (max 72 chars)'
    )

    class Config:
        json_schema_extra = {'example': {'email': 'c@t.com', 'password': 'P@ssw0rd'}}


class UserResponse(BaseModel):
    """User response schema"""

    id: int
    email: str
    name: str
    role: UserRole
    is_active: bool

    class Config:
        from_attributes = True
        json_schema_extra = {
            'example': {
                'id': 1,
                'email': 'user@example.com',
                'name': 'John Doe',
                'role': 'customer',
                'is_active': True,
            }
        }


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = 'bearer'
    user: UserResponse
