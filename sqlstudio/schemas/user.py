from pydantic import BaseModel, Field


class RegisterRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    email: str = Field(..., min_length=3, max_length=255)
    password: str = Field(..., min_length=1)


class LoginRequest(BaseModel):
    email: str
    password: str


class UserResponse(BaseModel):
    """Public profile; never carries the credential."""
    id: str
    name: str
    email: str
    role: str

    class Config:
        from_attributes = True
