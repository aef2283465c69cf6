from pydantic import BaseModel, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, examples=["noc_operator"])
    password: str = Field(..., min_length=6, examples=["supersecret"])
    is_superuser: bool = False


class UserOut(BaseModel):
    id: int
    username: str
    is_superuser: bool

    class Config:
        from_attributes = True


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
