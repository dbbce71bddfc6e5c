from pydantic import BaseModel

class Credentials(BaseModel):
    username: str
    password: str

    class Config:
        extra = "forbid"

class User(BaseModel):
    id: str
    username: str
    password_hash: str

class TokenResponse(BaseModel):
    token: str
