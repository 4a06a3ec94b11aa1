from pydantic import BaseModel


class UserCredential(BaseModel):
    username: str
    password: str  # hex digest, never the plain password

    class Config:
        from_attributes = True
